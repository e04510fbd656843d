"""
Priority engine API endpoints.

Top priority cards, the daily energy-slot schedule and ad-hoc time
suggestions. "Now" is taken in the configured timezone.
"""

from typing import List, Optional
import logging

from fastapi import APIRouter, Depends, HTTPException, Query

from backend.dependencies import get_daily_planner, get_dashboard_aggregator
from backend.schemas import (
    ApiResponse,
    DailyScheduleSchema,
    TimeSuggestionSchema,
    UrgencyResultSchema,
)
from museum_planner.dashboard.aggregator import DashboardAggregator
from museum_planner.dashboard.scheduler import DailyPlanner

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/priority", tags=["priority"])


@router.get("/top-tasks", response_model=ApiResponse[List[UrgencyResultSchema]])
async def get_top_tasks(
    aggregator: DashboardAggregator = Depends(get_dashboard_aggregator),
):
    """Up to three most urgent active tasks with score breakdowns."""
    try:
        top = aggregator.top_priorities()
    except Exception as e:
        logger.error(f"Failed to calculate top tasks: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=f"Failed to calculate top tasks: {e}")

    return {"success": True, "data": [result.to_dict() for result in top]}


@router.get("/daily-schedule", response_model=ApiResponse[DailyScheduleSchema])
async def get_daily_schedule(
    aggregator: DashboardAggregator = Depends(get_dashboard_aggregator),
):
    """Today's morning/afternoon/evening schedule."""
    try:
        schedule = aggregator.daily_schedule()
    except Exception as e:
        logger.error(f"Failed to generate schedule: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=f"Failed to generate schedule: {e}")

    return {"success": True, "data": schedule.to_dict()}


@router.get("/suggest/{task_id}", response_model=ApiResponse[TimeSuggestionSchema])
async def suggest_task_time(
    task_id: int,
    hour: Optional[int] = Query(None, ge=0, le=23, description="Current hour (0-23)"),
    aggregator: DashboardAggregator = Depends(get_dashboard_aggregator),
    planner: DailyPlanner = Depends(get_daily_planner),
):
    """When to work on a task given the current hour."""
    task = aggregator.find_task(task_id)
    if task is None:
        raise HTTPException(status_code=404, detail=f"Task {task_id} not found")

    suggestion = planner.suggest_task_time(task, hour)
    return {"success": True, "data": suggestion.to_dict()}
