"""
Dashboard data aggregation API endpoints.

Budget and weekly analytics summaries, plus the combined Today view
built by the DashboardAggregator.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException

from backend.dependencies import get_dashboard_aggregator
from backend.schemas import (
    AnalyticsSummarySchema,
    ApiResponse,
    BudgetSummarySchema,
    TodayDashboard,
)
from museum_planner.dashboard.aggregator import DashboardAggregator

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["dashboard"])


@router.get("/budget/summary", response_model=ApiResponse[BudgetSummarySchema])
async def get_budget_summary(
    aggregator: DashboardAggregator = Depends(get_dashboard_aggregator),
):
    """Budget totals and allocation per category."""
    try:
        budget = aggregator.budget_summary()
    except Exception as e:
        logger.error(f"Failed to summarize budget: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=f"Failed to summarize budget: {e}")

    return {"success": True, "data": budget.to_dict()}


@router.get("/analytics/summary", response_model=ApiResponse[AnalyticsSummarySchema])
async def get_analytics_summary(
    aggregator: DashboardAggregator = Depends(get_dashboard_aggregator),
):
    """Tasks completed, hours logged and top category this week."""
    try:
        analytics = aggregator.analytics_summary()
    except Exception as e:
        logger.error(f"Failed to summarize analytics: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=f"Failed to summarize analytics: {e}")

    return {"success": True, "data": analytics.to_dict()}


@router.get("/dashboard/today", response_model=ApiResponse[TodayDashboard])
async def get_today_dashboard(
    aggregator: DashboardAggregator = Depends(get_dashboard_aggregator),
):
    """
    Get unified dashboard data for today.

    Aggregates:
    - Top priority cards
    - Daily energy-slot schedule
    - Budget summary
    - Weekly analytics
    """
    try:
        data = aggregator.today()
    except Exception as e:
        logger.error(f"Failed to build dashboard: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=f"Failed to build dashboard: {e}")

    return {
        "success": True,
        "data": {
            "topTasks": [result.to_dict() for result in data["top_priorities"]],
            "schedule": data["schedule"].to_dict(),
            "budget": data["budget"].to_dict(),
            "analytics": data["analytics"].to_dict(),
        },
    }
