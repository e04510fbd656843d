"""
Task management API endpoints.

Provides create, read, update and complete operations for curatorial
tasks, leveraging the TaskAgent for validation and persistence.
"""

from typing import List, Optional
from fastapi import APIRouter, Body, Depends, Query

from backend.dependencies import get_task_agent
from backend.errors import raise_for_agent_error
from backend.schemas import (
    ApiResponse,
    TaskComplete,
    TaskCreate,
    TaskResponse,
    TaskUpdate,
)
from museum_planner.agents import TaskAgent

router = APIRouter(prefix="/api/tasks", tags=["tasks"])


@router.get("", response_model=ApiResponse[List[TaskResponse]])
async def list_tasks(
    project_id: Optional[int] = Query(None, description="Filter by project"),
    status: Optional[str] = Query(None, description="Filter by status"),
    category: Optional[str] = Query(None, description="Filter by category"),
    agent: TaskAgent = Depends(get_task_agent),
):
    """
    List tasks with optional filters.

    Ordered by priority (highest first), then due date.
    """
    context = {"project_id": project_id, "status": status, "category": category}
    context = {k: v for k, v in context.items() if v is not None}

    response = agent.process("list_tasks", context)
    raise_for_agent_error(response)

    return {"success": True, "data": response.data["tasks"]}


@router.post("", response_model=ApiResponse[TaskResponse], status_code=201)
async def create_task(
    task: TaskCreate,
    agent: TaskAgent = Depends(get_task_agent),
):
    """
    Create a new task.

    Priority defaults to 3 and estimated hours to 1.0 when omitted.
    """
    context = {k: v for k, v in task.model_dump().items() if v is not None}

    response = agent.process("add_task", context)
    raise_for_agent_error(response)

    return {"success": True, "data": response.data["task"]}


@router.get("/{task_id}", response_model=ApiResponse[TaskResponse])
async def get_task(
    task_id: int,
    agent: TaskAgent = Depends(get_task_agent),
):
    """Get a single task by ID."""
    response = agent.process("get_task", {"task_id": task_id})
    raise_for_agent_error(response)

    return {"success": True, "data": response.data["task"]}


@router.patch("/{task_id}", response_model=ApiResponse[TaskResponse])
async def patch_task(
    task_id: int,
    task: TaskUpdate,
    agent: TaskAgent = Depends(get_task_agent),
):
    """Partially update an existing task."""
    context = {"task_id": task_id}

    # Only include fields that were explicitly set
    context.update(task.model_dump(exclude_unset=True))

    response = agent.process("update_task", context)
    raise_for_agent_error(response)

    return {"success": True, "data": response.data["task"]}


@router.post("/{task_id}/complete", response_model=ApiResponse[TaskResponse])
async def complete_task(
    task_id: int,
    body: Optional[TaskComplete] = Body(default=None),
    agent: TaskAgent = Depends(get_task_agent),
):
    """Mark a task as completed."""
    context = {"task_id": task_id}
    if body is not None and body.actual_hours is not None:
        context["actual_hours"] = body.actual_hours

    response = agent.process("complete_task", context)
    raise_for_agent_error(response)

    return {"success": True, "data": response.data["task"]}
