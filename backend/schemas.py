"""
Pydantic schemas for API request/response validation.

These schemas provide:
- Type safety for API inputs and outputs
- Automatic validation and error messages
- OpenAPI documentation generation

Every endpoint answers with an envelope: {"success": true, "data": ...} on
success and {"success": false, "error": "..."} on failure. Dashboard
values use camelCase wire names (urgencyScore, totalEstimatedHours, ...)
through field aliases; task and project rows keep their column names.
"""

from typing import Dict, Generic, List, Optional, TypeVar

from pydantic import BaseModel, Field

T = TypeVar("T")


# =============================================================================
# Envelope Schemas
# =============================================================================

class ApiResponse(BaseModel, Generic[T]):
    """Success envelope."""
    success: bool = True
    data: T


class ErrorResponse(BaseModel):
    """Error envelope."""
    success: bool = False
    error: str


# =============================================================================
# Task Schemas
# =============================================================================

class TaskCreate(BaseModel):
    """Request body for creating a task."""
    title: str = Field(..., min_length=1, max_length=500)
    category: str
    description: Optional[str] = None
    priority: Optional[int] = Field(default=None, ge=1, le=5)
    estimated_hours: Optional[float] = Field(default=None, gt=0)
    due_date: Optional[str] = None  # Any date format dateutil parses
    project_id: Optional[int] = None
    status: Optional[str] = None


class TaskUpdate(BaseModel):
    """Request body for updating a task."""
    title: Optional[str] = Field(default=None, min_length=1, max_length=500)
    description: Optional[str] = None
    category: Optional[str] = None
    status: Optional[str] = None  # pending, in_progress, completed, paused, cancelled
    priority: Optional[int] = Field(default=None, ge=1, le=5)
    estimated_hours: Optional[float] = Field(default=None, gt=0)
    actual_hours: Optional[float] = Field(default=None, ge=0)
    due_date: Optional[str] = None
    project_id: Optional[int] = None


class TaskComplete(BaseModel):
    """Optional body for completing a task."""
    actual_hours: Optional[float] = Field(default=None, ge=0)


class TaskResponse(BaseModel):
    """Task data returned from API."""
    id: int
    project_id: Optional[int] = None
    title: str
    description: Optional[str] = None
    category: str
    priority: int = 3
    urgency_score: Optional[float] = None
    estimated_hours: Optional[float] = None
    actual_hours: Optional[float] = None
    due_date: Optional[str] = None
    status: str
    completed_at: Optional[str] = None
    created_at: Optional[str] = None

    class Config:
        from_attributes = True


# =============================================================================
# Project Schemas
# =============================================================================

class ProjectCreate(BaseModel):
    """Request body for creating a project."""
    title: str = Field(..., min_length=1, max_length=500)
    category: str
    description: Optional[str] = None
    status: Optional[str] = None
    start_date: Optional[str] = None
    end_date: Optional[str] = None
    budget: Optional[int] = Field(default=None, ge=0)
    spent: Optional[int] = Field(default=None, ge=0)


class ProjectUpdate(BaseModel):
    """Request body for updating a project."""
    title: Optional[str] = Field(default=None, min_length=1, max_length=500)
    description: Optional[str] = None
    category: Optional[str] = None
    status: Optional[str] = None  # planning, in_progress, completed, on_hold
    start_date: Optional[str] = None
    end_date: Optional[str] = None
    budget: Optional[int] = Field(default=None, ge=0)
    spent: Optional[int] = Field(default=None, ge=0)


class ProjectResponse(BaseModel):
    """Project data returned from API."""
    id: int
    title: str
    description: Optional[str] = None
    category: str
    status: str
    start_date: Optional[str] = None
    end_date: Optional[str] = None
    budget: int = 0
    spent: int = 0
    created_at: Optional[str] = None
    updated_at: Optional[str] = None

    class Config:
        from_attributes = True


class ProjectDetail(BaseModel):
    """Project with its task counts by status."""
    project: ProjectResponse
    task_counts: Dict[str, int] = {}


# =============================================================================
# Priority Schemas
# =============================================================================

class UrgencyFactorsSchema(BaseModel):
    """Integer sub-scores behind an urgency score."""
    deadline: int
    impact: int
    dependency: int
    complexity: int


class UrgencyResultSchema(BaseModel):
    """Priority card: task, score, factors and justification."""
    task: TaskResponse
    urgency_score: float = Field(alias="urgencyScore")
    factors: UrgencyFactorsSchema
    recommendation: str

    class Config:
        populate_by_name = True


class ScheduleSlotSchema(BaseModel):
    time: str
    tasks: List[TaskResponse]
    energy: str


class DailyScheduleSchema(BaseModel):
    """Three energy slots for one day."""
    date: str
    morning: ScheduleSlotSchema
    afternoon: ScheduleSlotSchema
    evening: ScheduleSlotSchema
    total_estimated_hours: float = Field(alias="totalEstimatedHours")
    ai_recommendation: str = Field(alias="aiRecommendation")
    deferred: List[TaskResponse] = []

    class Config:
        populate_by_name = True


class TimeSuggestionSchema(BaseModel):
    recommended_time: str = Field(alias="recommendedTime")
    reason: str

    class Config:
        populate_by_name = True


# =============================================================================
# Dashboard Schemas
# =============================================================================

class BudgetSummarySchema(BaseModel):
    """Budget totals with per-category allocation."""
    total: int
    spent: int
    remaining: int
    by_category: Dict[str, int] = Field(alias="byCategory")

    class Config:
        populate_by_name = True


class AnalyticsSummarySchema(BaseModel):
    """Weekly productivity figures."""
    completed_this_week: int = Field(alias="completedThisWeek")
    hours_this_week: float = Field(alias="hoursThisWeek")
    top_category: Optional[str] = Field(default=None, alias="topCategory")

    class Config:
        populate_by_name = True


class TodayDashboard(BaseModel):
    """Complete Today view."""
    top_tasks: List[UrgencyResultSchema] = Field(alias="topTasks")
    schedule: DailyScheduleSchema
    budget: BudgetSummarySchema
    analytics: AnalyticsSummarySchema

    class Config:
        populate_by_name = True
