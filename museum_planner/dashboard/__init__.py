"""
Dashboard module for the Museum Curator Planner.

Provides urgency scoring, the daily energy-slot schedule, the state store,
data aggregation and Rich formatting for the Today view.
"""

from museum_planner.dashboard.prioritizer import (
    Prioritizer,
    UrgencyFactors,
    UrgencyResult,
)
from museum_planner.dashboard.scheduler import (
    DailyPlanner,
    DailySchedule,
    ScheduleSlot,
    TimeSuggestion,
)
from museum_planner.dashboard.state import StateStore, StateUpdate
from museum_planner.dashboard.aggregator import (
    AnalyticsSummary,
    BudgetSummary,
    DashboardAggregator,
)
from museum_planner.dashboard.formatter import DashboardFormatter

__all__ = [
    "Prioritizer",
    "UrgencyFactors",
    "UrgencyResult",
    "DailyPlanner",
    "DailySchedule",
    "ScheduleSlot",
    "TimeSuggestion",
    "StateStore",
    "StateUpdate",
    "AnalyticsSummary",
    "BudgetSummary",
    "DashboardAggregator",
    "DashboardFormatter",
]
