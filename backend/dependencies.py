"""
Dependency injection for FastAPI endpoints.

Provides singleton instances of Config, Database and StateStore, plus
per-request agents and dashboard services built on top of them.

Providers declare their inputs with Depends() so tests can swap the
database, config or state store through app.dependency_overrides.
"""

from functools import lru_cache
import sys
from pathlib import Path

from fastapi import Depends

# Add project root to path for imports
project_root = Path(__file__).parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

from museum_planner.core.config import Config
from museum_planner.core.database import Database, get_database as open_database
from museum_planner.agents import TaskAgent, ProjectAgent
from museum_planner.dashboard.aggregator import DashboardAggregator
from museum_planner.dashboard.scheduler import DailyPlanner
from museum_planner.dashboard.state import StateStore


@lru_cache()
def get_config() -> Config:
    """
    Get cached Config instance.

    lru_cache keeps one Config for the lifetime of the application.
    """
    return Config()


@lru_cache()
def get_database() -> Database:
    """Get cached Database instance ($MUSEUM_PLANNER_DB, then config)."""
    return open_database(get_config())


@lru_cache()
def get_state_store() -> StateStore:
    """The application's dashboard state store."""
    return StateStore()


def get_task_agent(
    db: Database = Depends(get_database),
    config: Config = Depends(get_config),
    state: StateStore = Depends(get_state_store),
) -> TaskAgent:
    """Get TaskAgent for direct task operations."""
    return TaskAgent(db, config, state)


def get_project_agent(
    db: Database = Depends(get_database),
    config: Config = Depends(get_config),
    state: StateStore = Depends(get_state_store),
) -> ProjectAgent:
    """Get ProjectAgent for project operations."""
    return ProjectAgent(db, config, state)


def get_dashboard_aggregator(
    db: Database = Depends(get_database),
    config: Config = Depends(get_config),
    state: StateStore = Depends(get_state_store),
) -> DashboardAggregator:
    """Get DashboardAggregator for dashboard data."""
    return DashboardAggregator(db, config, state)


def get_daily_planner(config: Config = Depends(get_config)) -> DailyPlanner:
    """Get DailyPlanner for ad-hoc time suggestions in the configured zone."""
    return DailyPlanner(config)
