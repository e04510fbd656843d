"""
Data aggregation module for the Museum Curator Planner dashboard.

Collects tasks, projects, budget items and work logs from the database and
combines them into the values the dashboard shows. Every refreshed value is
published to the attached StateStore.
"""

import logging
import math
from dataclasses import dataclass, field
from datetime import date, datetime, timedelta
from typing import Any, Dict, List, Optional

from museum_planner.core.config import Config
from museum_planner.core.database import Database
from museum_planner.core.models import Project, Task, TASK_CATEGORIES
from museum_planner.dashboard.prioritizer import Prioritizer, UrgencyResult
from museum_planner.dashboard.scheduler import DailyPlanner, DailySchedule
from museum_planner.dashboard.state import StateStore

logger = logging.getLogger(__name__)

BUDGET_RISK_THRESHOLD = 0.85


@dataclass
class BudgetSummary:
    """Budget totals across all budget items."""
    total: int = 0
    spent: int = 0
    remaining: int = 0
    by_category: Dict[str, int] = field(
        default_factory=lambda: {category: 0 for category in TASK_CATEGORIES}
    )

    @property
    def usage_percentage(self) -> int:
        return budget_usage_percentage(self.spent, self.total)

    @property
    def at_risk(self) -> bool:
        return is_budget_at_risk(self.spent, self.total)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "total": self.total,
            "spent": self.spent,
            "remaining": self.remaining,
            "byCategory": dict(self.by_category),
        }


@dataclass
class AnalyticsSummary:
    """Weekly productivity figures."""
    completed_this_week: int = 0
    hours_this_week: float = 0.0
    top_category: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "completedThisWeek": self.completed_this_week,
            "hoursThisWeek": self.hours_this_week,
            "topCategory": self.top_category,
        }


def budget_usage_percentage(spent: float, total: float) -> int:
    """Spent share of total as a whole percent (half rounds up); 0 when total is 0."""
    if total == 0:
        return 0
    return int(math.floor(spent / total * 100 + 0.5))


def is_budget_at_risk(spent: float, total: float,
                      threshold: float = BUDGET_RISK_THRESHOLD) -> bool:
    """True when usage reaches the threshold (fraction of total)."""
    return budget_usage_percentage(spent, total) >= threshold * 100


def week_start(today: date, first_day_of_week: str = "sunday") -> date:
    """First day of the week containing today."""
    if first_day_of_week.lower() == "monday":
        offset = today.weekday()
    else:
        offset = (today.weekday() + 1) % 7
    return today - timedelta(days=offset)


class DashboardAggregator:
    """
    Central data aggregation for the curator dashboard.

    Queries the database and hands tasks to the priority engine; the engine
    itself never touches storage.
    """

    def __init__(
        self,
        db: Database,
        config: Optional[Config] = None,
        state: Optional[StateStore] = None
    ):
        """
        Initialize aggregator.

        Args:
            db: Database connection
            config: Configuration (creates default if not provided)
            state: State store receiving refreshed values
        """
        self.db = db
        self.config = config if config else Config()
        self.state = state
        self.prioritizer = Prioritizer(self.config.get_timezone())
        self.planner = DailyPlanner(self.config, self.prioritizer)

    def _publish(self, key: str, value: Any) -> None:
        if self.state is not None:
            self.state.publish(key, value)

    def load_tasks(self, project_id: Optional[int] = None) -> List[Task]:
        """Load tasks ordered by priority then due date."""
        if project_id is not None:
            rows = self.db.execute(
                "SELECT * FROM tasks WHERE project_id = ? "
                "ORDER BY priority DESC, due_date ASC",
                (project_id,)
            )
        else:
            rows = self.db.execute(
                "SELECT * FROM tasks ORDER BY priority DESC, due_date ASC"
            )
        tasks = [Task.from_dict(row) for row in rows]
        self._publish("tasks", tasks)
        return tasks

    def load_projects(self) -> List[Project]:
        """Load projects, most recently updated first."""
        rows = self.db.execute("SELECT * FROM projects ORDER BY updated_at DESC, id DESC")
        projects = [Project.from_dict(row) for row in rows]
        self._publish("projects", projects)
        return projects

    def top_priorities(
        self,
        now: Optional[datetime] = None,
        tasks: Optional[List[Task]] = None
    ) -> List[UrgencyResult]:
        """
        Top priority cards for the dashboard.

        Args:
            now: Current datetime
            tasks: Tasks to rank (loaded from the database if omitted)
        """
        if tasks is None:
            tasks = self.load_tasks()
        count = int(self.config.get("top_priority_count", "preferences", 3))
        top = self.prioritizer.calculate_top_priority_tasks(tasks, now, n=count)
        self._publish("top_priority_tasks", top)
        return top

    def daily_schedule(
        self,
        now: Optional[datetime] = None,
        tasks: Optional[List[Task]] = None
    ) -> DailySchedule:
        """Today's energy-slot schedule."""
        if tasks is None:
            tasks = self.load_tasks()
        return self.planner.generate_daily_schedule(tasks, now)

    def find_task(self, task_id: int) -> Optional[Task]:
        row = self.db.execute_one("SELECT * FROM tasks WHERE id = ?", (task_id,))
        return Task.from_dict(row) if row else None

    def budget_summary(self) -> BudgetSummary:
        """
        Sum budget items per category.

        Returns:
            BudgetSummary with totals and per-category allocation
        """
        rows = self.db.execute(
            """
            SELECT category, SUM(amount) AS total, SUM(spent) AS spent
            FROM budget_items
            GROUP BY category
            """
        )

        summary = BudgetSummary()
        for row in rows:
            total = row["total"] or 0
            spent = row["spent"] or 0
            summary.by_category[row["category"]] = total
            summary.total += total
            summary.spent += spent
        summary.remaining = summary.total - summary.spent

        if summary.at_risk:
            logger.warning(
                "Budget usage at %d%% of %d", summary.usage_percentage, summary.total
            )

        self._publish("budget", summary)
        return summary

    def analytics_summary(self, now: Optional[datetime] = None) -> AnalyticsSummary:
        """
        Weekly figures since the start of the current week.

        Args:
            now: Current datetime (defaults to now in the configured zone)

        Returns:
            AnalyticsSummary with completions, logged hours and top category
        """
        now = self.config.localize(now) if now is not None else self.config.now()

        first_day = self.config.get("first_day_of_week", "settings", "sunday")
        start = week_start(now.date(), first_day).isoformat()

        completed_row = self.db.execute_one(
            """
            SELECT COUNT(*) AS count FROM tasks
            WHERE status = 'completed' AND completed_at >= ?
            """,
            (start,)
        )

        minutes_row = self.db.execute_one(
            "SELECT SUM(duration_minutes) AS total_minutes FROM work_logs WHERE start_time >= ?",
            (start,)
        )

        category_row = self.db.execute_one(
            """
            SELECT category, COUNT(*) AS count FROM tasks
            WHERE status = 'completed' AND completed_at >= ?
            GROUP BY category
            ORDER BY count DESC, category ASC
            LIMIT 1
            """,
            (start,)
        )

        total_minutes = (minutes_row or {}).get("total_minutes") or 0
        summary = AnalyticsSummary(
            completed_this_week=(completed_row or {}).get("count") or 0,
            hours_this_week=total_minutes / 60,
            top_category=(category_row or {}).get("category"),
        )

        self._publish("analytics", summary)
        return summary

    def refresh_all(self, now: Optional[datetime] = None) -> Dict[str, Any]:
        """
        Reload every dashboard value and publish each one.

        Returns:
            Mapping of state key to the refreshed value
        """
        now = self.config.localize(now) if now is not None else self.config.now()

        tasks = self.load_tasks()
        refreshed = {
            "projects": self.load_projects(),
            "tasks": tasks,
            "top_priority_tasks": self.top_priorities(now, tasks),
            "budget": self.budget_summary(),
            "analytics": self.analytics_summary(now),
        }
        logger.info("Dashboard state refreshed: %d tasks", len(tasks))
        return refreshed

    def today(self, now: Optional[datetime] = None) -> Dict[str, Any]:
        """Everything the Today view shows, in one pass over the tasks."""
        now = self.config.localize(now) if now is not None else self.config.now()

        tasks = self.load_tasks()
        return {
            "top_priorities": self.top_priorities(now, tasks),
            "schedule": self.daily_schedule(now, tasks),
            "budget": self.budget_summary(),
            "analytics": self.analytics_summary(now),
        }
