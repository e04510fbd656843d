"""
Unit tests for the aggregator module.
Tests the DashboardAggregator against a seeded SQLite database.
"""

import pytest
from datetime import date, datetime, timezone

import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent.parent.parent.parent))

from museum_planner.core.models import Project, Task
from museum_planner.dashboard.aggregator import (
    AnalyticsSummary,
    BudgetSummary,
    DashboardAggregator,
    budget_usage_percentage,
    is_budget_at_risk,
    week_start,
)
from museum_planner.dashboard.state import STATE_KEYS, StateStore

# Thursday
NOW = datetime(2025, 12, 4, 10, 0, tzinfo=timezone.utc)


@pytest.fixture
def state():
    return StateStore()


@pytest.fixture
def aggregator(seeded_db, temp_config, state):
    return DashboardAggregator(seeded_db, temp_config, state)


@pytest.fixture
def weekly_activity(seeded_db):
    """Completed tasks and work logs around the week starting 2025-11-30."""
    db = seeded_db
    insert = """
        INSERT INTO tasks (title, category, status, completed_at)
        VALUES (?, ?, 'completed', ?)
    """
    db.execute_write(insert, ("Docent training", "education", "2025-12-02T09:00:00+00:00"))
    db.execute_write(insert, ("Family tour", "education", "2025-12-03T15:30:00+00:00"))
    db.execute_write(insert, ("Catalog entry", "collection", "2025-12-01T11:00:00+00:00"))
    db.execute_write(insert, ("Old report", "research", "2025-11-28T10:00:00+00:00"))

    log = "INSERT INTO work_logs (task_id, start_time, duration_minutes, status) VALUES (?, ?, ?, 'completed')"
    db.execute_write(log, (1, "2025-12-01 09:00:00", 90))
    db.execute_write(log, (2, "2025-12-03 14:00:00", 30))
    db.execute_write(log, (3, "2025-11-27 10:00:00", 600))
    return db


class TestHelpers:
    """Tests for budget helpers and week start."""

    @pytest.mark.parametrize("spent,total,expected", [
        (850, 1000, 85),
        (0, 0, 0),
        (500, 0, 0),
        (1, 3, 33),
        (1, 8, 13),
        (1200, 1000, 120),
    ])
    def test_usage_percentage(self, spent, total, expected):
        assert budget_usage_percentage(spent, total) == expected

    def test_budget_at_risk(self):
        assert is_budget_at_risk(850, 1000)
        assert not is_budget_at_risk(840, 1000)
        assert not is_budget_at_risk(0, 0)
        assert is_budget_at_risk(500, 1000, threshold=0.5)

    def test_week_start_sunday(self):
        assert week_start(date(2025, 12, 4)) == date(2025, 11, 30)
        assert week_start(date(2025, 11, 30)) == date(2025, 11, 30)

    def test_week_start_monday(self):
        assert week_start(date(2025, 12, 4), "monday") == date(2025, 12, 1)
        assert week_start(date(2025, 11, 30), "monday") == date(2025, 11, 24)


class TestLoading:
    """Tests for task and project loading."""

    def test_load_tasks_ordered_by_priority(self, aggregator, state):
        tasks = aggregator.load_tasks()

        assert [t.id for t in tasks] == [1, 2, 3, 4]
        assert all(isinstance(t, Task) for t in tasks)
        assert tasks[0].due_date == date(2025, 12, 4)
        assert state.get("tasks") == tasks

    def test_load_tasks_for_project(self, aggregator):
        assert [t.id for t in aggregator.load_tasks(project_id=1)] == [1, 2]

    def test_load_projects(self, aggregator, state):
        projects = aggregator.load_projects()

        assert len(projects) == 3
        assert all(isinstance(p, Project) for p in projects)
        assert state.get("projects") == projects

    def test_find_task(self, aggregator):
        assert aggregator.find_task(3).category == "education"
        assert aggregator.find_task(99) is None


class TestPriorities:
    """Tests for top priorities and the daily schedule."""

    def test_top_priorities(self, aggregator, state):
        top = aggregator.top_priorities(NOW)

        assert [r.task.id for r in top] == [1, 2, 3]
        assert top[0].urgency_score == pytest.approx(6.6)
        assert state.get("top_priority_tasks") == top

    def test_top_priority_count_from_config(self, aggregator, temp_config):
        temp_config.set("top_priority_count", 2, "preferences")
        assert len(aggregator.top_priorities(NOW)) == 2

    def test_completed_tasks_drop_out(self, aggregator, seeded_db):
        seeded_db.execute_write("UPDATE tasks SET status = 'completed' WHERE id = 1")
        assert [r.task.id for r in aggregator.top_priorities(NOW)] == [2, 3, 4]

    def test_daily_schedule(self, aggregator):
        schedule = aggregator.daily_schedule(NOW)

        assert [t.id for t in schedule.morning.tasks] == [4]
        assert [t.id for t in schedule.afternoon.tasks] == [3]
        assert [t.id for t in schedule.evening.tasks] == [1, 2]
        assert schedule.total_estimated_hours == pytest.approx(11.5)
        assert schedule.ai_recommendation.startswith("⚠️")

    def test_schedule_date_is_local(self, aggregator):
        """Late evening UTC already counts as the next day in Seoul."""
        late_utc = datetime(2025, 12, 3, 23, 0, tzinfo=timezone.utc)
        assert aggregator.daily_schedule(late_utc).date == "2025-12-04"


class TestBudgetSummary:
    """Tests for budget aggregation."""

    def test_seeded_budget(self, aggregator, state):
        budget = aggregator.budget_summary()

        assert isinstance(budget, BudgetSummary)
        assert budget.total == 10_000_000
        assert budget.spent == 8_500_000
        assert budget.remaining == 1_500_000
        assert budget.by_category["exhibition"] == 10_000_000
        assert budget.by_category["education"] == 0
        assert set(budget.by_category) == {
            "exhibition", "education", "collection", "publication", "research", "admin"
        }
        assert budget.at_risk
        assert state.get("budget") == budget

    def test_empty_budget(self, temp_db, temp_config):
        budget = DashboardAggregator(temp_db, temp_config).budget_summary()

        assert (budget.total, budget.spent, budget.remaining) == (0, 0, 0)
        assert budget.usage_percentage == 0

    def test_to_dict(self, aggregator):
        data = aggregator.budget_summary().to_dict()
        assert set(data) == {"total", "spent", "remaining", "byCategory"}


class TestAnalyticsSummary:
    """Tests for weekly analytics."""

    def test_counts_this_week_only(self, aggregator, weekly_activity):
        analytics = aggregator.analytics_summary(NOW)

        assert isinstance(analytics, AnalyticsSummary)
        assert analytics.completed_this_week == 3
        assert analytics.hours_this_week == pytest.approx(2.0)
        assert analytics.top_category == "education"

    def test_monday_week_start(self, aggregator, weekly_activity, temp_config):
        temp_config.set("first_day_of_week", "monday")
        analytics = aggregator.analytics_summary(NOW)

        assert analytics.completed_this_week == 3
        assert analytics.hours_this_week == pytest.approx(2.0)

    def test_empty_week(self, aggregator):
        analytics = aggregator.analytics_summary(NOW)

        assert analytics == AnalyticsSummary(0, 0.0, None)
        assert analytics.to_dict() == {
            "completedThisWeek": 0,
            "hoursThisWeek": 0.0,
            "topCategory": None,
        }


class TestRefresh:
    """Tests for refresh_all and the Today view."""

    def test_refresh_all_publishes_every_key(self, aggregator, state):
        published = []
        state.subscribe(lambda update: published.append(update.key))

        refreshed = aggregator.refresh_all(NOW)

        assert set(refreshed) == set(STATE_KEYS)
        assert set(published) == set(STATE_KEYS)

    def test_today(self, aggregator):
        data = aggregator.today(NOW)

        assert set(data) == {"top_priorities", "schedule", "budget", "analytics"}
        assert data["schedule"].date == "2025-12-04"
