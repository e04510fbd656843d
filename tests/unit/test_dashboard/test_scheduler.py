"""
Unit tests for the scheduler module.
Tests slot assignment, load balancing, recommendations and time suggestions.
"""

import pytest
from copy import deepcopy
from datetime import date, datetime, timedelta, timezone

import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent.parent.parent.parent))

from museum_planner.core.models import Task
from museum_planner.dashboard.scheduler import (
    DailyPlanner,
    ScheduleSlot,
    assign_slot,
    balance_slot,
    generate_schedule_recommendation,
)

NOW = datetime(2025, 12, 4, 10, 0, tzinfo=timezone.utc)
TODAY = NOW.date()


def slot_ids(slot):
    return [task.id for task in slot.tasks]


class TestAssignSlot:
    """Tests for the slot assignment rules."""

    @pytest.mark.parametrize("category,hours,expected", [
        ("exhibition", 3, "morning"),
        ("research", 5, "morning"),
        ("exhibition", 2, "evening"),
        ("research", None, "evening"),
        ("education", 8, "afternoon"),
        ("publication", 1, "afternoon"),
        ("collection", 5, "evening"),
        ("admin", 1, "evening"),
    ])
    def test_rules(self, category, hours, expected):
        task = Task(id=1, category=category, estimated_hours=hours)
        assert assign_slot(task) == expected


class TestBalanceSlot:
    """Tests for tail-trim load balancing."""

    def test_trims_from_tail_until_within_cap(self):
        slot = ScheduleSlot("17:00-18:00", "low", [
            Task(id=i, category="admin", estimated_hours=1) for i in range(1, 5)
        ])
        removed = balance_slot(slot, 3.0)

        assert slot_ids(slot) == [1, 2, 3]
        assert [t.id for t in removed] == [4]
        assert slot.total_hours == 3.0

    def test_single_oversized_task_stays(self):
        slot = ScheduleSlot("09:00-12:00", "high", [
            Task(id=1, category="research", estimated_hours=8)
        ])
        assert balance_slot(slot, 3.0) == []
        assert slot_ids(slot) == [1]

    def test_stops_at_one_task(self):
        slot = ScheduleSlot("09:00-12:00", "high", [
            Task(id=1, category="research", estimated_hours=5),
            Task(id=2, category="exhibition", estimated_hours=4),
        ])
        removed = balance_slot(slot, 3.0)

        assert slot_ids(slot) == [1]
        assert [t.id for t in removed] == [2]

    def test_under_cap_is_untouched(self):
        slot = ScheduleSlot("13:00-17:00", "medium", [
            Task(id=1, category="education", estimated_hours=1.5),
            Task(id=2, category="education", estimated_hours=1.5),
        ])
        assert balance_slot(slot, 3.0) == []
        assert slot_ids(slot) == [1, 2]


class TestScheduleRecommendation:
    """Tests for the advisory text."""

    def _slot(self, count):
        return ScheduleSlot("x", "low", [Task(id=i, estimated_hours=1) for i in range(count)])

    def test_balanced_schedule(self):
        text = generate_schedule_recommendation(self._slot(1), self._slot(1), 5)
        assert text == "👍 Well-balanced schedule. Stay focused and carry on!"

    def test_heavy_workload(self):
        text = generate_schedule_recommendation(self._slot(1), self._slot(0), 9)
        assert text.startswith("⚠️")
        assert "\n" not in text

    def test_light_day_and_empty_morning_join_with_newline(self):
        text = generate_schedule_recommendation(self._slot(0), self._slot(0), 2)
        lines = text.split("\n")

        assert len(lines) == 2
        assert lines[0].startswith("✅")
        assert lines[1].startswith("💡")

    def test_busy_evening(self):
        text = generate_schedule_recommendation(self._slot(1), self._slot(3), 6)
        assert text.startswith("📋")

    def test_exactly_eight_and_four_hours_are_not_flagged(self):
        assert generate_schedule_recommendation(self._slot(1), self._slot(1), 8).startswith("👍")
        assert generate_schedule_recommendation(self._slot(1), self._slot(1), 4).startswith("👍")


class TestDailySchedule:
    """Tests for DailyPlanner.generate_daily_schedule."""

    def test_twelve_tasks_schedule_top_ten(self):
        """Only the ten highest-ranked tasks are considered."""
        tasks = [Task(id=i, category="admin", estimated_hours=0.5) for i in range(1, 13)]
        schedule = DailyPlanner().generate_daily_schedule(tasks, NOW)

        placed = [t.id for slot in schedule.slots for t in slot.tasks]
        deferred = [t.id for t in schedule.deferred]

        assert sorted(placed + deferred) == list(range(1, 11))
        assert 11 not in placed + deferred
        assert 12 not in placed + deferred

    def test_trimmed_tasks_are_deferred_in_removal_order(self):
        tasks = [Task(id=i, category="admin", estimated_hours=0.5) for i in range(1, 13)]
        schedule = DailyPlanner().generate_daily_schedule(tasks, NOW)

        assert slot_ids(schedule.evening) == [1, 2, 3, 4, 5, 6]
        assert [t.id for t in schedule.deferred] == [10, 9, 8, 7]
        assert schedule.total_estimated_hours == 3.0

    def test_slots_respect_cap_unless_single_task(self):
        tasks = [
            Task(id=1, category="exhibition", estimated_hours=4, due_date=TODAY),
            Task(id=2, category="research", estimated_hours=3),
            Task(id=3, category="education", estimated_hours=2, due_date=TODAY),
            Task(id=4, category="publication", estimated_hours=2),
            Task(id=5, category="research", estimated_hours=20, due_date=TODAY - timedelta(days=1)),
        ]
        schedule = DailyPlanner().generate_daily_schedule(tasks, NOW)

        for slot in schedule.slots:
            assert slot.total_hours <= 3.0 or len(slot.tasks) == 1

    def test_task_appears_in_at_most_one_place(self):
        tasks = [
            Task(id=i, category=category, estimated_hours=hours)
            for i, (category, hours) in enumerate([
                ("exhibition", 3), ("education", 2), ("admin", 1), ("research", 6),
                ("publication", 2), ("collection", 1), ("admin", 2),
            ], start=1)
        ]
        schedule = DailyPlanner().generate_daily_schedule(tasks, NOW)

        ids = [t.id for slot in schedule.slots for t in slot.tasks]
        ids += [t.id for t in schedule.deferred]
        assert len(ids) == len(set(ids))

    def test_slot_metadata_and_date(self):
        schedule = DailyPlanner().generate_daily_schedule([], NOW)

        assert schedule.date == "2025-12-04"
        assert (schedule.morning.time, schedule.morning.energy) == ("09:00-12:00", "high")
        assert (schedule.afternoon.time, schedule.afternoon.energy) == ("13:00-17:00", "medium")
        assert (schedule.evening.time, schedule.evening.energy) == ("17:00-18:00", "low")

    def test_empty_input(self):
        schedule = DailyPlanner().generate_daily_schedule([], NOW)

        assert all(not slot.tasks for slot in schedule.slots)
        assert schedule.total_estimated_hours == 0
        assert schedule.deferred == []
        assert "💡" in schedule.ai_recommendation

    def test_inactive_tasks_are_ignored(self):
        tasks = [
            Task(id=1, category="education", estimated_hours=1, status="completed"),
            Task(id=2, category="education", estimated_hours=1, status="paused"),
            Task(id=3, category="education", estimated_hours=1),
        ]
        schedule = DailyPlanner().generate_daily_schedule(tasks, NOW)
        assert slot_ids(schedule.afternoon) == [3]

    def test_total_sums_slot_hours(self):
        tasks = [
            Task(id=1, category="exhibition", estimated_hours=3),
            Task(id=2, category="education", estimated_hours=2),
            Task(id=3, category="admin", estimated_hours=None),
        ]
        schedule = DailyPlanner().generate_daily_schedule(tasks, NOW)
        assert schedule.total_estimated_hours == 5

    def test_configured_cap(self, temp_config):
        temp_config.set("max_hours_per_slot", 1.0, "preferences")
        tasks = [Task(id=i, category="admin", estimated_hours=0.5) for i in range(1, 5)]
        schedule = DailyPlanner(temp_config).generate_daily_schedule(tasks, NOW)

        assert slot_ids(schedule.evening) == [1, 2]
        assert [t.id for t in schedule.deferred] == [4, 3]

    def test_schedule_is_idempotent(self):
        tasks = [
            Task(id=1, category="exhibition", estimated_hours=3, due_date=TODAY),
            Task(id=2, category="admin", estimated_hours=1),
        ]
        planner = DailyPlanner()
        assert (planner.generate_daily_schedule(tasks, NOW).to_dict()
                == planner.generate_daily_schedule(tasks, NOW).to_dict())

    def test_tasks_are_not_mutated(self):
        tasks = [Task(id=i, category="admin", estimated_hours=1) for i in range(1, 6)]
        before = deepcopy(tasks)
        DailyPlanner().generate_daily_schedule(tasks, NOW)
        assert tasks == before

    def test_to_dict_uses_wire_names(self):
        data = DailyPlanner().generate_daily_schedule([], NOW).to_dict()
        assert {"totalEstimatedHours", "aiRecommendation", "deferred"} <= set(data)
        assert data["morning"] == {"time": "09:00-12:00", "tasks": [], "energy": "high"}

    def test_date_follows_configured_timezone(self, temp_config):
        """23:00 UTC is already the next morning in Seoul."""
        late_utc = datetime(2025, 12, 3, 23, 0, tzinfo=timezone.utc)
        assert temp_config.get("timezone") == "Asia/Seoul"

        schedule = DailyPlanner(temp_config).generate_daily_schedule([], late_utc)
        assert schedule.date == "2025-12-04"

        temp_config.set("timezone", "UTC")
        schedule = DailyPlanner(temp_config).generate_daily_schedule([], late_utc)
        assert schedule.date == "2025-12-03"

    def test_scoring_follows_configured_timezone(self, temp_config):
        late_utc = datetime(2025, 12, 3, 23, 0, tzinfo=timezone.utc)
        planner = DailyPlanner(temp_config)
        task = Task(id=1, category="admin", estimated_hours=1, due_date=date(2025, 12, 3))

        assert planner.prioritizer.score_task(task, late_utc).factors.deadline == 10


class TestSuggestTaskTime:
    """Tests for DailyPlanner.suggest_task_time."""

    @pytest.mark.parametrize("category,hours,hour,expected", [
        ("exhibition", 1, 10, "Right now"),
        ("admin", 3, 10, "Right now"),
        ("admin", 1, 10, "This afternoon"),
        ("exhibition", 5, 14, "Right now"),
        ("admin", 1, 14, "Right now"),
        ("admin", 1, 17, "Right now"),
        ("research", 1, 17, "Tomorrow 09:00-12:00"),
        ("admin", 4, 17, "Tomorrow 09:00-12:00"),
        ("research", 1, 20, "Tomorrow 09:00-12:00"),
        ("admin", 1, 20, "This afternoon"),
        ("education", None, 7, "This afternoon"),
        ("admin", 1, 12, "This afternoon"),
    ])
    def test_windows(self, category, hours, hour, expected):
        task = Task(id=1, category=category, estimated_hours=hours)
        suggestion = DailyPlanner().suggest_task_time(task, hour)

        assert suggestion.recommended_time == expected
        assert suggestion.reason

    def test_to_dict(self):
        suggestion = DailyPlanner().suggest_task_time(Task(id=1, category="admin"), 14)
        assert set(suggestion.to_dict()) == {"recommendedTime", "reason"}
