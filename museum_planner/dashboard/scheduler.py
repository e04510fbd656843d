"""
Daily schedule planner for the Museum Curator Planner dashboard.

Distributes the most urgent tasks over three energy slots:

    morning   09:00-12:00  high energy    creative and complex work
    afternoon 13:00-17:00  medium energy  education and publication work
    evening   17:00-18:00  low energy     everything else

Each slot is capped at a fixed number of hours. Overloaded slots are
trimmed from the tail; trimmed tasks are reported as deferred.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import List, Optional, Dict, Any

from museum_planner.core.config import Config
from museum_planner.core.models import Task
from museum_planner.dashboard.prioritizer import Prioritizer

logger = logging.getLogger(__name__)

DEFAULT_MAX_HOURS_PER_SLOT = 3.0
DEFAULT_CANDIDATE_COUNT = 10

# Categories that fill the afternoon slot
AFTERNOON_CATEGORIES = ("education", "publication")


@dataclass
class ScheduleSlot:
    """One time-of-day window with its presumed energy level."""
    time: str
    energy: str  # 'high', 'medium', 'low'
    tasks: List[Task] = field(default_factory=list)

    @property
    def total_hours(self) -> float:
        return sum(task.estimated_hours or 0 for task in self.tasks)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "time": self.time,
            "tasks": [task.to_dict() for task in self.tasks],
            "energy": self.energy,
        }


@dataclass
class DailySchedule:
    """Three-slot plan for one day."""
    date: str
    morning: ScheduleSlot
    afternoon: ScheduleSlot
    evening: ScheduleSlot
    total_estimated_hours: float
    ai_recommendation: str
    deferred: List[Task] = field(default_factory=list)

    @property
    def slots(self) -> List[ScheduleSlot]:
        return [self.morning, self.afternoon, self.evening]

    def to_dict(self) -> Dict[str, Any]:
        """Serialize using the dashboard's wire field names."""
        return {
            "date": self.date,
            "morning": self.morning.to_dict(),
            "afternoon": self.afternoon.to_dict(),
            "evening": self.evening.to_dict(),
            "totalEstimatedHours": self.total_estimated_hours,
            "aiRecommendation": self.ai_recommendation,
            "deferred": [task.to_dict() for task in self.deferred],
        }


@dataclass
class TimeSuggestion:
    """When to start a task, and why."""
    recommended_time: str
    reason: str

    def to_dict(self) -> Dict[str, str]:
        return {"recommendedTime": self.recommended_time, "reason": self.reason}


def assign_slot(task: Task) -> str:
    """Pick the slot name for a task; first matching rule wins."""
    if task.is_creative() and task.is_complex():
        return "morning"
    if task.category in AFTERNOON_CATEGORIES:
        return "afternoon"
    return "evening"


def balance_slot(slot: ScheduleSlot, max_hours: float) -> List[Task]:
    """
    Trim a slot from the tail until it fits max_hours.

    A slot is never emptied: a single task longer than max_hours stays.
    Greedy, not an optimal packing.

    Returns:
        Removed tasks in removal order
    """
    removed = []
    total = slot.total_hours
    while total > max_hours and len(slot.tasks) > 1:
        last = slot.tasks.pop()
        total -= last.estimated_hours or 0
        removed.append(last)
    return removed


def generate_schedule_recommendation(
    morning: ScheduleSlot,
    evening: ScheduleSlot,
    total_hours: float
) -> str:
    """Advisory text for a balanced schedule; advisories join with newlines."""
    recommendations = []

    if total_hours > 8:
        recommendations.append(
            "⚠️ Heavy workload today. Consider moving some tasks to tomorrow."
        )
    elif total_hours < 4:
        recommendations.append(
            "✅ A light day. Use the spare time for deferred research or study."
        )

    if not morning.tasks:
        recommendations.append(
            "💡 Schedule creative work in the morning to make the most of peak energy."
        )

    if len(evening.tasks) > 2:
        recommendations.append(
            "📋 Keep the evening to one or two light tasks and take a break."
        )

    if not recommendations:
        return "👍 Well-balanced schedule. Stay focused and carry on!"
    return "\n".join(recommendations)


class DailyPlanner:
    """
    Builds the daily energy-slot schedule from a task collection.

    Pure computation: receives tasks, returns a DailySchedule, performs no I/O.
    """

    def __init__(
        self,
        config: Optional[Config] = None,
        prioritizer: Optional[Prioritizer] = None
    ):
        """
        Initialize planner.

        Args:
            config: Configuration for slot cap, candidate count and timezone
            prioritizer: Urgency engine (creates default if not provided)
        """
        self.config = config
        self.local_tz = config.get_timezone() if config is not None else timezone.utc
        self.prioritizer = prioritizer or Prioritizer(self.local_tz)

    def _preference(self, key: str, default: Any) -> Any:
        if self.config is None:
            return default
        return self.config.get(key, "preferences", default)

    @property
    def max_hours_per_slot(self) -> float:
        return float(self._preference("max_hours_per_slot", DEFAULT_MAX_HOURS_PER_SLOT))

    @property
    def candidate_count(self) -> int:
        return int(self._preference("schedule_candidate_count", DEFAULT_CANDIDATE_COUNT))

    def generate_daily_schedule(
        self,
        tasks: List[Task],
        now: Optional[datetime] = None
    ) -> DailySchedule:
        """
        Build today's schedule from the top-ranked active tasks.

        Args:
            tasks: Candidate tasks (any status; inactive ones are ignored)
            now: Current datetime for urgency and the schedule date; aware
                values are converted to the configured zone first

        Returns:
            DailySchedule with balanced slots and recommendation text
        """
        if now is None:
            now = datetime.now(self.local_tz)
        elif now.tzinfo is not None:
            now = now.astimezone(self.local_tz)

        ranked = self.prioritizer.rank_tasks(tasks, now, top_n=self.candidate_count)
        candidates = [result.task for result in ranked]

        slots = {
            "morning": ScheduleSlot(time="09:00-12:00", energy="high"),
            "afternoon": ScheduleSlot(time="13:00-17:00", energy="medium"),
            "evening": ScheduleSlot(time="17:00-18:00", energy="low"),
        }
        for task in candidates:
            slots[assign_slot(task)].tasks.append(task)

        deferred = []
        for name, slot in slots.items():
            removed = balance_slot(slot, self.max_hours_per_slot)
            if removed:
                logger.info(
                    "Slot %s over %.1fh cap, deferred tasks %s",
                    name, self.max_hours_per_slot, [t.id for t in removed]
                )
            deferred.extend(removed)

        total_hours = sum(slot.total_hours for slot in slots.values())

        return DailySchedule(
            date=now.date().isoformat(),
            morning=slots["morning"],
            afternoon=slots["afternoon"],
            evening=slots["evening"],
            total_estimated_hours=total_hours,
            ai_recommendation=generate_schedule_recommendation(
                slots["morning"], slots["evening"], total_hours
            ),
            deferred=deferred,
        )

    def suggest_task_time(self, task: Task, hour: Optional[int] = None) -> TimeSuggestion:
        """
        Recommend when to work on a task given the current hour.

        Args:
            task: Task to place
            hour: Current hour of day (0-23, defaults to the configured zone)

        Returns:
            TimeSuggestion
        """
        if hour is None:
            hour = datetime.now(self.local_tz).hour

        creative = task.is_creative()
        complex_ = task.is_complex()

        if 9 <= hour < 12 and (creative or complex_):
            return TimeSuggestion(
                "Right now",
                "Morning high-energy window, ideal for creative or complex work",
            )
        if 13 <= hour < 17:
            return TimeSuggestion(
                "Right now",
                "Afternoon window, suited to medium-difficulty work",
            )
        if 17 <= hour < 18 and not creative and not complex_:
            return TimeSuggestion(
                "Right now",
                "Evening window, suited to simple tasks",
            )

        if creative or complex_:
            return TimeSuggestion(
                "Tomorrow 09:00-12:00",
                "Creative or complex work belongs in the morning high-energy window",
            )
        return TimeSuggestion(
            "This afternoon",
            "Routine work can be handled in the afternoon",
        )
