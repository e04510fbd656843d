"""
Urgency scoring algorithm for the Museum Curator Planner dashboard.

Scores curatorial tasks on four integer factors (0-10) so the curator
can focus on what matters most.

Score formula:
    score = (deadline * 0.4) + (impact * 0.3) + (dependency * 0.2) + (complexity * 0.1)
"""

from dataclasses import dataclass
from datetime import date, datetime, timezone, tzinfo
from typing import List, Optional, Dict, Any

from museum_planner.core.models import Task


# Base impact per category; unknown categories score 2
CATEGORY_IMPACT = {
    "exhibition": 5,
    "education": 4,
    "collection": 3,
    "publication": 3,
    "research": 2,
    "admin": 2,
}

# Categories that usually sit on a project's critical path
BLOCKING_CATEGORIES = ("exhibition", "collection")


@dataclass
class UrgencyFactors:
    """Integer sub-scores (0-10) behind an urgency score."""
    deadline: int
    impact: int
    dependency: int
    complexity: int

    def to_dict(self) -> Dict[str, int]:
        return {
            "deadline": self.deadline,
            "impact": self.impact,
            "dependency": self.dependency,
            "complexity": self.complexity,
        }


@dataclass
class UrgencyResult:
    """Task with computed urgency score, factor breakdown and justification."""
    task: Task
    urgency_score: float
    factors: UrgencyFactors
    recommendation: str

    def to_dict(self) -> Dict[str, Any]:
        """Serialize using the dashboard's wire field names."""
        return {
            "task": self.task.to_dict(),
            "urgencyScore": self.urgency_score,
            "factors": self.factors.to_dict(),
            "recommendation": self.recommendation,
        }


def days_until_due(due_date: date, now: datetime) -> float:
    """
    Days remaining until a due date.

    Plain dates are compared against today's calendar date, so a task due
    today has 0 days left. Datetimes give a fractional result.
    """
    if isinstance(due_date, datetime):
        if due_date.tzinfo is None and now.tzinfo is not None:
            now = now.replace(tzinfo=None)
        elif due_date.tzinfo is not None and now.tzinfo is None:
            due_date = due_date.replace(tzinfo=None)
        return (due_date - now).total_seconds() / 86400
    return float((due_date - now.date()).days)


def calculate_deadline_score(due_date: Optional[date], now: Optional[datetime] = None) -> int:
    """
    Calculate deadline score (0-10) from due date proximity.

    Scoring:
        - No due date: 2
        - Overdue: 10
        - Within 1 day: 9
        - Within 3 days: 8
        - Within a week: 6
        - Within two weeks: 4
        - Within 30 days: 3
        - Later: 2
    """
    if due_date is None:
        return 2

    if now is None:
        now = datetime.now(timezone.utc)

    days = days_until_due(due_date, now)

    if days < 0:
        return 10
    if days <= 1:
        return 9
    if days <= 3:
        return 8
    if days <= 7:
        return 6
    if days <= 14:
        return 4
    if days <= 30:
        return 3
    return 2


def calculate_impact_score(task: Task) -> int:
    """
    Calculate impact score (2-10) from category and effort.

    Category base (exhibition 5, education 4, collection/publication 3,
    research/admin 2) plus an effort bonus when hours are estimated:
    over 8h +3, over 4h +2, otherwise +1.
    """
    score = CATEGORY_IMPACT.get(task.category, 2)

    hours = task.estimated_hours
    if hours:
        if hours > 8:
            score += 3
        elif hours > 4:
            score += 2
        else:
            score += 1

    return min(score, 10)


def calculate_dependency_score(task: Task) -> int:
    """
    Calculate dependency score (0-10).

    Category heuristic standing in for a real dependency graph: exhibition
    and collection work tends to block other tasks.
    """
    if task.category in BLOCKING_CATEGORIES:
        return 5
    return 2


def calculate_complexity_score(estimated_hours: Optional[float]) -> int:
    """Calculate complexity score (2-8); longer work should start earlier."""
    if not estimated_hours:
        return 2

    if estimated_hours > 16:
        return 8
    if estimated_hours > 8:
        return 6
    if estimated_hours > 4:
        return 4
    if estimated_hours > 2:
        return 3
    return 2


def generate_recommendation(factors: UrgencyFactors, score: float) -> str:
    """Build the human-readable justification for a score."""
    reasons = []
    if factors.deadline >= 8:
        reasons.append("deadline approaching")
    if factors.impact >= 7:
        reasons.append("high impact")
    if factors.dependency >= 5:
        reasons.append("blocks other work")
    if factors.complexity >= 6:
        reasons.append("high complexity")

    joined = ", ".join(reasons)

    if score >= 8:
        return f"🚨 Urgent: {joined or 'needs immediate attention'}"
    elif score >= 6:
        return f"⚠️ Important: {joined or 'schedule soon'}"
    elif score >= 4:
        return f"📌 Normal: {joined or 'regular priority'}"
    else:
        return f"📋 Low: {joined or 'can be handled at a relaxed pace'}"


class Prioritizer:
    """
    Task urgency engine.

    Scores tasks on deadline, impact, dependency and complexity, and ranks
    the active ones for the dashboard's priority cards.
    """

    # Weight factors for score components
    DEADLINE_WEIGHT = 0.40
    IMPACT_WEIGHT = 0.30
    DEPENDENCY_WEIGHT = 0.20
    COMPLEXITY_WEIGHT = 0.10

    def __init__(self, local_tz: Optional[tzinfo] = None):
        """
        Args:
            local_tz: Zone whose calendar decides "today" for plain due
                dates (UTC when omitted)
        """
        self.local_tz = local_tz or timezone.utc

    def _local_now(self, now: Optional[datetime]) -> datetime:
        if now is None:
            return datetime.now(self.local_tz)
        if now.tzinfo is None:
            return now
        return now.astimezone(self.local_tz)

    def score_task(self, task: Task, now: Optional[datetime] = None) -> UrgencyResult:
        """
        Score a single task.

        Args:
            task: Task to score
            now: Current datetime for the deadline factor

        Returns:
            UrgencyResult with factor breakdown and recommendation
        """
        factors = UrgencyFactors(
            deadline=calculate_deadline_score(task.due_date, self._local_now(now)),
            impact=calculate_impact_score(task),
            dependency=calculate_dependency_score(task),
            complexity=calculate_complexity_score(task.estimated_hours),
        )

        score = (
            factors.deadline * self.DEADLINE_WEIGHT +
            factors.impact * self.IMPACT_WEIGHT +
            factors.dependency * self.DEPENDENCY_WEIGHT +
            factors.complexity * self.COMPLEXITY_WEIGHT
        )
        # Drop float noise so 2.0 stays 2.0
        score = round(score, 4)

        return UrgencyResult(
            task=task,
            urgency_score=score,
            factors=factors,
            recommendation=generate_recommendation(factors, score),
        )

    def rank_tasks(
        self,
        tasks: List[Task],
        now: Optional[datetime] = None,
        top_n: Optional[int] = None
    ) -> List[UrgencyResult]:
        """
        Score active tasks and sort them by urgency.

        Only pending and in-progress tasks are scored. Equal scores keep
        the lower task id first; tasks without an id go last.

        Args:
            tasks: Tasks to rank
            now: Current datetime
            top_n: If provided, return only the top N results (none when N <= 0)

        Returns:
            UrgencyResults sorted by score (highest first)
        """
        now = self._local_now(now)

        scored = [self.score_task(task, now) for task in tasks if task.is_active()]
        scored.sort(key=lambda r: (-r.urgency_score, r.task.id is None, r.task.id or 0))

        if top_n is not None:
            return scored[:max(top_n, 0)]
        return scored

    def calculate_top_priority_tasks(
        self,
        tasks: List[Task],
        now: Optional[datetime] = None,
        n: int = 3
    ) -> List[UrgencyResult]:
        """Get the top N (default 3) priority cards."""
        return self.rank_tasks(tasks, now, top_n=n)
