"""
Data models for the Museum Curator Planner
Defines core data structures for tasks and projects.
"""

from dataclasses import dataclass, asdict
from datetime import date, datetime
from typing import Optional, Dict, Any, Union


# Curatorial work categories shared by tasks, projects and budget items
TASK_CATEGORIES = (
    "exhibition",
    "education",
    "collection",
    "publication",
    "research",
    "admin",
)

TASK_STATUSES = ("pending", "in_progress", "completed", "paused", "cancelled")

# Only these statuses are scored and scheduled
ACTIVE_STATUSES = ("pending", "in_progress")

PROJECT_STATUSES = ("planning", "in_progress", "completed", "on_hold")


def parse_date(value: Any) -> Optional[Union[date, datetime]]:
    """
    Parse a stored date value.

    'YYYY-MM-DD' strings become dates, strings with a time component become
    datetimes. Unparseable values return None.
    """
    if value is None or value == "":
        return None
    if isinstance(value, (date, datetime)):
        return value
    if isinstance(value, str):
        try:
            if len(value) == 10:
                return date.fromisoformat(value)
            return datetime.fromisoformat(value)
        except (ValueError, TypeError):
            return None
    return None


def parse_datetime(value: Any) -> Optional[datetime]:
    """Parse datetime string from database"""
    if isinstance(value, datetime):
        return value
    if value:
        try:
            return datetime.fromisoformat(value)
        except (ValueError, TypeError):
            return None
    return None


def _optional_float(value: Any) -> Optional[float]:
    if value is None or value == "":
        return None
    try:
        return float(value)
    except (ValueError, TypeError):
        return None


def _isoformat(value: Optional[Union[date, datetime]]) -> Optional[str]:
    return value.isoformat() if value is not None else None


@dataclass
class Project:
    """Exhibition, education or research project"""
    id: Optional[int] = None
    title: str = ""
    description: Optional[str] = None
    category: str = "exhibition"
    status: str = "planning"  # 'planning', 'in_progress', 'completed', 'on_hold'
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    budget: int = 0
    spent: int = 0
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Project':
        """Create Project from database row dictionary"""
        return cls(
            id=data.get('id'),
            title=data.get('title', ''),
            description=data.get('description'),
            category=data.get('category', 'exhibition'),
            status=data.get('status', 'planning'),
            start_date=parse_date(data.get('start_date')),
            end_date=parse_date(data.get('end_date')),
            budget=data.get('budget') or 0,
            spent=data.get('spent') or 0,
            created_at=parse_datetime(data.get('created_at')),
            updated_at=parse_datetime(data.get('updated_at')),
        )

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        for key in ('start_date', 'end_date', 'created_at', 'updated_at'):
            data[key] = _isoformat(data[key])
        return data


@dataclass
class Task:
    """Curatorial task data model"""
    id: Optional[int] = None
    title: str = ""
    description: Optional[str] = None
    category: str = "admin"
    status: str = "pending"  # 'pending', 'in_progress', 'completed', 'paused', 'cancelled'
    priority: int = 3  # 1-5, where 5 is highest priority
    project_id: Optional[int] = None
    urgency_score: Optional[float] = None
    estimated_hours: Optional[float] = None
    actual_hours: Optional[float] = None
    due_date: Optional[date] = None
    completed_at: Optional[datetime] = None
    created_at: Optional[datetime] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Task':
        """Create Task from database row dictionary"""
        return cls(
            id=data.get('id'),
            title=data.get('title', ''),
            description=data.get('description'),
            category=data.get('category', 'admin'),
            status=data.get('status', 'pending'),
            priority=data.get('priority') or 3,
            project_id=data.get('project_id'),
            urgency_score=_optional_float(data.get('urgency_score')),
            estimated_hours=_optional_float(data.get('estimated_hours')),
            actual_hours=_optional_float(data.get('actual_hours')),
            due_date=parse_date(data.get('due_date')),
            completed_at=parse_datetime(data.get('completed_at')),
            created_at=parse_datetime(data.get('created_at')),
        )

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        for key in ('due_date', 'completed_at', 'created_at'):
            data[key] = _isoformat(data[key])
        return data

    def is_active(self) -> bool:
        """Check if task is eligible for scoring and scheduling"""
        return self.status in ACTIVE_STATUSES

    def is_creative(self) -> bool:
        """Exhibition and research work needs the high-energy hours"""
        return self.category in ("exhibition", "research")

    def is_complex(self) -> bool:
        """Tasks longer than two hours count as complex"""
        return (self.estimated_hours or 0) > 2
