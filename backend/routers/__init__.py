"""
API routers for the Museum Curator Planner backend.

Each router handles a specific domain:
- projects: Project CRUD
- tasks: Task CRUD and completion
- priority: Top priorities, daily schedule, time suggestions
- dashboard: Budget, analytics and the Today view
"""

from .projects import router as projects_router
from .tasks import router as tasks_router
from .priority import router as priority_router
from .dashboard import router as dashboard_router

__all__ = [
    'projects_router',
    'tasks_router',
    'priority_router',
    'dashboard_router',
]
