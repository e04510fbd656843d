"""
Task Agent for the Museum Curator Planner
Handles task operations: create, update, complete, get and list tasks.
"""

from datetime import date, datetime, timezone
from typing import Any, Dict, List, Optional

from dateutil import parser as date_parser

from .base_agent import BaseAgent, AgentResponse
from ..core.models import Task, TASK_CATEGORIES, TASK_STATUSES


class TaskAgent(BaseAgent):
    """
    Specialized agent for curatorial tasks.

    Handles intents:
    - add_task: Create a new task
    - update_task: Modify task fields
    - complete_task: Mark a task as completed
    - get_task: Fetch a single task
    - list_tasks: List tasks with filters
    """

    # Columns a caller may change through update_task
    UPDATABLE_FIELDS = (
        "title", "description", "category", "priority", "urgency_score",
        "estimated_hours", "actual_hours", "due_date", "status", "project_id",
    )

    def __init__(self, db, config, state=None):
        """Initialize the Task Agent."""
        super().__init__(db, config, "task", state)

    def get_handlers(self):
        return {
            "add_task": self._handle_add_task,
            "update_task": self._handle_update_task,
            "complete_task": self._handle_complete_task,
            "get_task": self._handle_get_task,
            "list_tasks": self._handle_list_tasks,
        }

    # =========================================================================
    # Intent Handlers
    # =========================================================================

    def _handle_add_task(self, context: Dict[str, Any]) -> AgentResponse:
        """
        Handle task creation.

        Context params:
            title (str): Task title
            category (str): One of the curatorial categories
            description (str, optional): Task description
            priority (int, optional): Priority 1-5
            estimated_hours (float, optional): Effort estimate
            due_date (str, optional): Due date, any format dateutil parses
            project_id (int, optional): Associated project
            status (str, optional): Initial status (default pending)
        """
        validation = self.validate_required_params(context, ["title", "category"])
        if validation:
            return validation

        priority = context.get("priority")
        if priority is None:
            priority = self.get_config_value("default_task_priority", default=3)

        estimated_hours = context.get("estimated_hours")
        if estimated_hours is None:
            estimated_hours = self.get_config_value("default_estimated_hours", default=1.0)

        task_data = {
            "project_id": context.get("project_id"),
            "title": context["title"],
            "description": context.get("description"),
            "category": context["category"],
            "priority": priority,
            "estimated_hours": estimated_hours,
            "due_date": context.get("due_date"),
            "status": context.get("status") or "pending",
        }

        error = self._validate_fields(task_data)
        if error:
            return error
        task_data["due_date"] = self._parse_due_date(task_data["due_date"])

        task_id = self._insert_task(task_data)
        created_task = self._get_task_by_id(task_id)
        self._publish_tasks()

        return AgentResponse.ok(
            message=f"Task created: '{task_data['title']}'",
            data={"task_id": task_id, "task": created_task},
            suggestions=[
                "See today's top priorities",
                f"Get a time suggestion for task {task_id}",
            ]
        )

    def _handle_update_task(self, context: Dict[str, Any]) -> AgentResponse:
        """
        Update task fields.

        Context params:
            task_id (int): Task to update
            any of UPDATABLE_FIELDS
        """
        validation = self.validate_required_params(context, ["task_id"])
        if validation:
            return validation

        task_id = context["task_id"]
        update_fields = {
            key: context[key] for key in self.UPDATABLE_FIELDS if key in context
        }
        if not update_fields:
            return AgentResponse.error("No fields to update provided")

        error = self._validate_fields(update_fields)
        if error:
            return error
        if "due_date" in update_fields:
            update_fields["due_date"] = self._parse_due_date(update_fields["due_date"])
        if "status" in update_fields:
            update_fields["completed_at"] = (
                self._now_iso() if update_fields["status"] == "completed" else None
            )

        if not self._update_task(task_id, update_fields):
            return AgentResponse.error(f"Task {task_id} not found", not_found=True)

        self._publish_tasks()
        return AgentResponse.ok(
            message=f"Task {task_id} updated",
            data={"task": self._get_task_by_id(task_id)}
        )

    def _handle_complete_task(self, context: Dict[str, Any]) -> AgentResponse:
        """
        Mark a task as completed.

        Context params:
            task_id (int): Task to complete
            actual_hours (float, optional): Time actually spent
        """
        validation = self.validate_required_params(context, ["task_id"])
        if validation:
            return validation

        fields = {"status": "completed", "completed_at": self._now_iso()}
        if context.get("actual_hours") is not None:
            fields["actual_hours"] = context["actual_hours"]

        task_id = context["task_id"]
        if not self._update_task(task_id, fields):
            return AgentResponse.error(f"Task {task_id} not found", not_found=True)

        self._publish_tasks()
        return AgentResponse.ok(
            message=f"Task {task_id} completed",
            data={"task": self._get_task_by_id(task_id)},
            suggestions=["Review the remaining schedule for today"]
        )

    def _handle_get_task(self, context: Dict[str, Any]) -> AgentResponse:
        """
        Get a single task by ID.

        Context params:
            task_id (int): Task ID to retrieve
        """
        validation = self.validate_required_params(context, ["task_id"])
        if validation:
            return validation

        task = self._get_task_by_id(context["task_id"])
        if task:
            return AgentResponse.ok(message=f"Task: {task['title']}", data={"task": task})
        return AgentResponse.error(f"Task {context['task_id']} not found", not_found=True)

    def _handle_list_tasks(self, context: Dict[str, Any]) -> AgentResponse:
        """
        List tasks with optional filters.

        Context params:
            project_id (int): Filter by project
            status (str): Filter by status
            category (str): Filter by category
            limit (int): Max tasks to return
        """
        tasks = self._fetch_tasks(
            project_id=context.get("project_id"),
            status=context.get("status"),
            category=context.get("category"),
            limit=context.get("limit"),
        )
        return AgentResponse.ok(
            message=f"Found {len(tasks)} task(s)",
            data={"tasks": tasks, "count": len(tasks)}
        )

    # =========================================================================
    # Helpers
    # =========================================================================

    def load_tasks(self, project_id: Optional[int] = None) -> List[Task]:
        """Load tasks as models, ordered by priority then due date."""
        return [Task.from_dict(row) for row in self._fetch_tasks(project_id=project_id)]

    def _validate_fields(self, fields: Dict[str, Any]) -> Optional[AgentResponse]:
        if "category" in fields and fields["category"] not in TASK_CATEGORIES:
            return AgentResponse.error(
                f"Invalid category '{fields['category']}'. "
                f"Expected one of: {', '.join(TASK_CATEGORIES)}"
            )
        if "status" in fields and fields["status"] not in TASK_STATUSES:
            return AgentResponse.error(
                f"Invalid status '{fields['status']}'. "
                f"Expected one of: {', '.join(TASK_STATUSES)}"
            )
        priority = fields.get("priority")
        if priority is not None and not (1 <= int(priority) <= 5):
            return AgentResponse.error("Priority must be between 1 and 5")
        hours = fields.get("estimated_hours")
        if hours is not None and float(hours) <= 0:
            return AgentResponse.error("Estimated hours must be positive")
        due_date = fields.get("due_date")
        if due_date not in (None, "") and self._parse_due_date(due_date) is None:
            return AgentResponse.error(f"Could not parse due date '{due_date}'")
        return None

    def _parse_due_date(self, due_date: Any) -> Optional[str]:
        """Normalize a due date to 'YYYY-MM-DD'."""
        if due_date is None or due_date == "":
            return None
        if isinstance(due_date, datetime):
            return due_date.date().isoformat()
        if isinstance(due_date, date):
            return due_date.isoformat()
        if isinstance(due_date, str):
            try:
                return date_parser.parse(due_date).date().isoformat()
            except (ValueError, OverflowError):
                return None
        return None

    def _now_iso(self) -> str:
        return datetime.now(timezone.utc).isoformat()

    def _publish_tasks(self) -> None:
        if self.state is not None:
            self.publish("tasks", self.load_tasks())

    # =========================================================================
    # Database Operations
    # =========================================================================

    def _insert_task(self, task_data: Dict[str, Any]) -> int:
        """Insert a new task and return its ID."""
        query = """
            INSERT INTO tasks (
                project_id, title, description, category, priority,
                estimated_hours, due_date, status
            ) VALUES (?, ?, ?, ?, ?, ?, ?, ?)
        """
        params = (
            task_data.get("project_id"),
            task_data["title"],
            task_data.get("description"),
            task_data["category"],
            task_data.get("priority", 3),
            task_data.get("estimated_hours"),
            task_data.get("due_date"),
            task_data.get("status", "pending"),
        )
        return self.db.execute_write(query, params)

    def _get_task_by_id(self, task_id: int) -> Optional[Dict[str, Any]]:
        """Fetch a single task by ID."""
        row = self.db.execute_one("SELECT * FROM tasks WHERE id = ?", (task_id,))
        return self.db.row_to_dict(row)

    def _update_task(self, task_id: int, fields: Dict[str, Any]) -> bool:
        """Update specified task fields."""
        set_clause = ", ".join(f"{key} = ?" for key in fields.keys())
        query = f"UPDATE tasks SET {set_clause} WHERE id = ?"
        params = tuple(fields.values()) + (task_id,)
        return self.db.execute_write(query, params) > 0

    def _fetch_tasks(
        self,
        project_id: Optional[int] = None,
        status: Optional[str] = None,
        category: Optional[str] = None,
        limit: Optional[int] = None
    ) -> List[Dict[str, Any]]:
        """Fetch tasks with filters."""
        conditions = []
        params: List[Any] = []

        if project_id is not None:
            conditions.append("project_id = ?")
            params.append(project_id)
        if status:
            conditions.append("status = ?")
            params.append(status)
        if category:
            conditions.append("category = ?")
            params.append(category)

        where_clause = " AND ".join(conditions) if conditions else "1=1"
        query = f"""
            SELECT * FROM tasks
            WHERE {where_clause}
            ORDER BY priority DESC, due_date ASC
        """
        if limit:
            query += " LIMIT ?"
            params.append(limit)

        rows = self.db.execute(query, tuple(params))
        return self.db.rows_to_dicts(rows)
