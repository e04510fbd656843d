"""
Project Agent for the Museum Curator Planner
Handles exhibition, education and research projects.
"""

from typing import Any, Dict, List, Optional

from dateutil import parser as date_parser

from .base_agent import BaseAgent, AgentResponse
from ..core.models import Project, TASK_CATEGORIES, PROJECT_STATUSES


class ProjectAgent(BaseAgent):
    """
    Agent for project management.

    Handles intents:
    - add_project: Create a new project
    - update_project: Modify project fields
    - get_project: Project details with task counts
    - list_projects: List projects, most recently updated first
    """

    UPDATABLE_FIELDS = (
        "title", "description", "category", "status",
        "start_date", "end_date", "budget", "spent",
    )

    def __init__(self, db, config, state=None):
        super().__init__(db, config, "project", state)

    def get_handlers(self):
        return {
            "add_project": self._handle_add_project,
            "update_project": self._handle_update_project,
            "get_project": self._handle_get_project,
            "list_projects": self._handle_list_projects,
        }

    def _handle_add_project(self, context: Dict[str, Any]) -> AgentResponse:
        """
        Create a new project.

        Context params:
            title (str): Project title
            category (str): Curatorial category
            description (str, optional)
            status (str, optional): Default 'planning'
            start_date / end_date (str, optional)
            budget / spent (int, optional): Default 0
        """
        validation = self.validate_required_params(context, ["title", "category"])
        if validation:
            return validation

        project_data = {
            "title": context["title"],
            "description": context.get("description"),
            "category": context["category"],
            "status": context.get("status") or "planning",
            "start_date": context.get("start_date"),
            "end_date": context.get("end_date"),
            "budget": context.get("budget") or 0,
            "spent": context.get("spent") or 0,
        }

        error = self._validate_fields(project_data)
        if error:
            return error
        for key in ("start_date", "end_date"):
            project_data[key] = self._parse_date(project_data[key])

        project_id = self.db.execute_write(
            """
            INSERT INTO projects (
                title, description, category, status,
                start_date, end_date, budget, spent
            ) VALUES (?, ?, ?, ?, ?, ?, ?, ?)
            """,
            (
                project_data["title"], project_data["description"],
                project_data["category"], project_data["status"],
                project_data["start_date"], project_data["end_date"],
                project_data["budget"], project_data["spent"],
            )
        )
        self._publish_projects()

        return AgentResponse.ok(
            message=f"Project created: '{project_data['title']}'",
            data={"project_id": project_id, "project": self._get_project_by_id(project_id)},
            suggestions=[f"Add tasks to project {project_id}"]
        )

    def _handle_update_project(self, context: Dict[str, Any]) -> AgentResponse:
        validation = self.validate_required_params(context, ["project_id"])
        if validation:
            return validation

        project_id = context["project_id"]
        fields = {key: context[key] for key in self.UPDATABLE_FIELDS if key in context}
        if not fields:
            return AgentResponse.error("No fields to update provided")

        error = self._validate_fields(fields)
        if error:
            return error
        for key in ("start_date", "end_date"):
            if key in fields:
                fields[key] = self._parse_date(fields[key])

        set_clause = ", ".join(f"{key} = ?" for key in fields)
        updated = self.db.execute_write(
            f"UPDATE projects SET {set_clause}, "
            "updated_at = strftime('%Y-%m-%d %H:%M:%f', 'now', 'utc') WHERE id = ?",
            tuple(fields.values()) + (project_id,)
        )
        if not updated:
            return AgentResponse.error(f"Project {project_id} not found", not_found=True)

        self._publish_projects()
        return AgentResponse.ok(
            message=f"Project {project_id} updated",
            data={"project": self._get_project_by_id(project_id)}
        )

    def _handle_get_project(self, context: Dict[str, Any]) -> AgentResponse:
        """Get project details including task counts by status."""
        validation = self.validate_required_params(context, ["project_id"])
        if validation:
            return validation

        project_id = context["project_id"]
        project = self._get_project_by_id(project_id)
        if not project:
            return AgentResponse.error(f"Project {project_id} not found", not_found=True)

        rows = self.db.execute(
            "SELECT status, COUNT(*) AS count FROM tasks WHERE project_id = ? GROUP BY status",
            (project_id,)
        )
        task_counts = {row["status"]: row["count"] for row in rows}

        return AgentResponse.ok(
            message=f"Project: {project['title']}",
            data={"project": project, "task_counts": task_counts}
        )

    def _handle_list_projects(self, context: Dict[str, Any]) -> AgentResponse:
        projects = self._fetch_projects(status=context.get("status"))
        return AgentResponse.ok(
            message=f"Found {len(projects)} project(s)",
            data={"projects": projects, "count": len(projects)}
        )

    def load_projects(self) -> List[Project]:
        return [Project.from_dict(row) for row in self._fetch_projects()]

    def _validate_fields(self, fields: Dict[str, Any]) -> Optional[AgentResponse]:
        if "category" in fields and fields["category"] not in TASK_CATEGORIES:
            return AgentResponse.error(
                f"Invalid category '{fields['category']}'. "
                f"Expected one of: {', '.join(TASK_CATEGORIES)}"
            )
        if "status" in fields and fields["status"] not in PROJECT_STATUSES:
            return AgentResponse.error(
                f"Invalid status '{fields['status']}'. "
                f"Expected one of: {', '.join(PROJECT_STATUSES)}"
            )
        for key in ("budget", "spent"):
            if fields.get(key) is not None and int(fields[key]) < 0:
                return AgentResponse.error(f"{key.capitalize()} cannot be negative")
        for key in ("start_date", "end_date"):
            value = fields.get(key)
            if value not in (None, "") and self._parse_date(value) is None:
                return AgentResponse.error(f"Could not parse {key} '{value}'")
        return None

    def _parse_date(self, value: Any) -> Optional[str]:
        if value is None or value == "":
            return None
        try:
            return date_parser.parse(str(value)).date().isoformat()
        except (ValueError, OverflowError):
            return None

    def _publish_projects(self) -> None:
        if self.state is not None:
            self.publish("projects", self.load_projects())

    def _get_project_by_id(self, project_id: int) -> Optional[Dict[str, Any]]:
        row = self.db.execute_one("SELECT * FROM projects WHERE id = ?", (project_id,))
        return self.db.row_to_dict(row)

    def _fetch_projects(self, status: Optional[str] = None) -> List[Dict[str, Any]]:
        query = "SELECT * FROM projects"
        params: tuple = ()
        if status:
            query += " WHERE status = ?"
            params = (status,)
        query += " ORDER BY updated_at DESC, id DESC"
        return self.db.rows_to_dicts(self.db.execute(query, params))
