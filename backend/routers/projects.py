"""
Project API endpoints.

Exhibition, education and research projects via the ProjectAgent.
"""

from typing import List, Optional
from fastapi import APIRouter, Depends, Query

from backend.dependencies import get_project_agent
from backend.errors import raise_for_agent_error
from backend.schemas import (
    ApiResponse,
    ProjectCreate,
    ProjectDetail,
    ProjectResponse,
    ProjectUpdate,
)
from museum_planner.agents import ProjectAgent

router = APIRouter(prefix="/api/projects", tags=["projects"])


@router.get("", response_model=ApiResponse[List[ProjectResponse]])
async def list_projects(
    status: Optional[str] = Query(None, description="Filter by status"),
    agent: ProjectAgent = Depends(get_project_agent),
):
    """List projects, most recently updated first."""
    context = {"status": status} if status else {}
    response = agent.process("list_projects", context)
    raise_for_agent_error(response)

    return {"success": True, "data": response.data["projects"]}


@router.post("", response_model=ApiResponse[ProjectResponse], status_code=201)
async def create_project(
    project: ProjectCreate,
    agent: ProjectAgent = Depends(get_project_agent),
):
    """Create a new project."""
    context = {k: v for k, v in project.model_dump().items() if v is not None}

    response = agent.process("add_project", context)
    raise_for_agent_error(response)

    return {"success": True, "data": response.data["project"]}


@router.get("/{project_id}", response_model=ApiResponse[ProjectDetail])
async def get_project(
    project_id: int,
    agent: ProjectAgent = Depends(get_project_agent),
):
    """Get a project with its task counts."""
    response = agent.process("get_project", {"project_id": project_id})
    raise_for_agent_error(response)

    return {"success": True, "data": response.data}


@router.patch("/{project_id}", response_model=ApiResponse[ProjectResponse])
async def patch_project(
    project_id: int,
    project: ProjectUpdate,
    agent: ProjectAgent = Depends(get_project_agent),
):
    """Partially update a project."""
    context = {"project_id": project_id}
    context.update(project.model_dump(exclude_unset=True))

    response = agent.process("update_project", context)
    raise_for_agent_error(response)

    return {"success": True, "data": response.data["project"]}
