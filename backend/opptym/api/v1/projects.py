"""
Project endpoints.
"""
from uuid import UUID

from fastapi import APIRouter, status

from opptym.core.deps import CurrentUser, DbSession, enforce_usage
from opptym.core.exceptions import NotFoundError
from opptym.schemas.common import MessageResponse
from opptym.schemas.project import ProjectCreate, ProjectResponse
from opptym.services.plan_limits import LimitCategory
from opptym.services.project_service import ProjectService
from opptym.services.usage_service import UsageService

router = APIRouter(prefix="/projects", tags=["Projects"])


@router.get("", response_model=list[ProjectResponse])
async def list_projects(current_user: CurrentUser, db: DbSession) -> list[ProjectResponse]:
    """List the current user's projects, newest first."""
    projects = await ProjectService(db).list_for_user(current_user.id)
    return [ProjectResponse.model_validate(p) for p in projects]


@router.post("", response_model=ProjectResponse, status_code=status.HTTP_201_CREATED)
async def create_project(
    data: ProjectCreate,
    current_user: CurrentUser,
    db: DbSession,
) -> ProjectResponse:
    """Create a project if the plan's project ceiling allows another one."""
    enforce_usage(await UsageService(db).track_usage(current_user.id, LimitCategory.PROJECTS))

    project = await ProjectService(db).create(current_user.id, data)
    return ProjectResponse.model_validate(project)


@router.get("/{project_id}", response_model=ProjectResponse)
async def get_project(project_id: UUID, current_user: CurrentUser, db: DbSession) -> ProjectResponse:
    project = await ProjectService(db).get_for_user(project_id, current_user.id)
    if not project:
        raise NotFoundError("Project")
    return ProjectResponse.model_validate(project)


@router.delete("/{project_id}", response_model=MessageResponse)
async def delete_project(project_id: UUID, current_user: CurrentUser, db: DbSession) -> MessageResponse:
    """Delete a project and bring the cached usage counters back in line."""
    service = ProjectService(db)
    project = await service.get_for_user(project_id, current_user.id)
    if not project:
        raise NotFoundError("Project")

    await service.delete(project)
    await UsageService(db).reconcile_cached_usage(current_user.id)
    return MessageResponse(message="Project deleted")
