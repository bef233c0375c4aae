"""
Project schemas.
"""
from datetime import datetime
from uuid import UUID

from pydantic import Field

from opptym.models.project import ProjectStatus
from opptym.schemas.common import CamelSchema


class ProjectCreate(CamelSchema):
    """Create project request."""

    project_name: str = Field(min_length=1, max_length=100)
    website_url: str = Field(min_length=1, max_length=500)
    category: str | None = Field(default=None, max_length=100)
    description: str | None = None


class ProjectResponse(CamelSchema):
    """Project response."""

    id: UUID
    project_name: str
    website_url: str
    category: str | None = None
    description: str | None = None
    status: ProjectStatus
    created_at: datetime
    updated_at: datetime
