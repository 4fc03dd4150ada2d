"""Project response schemas."""

from datetime import datetime
from uuid import UUID

from pydantic import Field

from core.enums import ProjectRole
from core.schemas.base_schema_model import BaseSchemaModel


class ProjectDetail(BaseSchemaModel):
    """A project with the caller's role and task and member counts."""

    project_id: UUID
    name: str
    description: str
    role: ProjectRole = Field(..., description="Role of the caller in the project")
    task_count: int = Field(0, ge=0)
    completed_task_count: int = Field(0, ge=0)
    member_count: int = Field(0, ge=0)
    created_at: datetime
    updated_at: datetime


class ProjectListResponse(BaseSchemaModel):
    """One page of the caller's projects, newest first."""

    projects: list[ProjectDetail] = Field(default_factory=list)
    total: int = Field(..., ge=0, description="Projects matching the filter")
    limit: int = Field(..., ge=1)
    offset: int = Field(0, ge=0)
