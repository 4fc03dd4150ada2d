"""Project member response schema."""

from datetime import datetime
from uuid import UUID

from core.enums import ProjectRole
from core.schemas.base_schema_model import BaseSchemaModel


class ProjectMemberDetail(BaseSchemaModel):
    """Membership of one user in one project."""

    project_id: UUID
    user_id: UUID
    role: ProjectRole
    joined_at: datetime
