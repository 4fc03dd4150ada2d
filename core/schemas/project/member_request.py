"""Project membership request schemas."""

from uuid import UUID

from core.enums import ProjectRole
from core.schemas.base_schema_model import BaseSchemaModel


class MemberAddRequest(BaseSchemaModel):
    """Body of ``POST /projects/<id>/members``."""

    user_id: UUID
    role: ProjectRole = ProjectRole.MEMBER


class MemberRoleUpdateRequest(BaseSchemaModel):
    """Body of ``PATCH /projects/<id>/members/<user_id>``."""

    role: ProjectRole
