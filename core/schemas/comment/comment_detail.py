"""Comment response schema."""

from datetime import datetime
from uuid import UUID

from core.schemas.base_schema_model import BaseSchemaModel


class CommentDetail(BaseSchemaModel):
    """A comment as returned by the API and pushed as ``comment:created``."""

    comment_id: UUID
    task_id: UUID
    author_id: UUID
    content: str
    created_at: datetime
    updated_at: datetime
