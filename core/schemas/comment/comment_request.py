"""Comment request schemas."""

from pydantic import Field

from core.schemas.base_schema_model import BaseSchemaModel


class CommentCreateRequest(BaseSchemaModel):
    """Body of ``POST /tasks/<id>/comments``."""

    content: str = Field(..., min_length=1, max_length=10_000)


class CommentUpdateRequest(BaseSchemaModel):
    """Body of ``PATCH /comments/<id>``."""

    content: str = Field(..., min_length=1, max_length=10_000)
