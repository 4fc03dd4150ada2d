"""Query parameters of the project list endpoint."""

from pydantic import Field

from core.constants import DEFAULT_PAGE_LIMIT
from core.schemas.base_schema_model import BaseSchemaModel


class ProjectListQuery(BaseSchemaModel):
    """``?limit=&offset=&search=``; search matches name or description."""

    limit: int = Field(DEFAULT_PAGE_LIMIT, ge=1)
    offset: int = Field(0, ge=0)
    search: str | None = Field(None, max_length=200)
