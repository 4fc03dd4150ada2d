"""Project create and update request schemas."""

from pydantic import Field

from core.schemas.base_schema_model import BaseSchemaModel


class ProjectCreateRequest(BaseSchemaModel):
    """Body of ``POST /projects``."""

    name: str = Field(..., min_length=1, max_length=200)
    description: str = ""


class ProjectUpdateRequest(BaseSchemaModel):
    """Body of ``PATCH /projects/<id>``; omitted fields keep their value."""

    name: str | None = Field(None, min_length=1, max_length=200)
    description: str | None = None

    def changes(self) -> dict:
        """Return the fields that were sent with a value, by field name."""
        return {
            field: value
            for field, value in self.model_dump(include=self.model_fields_set).items()
            if value is not None
        }
