"""Task update request schema."""

from datetime import datetime
from uuid import UUID

from pydantic import Field

from core.enums import TaskPriority, TaskStatus
from core.schemas.base_schema_model import BaseSchemaModel


class TaskUpdateRequest(BaseSchemaModel):
    """Body of ``PATCH /tasks/<id>``.

    Only fields present in the body are applied, so ``"assigneeId": null``
    unassigns the task while omitting it keeps the assignee.
    """

    title: str | None = Field(None, min_length=1, max_length=255)
    description: str | None = None
    status: TaskStatus | None = None
    priority: TaskPriority | None = None
    due_date: datetime | None = None
    assignee_id: UUID | None = None

    def changes(self) -> dict:
        """Return the fields that were sent, by field name."""
        return self.model_dump(include=self.model_fields_set)
