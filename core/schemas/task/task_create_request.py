"""Task creation request schema."""

from datetime import datetime
from uuid import UUID

from pydantic import Field

from core.enums import TaskPriority, TaskStatus
from core.schemas.base_schema_model import BaseSchemaModel


class TaskCreateRequest(BaseSchemaModel):
    """Body of ``POST /tasks``."""

    project_id: UUID
    title: str = Field(..., min_length=1, max_length=255)
    description: str = ""
    status: TaskStatus = TaskStatus.TODO
    priority: TaskPriority = TaskPriority.MEDIUM
    due_date: datetime | None = None
    assignee_id: UUID | None = None
