"""Task response schema."""

from datetime import datetime
from uuid import UUID

from core.enums import TaskPriority, TaskStatus
from core.schemas.base_schema_model import BaseSchemaModel


class TaskDetail(BaseSchemaModel):
    """A task as returned by the API and pushed as ``task:created``/``task:updated``."""

    task_id: UUID
    project_id: UUID
    title: str
    description: str
    status: TaskStatus
    priority: TaskPriority
    due_date: datetime | None = None
    completed_at: datetime | None = None
    creator_id: UUID
    assignee_id: UUID | None = None
    created_at: datetime
    updated_at: datetime
