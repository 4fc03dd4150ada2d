"""Immutable view of the task fields the analytics calculations read."""

from datetime import datetime
from uuid import UUID

from pydantic import ConfigDict

from core.enums import TaskPriority, TaskStatus
from core.schemas.base_schema_model import BaseSchemaModel


class TaskSnapshot(BaseSchemaModel):
    """One task row as seen by the analytics calculations."""

    model_config = ConfigDict(frozen=True)

    status: TaskStatus
    priority: TaskPriority
    created_at: datetime
    completed_at: datetime | None = None
    due_date: datetime | None = None
    assignee_id: UUID | None = None
    assignee_name: str | None = None

    @classmethod
    def from_task(cls, task) -> "TaskSnapshot":
        """Build a snapshot from a Task, reading ``assignee`` only if assigned."""
        return cls(
            status=task.status,
            priority=task.priority,
            created_at=task.created_at,
            completed_at=task.completed_at,
            due_date=task.due_date,
            assignee_id=task.assignee_id,
            assignee_name=task.assignee.full_name if task.assignee_id else None,
        )

    @property
    def is_done(self) -> bool:
        """Whether the task is DONE."""
        return self.status == TaskStatus.DONE.value

    def is_overdue(self, now: datetime) -> bool:
        """Not DONE and past its due date."""
        return (
            not self.is_done and self.due_date is not None and self.due_date < now
        )
