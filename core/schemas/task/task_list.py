"""Task list query and response schemas."""

from uuid import UUID

from pydantic import Field

from core.constants import DEFAULT_PAGE_LIMIT
from core.enums import TaskPriority, TaskStatus
from core.schemas.base_schema_model import BaseSchemaModel
from core.schemas.task.task_detail import TaskDetail


class TaskListQuery(BaseSchemaModel):
    """``?status=&priority=&assigneeId=&search=&limit=&offset=`` of a project."""

    status: TaskStatus | None = None
    priority: TaskPriority | None = None
    assignee_id: UUID | None = None
    search: str | None = Field(None, max_length=255)
    limit: int = Field(DEFAULT_PAGE_LIMIT, ge=1)
    offset: int = Field(0, ge=0)


class TaskListResponse(BaseSchemaModel):
    """One page of a project's tasks, newest first."""

    tasks: list[TaskDetail] = Field(default_factory=list)
    total: int = Field(..., ge=0, description="Tasks matching the filters")
    limit: int = Field(..., ge=1)
    offset: int = Field(0, ge=0)
