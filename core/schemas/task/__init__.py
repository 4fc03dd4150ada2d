"""Task schemas."""

from core.schemas.task.task_create_request import TaskCreateRequest
from core.schemas.task.task_detail import TaskDetail
from core.schemas.task.task_list import TaskListQuery, TaskListResponse
from core.schemas.task.task_update_request import TaskUpdateRequest

__all__ = [
    "TaskCreateRequest",
    "TaskDetail",
    "TaskListQuery",
    "TaskListResponse",
    "TaskUpdateRequest",
]
