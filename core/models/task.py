"""Task model."""

import uuid
from typing import ClassVar

from django.db import models
from django.utils import timezone

from core.enums import TaskPriority, TaskStatus


class Task(models.Model):
    """A unit of work inside a project.

    Attributes:
        task_id: Unique identifier for the task.
        title: Short summary.
        description: Free text body.
        status: Workflow status (see TaskStatus).
        priority: Priority bucket (see TaskPriority).
        due_date: Optional deadline.
        completed_at: Set while the task is DONE, cleared otherwise.
        project: Owning project.
        creator: User who created the task.
        assignee: Optional user responsible for the task.
    """

    task_id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    title = models.CharField(max_length=255)
    description = models.TextField(default="", blank=True)
    status = models.CharField(
        max_length=20,
        choices=[(status.value, status.value) for status in TaskStatus],
        default=TaskStatus.TODO.value,
    )
    priority = models.CharField(
        max_length=10,
        choices=[(priority.value, priority.value) for priority in TaskPriority],
        default=TaskPriority.MEDIUM.value,
    )
    due_date = models.DateTimeField(null=True, blank=True)
    completed_at = models.DateTimeField(null=True, blank=True)
    project = models.ForeignKey(
        "core.Project",
        on_delete=models.CASCADE,
        related_name="tasks",
        db_column="project_id",
    )
    creator = models.ForeignKey(
        "core.User",
        on_delete=models.CASCADE,
        related_name="created_tasks",
        db_column="creator_id",
    )
    assignee = models.ForeignKey(
        "core.User",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="assigned_tasks",
        db_column="assignee_id",
    )
    created_at = models.DateTimeField(default=timezone.now)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        """Django model metadata."""

        db_table = "tasks"
        ordering: ClassVar[list[str]] = ["-created_at"]
        indexes: ClassVar[list] = [
            models.Index(fields=["project", "status"]),
            models.Index(fields=["assignee", "status"]),
        ]

    def __str__(self) -> str:
        """Return string representation of task."""
        return self.title

    def __repr__(self) -> str:
        """Return detailed representation of task."""
        return (
            f"<Task(task_id={self.task_id}, "
            f"status={self.status}, "
            f"project={self.project_id})>"
        )
