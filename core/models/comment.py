"""Comment model."""

import uuid
from typing import ClassVar

from django.db import models
from django.utils import timezone


class Comment(models.Model):
    """A comment left on a task."""

    comment_id = models.UUIDField(
        primary_key=True, default=uuid.uuid4, editable=False
    )
    task = models.ForeignKey(
        "core.Task",
        on_delete=models.CASCADE,
        related_name="comments",
        db_column="task_id",
    )
    author = models.ForeignKey(
        "core.User",
        on_delete=models.CASCADE,
        related_name="comments",
        db_column="author_id",
    )
    content = models.TextField()
    created_at = models.DateTimeField(default=timezone.now)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        """Django model metadata."""

        db_table = "comments"
        ordering: ClassVar[list[str]] = ["created_at"]

    def __str__(self) -> str:
        """Return string representation of comment."""
        return f"Comment by {self.author_id} on {self.task_id}"
