"""Project model."""

import uuid
from typing import ClassVar

from django.db import models
from django.utils import timezone


class Project(models.Model):
    """A container of tasks shared by its members."""

    project_id = models.UUIDField(
        primary_key=True, default=uuid.uuid4, editable=False
    )
    name = models.CharField(max_length=200)
    description = models.TextField(default="", blank=True)
    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(default=timezone.now)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        """Django model metadata."""

        db_table = "projects"
        ordering: ClassVar[list[str]] = ["-created_at"]

    def __str__(self) -> str:
        """Return string representation of project."""
        return self.name

    def __repr__(self) -> str:
        """Return detailed representation of project."""
        return f"<Project(project_id={self.project_id}, name='{self.name}')>"
