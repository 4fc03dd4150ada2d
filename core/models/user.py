"""User model."""

import uuid
from typing import ClassVar

from django.db import models
from django.utils import timezone


class User(models.Model):
    """Account of a person using the tracker.

    Credentials live with the identity provider that issues bearer tokens;
    this table only holds what projects, tasks and notifications reference.
    """

    user_id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    email = models.EmailField(max_length=255, unique=True)
    username = models.CharField(max_length=50, unique=True)
    first_name = models.CharField(max_length=100, default="", blank=True)
    last_name = models.CharField(max_length=100, default="", blank=True)
    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(default=timezone.now)

    class Meta:
        """Django model metadata."""

        db_table = "users"
        ordering: ClassVar[list[str]] = ["-created_at"]

    def __str__(self) -> str:
        """Return string representation of user."""
        return f"{self.username} ({self.email})"

    def __repr__(self) -> str:
        """Return detailed representation of user."""
        return f"<User(user_id={self.user_id}, username='{self.username}')>"

    @property
    def full_name(self) -> str:
        """First and last name, falling back to the username."""
        name = f"{self.first_name} {self.last_name}".strip()
        return name or self.username
