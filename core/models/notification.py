"""Notification model for user-facing alerts."""

import uuid
from typing import ClassVar

from django.db import models
from django.utils import timezone

from core.enums import NotificationKind


class Notification(models.Model):
    """One alert shown to one user.

    Notifications are created by domain actions, never directly by clients.
    After creation only the read state changes, and only through
    ``mark_read`` or the conditional updates in NotificationService, so that
    ``read_at`` is set exactly when ``is_read`` is true.

    Attributes:
        notification_id: Unique identifier for the notification.
        user: The owner. Immutable after creation.
        kind: One of NotificationKind.
        title: Short headline.
        message: Human-readable body.
        is_read: Whether the owner has read it.
        read_at: When it was read, None while unread.
        metadata: Versioned metadata variant matching ``kind`` (stored as JSON).
        created_at: When the notification was created.
    """

    notification_id = models.UUIDField(
        primary_key=True,
        default=uuid.uuid4,
        editable=False,
        help_text="Unique identifier for the notification",
    )
    user = models.ForeignKey(
        "core.User",
        on_delete=models.CASCADE,
        related_name="notifications",
        db_column="user_id",
        help_text="User receiving the notification",
    )
    kind = models.CharField(
        max_length=30,
        choices=[(kind.value, kind.value) for kind in NotificationKind],
        help_text="Kind of the notification, decides the metadata shape",
    )
    title = models.CharField(max_length=255)
    message = models.TextField()
    is_read = models.BooleanField(
        default=False,
        help_text="Whether the notification has been read by the user",
    )
    read_at = models.DateTimeField(
        null=True,
        blank=True,
        help_text="When the notification was read",
    )
    metadata = models.JSONField(
        default=dict,
        help_text="Versioned metadata variant matching the kind",
    )
    created_at = models.DateTimeField(
        default=timezone.now,
        help_text="When the notification was created",
    )

    class Meta:
        """Django model metadata."""

        db_table = "notifications"
        ordering: ClassVar[list[str]] = ["-created_at"]
        indexes: ClassVar[list] = [
            models.Index(fields=["user", "-created_at"]),
            models.Index(fields=["user", "is_read", "-created_at"]),
        ]

    def __str__(self) -> str:
        """Return string representation of notification."""
        return f"{self.kind} for user {self.user_id}"

    def __repr__(self) -> str:
        """Return detailed representation of notification."""
        return (
            f"<Notification(id={self.notification_id}, "
            f"kind={self.kind}, "
            f"user={self.user_id}, "
            f"is_read={self.is_read})>"
        )

    def mark_read(self) -> None:
        """Mark as read, setting the flag and the timestamp together.

        A notification that is already read keeps its read_at.
        """
        now = timezone.now()
        type(self).objects.filter(pk=self.pk, is_read=False).update(
            is_read=True, read_at=now
        )
        self.refresh_from_db(fields=["is_read", "read_at"])
