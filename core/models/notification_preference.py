"""Per-user notification preferences."""

from django.db import models
from django.utils import timezone


class NotificationPreference(models.Model):
    """Toggles deciding whether a notification is also sent by email.

    The in-app notification and its live push are never affected by these
    flags.
    """

    user = models.OneToOneField(
        "core.User",
        on_delete=models.CASCADE,
        primary_key=True,
        related_name="notification_preference",
        db_column="user_id",
    )
    email_enabled = models.BooleanField(default=True)
    mention_notifications = models.BooleanField(default=True)
    task_assignment_notifications = models.BooleanField(default=True)
    due_date_notifications = models.BooleanField(default=True)
    project_update_notifications = models.BooleanField(default=True)
    created_at = models.DateTimeField(default=timezone.now)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        """Django model metadata."""

        db_table = "notification_preferences"

    def __str__(self) -> str:
        """Return string representation of preferences."""
        return f"Notification preferences of {self.user_id}"
