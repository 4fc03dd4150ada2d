"""Notification-related enumerations."""

from enum import Enum


class NotificationKind(str, Enum):
    """Kinds of user-facing notifications.

    The kind decides which metadata variant a notification carries and which
    preference flag gates its email delivery.
    """

    TASK_ASSIGNED = "TASK_ASSIGNED"
    TASK_DUE_SOON = "TASK_DUE_SOON"
    COMMENT_MENTION = "COMMENT_MENTION"
    PROJECT_INVITATION = "PROJECT_INVITATION"
    PROJECT_ROLE_CHANGED = "PROJECT_ROLE_CHANGED"
    TASK_COMPLETED = "TASK_COMPLETED"
    OTHER = "OTHER"
