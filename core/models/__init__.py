"""Database models for core application."""

from core.models.comment import Comment
from core.models.notification import Notification
from core.models.notification_preference import NotificationPreference
from core.models.project import Project
from core.models.project_member import ProjectMember
from core.models.task import Task
from core.models.user import User

__all__ = [
    "Comment",
    "Notification",
    "NotificationPreference",
    "Project",
    "ProjectMember",
    "Task",
    "User",
]
