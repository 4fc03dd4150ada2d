"""Enumerations for the core app."""

from core.enums.health_status import HealthStatus
from core.enums.notification import NotificationKind
from core.enums.project import ProjectRole
from core.enums.realtime import RealtimeEvent, RoomKind
from core.enums.task import TaskPriority, TaskStatus

__all__ = [
    "HealthStatus",
    "NotificationKind",
    "ProjectRole",
    "RealtimeEvent",
    "RoomKind",
    "TaskPriority",
    "TaskStatus",
]
