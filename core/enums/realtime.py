"""Realtime room kinds and server-to-client event names."""

from enum import Enum


class RoomKind(str, Enum):
    """Namespaces of realtime rooms.

    A room name is ``"{kind}:{id}"``. Every user has a dedicated ``user`` room
    that only their own connections join.
    """

    PROJECT = "project"
    TASK = "task"
    USER = "user"


class RealtimeEvent(str, Enum):
    """Events pushed from the server to room members."""

    NOTIFICATION_NEW = "notification:new"
    NOTIFICATION_READ = "notification:read"
    NOTIFICATION_ALL_READ = "notification:allRead"
    NOTIFICATION_DELETED = "notification:deleted"
    TASK_CREATED = "task:created"
    TASK_UPDATED = "task:updated"
    TASK_DELETED = "task:deleted"
    COMMENT_CREATED = "comment:created"
    COMMENT_UPDATED = "comment:updated"
    COMMENT_DELETED = "comment:deleted"
