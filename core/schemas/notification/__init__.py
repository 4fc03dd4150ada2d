"""Notification schemas."""

from core.schemas.notification.notification_detail import NotificationDetail
from core.schemas.notification.notification_list_query import NotificationListQuery
from core.schemas.notification.notification_list_response import (
    NotificationListResponse,
)
from core.schemas.notification.notification_metadata import (
    CommentMentionMetadata,
    MetadataBase,
    NotificationMetadata,
    OtherMetadata,
    ProjectInvitationMetadata,
    ProjectRoleChangedMetadata,
    TaskAssignedMetadata,
    TaskCompletedMetadata,
    TaskDueSoonMetadata,
    parse_notification_metadata,
)
from core.schemas.notification.notification_preferences import (
    NotificationPreferences,
    NotificationPreferencesUpdate,
)

__all__ = [
    "CommentMentionMetadata",
    "MetadataBase",
    "NotificationDetail",
    "NotificationListQuery",
    "NotificationListResponse",
    "NotificationMetadata",
    "NotificationPreferences",
    "NotificationPreferencesUpdate",
    "OtherMetadata",
    "ProjectInvitationMetadata",
    "ProjectRoleChangedMetadata",
    "TaskAssignedMetadata",
    "TaskCompletedMetadata",
    "TaskDueSoonMetadata",
    "parse_notification_metadata",
]
