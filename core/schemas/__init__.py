"""Schemas for the core app."""

from core.schemas.analytics import (
    AnalyticsRangeQuery,
    BurndownPoint,
    MemberProductivity,
    ProjectMetrics,
    ProjectTimeline,
    TimelineQuery,
    TimeRange,
    VelocityPoint,
)
from core.schemas.comment import (
    CommentCreateRequest,
    CommentDetail,
    CommentUpdateRequest,
)
from core.schemas.health import (
    DependencyHealth,
    LivenessResponse,
    ReadinessResponse,
)
from core.schemas.notification import (
    NotificationDetail,
    NotificationListQuery,
    NotificationListResponse,
    NotificationPreferences,
    NotificationPreferencesUpdate,
)
from core.schemas.project import (
    MemberAddRequest,
    MemberRoleUpdateRequest,
    ProjectCreateRequest,
    ProjectDetail,
    ProjectListQuery,
    ProjectListResponse,
    ProjectMemberDetail,
    ProjectUpdateRequest,
)
from core.schemas.task import (
    TaskCreateRequest,
    TaskDetail,
    TaskListQuery,
    TaskListResponse,
    TaskUpdateRequest,
)

__all__ = [
    "AnalyticsRangeQuery",
    "BurndownPoint",
    "CommentCreateRequest",
    "CommentDetail",
    "CommentUpdateRequest",
    "DependencyHealth",
    "LivenessResponse",
    "MemberAddRequest",
    "MemberProductivity",
    "MemberRoleUpdateRequest",
    "NotificationDetail",
    "NotificationListQuery",
    "NotificationListResponse",
    "NotificationPreferences",
    "NotificationPreferencesUpdate",
    "ProjectCreateRequest",
    "ProjectDetail",
    "ProjectListQuery",
    "ProjectListResponse",
    "ProjectMemberDetail",
    "ProjectMetrics",
    "ProjectTimeline",
    "ProjectUpdateRequest",
    "ReadinessResponse",
    "TaskCreateRequest",
    "TaskDetail",
    "TaskListQuery",
    "TaskListResponse",
    "TaskUpdateRequest",
    "TimeRange",
    "TimelineQuery",
    "VelocityPoint",
]
