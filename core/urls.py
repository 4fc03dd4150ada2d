"""URL routing configuration for core application."""

from django.urls import path

from .views import (
    BurndownChartView,
    CommentDetailView,
    LivenessCheckView,
    NotificationDetailView,
    NotificationListView,
    NotificationPreferencesView,
    NotificationReadAllView,
    NotificationReadView,
    ProjectDetailView,
    ProjectListView,
    ProjectMemberDetailView,
    ProjectMemberListView,
    ProjectMetricsView,
    ProjectTaskListView,
    ProjectTimelineView,
    ReadinessCheckView,
    TaskCommentListView,
    TaskDetailView,
    TaskListView,
    TaskVelocityView,
    TeamProductivityView,
)

urlpatterns = [
    # Health check endpoints
    path("health/live", LivenessCheckView.as_view(), name="health-live"),
    path("health/ready", ReadinessCheckView.as_view(), name="health-ready"),
    # Notification endpoints (specific routes before generic)
    path("notifications", NotificationListView.as_view(), name="notification-list"),
    path(
        "notifications/read-all",
        NotificationReadAllView.as_view(),
        name="notification-read-all",
    ),
    path(
        "notifications/preferences",
        NotificationPreferencesView.as_view(),
        name="notification-preferences",
    ),
    path(
        "notifications/<uuid:notification_id>/read",
        NotificationReadView.as_view(),
        name="notification-read",
    ),
    path(
        "notifications/<uuid:notification_id>",
        NotificationDetailView.as_view(),
        name="notification-detail",
    ),
    # Analytics endpoints
    path(
        "analytics/projects/<uuid:project_id>/metrics",
        ProjectMetricsView.as_view(),
        name="analytics-metrics",
    ),
    path(
        "analytics/projects/<uuid:project_id>/velocity",
        TaskVelocityView.as_view(),
        name="analytics-velocity",
    ),
    path(
        "analytics/projects/<uuid:project_id>/burndown",
        BurndownChartView.as_view(),
        name="analytics-burndown",
    ),
    path(
        "analytics/projects/<uuid:project_id>/productivity",
        TeamProductivityView.as_view(),
        name="analytics-productivity",
    ),
    path(
        "analytics/projects/<uuid:project_id>/timeline",
        ProjectTimelineView.as_view(),
        name="analytics-timeline",
    ),
    # Project endpoints
    path("projects", ProjectListView.as_view(), name="project-list"),
    path(
        "projects/<uuid:project_id>",
        ProjectDetailView.as_view(),
        name="project-detail",
    ),
    path(
        "projects/<uuid:project_id>/tasks",
        ProjectTaskListView.as_view(),
        name="project-tasks",
    ),
    path(
        "projects/<uuid:project_id>/members",
        ProjectMemberListView.as_view(),
        name="project-members",
    ),
    path(
        "projects/<uuid:project_id>/members/<uuid:user_id>",
        ProjectMemberDetailView.as_view(),
        name="project-member-detail",
    ),
    # Task and comment endpoints
    path("tasks", TaskListView.as_view(), name="task-list"),
    path("tasks/<uuid:task_id>", TaskDetailView.as_view(), name="task-detail"),
    path(
        "tasks/<uuid:task_id>/comments",
        TaskCommentListView.as_view(),
        name="task-comments",
    ),
    path(
        "comments/<uuid:comment_id>",
        CommentDetailView.as_view(),
        name="comment-detail",
    ),
]
