"""API views for core application.

Views validate input with pydantic schemas and delegate to the services.
Domain errors raised by the services are rendered by
core.exceptions.handlers.custom_exception_handler.
"""

import structlog
from pydantic import ValidationError
from rest_framework import status
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from core.auth import BearerTokenAuthentication
from core.schemas import (
    AnalyticsRangeQuery,
    CommentCreateRequest,
    CommentDetail,
    CommentUpdateRequest,
    MemberAddRequest,
    MemberRoleUpdateRequest,
    NotificationDetail,
    NotificationListQuery,
    NotificationPreferences,
    NotificationPreferencesUpdate,
    ProjectCreateRequest,
    ProjectDetail,
    ProjectListQuery,
    ProjectMemberDetail,
    ProjectUpdateRequest,
    TaskCreateRequest,
    TaskDetail,
    TaskListQuery,
    TaskUpdateRequest,
    TimelineQuery,
)
from core.services import health_service
from core.services.analytics_service import analytics_service
from core.services.comment_service import comment_service
from core.services.notification_service import notification_service
from core.services.project_service import project_service
from core.services.task_service import task_service

logger = structlog.get_logger(__name__)


def _dump(model) -> dict:
    return model.model_dump(mode="json", by_alias=True)


def _bad_request(e: ValidationError, endpoint: str) -> Response:
    errors = e.errors(include_url=False, include_context=False, include_input=False)
    logger.warning("invalid_request", endpoint=endpoint, validation_errors=errors)
    return Response(
        {
            "error": "bad_request",
            "message": "Invalid request parameters",
            "errors": errors,
        },
        status=status.HTTP_400_BAD_REQUEST,
    )


class LivenessCheckView(APIView):
    """Liveness check endpoint for Kubernetes.

    Returns 200 if the service is alive and running.
    This should not check external dependencies.
    """

    authentication_classes = []
    permission_classes = [AllowAny]

    def get(self, _request):
        """Handle GET request for liveness check."""
        liveness = health_service.get_liveness_status()
        return Response(_dump(liveness), status=status.HTTP_200_OK)


class ReadinessCheckView(APIView):
    """Readiness check endpoint for Kubernetes.

    Returns 200 with a degraded status when the database, Redis or the
    realtime hub is unavailable, so the pod stays in service.
    """

    authentication_classes = []
    permission_classes = [AllowAny]

    def get(self, _request):
        """Handle GET request for readiness check."""
        readiness = health_service.get_readiness_status()
        return Response(_dump(readiness), status=status.HTTP_200_OK)


class AuthenticatedView(APIView):
    """Base view for endpoints that require a bearer token."""

    authentication_classes = (BearerTokenAuthentication,)
    permission_classes = (IsAuthenticated,)


class NotificationListView(AuthenticatedView):
    """GET a page of the caller's notifications, newest first."""

    def get(self, request):
        """Return notifications of the authenticated user.

        Query parameters:
        - limit: Page size (default: 20, capped at 100)
        - offset: Number of notifications to skip (default: 0)
        - unreadOnly: Only unread notifications (default: false)

        Returns:
            200 with notifications, total, unreadCount, limit and offset
            400 if a query parameter is invalid
        """
        try:
            query = NotificationListQuery.model_validate(request.query_params.dict())
        except ValidationError as e:
            return _bad_request(e, "notification_list")

        page = notification_service.find_by_user(
            request.user.user_id,
            limit=query.limit,
            offset=query.offset,
            unread_only=query.unread_only,
        )
        return Response(_dump(page), status=status.HTTP_200_OK)


class NotificationReadAllView(AuthenticatedView):
    """PUT marks every unread notification of the caller as read."""

    def put(self, request):
        count = notification_service.mark_all_as_read(request.user.user_id)
        return Response({"count": count}, status=status.HTTP_200_OK)


class NotificationReadView(AuthenticatedView):
    """PUT marks one notification as read."""

    def put(self, request, notification_id):
        """Mark a notification of the authenticated user as read.

        Returns:
            200 with the notification
            403 if the notification belongs to another user
            404 if the notification does not exist
        """
        notification = notification_service.mark_as_read(
            notification_id, request.user.user_id
        )
        return Response(
            _dump(NotificationDetail.model_validate(notification)),
            status=status.HTTP_200_OK,
        )


class NotificationDetailView(AuthenticatedView):
    """DELETE one of the caller's notifications."""

    def delete(self, request, notification_id):
        notification_service.delete(notification_id, request.user.user_id)
        return Response(status=status.HTTP_204_NO_CONTENT)


class NotificationPreferencesView(AuthenticatedView):
    """GET or PUT the caller's email notification preferences."""

    def get(self, request):
        preferences = notification_service.get_user_preferences(request.user.user_id)
        return Response(
            _dump(NotificationPreferences.model_validate(preferences)),
            status=status.HTTP_200_OK,
        )

    def put(self, request):
        """Update some preference flags; omitted flags keep their value.

        Returns:
            200 with the full preferences
            400 if a flag is not a boolean
        """
        try:
            update = NotificationPreferencesUpdate.model_validate(request.data)
        except ValidationError as e:
            return _bad_request(e, "notification_preferences")

        preferences = notification_service.update_user_preferences(
            request.user.user_id, **update.model_dump(exclude_none=True)
        )
        return Response(
            _dump(NotificationPreferences.model_validate(preferences)),
            status=status.HTTP_200_OK,
        )


class ProjectMetricsView(AuthenticatedView):
    """GET task counts, completion rate and averages of a project."""

    def get(self, request, project_id):
        metrics = analytics_service.project_metrics(project_id, request.user.user_id)
        return Response(_dump(metrics), status=status.HTTP_200_OK)


class TaskVelocityView(AuthenticatedView):
    """GET created, completed and in-progress counts per day."""

    def get(self, request, project_id):
        """Return daily velocity.

        Query parameters:
        - startDate, endDate: ISO-8601 bounds, given together
        - days: Length of the range ending now, 1-365 (default: 30)
        """
        try:
            query = AnalyticsRangeQuery.model_validate(request.query_params.dict())
        except ValidationError as e:
            return _bad_request(e, "task_velocity")

        points = analytics_service.task_velocity(
            project_id, request.user.user_id, query.to_time_range()
        )
        return Response([_dump(p) for p in points], status=status.HTTP_200_OK)


class BurndownChartView(AuthenticatedView):
    """GET the ideal and actual remaining work per day."""

    def get(self, request, project_id):
        try:
            query = AnalyticsRangeQuery.model_validate(request.query_params.dict())
        except ValidationError as e:
            return _bad_request(e, "burndown_chart")

        points = analytics_service.burndown_chart(
            project_id, request.user.user_id, query.to_time_range()
        )
        return Response([_dump(p) for p in points], status=status.HTTP_200_OK)


class TeamProductivityView(AuthenticatedView):
    """GET per-assignee productivity, best score first (OWNER and ADMIN only)."""

    def get(self, request, project_id):
        try:
            query = AnalyticsRangeQuery.model_validate(request.query_params.dict())
        except ValidationError as e:
            return _bad_request(e, "team_productivity")

        members = analytics_service.team_productivity(
            project_id, request.user.user_id, query.to_time_range()
        )
        return Response([_dump(m) for m in members], status=status.HTTP_200_OK)


class ProjectTimelineView(AuthenticatedView):
    """GET daily velocity reshaped into chart labels and series."""

    def get(self, request, project_id):
        try:
            query = TimelineQuery.model_validate(request.query_params.dict())
        except ValidationError as e:
            return _bad_request(e, "project_timeline")

        timeline = analytics_service.project_timeline(
            project_id, request.user.user_id, days=query.days
        )
        return Response(_dump(timeline), status=status.HTTP_200_OK)


class ProjectListView(AuthenticatedView):
    """GET a page of the caller's projects; POST creates a project."""

    def get(self, request):
        """Return active projects the caller is a member of, newest first.

        Query parameters:
        - limit: Page size (default: 20, capped at 100)
        - offset: Number of projects to skip (default: 0)
        - search: Filter on name or description

        Returns:
            200 with projects, total, limit and offset
            400 if a query parameter is invalid
        """
        try:
            query = ProjectListQuery.model_validate(request.query_params.dict())
        except ValidationError as e:
            return _bad_request(e, "project_list")

        page = project_service.list_projects(
            request.user.user_id,
            search=query.search,
            limit=query.limit,
            offset=query.offset,
        )
        return Response(_dump(page), status=status.HTTP_200_OK)

    def post(self, request):
        try:
            body = ProjectCreateRequest.model_validate(request.data)
        except ValidationError as e:
            return _bad_request(e, "project_create")

        project = project_service.create_project(body, request.user.user_id)
        return Response(
            _dump(ProjectDetail.model_validate(project)),
            status=status.HTTP_201_CREATED,
        )


class ProjectDetailView(AuthenticatedView):
    """GET (any member), PATCH (OWNER and ADMIN) or DELETE (OWNER) a project."""

    def get(self, request, project_id):
        project = project_service.get_project(project_id, request.user.user_id)
        return Response(
            _dump(ProjectDetail.model_validate(project)), status=status.HTTP_200_OK
        )

    def patch(self, request, project_id):
        try:
            body = ProjectUpdateRequest.model_validate(request.data)
        except ValidationError as e:
            return _bad_request(e, "project_update")

        project = project_service.update_project(
            project_id, body, request.user.user_id
        )
        return Response(
            _dump(ProjectDetail.model_validate(project)), status=status.HTTP_200_OK
        )

    def delete(self, request, project_id):
        project_service.delete_project(project_id, request.user.user_id)
        return Response(status=status.HTTP_204_NO_CONTENT)


class ProjectTaskListView(AuthenticatedView):
    """GET a filtered page of a project's tasks."""

    def get(self, request, project_id):
        """Return the project's tasks, newest first.

        Query parameters:
        - status, priority, assigneeId: Exact filters
        - search: Filter on title or description
        - limit: Page size (default: 20, capped at 100)
        - offset: Number of tasks to skip (default: 0)

        Returns:
            200 with tasks, total, limit and offset
            400 if a query parameter is invalid
            403 if the caller is not a member of the project
        """
        try:
            query = TaskListQuery.model_validate(request.query_params.dict())
        except ValidationError as e:
            return _bad_request(e, "project_task_list")

        page = task_service.list_tasks(
            project_id, request.user.user_id, **query.model_dump()
        )
        return Response(_dump(page), status=status.HTTP_200_OK)


class ProjectMemberListView(AuthenticatedView):
    """POST adds a user to a project (OWNER and ADMIN only)."""

    def post(self, request, project_id):
        """Add a member and send them an invitation notification.

        Returns:
            201 with the membership
            400 if the body is invalid
            403 if the caller is not OWNER or ADMIN of the project
            404 if the project or the user does not exist
            409 if the user already is a member
        """
        try:
            body = MemberAddRequest.model_validate(request.data)
        except ValidationError as e:
            return _bad_request(e, "project_member_add")

        membership = project_service.add_member(
            project_id, body.user_id, body.role, request.user.user_id
        )
        return Response(
            _dump(ProjectMemberDetail.model_validate(membership)),
            status=status.HTTP_201_CREATED,
        )


class ProjectMemberDetailView(AuthenticatedView):
    """PATCH changes a member's role (OWNER only); DELETE removes a member."""

    def patch(self, request, project_id, user_id):
        try:
            body = MemberRoleUpdateRequest.model_validate(request.data)
        except ValidationError as e:
            return _bad_request(e, "project_member_role")

        membership = project_service.update_member_role(
            project_id, user_id, body.role, request.user.user_id
        )
        return Response(
            _dump(ProjectMemberDetail.model_validate(membership)),
            status=status.HTTP_200_OK,
        )

    def delete(self, request, project_id, user_id):
        project_service.remove_member(project_id, user_id, request.user.user_id)
        return Response(status=status.HTTP_204_NO_CONTENT)


class TaskListView(AuthenticatedView):
    """POST creates a task in a project the caller contributes to."""

    def post(self, request):
        try:
            body = TaskCreateRequest.model_validate(request.data)
        except ValidationError as e:
            return _bad_request(e, "task_create")

        task = task_service.create_task(body, request.user.user_id)
        return Response(
            _dump(TaskDetail.model_validate(task)), status=status.HTTP_201_CREATED
        )


class TaskDetailView(AuthenticatedView):
    """GET, PATCH or DELETE one task."""

    def get(self, request, task_id):
        task = task_service.get_task(task_id, request.user.user_id)
        return Response(
            _dump(TaskDetail.model_validate(task)), status=status.HTTP_200_OK
        )

    def patch(self, request, task_id):
        """Apply the fields present in the body.

        Returns:
            200 with the task
            400 if the body is invalid or the assignee is not a project member
            403 if the caller is a VIEWER or not a member
            404 if the task does not exist
        """
        try:
            body = TaskUpdateRequest.model_validate(request.data)
        except ValidationError as e:
            return _bad_request(e, "task_update")

        task = task_service.update_task(task_id, body, request.user.user_id)
        return Response(
            _dump(TaskDetail.model_validate(task)), status=status.HTTP_200_OK
        )

    def delete(self, request, task_id):
        task_service.delete_task(task_id, request.user.user_id)
        return Response(status=status.HTTP_204_NO_CONTENT)


class TaskCommentListView(AuthenticatedView):
    """GET the comments of a task, oldest first; POST adds a comment."""

    def get(self, request, task_id):
        comments = comment_service.list_comments(task_id, request.user.user_id)
        return Response(
            [_dump(CommentDetail.model_validate(c)) for c in comments],
            status=status.HTTP_200_OK,
        )

    def post(self, request, task_id):
        try:
            body = CommentCreateRequest.model_validate(request.data)
        except ValidationError as e:
            return _bad_request(e, "comment_create")

        comment = comment_service.create_comment(
            task_id, body.content, request.user.user_id
        )
        return Response(
            _dump(CommentDetail.model_validate(comment)),
            status=status.HTTP_201_CREATED,
        )


class CommentDetailView(AuthenticatedView):
    """PATCH (author only) or DELETE (author, OWNER or ADMIN) a comment."""

    def patch(self, request, comment_id):
        try:
            body = CommentUpdateRequest.model_validate(request.data)
        except ValidationError as e:
            return _bad_request(e, "comment_update")

        comment = comment_service.update_comment(
            comment_id, body.content, request.user.user_id
        )
        return Response(
            _dump(CommentDetail.model_validate(comment)), status=status.HTTP_200_OK
        )

    def delete(self, request, comment_id):
        comment_service.delete_comment(comment_id, request.user.user_id)
        return Response(status=status.HTTP_204_NO_CONTENT)
