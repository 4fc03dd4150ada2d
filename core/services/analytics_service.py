"""Analytics endpoints' service: loads task rows, checks roles, computes.

The calculations themselves live in core.analytics and are pure; this
service decides which rows to load for each chart.
"""

from datetime import datetime
from uuid import UUID

from django.db.models import Q
from django.utils import timezone

import structlog

from core import analytics
from core.analytics import TaskSnapshot
from core.constants import DEFAULT_ANALYTICS_RANGE_DAYS
from core.enums import ProjectRole
from core.models import Task
from core.schemas.analytics import (
    BurndownPoint,
    MemberProductivity,
    ProjectMetrics,
    ProjectTimeline,
    TimeRange,
    VelocityPoint,
)
from core.services.project_service import ProjectService, project_service

logger = structlog.get_logger(__name__)


class AnalyticsService:
    """Service computing derived project metrics on every call."""

    def __init__(self, projects: ProjectService | None = None) -> None:
        """Initialize analytics service.

        Args:
            projects: Service used for permission checks.
        """
        self.projects = projects or project_service

    def project_metrics(
        self, project_id: UUID, user_id: UUID, now: datetime | None = None
    ) -> ProjectMetrics:
        """Metrics over all tasks of a project. Any member may read them."""
        self.projects.check_project_permission(project_id, user_id)
        tasks = self._snapshots(Task.objects.filter(project_id=project_id))
        metrics = analytics.project_metrics(tasks, now or timezone.now())

        logger.info(
            "analytics_metrics_computed",
            project_id=str(project_id),
            total_tasks=metrics.total_tasks,
        )
        return metrics

    def task_velocity(
        self, project_id: UUID, user_id: UUID, time_range: TimeRange
    ) -> list[VelocityPoint]:
        """Daily velocity over the range. Any member may read it."""
        self.projects.check_project_permission(project_id, user_id)
        return self._velocity(project_id, time_range)

    def burndown_chart(
        self, project_id: UUID, user_id: UUID, time_range: TimeRange
    ) -> list[BurndownPoint]:
        """Burndown over the range. Any member may read it."""
        self.projects.check_project_permission(project_id, user_id)
        tasks = self._snapshots(
            Task.objects.filter(project_id=project_id, created_at__lte=time_range.end)
        )
        points = analytics.burndown_chart(tasks, time_range)

        logger.info(
            "analytics_burndown_computed",
            project_id=str(project_id),
            days=len(points),
        )
        return points

    def team_productivity(
        self,
        project_id: UUID,
        user_id: UUID,
        time_range: TimeRange | None = None,
        now: datetime | None = None,
    ) -> list[MemberProductivity]:
        """Per-assignee productivity. Only OWNER and ADMIN may read it.

        ``time_range`` is accepted for symmetry with the other charts and
        does not filter the tasks.
        """
        self.projects.check_project_permission(
            project_id, user_id, ProjectRole.managers()
        )
        tasks = self._snapshots(
            Task.objects.filter(project_id=project_id, assignee__isnull=False)
        )
        members = analytics.team_productivity(tasks, now or timezone.now())

        logger.info(
            "analytics_productivity_computed",
            project_id=str(project_id),
            member_count=len(members),
        )
        return members

    def project_timeline(
        self,
        project_id: UUID,
        user_id: UUID,
        days: int = DEFAULT_ANALYTICS_RANGE_DAYS,
        now: datetime | None = None,
    ) -> ProjectTimeline:
        """Velocity of the last ``days`` days as chart series. Any member."""
        self.projects.check_project_permission(project_id, user_id)
        velocity = self._velocity(project_id, TimeRange.last_days(days, now))
        return analytics.project_timeline(velocity)

    def _velocity(self, project_id: UUID, time_range: TimeRange) -> list[VelocityPoint]:
        in_range = Q(created_at__range=(time_range.start, time_range.end)) | Q(
            completed_at__range=(time_range.start, time_range.end)
        )
        tasks = self._snapshots(Task.objects.filter(in_range, project_id=project_id))
        points = analytics.task_velocity(tasks, time_range)

        logger.info(
            "analytics_velocity_computed",
            project_id=str(project_id),
            days=len(points),
            task_count=len(tasks),
        )
        return points

    @staticmethod
    def _snapshots(queryset) -> list[TaskSnapshot]:
        return [
            TaskSnapshot.from_task(task) for task in queryset.select_related("assignee")
        ]


analytics_service = AnalyticsService()
