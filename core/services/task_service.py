"""Task lifecycle with realtime updates and assignment notifications."""

from uuid import UUID

from django.conf import settings
from django.db import transaction
from django.db.models import Q
from django.utils import timezone

import structlog

from core.constants import DEFAULT_PAGE_LIMIT
from core.enums import ProjectRole, RealtimeEvent, TaskPriority, TaskStatus
from core.exceptions import DomainError, TaskNotFoundError
from core.models import ProjectMember, Task
from core.realtime import EventHub
from core.schemas.task import (
    TaskCreateRequest,
    TaskDetail,
    TaskListResponse,
    TaskUpdateRequest,
)
from core.services.broadcasting import BroadcastingService
from core.services.notification_service import (
    NotificationService,
    notification_service,
)
from core.services.project_service import ProjectService, project_service

logger = structlog.get_logger(__name__)


class TaskService(BroadcastingService):
    """Service for listing, creating, updating and deleting tasks.

    Every change is pushed to the project room (and, for updates, the task
    room) after it has been saved.
    """

    def __init__(
        self,
        hub: EventHub | None = None,
        projects: ProjectService | None = None,
        notifications: NotificationService | None = None,
    ) -> None:
        """Initialize task service.

        Args:
            hub: Hub to broadcast through, or None for the installed hub.
            projects: Service used for permission checks.
            notifications: Service used for assignment notifications.
        """
        super().__init__(hub)
        self.projects = projects or project_service
        self.notifications = notifications or notification_service

    def get_task(self, task_id: UUID, user_id: UUID) -> Task:
        """Return a task the user can see (any project role).

        Raises:
            TaskNotFoundError: If the task does not exist.
            ProjectPermissionDeniedError: If the user is not a project member.
        """
        task = self._get(task_id)
        self.projects.check_project_permission(task.project_id, user_id)
        return task

    def list_tasks(
        self,
        project_id: UUID,
        user_id: UUID,
        status: TaskStatus | str | None = None,
        priority: TaskPriority | str | None = None,
        assignee_id: UUID | None = None,
        search: str | None = None,
        limit: int = DEFAULT_PAGE_LIMIT,
        offset: int = 0,
    ) -> TaskListResponse:
        """Return a page of a project's tasks, newest first (any project role).

        Args:
            project_id: Project whose tasks are listed.
            user_id: Caller, who must be a member of the project.
            status: Only tasks in this status.
            priority: Only tasks of this priority.
            assignee_id: Only tasks assigned to this user.
            search: Case-insensitive filter on title or description.
            limit: Page size, capped to 1..LIST_PAGE_MAX_LIMIT.
            offset: Number of tasks to skip.

        Raises:
            ProjectPermissionDeniedError: If the user is not a project member.
            ValueError: If offset is negative.
        """
        if offset < 0:
            msg = "offset must not be negative"
            raise ValueError(msg)
        limit = max(1, min(limit, settings.LIST_PAGE_MAX_LIMIT))
        self.projects.check_project_permission(project_id, user_id)

        queryset = Task.objects.filter(project_id=project_id)
        if status is not None:
            queryset = queryset.filter(status=TaskStatus(status).value)
        if priority is not None:
            queryset = queryset.filter(priority=TaskPriority(priority).value)
        if assignee_id is not None:
            queryset = queryset.filter(assignee_id=assignee_id)
        if search:
            queryset = queryset.filter(
                Q(title__icontains=search) | Q(description__icontains=search)
            )

        page = queryset.order_by("-created_at")[offset : offset + limit]
        return TaskListResponse(
            tasks=[TaskDetail.model_validate(t) for t in page],
            total=queryset.count(),
            limit=limit,
            offset=offset,
        )

    def create_task(self, request: TaskCreateRequest, user_id: UUID) -> Task:
        """Create a task in a project.

        Raises:
            ProjectPermissionDeniedError: If the user is not OWNER/ADMIN/MEMBER.
            DomainError: If the assignee is not a project member.
        """
        self.projects.check_project_permission(
            request.project_id, user_id, ProjectRole.contributors()
        )
        self._check_assignee(request.project_id, request.assignee_id)

        task = Task.objects.create(
            project_id=request.project_id,
            creator_id=user_id,
            title=request.title,
            description=request.description,
            status=request.status,
            priority=request.priority,
            due_date=request.due_date,
            assignee_id=request.assignee_id,
            completed_at=(
                timezone.now() if request.status == TaskStatus.DONE.value else None
            ),
        )

        logger.info(
            "task_created",
            task_id=str(task.task_id),
            project_id=str(task.project_id),
            user_id=str(user_id),
        )

        if task.assignee_id and task.assignee_id != user_id:
            self.notifications.notify_task_assignment(
                task.task_id, task.assignee_id, user_id
            )

        self.hub.emit_to_project(
            task.project_id, RealtimeEvent.TASK_CREATED, TaskDetail.model_validate(task)
        )
        return task

    def update_task(
        self, task_id: UUID, request: TaskUpdateRequest, user_id: UUID
    ) -> Task:
        """Apply the fields sent in ``request`` to a task.

        Moving to DONE sets completed_at; moving away from DONE clears it.

        Raises:
            TaskNotFoundError: If the task does not exist.
            ProjectPermissionDeniedError: If the user is not OWNER/ADMIN/MEMBER.
            DomainError: If the new assignee is not a project member.
        """
        changes = request.changes()
        with transaction.atomic():
            task = self._get(task_id, for_update=True)
            self.projects.check_project_permission(
                task.project_id, user_id, ProjectRole.contributors()
            )

            previous_status = task.status
            previous_assignee_id = task.assignee_id
            if "assignee_id" in changes:
                self._check_assignee(task.project_id, changes["assignee_id"])

            for field, value in changes.items():
                setattr(task, field, value)

            if "status" in changes and changes["status"] != previous_status:
                if changes["status"] == TaskStatus.DONE.value:
                    task.completed_at = timezone.now()
                else:
                    task.completed_at = None

            task.save()

        logger.info(
            "task_updated",
            task_id=str(task_id),
            user_id=str(user_id),
            fields=sorted(changes),
        )

        if (
            task.assignee_id is not None
            and task.assignee_id != previous_assignee_id
            and task.assignee_id != user_id
        ):
            self.notifications.notify_task_assignment(
                task.task_id, task.assignee_id, user_id
            )
        if (
            task.status == TaskStatus.DONE.value
            and previous_status != TaskStatus.DONE.value
        ):
            self.notifications.notify_task_completed(task.task_id, user_id)

        detail = TaskDetail.model_validate(task)
        self.hub.emit_to_task(task.task_id, RealtimeEvent.TASK_UPDATED, detail)
        self.hub.emit_to_project(task.project_id, RealtimeEvent.TASK_UPDATED, detail)
        return task

    def delete_task(self, task_id: UUID, user_id: UUID) -> None:
        """Delete a task and its comments.

        Raises:
            TaskNotFoundError: If the task does not exist.
            ProjectPermissionDeniedError: If the user is not OWNER/ADMIN.
        """
        task = self._get(task_id)
        self.projects.check_project_permission(
            task.project_id, user_id, ProjectRole.managers()
        )
        project_id = task.project_id
        task.delete()

        logger.info(
            "task_deleted",
            task_id=str(task_id),
            project_id=str(project_id),
            user_id=str(user_id),
        )
        self.hub.emit_to_project(
            project_id, RealtimeEvent.TASK_DELETED, {"id": str(task_id)}
        )

    def _get(self, task_id: UUID, for_update: bool = False) -> Task:
        queryset = Task.objects.select_for_update() if for_update else Task.objects
        task = queryset.filter(task_id=task_id).first()
        if task is None:
            raise TaskNotFoundError(task_id)
        return task

    def _check_assignee(self, project_id: UUID, assignee_id: UUID | None) -> None:
        if assignee_id is None:
            return
        if not ProjectMember.objects.filter(
            project_id=project_id, user_id=assignee_id
        ).exists():
            raise DomainError("Assignee is not a member of this project")


task_service = TaskService()
