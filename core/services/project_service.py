"""Projects: lifecycle, permission checks and member management."""

from collections.abc import Iterable
from uuid import UUID

from django.conf import settings
from django.db import IntegrityError, transaction
from django.db.models import Count, OuterRef, Q, QuerySet, Subquery
from django.utils import timezone

import structlog

from core.constants import DEFAULT_PAGE_LIMIT
from core.enums import ProjectRole, TaskStatus
from core.exceptions import (
    ConflictError,
    ProjectNotFoundError,
    ProjectPermissionDeniedError,
    UserNotFoundError,
)
from core.models import Project, ProjectMember, Task, User
from core.schemas.project import (
    ProjectCreateRequest,
    ProjectDetail,
    ProjectListResponse,
    ProjectUpdateRequest,
)
from core.services.notification_service import (
    NotificationService,
    notification_service,
)

logger = structlog.get_logger(__name__)

ANY_ROLE = tuple(ProjectRole)


class ProjectService:
    """Service for projects, their membership and role checks.

    Deleted projects are deactivated rather than removed, and every
    membership check treats them as gone.
    """

    def __init__(self, notifications: NotificationService | None = None) -> None:
        """Initialize project service.

        Args:
            notifications: Service used for invitation and role notifications.
        """
        self.notifications = notifications or notification_service

    def create_project(self, request: ProjectCreateRequest, user_id: UUID) -> Project:
        """Create a project with the creator as its OWNER.

        The project and the OWNER membership are written in one transaction.

        Returns:
            The project, annotated like ``get_project``.
        """
        with transaction.atomic():
            project = Project.objects.create(
                name=request.name, description=request.description
            )
            ProjectMember.objects.create(
                project=project, user_id=user_id, role=ProjectRole.OWNER.value
            )

        logger.info(
            "project_created", project_id=str(project.project_id), user_id=str(user_id)
        )
        return self.get_project(project.project_id, user_id)

    def list_projects(
        self,
        user_id: UUID,
        search: str | None = None,
        limit: int = DEFAULT_PAGE_LIMIT,
        offset: int = 0,
    ) -> ProjectListResponse:
        """Return a page of the active projects the user is a member of.

        Args:
            user_id: Member whose projects are listed.
            search: Case-insensitive filter on name or description.
            limit: Page size, capped to 1..LIST_PAGE_MAX_LIMIT.
            offset: Number of projects to skip.

        Raises:
            ValueError: If offset is negative.
        """
        if offset < 0:
            msg = "offset must not be negative"
            raise ValueError(msg)
        limit = max(1, min(limit, settings.LIST_PAGE_MAX_LIMIT))

        queryset = Project.objects.filter(
            is_active=True,
            project_id__in=ProjectMember.objects.filter(user_id=user_id).values(
                "project_id"
            ),
        )
        if search:
            queryset = queryset.filter(
                Q(name__icontains=search) | Q(description__icontains=search)
            )

        page = self._with_stats(queryset, user_id).order_by("-created_at")
        return ProjectListResponse(
            projects=[
                ProjectDetail.model_validate(p) for p in page[offset : offset + limit]
            ],
            total=queryset.count(),
            limit=limit,
            offset=offset,
        )

    def get_project(self, project_id: UUID, user_id: UUID) -> Project:
        """Return an active project the user is a member of.

        Projects the user cannot see are reported as missing.

        Raises:
            ProjectNotFoundError: If the project does not exist, was deleted
                or the user is not a member.
        """
        queryset = Project.objects.filter(
            project_id=project_id,
            is_active=True,
            project_id__in=ProjectMember.objects.filter(user_id=user_id).values(
                "project_id"
            ),
        )
        project = self._with_stats(queryset, user_id).first()
        if project is None:
            raise ProjectNotFoundError(project_id)
        return project

    def update_project(
        self, project_id: UUID, request: ProjectUpdateRequest, user_id: UUID
    ) -> Project:
        """Rename or redescribe a project (OWNER and ADMIN only).

        Raises:
            ProjectNotFoundError: If the project does not exist or was deleted.
            ProjectPermissionDeniedError: If the user is not OWNER/ADMIN.
        """
        self._require_active(project_id)
        self.check_project_permission(project_id, user_id, ProjectRole.managers())

        changes = request.changes()
        if changes:
            project = Project.objects.get(project_id=project_id)
            for field, value in changes.items():
                setattr(project, field, value)
            project.save(update_fields=[*changes, "updated_at"])

        logger.info(
            "project_updated",
            project_id=str(project_id),
            user_id=str(user_id),
            fields=sorted(changes),
        )
        return self.get_project(project_id, user_id)

    def delete_project(self, project_id: UUID, user_id: UUID) -> None:
        """Deactivate a project (OWNER only).

        The rows are kept, but the project no longer passes membership
        checks, so its tasks, rooms and analytics become unreachable.

        Raises:
            ProjectNotFoundError: If the project does not exist or was deleted.
            ProjectPermissionDeniedError: If the user is not the OWNER.
        """
        self._require_active(project_id)
        self.check_project_permission(project_id, user_id, [ProjectRole.OWNER])

        Project.objects.filter(project_id=project_id).update(
            is_active=False, updated_at=timezone.now()
        )
        logger.info("project_deleted", project_id=str(project_id), user_id=str(user_id))

    def check_project_permission(
        self,
        project_id: UUID,
        user_id: UUID,
        allowed_roles: Iterable[ProjectRole | str] = ANY_ROLE,
    ) -> ProjectMember:
        """Return the user's membership if their role is allowed.

        Args:
            project_id: Project to check.
            user_id: User to check.
            allowed_roles: Roles that pass the check.

        Returns:
            The membership.

        Raises:
            ProjectPermissionDeniedError: If the user is not a member, or their
                role is not in ``allowed_roles``.
        """
        membership = ProjectMember.objects.filter(
            project_id=project_id, user_id=user_id, project__is_active=True
        ).first()
        if membership is None:
            logger.warning(
                "project_permission_denied",
                project_id=str(project_id),
                user_id=str(user_id),
                reason="not_a_member",
            )
            raise ProjectPermissionDeniedError("Not a member of this project")

        allowed = {ProjectRole(role).value for role in allowed_roles}
        if membership.role not in allowed:
            logger.warning(
                "project_permission_denied",
                project_id=str(project_id),
                user_id=str(user_id),
                role=membership.role,
                reason="insufficient_role",
            )
            raise ProjectPermissionDeniedError("Insufficient permissions")

        return membership

    def is_project_member(self, project_id: UUID | str, user_id: UUID) -> bool:
        """Whether the user holds any role in the project.

        Malformed project ids are treated as unknown projects.
        """
        try:
            project_uuid = UUID(str(project_id))
        except ValueError:
            return False
        return ProjectMember.objects.filter(
            project_id=project_uuid, user_id=user_id, project__is_active=True
        ).exists()

    def is_task_member(self, task_id: UUID | str, user_id: UUID) -> bool:
        """Whether the user holds any role in the project of the task."""
        try:
            task_uuid = UUID(str(task_id))
        except ValueError:
            return False
        return Task.objects.filter(
            task_id=task_uuid,
            project__is_active=True,
            project__members__user_id=user_id,
        ).exists()

    def add_member(
        self,
        project_id: UUID,
        new_user_id: UUID,
        role: ProjectRole | str,
        requester_id: UUID,
    ) -> ProjectMember:
        """Add a user to a project and send them an invitation notification.

        Raises:
            ProjectNotFoundError: If the project does not exist.
            ProjectPermissionDeniedError: If the requester is not OWNER/ADMIN.
            UserNotFoundError: If the new user does not exist.
            ConflictError: If the user already is a member.
        """
        self._require_active(project_id)
        self.check_project_permission(project_id, requester_id, ProjectRole.managers())
        if not User.objects.filter(user_id=new_user_id).exists():
            raise UserNotFoundError(new_user_id)

        role = ProjectRole(role)
        try:
            with transaction.atomic():
                membership = ProjectMember.objects.create(
                    project_id=project_id, user_id=new_user_id, role=role.value
                )
        except IntegrityError as e:
            raise ConflictError("User is already a member of this project") from e

        logger.info(
            "project_member_added",
            project_id=str(project_id),
            user_id=str(new_user_id),
            role=role.value,
            requester_id=str(requester_id),
        )
        self.notifications.notify_project_invitation(
            project_id, new_user_id, role.value, requester_id
        )
        return membership

    def update_member_role(
        self,
        project_id: UUID,
        member_user_id: UUID,
        role: ProjectRole | str,
        requester_id: UUID,
    ) -> ProjectMember:
        """Change a member's role and notify them.

        Only the project OWNER may change roles.

        Raises:
            ProjectPermissionDeniedError: If the requester is not the OWNER.
            UserNotFoundError: If the user is not a member of the project.
        """
        self.check_project_permission(project_id, requester_id, [ProjectRole.OWNER])

        membership = ProjectMember.objects.filter(
            project_id=project_id, user_id=member_user_id
        ).first()
        if membership is None:
            raise UserNotFoundError(member_user_id)

        role = ProjectRole(role)
        if membership.role == role.value:
            return membership

        membership.role = role.value
        membership.save(update_fields=["role"])

        logger.info(
            "project_member_role_changed",
            project_id=str(project_id),
            user_id=str(member_user_id),
            role=role.value,
            requester_id=str(requester_id),
        )
        self.notifications.notify_project_role_changed(
            project_id, member_user_id, role.value, requester_id
        )
        return membership

    def remove_member(
        self, project_id: UUID, member_user_id: UUID, requester_id: UUID
    ) -> None:
        """Remove a member from a project.

        Raises:
            ProjectPermissionDeniedError: If the requester is not OWNER/ADMIN.
            UserNotFoundError: If the user is not a member of the project.
            ConflictError: If the member is the last OWNER.
        """
        self.check_project_permission(project_id, requester_id, ProjectRole.managers())

        membership = ProjectMember.objects.filter(
            project_id=project_id, user_id=member_user_id
        ).first()
        if membership is None:
            raise UserNotFoundError(member_user_id)
        if membership.role == ProjectRole.OWNER.value:
            owners = ProjectMember.objects.filter(
                project_id=project_id, role=ProjectRole.OWNER.value
            ).count()
            if owners == 1:
                raise ConflictError("Cannot remove the last owner of a project")

        membership.delete()
        logger.info(
            "project_member_removed",
            project_id=str(project_id),
            user_id=str(member_user_id),
            requester_id=str(requester_id),
        )

    def _require_active(self, project_id: UUID) -> None:
        if not Project.objects.filter(project_id=project_id, is_active=True).exists():
            raise ProjectNotFoundError(project_id)

    def _with_stats(self, queryset: QuerySet, user_id: UUID) -> QuerySet:
        role = ProjectMember.objects.filter(
            project_id=OuterRef("project_id"), user_id=user_id
        ).values("role")[:1]
        return queryset.annotate(
            role=Subquery(role),
            task_count=Count("tasks", distinct=True),
            completed_task_count=Count(
                "tasks",
                filter=Q(tasks__status=TaskStatus.DONE.value),
                distinct=True,
            ),
            member_count=Count("members", distinct=True),
        )


project_service = ProjectService()
