"""Task comments with realtime updates and mention notifications."""

from uuid import UUID

import structlog

from core.enums import ProjectRole, RealtimeEvent
from core.exceptions import (
    CommentNotFoundError,
    CommentPermissionDeniedError,
    ProjectPermissionDeniedError,
    TaskNotFoundError,
)
from core.models import Comment, Task
from core.realtime import EventHub
from core.schemas.comment import CommentDetail
from core.services.broadcasting import BroadcastingService
from core.services.notification_service import (
    NotificationService,
    notification_service,
)
from core.services.project_service import ProjectService, project_service

logger = structlog.get_logger(__name__)


class CommentService(BroadcastingService):
    """Service for commenting on tasks. Events go to the task room."""

    def __init__(
        self,
        hub: EventHub | None = None,
        projects: ProjectService | None = None,
        notifications: NotificationService | None = None,
    ) -> None:
        """Initialize comment service.

        Args:
            hub: Hub to broadcast through, or None for the installed hub.
            projects: Service used for permission checks.
            notifications: Service used for mention notifications.
        """
        super().__init__(hub)
        self.projects = projects or project_service
        self.notifications = notifications or notification_service

    def list_comments(self, task_id: UUID, user_id: UUID) -> list[Comment]:
        """Return the comments of a task, oldest first (any project role)."""
        task = self._get_task(task_id)
        self.projects.check_project_permission(task.project_id, user_id)
        return list(task.comments.order_by("created_at"))

    def create_comment(self, task_id: UUID, content: str, user_id: UUID) -> Comment:
        """Comment on a task and notify the users it mentions.

        Raises:
            TaskNotFoundError: If the task does not exist.
            ProjectPermissionDeniedError: If the user is not OWNER/ADMIN/MEMBER.
        """
        task = self._get_task(task_id)
        self.projects.check_project_permission(
            task.project_id, user_id, ProjectRole.contributors()
        )

        comment = Comment.objects.create(task=task, author_id=user_id, content=content)
        logger.info(
            "comment_created",
            comment_id=str(comment.comment_id),
            task_id=str(task_id),
            user_id=str(user_id),
        )

        self.hub.emit_to_task(
            task_id,
            RealtimeEvent.COMMENT_CREATED,
            CommentDetail.model_validate(comment),
        )
        self.notifications.notify_comment_mentions(comment)
        return comment

    def update_comment(self, comment_id: UUID, content: str, user_id: UUID) -> Comment:
        """Edit a comment. Only its author may.

        Raises:
            CommentNotFoundError: If the comment does not exist.
            CommentPermissionDeniedError: If the user is not the author.
        """
        comment = self._get_comment(comment_id)
        if comment.author_id != user_id:
            raise CommentPermissionDeniedError

        comment.content = content
        comment.save(update_fields=["content", "updated_at"])
        logger.info("comment_updated", comment_id=str(comment_id), user_id=str(user_id))

        self.hub.emit_to_task(
            comment.task_id,
            RealtimeEvent.COMMENT_UPDATED,
            CommentDetail.model_validate(comment),
        )
        return comment

    def delete_comment(self, comment_id: UUID, user_id: UUID) -> None:
        """Delete a comment. Its author or a project OWNER/ADMIN may.

        Raises:
            CommentNotFoundError: If the comment does not exist.
            CommentPermissionDeniedError: If the user is neither the author nor
                a project OWNER/ADMIN.
        """
        comment = self._get_comment(comment_id)
        if comment.author_id != user_id:
            try:
                self.projects.check_project_permission(
                    comment.task.project_id, user_id, ProjectRole.managers()
                )
            except ProjectPermissionDeniedError as e:
                raise CommentPermissionDeniedError(
                    "Only the author or a project admin can delete this comment"
                ) from e

        task_id = comment.task_id
        comment.delete()
        logger.info("comment_deleted", comment_id=str(comment_id), user_id=str(user_id))

        self.hub.emit_to_task(
            task_id, RealtimeEvent.COMMENT_DELETED, {"id": str(comment_id)}
        )

    def _get_task(self, task_id: UUID) -> Task:
        task = Task.objects.filter(task_id=task_id).first()
        if task is None:
            raise TaskNotFoundError(task_id)
        return task

    def _get_comment(self, comment_id: UUID) -> Comment:
        comment = (
            Comment.objects.select_related("task").filter(comment_id=comment_id).first()
        )
        if comment is None:
            raise CommentNotFoundError(comment_id)
        return comment


comment_service = CommentService()
