"""Notification service: durable records, live push and email follow-up.

Creating a notification always pushes ``notification:new`` to the owner's
``user`` room. Email is a second, independent channel: it is queued only
when the owner's preferences allow it for the notification kind.
"""

import re
from typing import Any
from uuid import UUID

from django.conf import settings
from django.utils import timezone

import django_rq
import structlog
from redis.exceptions import RedisError

from core.constants import DEFAULT_NOTIFICATION_PAGE_LIMIT, MENTION_PATTERN
from core.enums import NotificationKind, RealtimeEvent
from core.exceptions import NotificationNotFoundError, NotificationOwnershipError
from core.models import (
    Comment,
    Notification,
    NotificationPreference,
    Project,
    Task,
    User,
)
from core.schemas.notification import (
    CommentMentionMetadata,
    MetadataBase,
    NotificationDetail,
    NotificationListResponse,
    ProjectInvitationMetadata,
    ProjectRoleChangedMetadata,
    TaskAssignedMetadata,
    TaskCompletedMetadata,
    TaskDueSoonMetadata,
    parse_notification_metadata,
)
from core.services.broadcasting import BroadcastingService

logger = structlog.get_logger(__name__)

EMAIL_JOB = "core.jobs.email_jobs.send_notification_email_job"

# Kinds missing here are always emailed when email is enabled
EMAIL_PREFERENCE_FIELDS = {
    NotificationKind.COMMENT_MENTION: "mention_notifications",
    NotificationKind.TASK_ASSIGNED: "task_assignment_notifications",
    NotificationKind.TASK_DUE_SOON: "due_date_notifications",
    NotificationKind.PROJECT_INVITATION: "project_update_notifications",
    NotificationKind.PROJECT_ROLE_CHANGED: "project_update_notifications",
}


class NotificationService(BroadcastingService):
    """Service for creating notifications and managing their read state."""

    def create(
        self,
        kind: NotificationKind | str,
        title: str,
        message: str,
        user_id: UUID,
        metadata: MetadataBase | dict[str, Any] | None = None,
    ) -> Notification:
        """Persist a notification, push it live and maybe queue an email.

        Args:
            kind: Kind of the notification.
            title: Short headline.
            message: Human-readable body.
            user_id: Owner of the notification.
            metadata: Metadata variant matching ``kind``. Only OTHER
                notifications may omit it.

        Returns:
            The persisted notification.

        Raises:
            ValueError: If the metadata does not match ``kind``.
            HubNotInitializedError: If no realtime hub is available.
        """
        kind = NotificationKind(kind)
        parsed_metadata = parse_notification_metadata(kind, metadata)
        hub = self.hub

        notification = Notification.objects.create(
            user_id=user_id,
            kind=kind.value,
            title=title,
            message=message,
            metadata=parsed_metadata.model_dump(mode="json", by_alias=True),
        )

        logger.info(
            "notification_created",
            notification_id=str(notification.notification_id),
            user_id=str(user_id),
            kind=kind.value,
        )

        hub.emit_to_user(
            user_id,
            RealtimeEvent.NOTIFICATION_NEW,
            NotificationDetail.model_validate(notification),
        )

        preferences = self.get_user_preferences(user_id)
        if preferences.email_enabled and self.should_send_email(kind, preferences):
            self._queue_email(notification)
        else:
            logger.debug(
                "notification_email_skipped",
                notification_id=str(notification.notification_id),
                kind=kind.value,
            )

        return notification

    def find_by_user(
        self,
        user_id: UUID,
        limit: int = DEFAULT_NOTIFICATION_PAGE_LIMIT,
        offset: int = 0,
        unread_only: bool = False,
    ) -> NotificationListResponse:
        """Return a page of a user's notifications, newest first.

        Args:
            user_id: Owner of the notifications.
            limit: Page size, capped to 1..NOTIFICATION_PAGE_MAX_LIMIT.
            offset: Number of notifications to skip.
            unread_only: Only return unread notifications.

        Returns:
            The page, the number of notifications matching the filter and
            the user's total unread count.

        Raises:
            ValueError: If offset is negative.
        """
        if offset < 0:
            msg = "offset must not be negative"
            raise ValueError(msg)
        limit = max(1, min(limit, settings.NOTIFICATION_PAGE_MAX_LIMIT))

        owned = Notification.objects.filter(user_id=user_id)
        queryset = owned.filter(is_read=False) if unread_only else owned

        page = queryset.order_by("-created_at")[offset : offset + limit]
        return NotificationListResponse(
            notifications=[NotificationDetail.model_validate(n) for n in page],
            total=queryset.count(),
            unread_count=owned.filter(is_read=False).count(),
            limit=limit,
            offset=offset,
        )

    def mark_as_read(self, notification_id: UUID, user_id: UUID) -> Notification:
        """Mark one of the user's notifications as read.

        Reading an already read notification keeps its original read_at.
        The write is a conditional update, so a row deleted concurrently
        surfaces as NotificationNotFoundError rather than a failed save.

        Raises:
            NotificationNotFoundError: If the notification does not exist.
            NotificationOwnershipError: If another user owns it.
        """
        notification = self._get_owned(notification_id, user_id)
        owned = Notification.objects.filter(
            notification_id=notification_id, user_id=user_id
        )
        owned.filter(is_read=False).update(is_read=True, read_at=timezone.now())
        try:
            notification.refresh_from_db(fields=["is_read", "read_at"])
        except Notification.DoesNotExist:
            raise NotificationNotFoundError(notification_id) from None

        logger.info(
            "notification_marked_read",
            notification_id=str(notification_id),
            user_id=str(user_id),
        )
        self.hub.emit_to_user(
            user_id,
            RealtimeEvent.NOTIFICATION_READ,
            {"id": str(notification_id)},
        )
        return notification

    def mark_all_as_read(self, user_id: UUID) -> int:
        """Mark every unread notification of the user as read.

        Returns:
            Number of notifications that were unread.
        """
        count = Notification.objects.filter(user_id=user_id, is_read=False).update(
            is_read=True, read_at=timezone.now()
        )
        logger.info("notifications_marked_all_read", user_id=str(user_id), count=count)
        self.hub.emit_to_user(user_id, RealtimeEvent.NOTIFICATION_ALL_READ, {})
        return count

    def delete(self, notification_id: UUID, user_id: UUID) -> None:
        """Delete one of the user's notifications.

        Raises:
            NotificationNotFoundError: If the notification does not exist.
            NotificationOwnershipError: If another user owns it.
        """
        self._get_owned(notification_id, user_id)
        deleted, _ = Notification.objects.filter(
            notification_id=notification_id, user_id=user_id
        ).delete()
        if not deleted:
            raise NotificationNotFoundError(notification_id)

        logger.info(
            "notification_deleted",
            notification_id=str(notification_id),
            user_id=str(user_id),
        )
        self.hub.emit_to_user(
            user_id,
            RealtimeEvent.NOTIFICATION_DELETED,
            {"id": str(notification_id)},
        )

    def get_user_preferences(self, user_id: UUID) -> NotificationPreference:
        """Return the stored preferences, or unsaved defaults if there are none."""
        preferences = NotificationPreference.objects.filter(user_id=user_id).first()
        if preferences is None:
            return NotificationPreference(user_id=user_id)
        return preferences

    def update_user_preferences(
        self, user_id: UUID, **flags: bool
    ) -> NotificationPreference:
        """Update some preference flags, creating the row if needed.

        Args:
            user_id: Owner of the preferences.
            **flags: Preference fields to change; None values are ignored.

        Raises:
            ValueError: If a flag is not a preference field.
        """
        unknown = set(flags) - {
            "email_enabled",
            *EMAIL_PREFERENCE_FIELDS.values(),
        }
        if unknown:
            msg = f"Unknown preference fields: {sorted(unknown)}"
            raise ValueError(msg)

        preferences, _ = NotificationPreference.objects.get_or_create(user_id=user_id)
        changed = {name: value for name, value in flags.items() if value is not None}
        for name, value in changed.items():
            setattr(preferences, name, value)
        if changed:
            preferences.save(update_fields=[*changed, "updated_at"])

        logger.info(
            "notification_preferences_updated",
            user_id=str(user_id),
            changed=sorted(changed),
        )
        return preferences

    @staticmethod
    def should_send_email(
        kind: NotificationKind | str, preferences: NotificationPreference
    ) -> bool:
        """Whether the kind's category is enabled in the preferences.

        Only the email channel depends on this; ``email_enabled`` is checked
        separately by the caller.
        """
        field = EMAIL_PREFERENCE_FIELDS.get(NotificationKind(kind))
        if field is None:
            return True
        return bool(getattr(preferences, field))

    def notify_task_assignment(
        self, task_id: UUID, assignee_id: UUID, assigner_id: UUID
    ) -> Notification | None:
        """Tell a user that a task was assigned to them.

        Returns:
            The notification, or None if the task no longer exists.
        """
        task = Task.objects.select_related("project").filter(task_id=task_id).first()
        if task is None:
            logger.info("notification_skipped_task_missing", task_id=str(task_id))
            return None
        assigner = User.objects.filter(user_id=assigner_id).first()
        assigner_name = assigner.full_name if assigner else "Someone"

        return self.create(
            kind=NotificationKind.TASK_ASSIGNED,
            title="New Task Assignment",
            message=(
                f'{assigner_name} assigned you to task "{task.title}" '
                f"in project {task.project.name}"
            ),
            user_id=assignee_id,
            metadata=TaskAssignedMetadata(
                task_id=task.task_id,
                project_id=task.project_id,
                assigner_id=assigner_id,
            ),
        )

    def notify_task_due_soon(self, task_id: UUID) -> Notification | None:
        """Remind the assignee that a task is due soon.

        Returns:
            The notification, or None if the task is gone, unassigned or has
            no due date.
        """
        task = (
            Task.objects.select_related("project", "assignee")
            .filter(task_id=task_id)
            .first()
        )
        if task is None or task.assignee_id is None or task.due_date is None:
            logger.info("notification_skipped_task_not_due", task_id=str(task_id))
            return None

        return self.create(
            kind=NotificationKind.TASK_DUE_SOON,
            title="Task Due Soon",
            message=f'Task "{task.title}" in project {task.project.name} is due soon',
            user_id=task.assignee_id,
            metadata=TaskDueSoonMetadata(
                task_id=task.task_id,
                project_id=task.project_id,
                due_date=task.due_date,
            ),
        )

    def notify_task_completed(
        self, task_id: UUID, completed_by_id: UUID
    ) -> Notification | None:
        """Tell the creator of a task that someone else completed it.

        Returns:
            The notification, or None if the task is gone or the creator
            completed it.
        """
        task = Task.objects.select_related("project").filter(task_id=task_id).first()
        if task is None or task.creator_id == completed_by_id:
            return None
        completer = User.objects.filter(user_id=completed_by_id).first()
        completer_name = completer.full_name if completer else "Someone"

        return self.create(
            kind=NotificationKind.TASK_COMPLETED,
            title="Task Completed",
            message=(
                f'{completer_name} completed task "{task.title}" '
                f"in project {task.project.name}"
            ),
            user_id=task.creator_id,
            metadata=TaskCompletedMetadata(
                task_id=task.task_id, project_id=task.project_id
            ),
        )

    def notify_project_invitation(
        self, project_id: UUID, user_id: UUID, role: str, inviter_id: UUID
    ) -> Notification | None:
        """Tell a user they were added to a project.

        Returns:
            The notification, or None if the project or inviter is gone.
        """
        project = Project.objects.filter(project_id=project_id).first()
        inviter = User.objects.filter(user_id=inviter_id).first()
        if project is None or inviter is None:
            logger.info(
                "notification_skipped_project_or_inviter_missing",
                project_id=str(project_id),
                inviter_id=str(inviter_id),
            )
            return None

        return self.create(
            kind=NotificationKind.PROJECT_INVITATION,
            title="Project Invitation",
            message=(
                f'{inviter.full_name} invited you to join project "{project.name}" '
                f"as {role}"
            ),
            user_id=user_id,
            metadata=ProjectInvitationMetadata(
                project_id=project_id, role=role, inviter_id=inviter_id
            ),
        )

    def notify_project_role_changed(
        self, project_id: UUID, user_id: UUID, role: str, changed_by_id: UUID
    ) -> Notification | None:
        """Tell a member their role in a project changed.

        Returns:
            The notification, or None if the project or actor is gone.
        """
        project = Project.objects.filter(project_id=project_id).first()
        changed_by = User.objects.filter(user_id=changed_by_id).first()
        if project is None or changed_by is None:
            logger.info(
                "notification_skipped_project_or_actor_missing",
                project_id=str(project_id),
                changed_by_id=str(changed_by_id),
            )
            return None

        return self.create(
            kind=NotificationKind.PROJECT_ROLE_CHANGED,
            title="Project Role Changed",
            message=(
                f'{changed_by.full_name} changed your role in project "{project.name}" '
                f"to {role}"
            ),
            user_id=user_id,
            metadata=ProjectRoleChangedMetadata(
                project_id=project_id, role=role, changed_by_id=changed_by_id
            ),
        )

    def notify_comment_mentions(self, comment: Comment) -> list[Notification]:
        """Notify every user mentioned as ``@username`` in a comment.

        The author is never notified and unknown usernames are ignored.

        Returns:
            The notifications created, one per mentioned user.
        """
        usernames = set(re.findall(MENTION_PATTERN, comment.content))
        if not usernames:
            return []

        task = comment.task
        mentioned = User.objects.filter(username__in=usernames, is_active=True).exclude(
            user_id=comment.author_id
        )

        notifications = [
            self.create(
                kind=NotificationKind.COMMENT_MENTION,
                title="You were mentioned in a comment",
                message=(
                    f"{comment.author.full_name} mentioned you in a comment "
                    f'on task "{task.title}"'
                ),
                user_id=user.user_id,
                metadata=CommentMentionMetadata(
                    task_id=task.task_id,
                    project_id=task.project_id,
                    comment_id=comment.comment_id,
                    author_id=comment.author_id,
                ),
            )
            for user in mentioned
        ]
        logger.info(
            "comment_mentions_notified",
            comment_id=str(comment.comment_id),
            mentioned_count=len(notifications),
        )
        return notifications

    def _get_owned(self, notification_id: UUID, user_id: UUID) -> Notification:
        notification = Notification.objects.filter(
            notification_id=notification_id
        ).first()
        if notification is None:
            raise NotificationNotFoundError(notification_id)
        if str(notification.user_id) != str(user_id):
            logger.warning(
                "notification_ownership_denied",
                notification_id=str(notification_id),
                user_id=str(user_id),
            )
            raise NotificationOwnershipError(notification_id)
        return notification

    def _queue_email(self, notification: Notification) -> None:
        try:
            django_rq.get_queue("default").enqueue(
                EMAIL_JOB, str(notification.notification_id)
            )
        except RedisError as e:
            logger.error(
                "notification_email_queue_failed",
                notification_id=str(notification.notification_id),
                error=str(e),
            )
            return

        logger.info(
            "notification_email_queued",
            notification_id=str(notification.notification_id),
        )


notification_service = NotificationService()
