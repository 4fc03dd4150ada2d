"""Tests for CommentService."""

from uuid import uuid4

from core.enums import NotificationKind, ProjectRole, RoomKind
from core.exceptions import (
    CommentNotFoundError,
    CommentPermissionDeniedError,
    ProjectPermissionDeniedError,
)
from core.models import Comment, Notification
from core.services.comment_service import CommentService
from tests.base import BaseServiceTest
from tests.factories import (
    add_member,
    create_comment,
    create_project,
    create_task,
    create_user,
)


class TestCommentService(BaseServiceTest):
    """Test suite for CommentService."""

    def setUp(self):
        """Set up a task in a project with an owner, a member and a viewer."""
        super().setUp()
        self.service = CommentService()
        self.owner = create_user()
        self.member = create_user(username="linus")
        self.viewer = create_user()
        self.project = create_project(owner=self.owner)
        add_member(self.project, self.member)
        add_member(self.project, self.viewer, ProjectRole.VIEWER)
        self.task = create_task(self.project, self.owner)
        self.task_listener = self.listen(RoomKind.TASK, self.task.task_id)

    def test_create_emits_and_notifies_mentions(self):
        """Comments reach the task room and mentioned users are notified."""
        comment = self.service.create_comment(
            self.task.task_id, "cc @linus", self.owner.user_id
        )

        [(event, payload)] = self.transport.received(self.task_listener)
        self.assertEqual(event, "comment:created")
        self.assertEqual(payload["commentId"], str(comment.comment_id))
        notification = Notification.objects.get(user=self.member)
        self.assertEqual(notification.kind, NotificationKind.COMMENT_MENTION.value)

    def test_viewer_cannot_comment(self):
        """Viewers are read-only."""
        with self.assertRaises(ProjectPermissionDeniedError):
            self.service.create_comment(self.task.task_id, "hi", self.viewer.user_id)

    def test_list_comments_oldest_first(self):
        """Any member can list comments in creation order."""
        first = create_comment(self.task, self.owner, "first")
        second = create_comment(self.task, self.member, "second")

        comments = self.service.list_comments(self.task.task_id, self.viewer.user_id)

        self.assertEqual([c.pk for c in comments], [first.pk, second.pk])

    def test_only_author_updates(self):
        """Others, even the owner, cannot edit a comment."""
        comment = create_comment(self.task, self.member, "draft")

        with self.assertRaises(CommentPermissionDeniedError):
            self.service.update_comment(comment.comment_id, "x", self.owner.user_id)

        self.service.update_comment(comment.comment_id, "final", self.member.user_id)
        comment.refresh_from_db()
        self.assertEqual(comment.content, "final")
        self.assertEqual(
            [e for e, _ in self.transport.received(self.task_listener)],
            ["comment:updated"],
        )

    def test_delete_by_author_or_manager(self):
        """Authors and project managers delete; other members cannot."""
        own = create_comment(self.task, self.member)
        foreign = create_comment(self.task, self.owner)

        with self.assertRaises(CommentPermissionDeniedError):
            self.service.delete_comment(foreign.comment_id, self.member.user_id)

        self.service.delete_comment(own.comment_id, self.member.user_id)
        self.service.delete_comment(foreign.comment_id, self.owner.user_id)

        self.assertFalse(Comment.objects.exists())
        self.assertEqual(
            self.transport.payloads("comment:deleted"),
            [{"id": str(own.comment_id)}, {"id": str(foreign.comment_id)}],
        )

    def test_unknown_comment(self):
        """Unknown comments raise NotFound."""
        with self.assertRaises(CommentNotFoundError):
            self.service.delete_comment(uuid4(), self.owner.user_id)
