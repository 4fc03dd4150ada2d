"""Tests for ProjectService."""

from unittest.mock import Mock
from uuid import uuid4

from core.enums import NotificationKind, ProjectRole, TaskStatus
from core.exceptions import (
    ConflictError,
    ProjectNotFoundError,
    ProjectPermissionDeniedError,
    UserNotFoundError,
)
from core.models import Notification, ProjectMember
from core.schemas.project import (
    ProjectCreateRequest,
    ProjectDetail,
    ProjectUpdateRequest,
)
from core.services.project_service import ProjectService
from tests.base import BaseServiceTest
from tests.factories import add_member, create_project, create_task, create_user


class TestProjectPermissions(BaseServiceTest):
    """Test suite for membership checks."""

    def setUp(self):
        """Set up a project with one member per role."""
        super().setUp()
        self.service = ProjectService(notifications=Mock())
        self.owner = create_user()
        self.project = create_project(owner=self.owner)
        self.viewer = create_user()
        add_member(self.project, self.viewer, ProjectRole.VIEWER)

    def test_member_passes_any_role_check(self):
        """Any role passes the default check."""
        membership = self.service.check_project_permission(
            self.project.project_id, self.viewer.user_id
        )
        self.assertEqual(membership.role, ProjectRole.VIEWER.value)

    def test_non_member_is_denied(self):
        """Outsiders are denied with a membership message."""
        with self.assertRaises(ProjectPermissionDeniedError) as ctx:
            self.service.check_project_permission(self.project.project_id, uuid4())
        self.assertEqual(ctx.exception.message, "Not a member of this project")
        self.assertEqual(ctx.exception.status_code, 403)

    def test_insufficient_role_is_denied(self):
        """Roles outside the allowed set are denied."""
        with self.assertRaises(ProjectPermissionDeniedError) as ctx:
            self.service.check_project_permission(
                self.project.project_id, self.viewer.user_id, ProjectRole.managers()
            )
        self.assertEqual(ctx.exception.message, "Insufficient permissions")

    def test_membership_predicates(self):
        """Room join checks accept members and reject malformed ids."""
        task = create_task(self.project, self.owner)

        self.assertTrue(
            self.service.is_project_member(
                str(self.project.project_id), self.viewer.user_id
            )
        )
        self.assertTrue(self.service.is_task_member(task.task_id, self.viewer.user_id))
        self.assertFalse(self.service.is_task_member(task.task_id, uuid4()))
        self.assertFalse(self.service.is_project_member("nope", self.viewer.user_id))


class TestMemberManagement(BaseServiceTest):
    """Test suite for adding, changing and removing members."""

    def setUp(self):
        """Set up a project with an owner and an admin."""
        super().setUp()
        self.service = ProjectService()
        self.owner = create_user()
        self.admin = create_user()
        self.project = create_project(owner=self.owner)
        add_member(self.project, self.admin, ProjectRole.ADMIN)

    def test_admin_adds_member_and_invitation_is_sent(self):
        """New members get a PROJECT_INVITATION notification."""
        invited = create_user()

        membership = self.service.add_member(
            self.project.project_id, invited.user_id, "MEMBER", self.admin.user_id
        )

        self.assertEqual(membership.role, "MEMBER")
        notification = Notification.objects.get(user=invited)
        self.assertEqual(notification.kind, NotificationKind.PROJECT_INVITATION.value)

    def test_add_existing_member_conflicts(self):
        """Adding a member twice is a conflict."""
        with self.assertRaises(ConflictError):
            self.service.add_member(
                self.project.project_id,
                self.admin.user_id,
                "MEMBER",
                self.owner.user_id,
            )

    def test_add_to_unknown_project_or_user(self):
        """Unknown projects and users are reported as not found."""
        with self.assertRaises(ProjectNotFoundError):
            self.service.add_member(uuid4(), uuid4(), "MEMBER", self.owner.user_id)
        with self.assertRaises(UserNotFoundError):
            self.service.add_member(
                self.project.project_id, uuid4(), "MEMBER", self.owner.user_id
            )

    def test_member_cannot_add_members(self):
        """Plain members may not invite."""
        member = create_user()
        add_member(self.project, member)
        with self.assertRaises(ProjectPermissionDeniedError):
            self.service.add_member(
                self.project.project_id, create_user().user_id, "MEMBER", member.user_id
            )

    def test_owner_changes_role_and_member_is_notified(self):
        """Role changes are saved and announced."""
        self.service.update_member_role(
            self.project.project_id, self.admin.user_id, "MEMBER", self.owner.user_id
        )

        membership = ProjectMember.objects.get(project=self.project, user=self.admin)
        self.assertEqual(membership.role, "MEMBER")
        notification = Notification.objects.get(user=self.admin)
        self.assertEqual(notification.kind, NotificationKind.PROJECT_ROLE_CHANGED.value)
        self.assertEqual(notification.metadata["role"], "MEMBER")

    def test_unchanged_role_sends_nothing(self):
        """Setting the current role again is a no-op."""
        self.service.update_member_role(
            self.project.project_id, self.admin.user_id, "ADMIN", self.owner.user_id
        )
        self.assertFalse(Notification.objects.exists())

    def test_admin_cannot_change_roles(self):
        """Only the owner changes roles."""
        with self.assertRaises(ProjectPermissionDeniedError):
            self.service.update_member_role(
                self.project.project_id,
                self.owner.user_id,
                "VIEWER",
                self.admin.user_id,
            )

    def test_remove_member(self):
        """Managers remove members; the last owner cannot be removed."""
        self.service.remove_member(
            self.project.project_id, self.admin.user_id, self.owner.user_id
        )
        self.assertFalse(
            ProjectMember.objects.filter(project=self.project, user=self.admin).exists()
        )

        with self.assertRaises(ConflictError):
            self.service.remove_member(
                self.project.project_id, self.owner.user_id, self.owner.user_id
            )


class TestProjectLifecycle(BaseServiceTest):
    """Test suite for creating, listing, updating and deleting projects."""

    def setUp(self):
        """Set up an owner, an admin and a viewer of one project."""
        super().setUp()
        self.service = ProjectService(notifications=Mock())
        self.owner = create_user()
        self.admin = create_user()
        self.viewer = create_user()
        self.project = create_project(owner=self.owner, name="Apollo")
        add_member(self.project, self.admin, ProjectRole.ADMIN)
        add_member(self.project, self.viewer, ProjectRole.VIEWER)

    def test_create_makes_creator_owner(self):
        """The creator becomes the only OWNER of the new project."""
        creator = create_user()

        project = self.service.create_project(
            ProjectCreateRequest(name="Gemini", description="Second"), creator.user_id
        )

        membership = ProjectMember.objects.get(project_id=project.project_id)
        self.assertEqual(membership.user_id, creator.user_id)
        self.assertEqual(membership.role, ProjectRole.OWNER.value)
        self.assertEqual(project.role, ProjectRole.OWNER.value)
        self.assertEqual(project.member_count, 1)
        self.assertEqual(project.task_count, 0)

    def test_get_reports_role_and_counts(self):
        """Counts cover every task and member, not only the caller's."""
        create_task(self.project, self.owner)
        create_task(self.project, self.owner, status=TaskStatus.DONE.value)

        project = self.service.get_project(self.project.project_id, self.viewer.user_id)

        detail = ProjectDetail.model_validate(project)
        self.assertEqual(detail.role, ProjectRole.VIEWER.value)
        self.assertEqual(detail.task_count, 2)
        self.assertEqual(detail.completed_task_count, 1)
        self.assertEqual(detail.member_count, 3)

    def test_get_hides_projects_of_others(self):
        """Non-members see the project as missing."""
        with self.assertRaises(ProjectNotFoundError):
            self.service.get_project(self.project.project_id, create_user().user_id)

    def test_list_only_returns_memberships(self):
        """Projects the user is not in are not listed."""
        create_project(owner=create_user())
        second = create_project(owner=self.viewer, name="Borealis")

        page = self.service.list_projects(self.viewer.user_id)

        self.assertEqual(page.total, 2)
        self.assertEqual(
            {p.project_id for p in page.projects},
            {self.project.project_id, second.project_id},
        )

    def test_list_search_and_paging(self):
        """Search matches the name case-insensitively and the page is capped."""
        create_project(owner=self.owner, name="Borealis")

        found = self.service.list_projects(self.owner.user_id, search="apol")
        first = self.service.list_projects(self.owner.user_id, limit=1)

        self.assertEqual([p.name for p in found.projects], ["Apollo"])
        self.assertEqual(len(first.projects), 1)
        self.assertEqual(first.total, 2)

    def test_list_rejects_negative_offset(self):
        """Offsets below zero are invalid."""
        with self.assertRaises(ValueError):
            self.service.list_projects(self.owner.user_id, offset=-1)

    def test_admin_updates_sent_fields(self):
        """Only the fields present in the request change."""
        project = self.service.update_project(
            self.project.project_id,
            ProjectUpdateRequest(name="Apollo 11"),
            self.admin.user_id,
        )

        self.assertEqual(project.name, "Apollo 11")
        self.assertEqual(project.description, self.project.description)

    def test_viewer_cannot_update(self):
        """Viewers may not edit the project."""
        with self.assertRaises(ProjectPermissionDeniedError):
            self.service.update_project(
                self.project.project_id,
                ProjectUpdateRequest(name="Nope"),
                self.viewer.user_id,
            )

    def test_only_owner_deletes(self):
        """Admins are denied; the owner's delete deactivates the project."""
        with self.assertRaises(ProjectPermissionDeniedError):
            self.service.delete_project(self.project.project_id, self.admin.user_id)

        self.service.delete_project(self.project.project_id, self.owner.user_id)

        self.project.refresh_from_db()
        self.assertFalse(self.project.is_active)

    def test_deleted_project_is_gone_for_members(self):
        """After deletion the project is neither listed nor passes checks."""
        task = create_task(self.project, self.owner)
        self.service.delete_project(self.project.project_id, self.owner.user_id)

        self.assertEqual(self.service.list_projects(self.owner.user_id).total, 0)
        with self.assertRaises(ProjectNotFoundError):
            self.service.get_project(self.project.project_id, self.owner.user_id)
        with self.assertRaises(ProjectNotFoundError):
            self.service.delete_project(self.project.project_id, self.owner.user_id)
        with self.assertRaises(ProjectPermissionDeniedError):
            self.service.check_project_permission(
                self.project.project_id, self.owner.user_id
            )
        self.assertFalse(
            self.service.is_project_member(self.project.project_id, self.owner.user_id)
        )
        self.assertFalse(self.service.is_task_member(task.task_id, self.owner.user_id))
