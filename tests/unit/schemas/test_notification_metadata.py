"""Tests for notification metadata parsing."""

from uuid import uuid4

from core.enums import NotificationKind
from core.schemas.notification import (
    OtherMetadata,
    ProjectInvitationMetadata,
    TaskAssignedMetadata,
    parse_notification_metadata,
)
from tests.base import BaseUnitTest


class TestParseNotificationMetadata(BaseUnitTest):
    """Test suite for parse_notification_metadata."""

    def test_dict_is_read_as_variant_of_kind(self):
        """A camelCase dict without ``kind`` becomes the kind's variant."""
        task_id, project_id, assigner_id = uuid4(), uuid4(), uuid4()

        parsed = parse_notification_metadata(
            NotificationKind.TASK_ASSIGNED,
            {
                "taskId": str(task_id),
                "projectId": str(project_id),
                "assignerId": str(assigner_id),
            },
        )

        self.assertIsInstance(parsed, TaskAssignedMetadata)
        self.assertEqual(parsed.task_id, task_id)
        self.assertEqual(parsed.version, 1)

    def test_variant_of_other_kind_is_rejected(self):
        """Metadata must belong to the kind of its notification."""
        metadata = ProjectInvitationMetadata(
            project_id=uuid4(), role="MEMBER", inviter_id=uuid4()
        )
        with self.assertRaises(ValueError):
            parse_notification_metadata(NotificationKind.TASK_ASSIGNED, metadata)

    def test_missing_fields_are_rejected(self):
        """Pydantic validation errors surface as ValueError."""
        with self.assertRaises(ValueError):
            parse_notification_metadata(
                NotificationKind.TASK_ASSIGNED, {"taskId": str(uuid4())}
            )

    def test_omitted_metadata_only_for_other(self):
        """OTHER notifications get empty metadata; other kinds require it."""
        self.assertIsInstance(
            parse_notification_metadata(NotificationKind.OTHER, None), OtherMetadata
        )
        with self.assertRaises(ValueError):
            parse_notification_metadata(NotificationKind.COMMENT_MENTION, None)

    def test_dump_is_camel_case_with_version_and_kind(self):
        """Stored JSON carries the discriminator and the version."""
        metadata = OtherMetadata(attributes={"source": "import"})
        self.assertEqual(
            metadata.model_dump(mode="json", by_alias=True),
            {"version": 1, "kind": "OTHER", "attributes": {"source": "import"}},
        )
