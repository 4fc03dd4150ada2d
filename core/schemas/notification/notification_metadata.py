"""Versioned metadata carried by a notification.

Each NotificationKind has exactly one metadata variant; the ``kind`` field is
the discriminator. Variants are stored as camelCase JSON in
``Notification.metadata`` and sent to clients unchanged.
"""

from datetime import datetime
from typing import Annotated, Any, Literal
from uuid import UUID

from pydantic import Field, TypeAdapter

from core.constants import NOTIFICATION_METADATA_VERSION
from core.enums import NotificationKind, ProjectRole
from core.schemas.base_schema_model import BaseSchemaModel


class MetadataBase(BaseSchemaModel):
    """Fields shared by every metadata variant."""

    version: int = Field(
        NOTIFICATION_METADATA_VERSION, ge=1, description="Metadata shape version"
    )


class TaskAssignedMetadata(MetadataBase):
    """A task was assigned to the notified user."""

    kind: Literal["TASK_ASSIGNED"] = "TASK_ASSIGNED"
    task_id: UUID
    project_id: UUID
    assigner_id: UUID


class TaskDueSoonMetadata(MetadataBase):
    """A task assigned to the notified user is close to its due date."""

    kind: Literal["TASK_DUE_SOON"] = "TASK_DUE_SOON"
    task_id: UUID
    project_id: UUID
    due_date: datetime


class CommentMentionMetadata(MetadataBase):
    """The notified user was mentioned in a comment."""

    kind: Literal["COMMENT_MENTION"] = "COMMENT_MENTION"
    task_id: UUID
    project_id: UUID
    comment_id: UUID
    author_id: UUID


class ProjectInvitationMetadata(MetadataBase):
    """The notified user was added to a project."""

    kind: Literal["PROJECT_INVITATION"] = "PROJECT_INVITATION"
    project_id: UUID
    role: ProjectRole
    inviter_id: UUID


class ProjectRoleChangedMetadata(MetadataBase):
    """The notified user's role in a project changed."""

    kind: Literal["PROJECT_ROLE_CHANGED"] = "PROJECT_ROLE_CHANGED"
    project_id: UUID
    role: ProjectRole
    changed_by_id: UUID


class TaskCompletedMetadata(MetadataBase):
    """A task the notified user follows was completed."""

    kind: Literal["TASK_COMPLETED"] = "TASK_COMPLETED"
    task_id: UUID
    project_id: UUID


class OtherMetadata(MetadataBase):
    """Anything else: a flat string map."""

    kind: Literal["OTHER"] = "OTHER"
    attributes: dict[str, str] = Field(default_factory=dict)


NotificationMetadata = Annotated[
    TaskAssignedMetadata
    | TaskDueSoonMetadata
    | CommentMentionMetadata
    | ProjectInvitationMetadata
    | ProjectRoleChangedMetadata
    | TaskCompletedMetadata
    | OtherMetadata,
    Field(discriminator="kind"),
]

notification_metadata_adapter: TypeAdapter[NotificationMetadata] = TypeAdapter(
    NotificationMetadata
)


def parse_notification_metadata(
    kind: NotificationKind | str,
    metadata: MetadataBase | dict[str, Any] | None,
) -> MetadataBase:
    """Validate metadata against the kind of the notification carrying it.

    A dict without ``kind`` is read as the variant of ``kind``. Omitted
    metadata is only accepted for OTHER notifications.

    Args:
        kind: Kind of the notification.
        metadata: A metadata variant, its dict form, or None.

    Returns:
        The validated metadata variant.

    Raises:
        ValueError: If the metadata is missing, malformed, or belongs to a
            different kind (pydantic's ValidationError is a ValueError).
    """
    kind_value = NotificationKind(kind).value

    if metadata is None:
        if kind_value != NotificationKind.OTHER.value:
            msg = f"Metadata is required for {kind_value} notifications"
            raise ValueError(msg)
        return OtherMetadata()

    if isinstance(metadata, MetadataBase):
        parsed = metadata
    else:
        parsed = notification_metadata_adapter.validate_python(
            {"kind": kind_value, **metadata}
        )

    if parsed.kind != kind_value:
        msg = f"Metadata of kind {parsed.kind} cannot be attached to {kind_value}"
        raise ValueError(msg)
    return parsed
