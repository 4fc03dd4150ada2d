"""Schema for notification details."""

from datetime import datetime
from typing import Any
from uuid import UUID

from pydantic import Field

from core.enums import NotificationKind
from core.schemas.base_schema_model import BaseSchemaModel


class NotificationDetail(BaseSchemaModel):
    """A notification as returned by the API and pushed as ``notification:new``."""

    notification_id: UUID = Field(
        ..., description="Unique identifier for the notification"
    )
    user_id: UUID = Field(..., description="Owner of the notification")
    kind: NotificationKind = Field(..., description="Kind of the notification")
    title: str = Field(..., description="Short headline")
    message: str = Field(..., description="Human-readable body")
    is_read: bool = Field(..., description="Whether the owner has read it")
    read_at: datetime | None = Field(None, description="When it was read")
    metadata: dict[str, Any] = Field(
        default_factory=dict, description="Metadata variant matching the kind"
    )
    created_at: datetime = Field(..., description="When it was created")
