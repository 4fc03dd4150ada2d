"""Notification preference schemas."""

from pydantic import Field

from core.schemas.base_schema_model import BaseSchemaModel


class NotificationPreferences(BaseSchemaModel):
    """Email delivery toggles of one user."""

    email_enabled: bool = True
    mention_notifications: bool = True
    task_assignment_notifications: bool = True
    due_date_notifications: bool = True
    project_update_notifications: bool = True


class NotificationPreferencesUpdate(BaseSchemaModel):
    """Partial update: omitted flags keep their value."""

    email_enabled: bool | None = Field(None)
    mention_notifications: bool | None = Field(None)
    task_assignment_notifications: bool | None = Field(None)
    due_date_notifications: bool | None = Field(None)
    project_update_notifications: bool | None = Field(None)
