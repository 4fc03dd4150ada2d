"""Response schema for a page of notifications."""

from pydantic import Field

from core.schemas.base_schema_model import BaseSchemaModel
from core.schemas.notification.notification_detail import NotificationDetail


class NotificationListResponse(BaseSchemaModel):
    """One page of a user's notifications, newest first."""

    notifications: list[NotificationDetail] = Field(default_factory=list)
    total: int = Field(..., ge=0, description="Notifications matching the filter")
    unread_count: int = Field(..., ge=0, description="Unread notifications overall")
    limit: int = Field(..., ge=1)
    offset: int = Field(..., ge=0)
