"""Query parameters of the notification list endpoint."""

from pydantic import Field

from core.constants import DEFAULT_NOTIFICATION_PAGE_LIMIT
from core.schemas.base_schema_model import BaseSchemaModel


class NotificationListQuery(BaseSchemaModel):
    """``?limit=&offset=&unreadOnly=``; limits above the maximum are capped."""

    limit: int = Field(DEFAULT_NOTIFICATION_PAGE_LIMIT, ge=1)
    offset: int = Field(0, ge=0)
    unread_only: bool = False
