"""
Pydantic schemas for notifications.
"""
from pydantic import Field

from dashboard.core.schemas import SheetModel


class NotificationResponse(SheetModel):
    id: str
    title: str
    text: str | None = None
    by: str | None = None
    date: str | None = None
    is_read: bool = False


class NotificationListResponse(SheetModel):
    notifications: list[NotificationResponse] = Field(default_factory=list)
    unread_count: int = 0


class MarkReadRequest(SheetModel):
    """Either `id` of one notification or `markAll: true`."""
    id: str | None = None
    mark_all: bool = False
