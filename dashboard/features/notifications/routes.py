"""
Notification routes.
"""
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status

from dashboard.core import config
from dashboard.core.sheets.store import RowStore, get_row_store
from dashboard.features.notifications.schemas import (
    MarkReadRequest,
    NotificationListResponse,
    NotificationResponse,
)
from dashboard.features.users.dependencies import get_current_user
from dashboard.features.users.schemas import UserProfile


router = APIRouter(tags=["notifications"])


async def load_notifications(store: RowStore) -> list[NotificationResponse]:
    return [NotificationResponse.model_validate(row) for row in await store.get_all(config.NOTIFICATIONS_SHEET)]


@router.get("/", response_model=NotificationListResponse)
async def list_notifications(
    user: Annotated[UserProfile, Depends(get_current_user)],
    store: Annotated[RowStore, Depends(get_row_store)]
):
    """List notifications with the number still unread."""
    notifications = await load_notifications(store)
    return NotificationListResponse(
        notifications=notifications,
        unread_count=sum(1 for notification in notifications if not notification.is_read),
    )


@router.post("/read", response_model=NotificationListResponse)
async def mark_read(
    request: MarkReadRequest,
    user: Annotated[UserProfile, Depends(get_current_user)],
    store: Annotated[RowStore, Depends(get_row_store)]
):
    """Mark one notification, or all of them, as read."""
    if request.mark_all:
        for notification in await load_notifications(store):
            if not notification.is_read:
                await store.update(config.NOTIFICATIONS_SHEET, notification.id, {"isRead": True})
    elif request.id:
        if not await store.update(config.NOTIFICATIONS_SHEET, request.id, {"isRead": True}):
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Notification not found"
            )
    else:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Provide a notification id or markAll"
        )

    return await list_notifications(user, store)
