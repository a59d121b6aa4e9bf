"""
Announcement routes.
"""
from datetime import datetime, timezone
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, status

from dashboard.core import config
from dashboard.core.sheets.store import RowStore, get_row_store
from dashboard.features.announcements.schemas import (
    AnnouncementCreate,
    AnnouncementResponse,
    AnnouncementTab,
    AnnouncementUpdate,
)
from dashboard.features.permissions.dependencies import require_permission
from dashboard.features.users.schemas import UserProfile
from dashboard.utils import get_logger, utc_now_iso


log = get_logger(__name__)
router = APIRouter(tags=["announcements"])


async def get_announcement_or_404(store: RowStore, announcement_id: str) -> AnnouncementResponse:
    row = await store.get(config.ANNOUNCEMENTS_SHEET, announcement_id)
    if row is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Announcement not found"
        )
    return AnnouncementResponse.model_validate(row)


@router.get("/", response_model=list[AnnouncementResponse])
async def list_announcements(
    user: Annotated[UserProfile, Depends(require_permission("announcement:view"))],
    store: Annotated[RowStore, Depends(get_row_store)],
    tab: AnnouncementTab = Query(default=AnnouncementTab.ALL),
):
    """List announcements in a tab: all, drafts, scheduled, polls or contests."""
    now = datetime.now(timezone.utc)
    announcements = [
        AnnouncementResponse.model_validate(row)
        for row in await store.get_all(config.ANNOUNCEMENTS_SHEET)
    ]
    return [announcement for announcement in announcements if announcement.in_tab(tab, now)]


@router.post("/", response_model=AnnouncementResponse, status_code=status.HTTP_201_CREATED)
async def create_announcement(
    announcement_data: AnnouncementCreate,
    user: Annotated[UserProfile, Depends(require_permission("announcement:create"))],
    store: Annotated[RowStore, Depends(get_row_store)]
):
    """Create an announcement. Its type follows its active flag and schedule."""
    announcement = AnnouncementResponse(id="new", created_at=utc_now_iso(), **announcement_data.model_dump())
    announcement.type = announcement.normalized_type()
    created = await store.add(config.ANNOUNCEMENTS_SHEET, announcement.to_row(exclude={"id"}))
    log.info("Profile %s created announcement %s", user.id, created["id"])
    return AnnouncementResponse.model_validate(created)


@router.get("/{announcement_id}", response_model=AnnouncementResponse)
async def get_announcement(
    announcement_id: str,
    user: Annotated[UserProfile, Depends(require_permission("announcement:view"))],
    store: Annotated[RowStore, Depends(get_row_store)]
):
    """Get announcement by ID."""
    return await get_announcement_or_404(store, announcement_id)


@router.patch("/{announcement_id}", response_model=AnnouncementResponse)
async def update_announcement(
    announcement_id: str,
    update_data: AnnouncementUpdate,
    user: Annotated[UserProfile, Depends(require_permission("announcement:edit"))],
    store: Annotated[RowStore, Depends(get_row_store)]
):
    """Update an announcement and re-derive its type."""
    current = await get_announcement_or_404(store, announcement_id)
    # Null leaves a field unchanged, except scheduledFor where it clears the schedule
    clear_schedule = "scheduled_for" in update_data.model_fields_set and update_data.scheduled_for is None
    merged = {**current.model_dump(), **update_data.model_dump(exclude_unset=True, exclude_none=True)}
    if clear_schedule:
        merged["scheduled_for"] = None
    announcement = AnnouncementResponse.model_validate(merged)
    announcement.type = announcement.normalized_type()

    updates = update_data.to_row(exclude_unset=True)
    updates["type"] = announcement.type.value
    if clear_schedule:
        updates["scheduledFor"] = ""
    if not await store.update(config.ANNOUNCEMENTS_SHEET, announcement_id, updates):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Announcement not found"
        )
    return announcement


@router.delete("/{announcement_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_announcement(
    announcement_id: str,
    user: Annotated[UserProfile, Depends(require_permission("announcement:delete"))],
    store: Annotated[RowStore, Depends(get_row_store)]
):
    """Delete an announcement."""
    if not await store.delete(config.ANNOUNCEMENTS_SHEET, announcement_id):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Announcement not found"
        )
    log.info("Profile %s deleted announcement %s", user.id, announcement_id)
