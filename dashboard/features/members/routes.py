"""
Team member routes.

Every write recomputes the organization units' member counts.
"""
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, status

from dashboard.core import config
from dashboard.core.sheets.store import RowStore, get_row_store
from dashboard.features.members.schemas import (
    MemberCreate,
    MemberResponse,
    MemberUpdate,
    RecalculateResponse,
    legacy_unit,
)
from dashboard.features.organizations.dependencies import recalculate_unit_counts
from dashboard.features.permissions.dependencies import require_permission
from dashboard.features.users.schemas import UserProfile
from dashboard.utils import get_logger, utc_now_iso


log = get_logger(__name__)
router = APIRouter(tags=["members"])


async def get_member_or_404(store: RowStore, member_id: str) -> MemberResponse:
    row = await store.get(config.MEMBERS_SHEET, member_id)
    if row is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Member not found"
        )
    return MemberResponse.model_validate(row)


@router.get("/", response_model=list[MemberResponse])
async def list_members(
    user: Annotated[UserProfile, Depends(require_permission("member:view"))],
    store: Annotated[RowStore, Depends(get_row_store)],
    q: str | None = Query(default=None, description="Search name or email"),
    unit: str | None = Query(default=None, description="Only members of this unit id"),
):
    """List members, optionally filtered by search text and unit."""
    members = [MemberResponse.model_validate(row) for row in await store.get_all(config.MEMBERS_SHEET)]

    if unit:
        members = [member for member in members if unit in member.units]
    if q:
        needle = q.lower()
        members = [
            member for member in members
            if needle in member.name.lower() or needle in member.email.lower()
        ]
    return members


@router.post("/", response_model=MemberResponse, status_code=status.HTTP_201_CREATED)
async def create_member(
    member_data: MemberCreate,
    user: Annotated[UserProfile, Depends(require_permission("member:create"))],
    store: Annotated[RowStore, Depends(get_row_store)]
):
    """Add a member."""
    row = member_data.to_row()
    row.update(unit=legacy_unit(member_data.units), createdAt=utc_now_iso())
    created = await store.add(config.MEMBERS_SHEET, row)
    await recalculate_unit_counts(store)
    log.info("Profile %s added member %s", user.id, created["id"])
    return MemberResponse.model_validate(created)


@router.post("/recalculate-unit-counts", response_model=RecalculateResponse)
async def recalculate_counts(
    user: Annotated[UserProfile, Depends(require_permission("member:edit"))],
    store: Annotated[RowStore, Depends(get_row_store)]
):
    """Recompute and store every unit's member count."""
    return RecalculateResponse(counts=await recalculate_unit_counts(store))


@router.get("/{member_id}", response_model=MemberResponse)
async def get_member(
    member_id: str,
    user: Annotated[UserProfile, Depends(require_permission("member:view"))],
    store: Annotated[RowStore, Depends(get_row_store)]
):
    """Get member by ID."""
    return await get_member_or_404(store, member_id)


@router.patch("/{member_id}", response_model=MemberResponse)
async def update_member(
    member_id: str,
    update_data: MemberUpdate,
    user: Annotated[UserProfile, Depends(require_permission("member:edit"))],
    store: Annotated[RowStore, Depends(get_row_store)]
):
    """Update member details."""
    member = await get_member_or_404(store, member_id)
    updates = update_data.to_row(exclude_unset=True)
    if not updates:
        return member
    if update_data.units is not None:
        updates["unit"] = legacy_unit(update_data.units)

    if not await store.update(config.MEMBERS_SHEET, member_id, updates):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Member not found"
        )
    if update_data.units is not None:
        await recalculate_unit_counts(store)
    return MemberResponse.model_validate({**member.to_row(), **updates})


@router.delete("/{member_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_member(
    member_id: str,
    user: Annotated[UserProfile, Depends(require_permission("member:delete"))],
    store: Annotated[RowStore, Depends(get_row_store)]
):
    """Remove a member."""
    if not await store.delete(config.MEMBERS_SHEET, member_id):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Member not found"
        )
    await recalculate_unit_counts(store)
    log.info("Profile %s removed member %s", user.id, member_id)
