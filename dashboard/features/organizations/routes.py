"""
Organization unit routes.
"""
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, status

from dashboard.core import config
from dashboard.core.sheets.store import RowStore, get_row_store
from dashboard.features.organizations.dependencies import get_unit_by_id
from dashboard.features.organizations.schemas import UnitCreate, UnitResponse, UnitUpdate
from dashboard.features.permissions.dependencies import require_permission
from dashboard.features.users.schemas import UserProfile
from dashboard.utils import get_logger, utc_now_iso


log = get_logger(__name__)
router = APIRouter(tags=["organizations"])


@router.get("/", response_model=list[UnitResponse])
async def list_units(
    user: Annotated[UserProfile, Depends(require_permission("org:view"))],
    store: Annotated[RowStore, Depends(get_row_store)],
    q: str | None = Query(default=None, description="Search name or description"),
    type: str = Query(default="all", description="'all' or a unit type"),
):
    """List organization units, optionally filtered by search text and type."""
    units = [UnitResponse.model_validate(row) for row in await store.get_all(config.ORGANIZATION_UNITS_SHEET)]

    if type != "all":
        units = [unit for unit in units if unit.type.value == type]
    if q:
        needle = q.lower()
        units = [
            unit for unit in units
            if needle in unit.name.lower() or needle in (unit.description or "").lower()
        ]
    return units


@router.post("/", response_model=UnitResponse, status_code=status.HTTP_201_CREATED)
async def create_unit(
    unit_data: UnitCreate,
    user: Annotated[UserProfile, Depends(require_permission("org:create"))],
    store: Annotated[RowStore, Depends(get_row_store)]
):
    """Create a new organization unit."""
    row = unit_data.to_row()
    row.update(members=0, createdAt=utc_now_iso())
    created = await store.add(config.ORGANIZATION_UNITS_SHEET, row)
    log.info("Profile %s created unit %s", user.id, created["id"])
    return UnitResponse.model_validate(created)


@router.get("/{unit_id}", response_model=UnitResponse)
async def get_unit(
    user: Annotated[UserProfile, Depends(require_permission("org:view"))],
    unit: Annotated[UnitResponse, Depends(get_unit_by_id)]
):
    """Get organization unit by ID."""
    return unit


@router.patch("/{unit_id}", response_model=UnitResponse)
async def update_unit(
    update_data: UnitUpdate,
    user: Annotated[UserProfile, Depends(require_permission("org:edit"))],
    unit: Annotated[UnitResponse, Depends(get_unit_by_id)],
    store: Annotated[RowStore, Depends(get_row_store)]
):
    """Update organization unit details."""
    updates = update_data.to_row(exclude_unset=True)
    if not updates:
        return unit
    if not await store.update(config.ORGANIZATION_UNITS_SHEET, unit.id, updates):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Organization unit not found"
        )
    return UnitResponse.model_validate({**unit.to_row(), **updates})


@router.delete("/{unit_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_unit(
    unit_id: str,
    user: Annotated[UserProfile, Depends(require_permission("org:delete"))],
    store: Annotated[RowStore, Depends(get_row_store)]
):
    """Delete an organization unit."""
    if not await store.delete(config.ORGANIZATION_UNITS_SHEET, unit_id):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Organization unit not found"
        )
    log.info("Profile %s deleted unit %s", user.id, unit_id)
