"""
Organization unit lookups and derived member counts.
"""
from collections import Counter
from typing import Annotated

from fastapi import Depends, HTTPException, status

from dashboard.core import config
from dashboard.core.sheets.store import RowStore, get_row_store
from dashboard.features.members.schemas import MemberResponse
from dashboard.features.organizations.schemas import UnitResponse
from dashboard.utils import get_logger


log = get_logger(__name__)


async def get_unit_by_id(
    unit_id: str,
    store: Annotated[RowStore, Depends(get_row_store)]
) -> UnitResponse:
    """
    Get organization unit by ID or raise 404.

    Raises:
        HTTPException: 404 if unit not found
    """
    row = await store.get(config.ORGANIZATION_UNITS_SHEET, unit_id)
    if row is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Organization unit not found"
        )
    return UnitResponse.model_validate(row)


async def recalculate_unit_counts(store: RowStore) -> dict[str, int]:
    """
    Recompute every unit's member count from the members' unit lists and
    write back the counts that changed.

    Returns:
        Mapping of unit id to member count
    """
    members = [MemberResponse.model_validate(row) for row in await store.get_all(config.MEMBERS_SHEET)]
    assigned = Counter(unit_id for member in members for unit_id in set(member.units))

    counts: dict[str, int] = {}
    for row in await store.get_all(config.ORGANIZATION_UNITS_SHEET):
        unit = UnitResponse.model_validate(row)
        counts[unit.id] = assigned.get(unit.id, 0)
        if unit.members != counts[unit.id]:
            await store.update(config.ORGANIZATION_UNITS_SHEET, unit.id, {"members": counts[unit.id]})

    log.debug("Unit member counts: %s", counts)
    return counts
