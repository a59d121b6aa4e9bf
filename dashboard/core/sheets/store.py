"""
Row store used by every feature.

Reads and writes go to the spreadsheet when it is configured and fall back to
the local database store when the spreadsheet fails or is not configured.
"""
from typing import Annotated, Any

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from dashboard.core.database.engine import get_db
from dashboard.core.sheets.client import SheetsClient, SheetsError
from dashboard.core.sheets.codec import decode_row, encode_row
from dashboard.core.sheets.local import LocalRowStore
from dashboard.utils import generate_id, get_logger


log = get_logger(__name__)


class RowStore:
    def __init__(self, local: LocalRowStore, sheets: SheetsClient | None = None):
        self.local = local
        self.sheets = sheets

    async def get_all(self, sheet: str) -> list[dict[str, Any]]:
        """Return every row of a sheet as decoded dicts."""
        if self.sheets is not None:
            try:
                return await self.sheets.get_all_rows(sheet)
            except SheetsError as e:
                log.warning("Error getting rows from %s, falling back to local store: %s", sheet, e)
        return await self.local.get_all_rows(sheet)

    async def get(self, sheet: str, row_id: str) -> dict[str, Any] | None:
        for row in await self.get_all(sheet):
            if row["id"] == row_id:
                return row
        return None

    async def add(self, sheet: str, data: dict[str, Any]) -> dict[str, Any]:
        """
        Add a row and return it as stored.

        An id is generated when the data does not carry one.
        """
        cells = encode_row(data)
        if not cells.get("id"):
            cells["id"] = generate_id()

        if self.sheets is not None:
            try:
                await self.sheets.add_row(sheet, cells)
                return decode_row(cells, 0)
            except SheetsError as e:
                log.warning("Error adding row to %s, falling back to local store: %s", sheet, e)
        await self.local.add_row(sheet, cells)
        return decode_row(cells, 0)

    async def update(self, sheet: str, row_id: str, updates: dict[str, Any]) -> bool:
        """Apply updates to a row. Returns False when the row does not exist."""
        cells = encode_row(updates)
        if self.sheets is not None:
            try:
                return await self.sheets.update_row(sheet, row_id, cells)
            except SheetsError as e:
                log.warning("Error updating row in %s, falling back to local store: %s", sheet, e)
        return await self.local.update_row(sheet, row_id, cells)

    async def delete(self, sheet: str, row_id: str) -> bool:
        """Delete a row. Returns False when the row does not exist."""
        if self.sheets is not None:
            try:
                return await self.sheets.delete_row(sheet, row_id)
            except SheetsError as e:
                log.warning("Error deleting row from %s, falling back to local store: %s", sheet, e)
        return await self.local.delete_row(sheet, row_id)


async def get_row_store(db: Annotated[AsyncSession, Depends(get_db)]) -> RowStore:
    """FastAPI dependency returning a row store bound to the request's session."""
    return RowStore(LocalRowStore(db), SheetsClient.get_client())
