"""
Local fallback row store backed by the application database.

Rows are kept per sheet with the same string-encoded cells the spreadsheet
holds. A sheet is seeded with sample rows the first time it is touched, and
never again, so deleting every row leaves it empty.
"""
from typing import Any

from sqlalchemy import JSON, Integer, String, UniqueConstraint, func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import Mapped, mapped_column

from dashboard.core.database.base import Base, TimestampMixin
from dashboard.core.sheets.codec import decode_row, encode_row
from dashboard.core.sheets.defaults import sample_rows
from dashboard.utils import generate_id, get_logger


log = get_logger(__name__)


class LocalRow(Base, TimestampMixin):
    """One record of a sheet, stored locally."""
    __tablename__ = "local_rows"
    __table_args__ = (UniqueConstraint("sheet", "row_id", name="uq_local_rows_sheet_row"),)

    id: Mapped[str] = mapped_column(String(26), primary_key=True, default=generate_id)
    sheet: Mapped[str] = mapped_column(String(100), nullable=False, index=True)
    row_id: Mapped[str] = mapped_column(String(64), nullable=False)
    position: Mapped[int] = mapped_column(Integer, nullable=False)
    data: Mapped[dict[str, Any]] = mapped_column(JSON, nullable=False)

    def __repr__(self) -> str:
        return f"<LocalRow(sheet={self.sheet!r}, row_id={self.row_id!r})>"


class LocalSheet(Base, TimestampMixin):
    """Marks a sheet as seeded."""
    __tablename__ = "local_sheets"

    name: Mapped[str] = mapped_column(String(100), primary_key=True)


class LocalRowStore:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def _ensure_seeded(self, sheet: str) -> None:
        if await self.db.get(LocalSheet, sheet) is not None:
            return
        self.db.add(LocalSheet(name=sheet))
        for position, row in enumerate(sample_rows(sheet), start=1):
            cells = encode_row(row)
            self.db.add(LocalRow(sheet=sheet, row_id=cells["id"], position=position, data=cells))
        await self.db.flush()
        log.info("Initialized local sheet with sample data: %s", sheet)

    async def _find(self, sheet: str, row_id: str) -> LocalRow | None:
        result = await self.db.execute(
            select(LocalRow).where(LocalRow.sheet == sheet, LocalRow.row_id == row_id)
        )
        return result.scalar_one_or_none()

    async def get_all_rows(self, sheet: str) -> list[dict[str, Any]]:
        await self._ensure_seeded(sheet)
        result = await self.db.execute(
            select(LocalRow).where(LocalRow.sheet == sheet).order_by(LocalRow.position)
        )
        return [decode_row(row.data, index) for index, row in enumerate(result.scalars().all())]

    async def add_row(self, sheet: str, cells: dict[str, str]) -> None:
        await self._ensure_seeded(sheet)
        result = await self.db.execute(
            select(func.coalesce(func.max(LocalRow.position), 0)).where(LocalRow.sheet == sheet)
        )
        position = result.scalar_one() + 1
        self.db.add(LocalRow(sheet=sheet, row_id=cells["id"], position=position, data=dict(cells)))
        await self.db.flush()

    async def update_row(self, sheet: str, row_id: str, cells: dict[str, str]) -> bool:
        await self._ensure_seeded(sheet)
        row = await self._find(sheet, row_id)
        if row is None:
            log.error("Row with id %s not found in local sheet %s", row_id, sheet)
            return False
        # Reassign so the JSON column is marked dirty
        row.data = {**row.data, **{key: value for key, value in cells.items() if key != "id"}}
        await self.db.flush()
        return True

    async def delete_row(self, sheet: str, row_id: str) -> bool:
        await self._ensure_seeded(sheet)
        row = await self._find(sheet, row_id)
        if row is None:
            log.error("Row with id %s not found in local sheet %s", row_id, sheet)
            return False
        await self.db.delete(row)
        await self.db.flush()
        return True
