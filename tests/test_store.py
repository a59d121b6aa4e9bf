import pytest

from conftest import TEST_DB
from dashboard.core import config
from dashboard.core.database.engine import AsyncSessionLocal, init_db
from dashboard.core.sheets.client import SheetsError
from dashboard.core.sheets.local import LocalRowStore
from dashboard.core.sheets.store import RowStore


class UnreachableSheets:
    """Spreadsheet client whose every call fails."""

    def __init__(self):
        self.calls = []

    async def _fail(self, name):
        self.calls.append(name)
        raise SheetsError("quota exceeded")

    async def get_all_rows(self, sheet):
        return await self._fail("get_all_rows")

    async def add_row(self, sheet, cells):
        return await self._fail("add_row")

    async def update_row(self, sheet, row_id, cells):
        return await self._fail("update_row")

    async def delete_row(self, sheet, row_id):
        return await self._fail("delete_row")


class StaticSheets(UnreachableSheets):
    def __init__(self, rows):
        super().__init__()
        self.rows = rows

    async def get_all_rows(self, sheet):
        self.calls.append("get_all_rows")
        return self.rows


@pytest.fixture()
async def db():
    TEST_DB.unlink(missing_ok=True)
    await init_db()
    async with AsyncSessionLocal() as session:
        yield session
    TEST_DB.unlink(missing_ok=True)


async def test_falls_back_to_local_store(db):
    sheets = UnreachableSheets()
    store = RowStore(LocalRowStore(db), sheets)

    rows = await store.get_all(config.MEMBERS_SHEET)
    assert [row["id"] for row in rows] == ["1", "2"]

    added = await store.add(config.MEMBERS_SHEET, {"name": "Fallback", "units": ["1"], "isNew": True})
    assert added["id"]
    assert added["units"] == ["1"]
    assert added["isNew"] == "true"

    assert await store.update(config.MEMBERS_SHEET, added["id"], {"name": "Renamed"}) is True
    assert (await store.get(config.MEMBERS_SHEET, added["id"]))["name"] == "Renamed"
    assert await store.delete(config.MEMBERS_SHEET, added["id"]) is True
    assert await store.get(config.MEMBERS_SHEET, added["id"]) is None

    assert sheets.calls[:3] == ["get_all_rows", "add_row", "update_row"]


async def test_missing_rows(db):
    store = RowStore(LocalRowStore(db))
    assert await store.update(config.NOTIFICATIONS_SHEET, "missing", {"isRead": True}) is False
    assert await store.delete(config.NOTIFICATIONS_SHEET, "missing") is False


async def test_emptied_sheet_is_not_reseeded(db):
    store = RowStore(LocalRowStore(db))
    for row in await store.get_all(config.ANNOUNCEMENTS_SHEET):
        assert await store.delete(config.ANNOUNCEMENTS_SHEET, row["id"]) is True
    assert await store.get_all(config.ANNOUNCEMENTS_SHEET) == []


async def test_supplied_id_is_kept(db):
    store = RowStore(LocalRowStore(db))
    added = await store.add(config.ORGANIZATION_UNITS_SHEET, {"id": "north-2", "name": "North 2"})
    assert added["id"] == "north-2"
    assert (await store.get(config.ORGANIZATION_UNITS_SHEET, "north-2"))["name"] == "North 2"


async def test_reads_from_sheets_when_available(db):
    sheets = StaticSheets([{"id": "9", "name": "From Sheet"}])
    store = RowStore(LocalRowStore(db), sheets)
    assert await store.get(config.MEMBERS_SHEET, "9") == {"id": "9", "name": "From Sheet"}
    assert sheets.calls == ["get_all_rows"]
