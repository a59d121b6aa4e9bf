import pytest
from gspread.exceptions import WorksheetNotFound

from dashboard.core import config
from dashboard.core.sheets.client import SheetsClient, SheetsError
from dashboard.core.sheets.codec import decode_row, encode_row


class FakeWorksheet:
    def __init__(self, values):
        self.values = values

    def get_all_values(self):
        return [list(row) for row in self.values]

    def row_values(self, number):
        return list(self.values[number - 1]) if len(self.values) >= number else []

    def append_row(self, row, value_input_option=None):
        self.values.append(list(row))

    def batch_update(self, data, value_input_option=None):
        for update in data:
            column = ord(update["range"][0]) - ord("A")
            number = int(update["range"][1:])
            self.values[number - 1][column] = update["values"][0][0]

    def delete_rows(self, number):
        del self.values[number - 1]


class FakeSpreadsheet:
    def __init__(self, worksheets):
        self.worksheets = worksheets

    def worksheet(self, title):
        if title not in self.worksheets:
            raise WorksheetNotFound(title)
        return self.worksheets[title]

    def add_worksheet(self, title, rows, cols):
        self.worksheets[title] = FakeWorksheet([])
        return self.worksheets[title]


@pytest.fixture()
def sheets():
    client = SheetsClient("sheet-id", "svc@example.iam.gserviceaccount.com", "key")
    client._spreadsheet = FakeSpreadsheet({
        "Notifications": FakeWorksheet([
            ["id", "title", "by", "date", "isRead", "text"],
            ["1", "Hello", "Admin", "2023-07-21", "false", "Hi"],
            ["", "No id", "System", "2023-07-20", "true", ""],
        ]),
        "UserProfiles": FakeWorksheet([["id", "name", "phone"]]),
    })
    return client


def test_get_client_is_none_when_unconfigured():
    assert config.SHEETS_ENABLED is False
    assert SheetsClient.get_client() is None


async def test_reads_rows_with_fallback_ids(sheets):
    rows = await sheets.get_all_rows("Notifications")
    assert rows[0] == {"id": "1", "title": "Hello", "by": "Admin", "date": "2023-07-21", "isRead": "false", "text": "Hi"}
    assert rows[1]["id"] == "row-2"


async def test_phone_is_stored_as_text(sheets):
    await sheets.add_row("UserProfiles", encode_row({"id": "7", "name": "Ann", "phone": "+1 555 0100", "plan": "free"}))
    assert sheets._spreadsheet.worksheets["UserProfiles"].values[-1] == ["7", "Ann", "'+1 555 0100"]


async def test_update_and_delete(sheets):
    assert await sheets.update_row("Notifications", "1", {"isRead": "true", "unknown": "x"}) is True
    assert (await sheets.get_all_rows("Notifications"))[0]["isRead"] == "true"
    assert await sheets.update_row("Notifications", "missing", {"isRead": "true"}) is False

    assert await sheets.delete_row("Notifications", "1") is True
    assert await sheets.delete_row("Notifications", "1") is False
    assert len(await sheets.get_all_rows("Notifications")) == 1


async def test_missing_sheet_raises(sheets):
    with pytest.raises(SheetsError):
        await sheets.get_all_rows("Members")


async def test_initialize_creates_and_seeds_empty_sheets(sheets):
    seeded = await sheets.initialize_if_empty()
    assert "Notifications" not in seeded
    assert set(seeded) == set(config.SHEET_HEADERS) - {"Notifications"}

    members = sheets._spreadsheet.worksheets["Members"].values
    assert members[0] == config.SHEET_HEADERS["Members"]
    assert [row[0] for row in members[1:]] == ["1", "2"]


def test_codec_round_trips_structured_cells():
    cells = encode_row({"id": "1", "units": ["1", "2"], "isActive": True, "scheduledFor": None, "members": 3})
    assert cells == {"id": "1", "units": '["1", "2"]', "isActive": "true", "members": "3"}
    assert decode_row(cells, 0)["units"] == ["1", "2"]


def test_decode_keeps_unparseable_json():
    assert decode_row({"id": "", "roles": "[oops"}, 4) == {"id": "row-5", "roles": "[oops"}
