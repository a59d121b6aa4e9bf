"""
Google Sheets backend for the row store.

Each worksheet is a table: the first row holds the headers and every following
row is a record keyed by its "id" column. gspread is synchronous, so every call
runs in a worker thread.
"""
import asyncio
from typing import Any, Callable, Optional

import gspread
from google.auth.exceptions import GoogleAuthError
from gspread.exceptions import GSpreadException, WorksheetNotFound
from gspread.utils import rowcol_to_a1
from requests.exceptions import RequestException

from dashboard.core import config
from dashboard.core.sheets.codec import decode_row, encode_row
from dashboard.core.sheets.defaults import sample_rows
from dashboard.utils import get_logger


log = get_logger(__name__)

SCOPES = ["https://www.googleapis.com/auth/spreadsheets"]
TOKEN_URI = "https://oauth2.googleapis.com/token"


class SheetsError(Exception):
    """Raised when the spreadsheet cannot be reached or a sheet is missing."""


class SheetsClient:
    """Row-level access to one spreadsheet through a service account."""

    _instance: Optional["SheetsClient"] = None

    def __init__(self, sheet_id: str, client_email: str, private_key: str):
        self.sheet_id = sheet_id
        self._credentials = {
            "type": "service_account",
            "client_email": client_email,
            "private_key": private_key,
            "token_uri": TOKEN_URI,
        }
        self._spreadsheet: gspread.Spreadsheet | None = None

    @classmethod
    def get_client(cls) -> Optional["SheetsClient"]:
        """Get or create the shared client; None when the spreadsheet is not configured."""
        if not config.SHEETS_ENABLED:
            return None
        if cls._instance is None:
            cls._instance = cls(config.GOOGLE_SHEET_ID, config.GOOGLE_CLIENT_EMAIL, config.GOOGLE_PRIVATE_KEY)
        return cls._instance

    # ------------------------------------------------------------------
    # Blocking helpers (run in a thread)
    # ------------------------------------------------------------------

    def _open(self) -> gspread.Spreadsheet:
        if self._spreadsheet is None:
            gc = gspread.service_account_from_dict(self._credentials, scopes=SCOPES)
            self._spreadsheet = gc.open_by_key(self.sheet_id)
        return self._spreadsheet

    def _worksheet(self, sheet: str) -> gspread.Worksheet:
        try:
            return self._open().worksheet(sheet)
        except WorksheetNotFound:
            raise SheetsError(f'Sheet "{sheet}" not found')

    @staticmethod
    def _cell(header: str, value: str) -> str:
        # Leading quote keeps phone numbers as text instead of formulas
        if header == "phone" and value and not value.startswith("'"):
            return f"'{value}"
        return value

    @staticmethod
    def _find_row(values: list[list[str]], row_id: str) -> int | None:
        """Return the 1-based sheet row number of the record, or None."""
        if not values or "id" not in values[0]:
            return None
        id_col = values[0].index("id")
        for offset, row in enumerate(values[1:]):
            if id_col < len(row) and row[id_col] == row_id:
                return offset + 2
        return None

    def _get_all_rows(self, sheet: str) -> list[dict[str, Any]]:
        values = self._worksheet(sheet).get_all_values()
        if not values:
            return []
        headers = values[0]
        rows = []
        for index, raw in enumerate(values[1:]):
            cells = {header: raw[i] if i < len(raw) else "" for i, header in enumerate(headers)}
            rows.append(decode_row(cells, index))
        return rows

    def _add_row(self, sheet: str, cells: dict[str, str]) -> None:
        worksheet = self._worksheet(sheet)
        headers = worksheet.row_values(1)
        unknown = set(cells) - set(headers)
        if unknown:
            log.debug("Dropping columns %s not present in sheet %s", sorted(unknown), sheet)
        worksheet.append_row(
            [self._cell(header, cells.get(header, "")) for header in headers],
            value_input_option="USER_ENTERED",
        )

    def _update_row(self, sheet: str, row_id: str, cells: dict[str, str]) -> bool:
        worksheet = self._worksheet(sheet)
        values = worksheet.get_all_values()
        row_number = self._find_row(values, row_id)
        if row_number is None:
            log.error("Row with id %s not found in %s", row_id, sheet)
            return False

        headers = values[0]
        data = [
            {"range": rowcol_to_a1(row_number, headers.index(key) + 1), "values": [[self._cell(key, value)]]}
            for key, value in cells.items()
            if key in headers and key != "id"
        ]
        if data:
            worksheet.batch_update(data, value_input_option="USER_ENTERED")
        return True

    def _delete_row(self, sheet: str, row_id: str) -> bool:
        worksheet = self._worksheet(sheet)
        row_number = self._find_row(worksheet.get_all_values(), row_id)
        if row_number is None:
            log.error("Row with id %s not found in %s", row_id, sheet)
            return False
        worksheet.delete_rows(row_number)
        return True

    def _initialize_if_empty(self) -> list[str]:
        spreadsheet = self._open()
        seeded = []
        for sheet, headers in config.SHEET_HEADERS.items():
            try:
                worksheet = spreadsheet.worksheet(sheet)
            except WorksheetNotFound:
                worksheet = spreadsheet.add_worksheet(title=sheet, rows=1000, cols=len(headers))
                worksheet.append_row(headers, value_input_option="RAW")
                log.info("Created sheet: %s", sheet)

            if len(worksheet.get_all_values()) <= 1:
                for row in sample_rows(sheet):
                    cells = encode_row(row)
                    worksheet.append_row(
                        [self._cell(header, cells.get(header, "")) for header in headers],
                        value_input_option="USER_ENTERED",
                    )
                seeded.append(sheet)
                log.info("Initialized sheet with sample data: %s", sheet)
        return seeded

    # ------------------------------------------------------------------
    # Async API
    # ------------------------------------------------------------------

    async def _run(self, fn: Callable[..., Any], *args: Any) -> Any:
        try:
            return await asyncio.to_thread(fn, *args)
        except SheetsError:
            raise
        except (GSpreadException, GoogleAuthError, RequestException, ValueError) as e:
            raise SheetsError(str(e)) from e

    async def get_all_rows(self, sheet: str) -> list[dict[str, Any]]:
        return await self._run(self._get_all_rows, sheet)

    async def add_row(self, sheet: str, cells: dict[str, str]) -> None:
        await self._run(self._add_row, sheet, cells)

    async def update_row(self, sheet: str, row_id: str, cells: dict[str, str]) -> bool:
        return await self._run(self._update_row, sheet, row_id, cells)

    async def delete_row(self, sheet: str, row_id: str) -> bool:
        return await self._run(self._delete_row, sheet, row_id)

    async def initialize_if_empty(self) -> list[str]:
        """Create missing sheets and seed empty ones. Returns the seeded sheet names."""
        return await self._run(self._initialize_if_empty)
