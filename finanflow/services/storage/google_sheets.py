"""
Google Sheets Storage Implementation

DESIGN DECISION: Google Sheets is offered as a storage backend because:
1. The business owner can inspect the ledger directly in Sheets
2. No database setup required
3. Built-in backup (Google's infrastructure)

Each slot maps to one worksheet: a header row with the record keys,
then one row per record. Saves are full replacements (clear + write),
matching the slot contract of RecordStorageInterface.

TRADEOFFS:
- Not suitable for high-volume data (fine for a small business ledger)
- No transactions (a failed write after clear() leaves the sheet empty;
  the in-memory ledger stays the source of truth and the next save
  rewrites everything)
"""

import json
from typing import Any, Optional

import gspread
from google.oauth2.service_account import Credentials
from tenacity import retry, stop_after_attempt, wait_exponential

from finanflow.config import get_settings
from finanflow.config.settings import GoogleSheetsSettings
from finanflow.services.storage.interface import (
    ConnectionError,
    Record,
    RecordStorageInterface,
    StorageError,
)


# Columns whose cells hold JSON-encoded lists
JSON_COLUMNS = {"sourceSaleIds"}


class GoogleSheetsClient:
    """
    Low-level Google Sheets client wrapper.

    Handles authentication and worksheet lookup.
    """

    def __init__(self, settings: Optional[GoogleSheetsSettings] = None):
        self._client: Optional[gspread.Client] = None
        self._spreadsheet: Optional[gspread.Spreadsheet] = None
        self._settings = settings or get_settings().google_sheets

    @retry(
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=1, min=2, max=10),
        reraise=True,
    )
    def connect(self) -> gspread.Client:
        """
        Establish connection to Google Sheets.

        Uses service account credentials for authentication.
        """
        if self._client is None:
            try:
                scopes = [
                    "https://www.googleapis.com/auth/spreadsheets",
                    "https://www.googleapis.com/auth/drive",
                ]
                credentials = Credentials.from_service_account_file(
                    self._settings.credentials_path,
                    scopes=scopes,
                )
                self._client = gspread.authorize(credentials)
            except FileNotFoundError:
                raise ConnectionError(
                    f"Google credentials file not found: {self._settings.credentials_path}"
                )
            except Exception as e:
                raise ConnectionError(f"Failed to connect to Google Sheets: {e}")

        return self._client

    def get_spreadsheet(self) -> gspread.Spreadsheet:
        """Get the configured spreadsheet."""
        if self._spreadsheet is None:
            client = self.connect()
            try:
                self._spreadsheet = client.open_by_key(
                    self._settings.spreadsheet_id
                )
            except gspread.SpreadsheetNotFound:
                raise ConnectionError(
                    f"Spreadsheet not found: {self._settings.spreadsheet_id}"
                )
        return self._spreadsheet

    def find_worksheet(self, title: str) -> Optional[gspread.Worksheet]:
        """Get a worksheet by title, or None if it does not exist."""
        try:
            return self.get_spreadsheet().worksheet(title)
        except gspread.WorksheetNotFound:
            return None

    def get_or_create_worksheet(self, title: str, cols: int) -> gspread.Worksheet:
        """Get a worksheet by title, creating it if needed."""
        sheet = self.find_worksheet(title)
        if sheet is None:
            sheet = self.get_spreadsheet().add_worksheet(
                title=title,
                rows=1000,
                cols=max(cols, 1),
            )
        return sheet


def _to_cell(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, (list, tuple)):
        return json.dumps(list(value), ensure_ascii=False)
    return str(value)


def _from_cell(column: str, cell: str) -> Any:
    if column in JSON_COLUMNS:
        return json.loads(cell)
    return cell


def records_to_rows(records: list[Record]) -> list[list[str]]:
    """Header row (keys in first-seen order) followed by one row per record."""
    header: list[str] = []
    for record in records:
        for key in record:
            if key not in header:
                header.append(key)

    if not header:
        return []

    rows = [header]
    for record in records:
        rows.append([_to_cell(record.get(key)) for key in header])
    return rows


def rows_to_records(rows: list[list[str]]) -> list[Record]:
    """Inverse of records_to_rows. Empty cells are dropped so defaults apply."""
    if not rows:
        return []

    header, *body = rows
    records = []
    for row in body:
        if not any(row):  # Skip empty rows
            continue
        record = {}
        for column, cell in zip(header, row):
            if column and cell != "":
                record[column] = _from_cell(column, cell)
        records.append(record)
    return records


class GoogleSheetsStorage(RecordStorageInterface):
    """
    Google Sheets implementation of slot storage.

    Slot name == worksheet title.
    """

    def __init__(self, client: Optional[GoogleSheetsClient] = None):
        self._client = client or GoogleSheetsClient()

    @retry(
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=1, min=2, max=10),
        reraise=True,
    )
    def load(self, slot: str) -> Optional[list[Record]]:
        """Read every record of a slot worksheet."""
        try:
            sheet = self._client.find_worksheet(slot)
            if sheet is None:
                return None
            return rows_to_records(sheet.get_all_values())
        except ConnectionError:
            raise
        except Exception as e:
            raise StorageError(f"Failed to load slot {slot}: {e}")

    @retry(
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=1, min=2, max=10),
        reraise=True,
    )
    def save(self, slot: str, records: list[Record]) -> bool:
        """Replace the slot worksheet with the given records."""
        try:
            rows = records_to_rows(records)
            sheet = self._client.get_or_create_worksheet(
                slot, cols=len(rows[0]) if rows else 1
            )
            sheet.clear()
            if rows:
                sheet.update(values=rows, range_name="A1", value_input_option="RAW")
            return True
        except ConnectionError:
            raise
        except Exception as e:
            raise StorageError(f"Failed to save slot {slot}: {e}")
