"""
Google Sheets Storage Implementation

DESIGN DECISION: Google Sheets is offered as a backend because:
1. The history can be viewed and shared directly in Sheets
2. No database setup required
3. Built-in backup (Google's infrastructure)

Each destination is a worksheet in the configured spreadsheet.
Row 1 is the header, then one transaction per row in history order.

TRADEOFFS:
- Saving rewrites the whole worksheet (fine for a personal ledger)
- No transactions across save/load
"""

from collections.abc import Sequence
from datetime import date
from typing import Optional

import gspread
from google.oauth2.service_account import Credentials
from tenacity import retry, stop_after_attempt, wait_exponential

from ledger.config import GoogleSheetsSettings, get_settings
from ledger.models.transaction import Transaction
from ledger.services.storage.interface import (
    ConnectionError,
    CorruptDataError,
    DestinationNotFoundError,
    StorageError,
    TransactionStorageInterface,
)


# Column layout for a transaction worksheet
TRANSACTION_COLUMNS = [
    "amount",
    "date",
]


class GoogleSheetsClient:
    """
    Low-level Google Sheets client wrapper.

    Handles authentication and provides retry logic for API calls.
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

    def get_worksheet(self, title: str, create: bool = False) -> gspread.Worksheet:
        """
        Get the worksheet for a destination.

        With ``create=True`` a missing worksheet is added with the header row.
        Otherwise a missing worksheet raises DestinationNotFoundError.
        """
        spreadsheet = self.get_spreadsheet()
        try:
            return spreadsheet.worksheet(title)
        except gspread.WorksheetNotFound:
            if not create:
                raise DestinationNotFoundError(f"Worksheet not found: {title}")
            sheet = spreadsheet.add_worksheet(
                title=title,
                rows=1000,
                cols=len(TRANSACTION_COLUMNS),
            )
            sheet.append_row(TRANSACTION_COLUMNS)
            return sheet


class GoogleSheetsTransactionStorage(TransactionStorageInterface):
    """
    Google Sheets implementation of transaction storage.

    Transactions are stored as rows in a worksheet, one per row.
    """

    def __init__(self, client: Optional[GoogleSheetsClient] = None):
        self._client = client or GoogleSheetsClient()

    def _transaction_to_row(self, transaction: Transaction) -> list:
        """Convert a Transaction to a spreadsheet row."""
        return [
            str(transaction.amount),
            transaction.date.isoformat(),
        ]

    def _row_to_transaction(self, row: list) -> Transaction:
        """Convert a spreadsheet row to a Transaction."""
        if len(row) < len(TRANSACTION_COLUMNS):
            raise ValueError(f"expected {len(TRANSACTION_COLUMNS)} columns, got {len(row)}")
        return Transaction(
            amount=int(row[0]),
            date=date.fromisoformat(row[1]),
        )

    def save_transactions(
        self,
        destination: str,
        transactions: Sequence[Transaction],
    ) -> bool:
        """Replace the destination worksheet's rows with the history."""
        if not destination.strip():
            raise StorageError("Destination name cannot be empty")
        try:
            sheet = self._client.get_worksheet(destination, create=True)
            rows = [TRANSACTION_COLUMNS]
            rows.extend(self._transaction_to_row(t) for t in transactions)
            sheet.clear()
            sheet.append_rows(rows, value_input_option="RAW")
            return True
        except StorageError:
            raise
        except Exception as e:
            raise StorageError(f"Failed to save transactions: {e}")

    def load_transactions(self, destination: str) -> list[Transaction]:
        """Read the destination worksheet back into a history."""
        try:
            sheet = self._client.get_worksheet(destination)
            all_rows = sheet.get_all_values()
        except StorageError:
            raise
        except Exception as e:
            raise StorageError(f"Failed to load transactions: {e}")

        if not all_rows or all_rows[0][:len(TRANSACTION_COLUMNS)] != TRANSACTION_COLUMNS:
            raise CorruptDataError(f"Worksheet {destination} has no transaction header")

        transactions = []
        # Start from 2 (row 1 is header)
        for idx, row in enumerate(all_rows[1:], start=2):
            if not any(row):  # Skip empty rows
                continue
            try:
                transactions.append(self._row_to_transaction(row))
            except ValueError as e:
                raise CorruptDataError(f"Row {idx} of {destination} is invalid: {e}")
        return transactions
