"""Tests for storage backends (JSON file, in-memory, mocked Google Sheets)."""

import json
from datetime import date
from unittest.mock import MagicMock

import gspread
import pytest

from ledger.models.transaction import new_transaction
from ledger.services.storage import (
    CorruptDataError,
    DestinationNotFoundError,
    GoogleSheetsClient,
    GoogleSheetsTransactionStorage,
    InMemoryTransactionStorage,
    JsonFileTransactionStorage,
    StorageError,
)
from ledger.services.storage.google_sheets import TRANSACTION_COLUMNS


HISTORY = [
    new_transaction(100, date(2024, 1, 5)),
    new_transaction(-30, date(2024, 1, 5)),
    new_transaction(45, date(2024, 2, 29)),
]


class TestJsonFileStorage:
    """Tests for the JSON file backend."""

    def test_round_trip(self, tmp_path):
        """Test load returns exactly what was saved."""
        storage = JsonFileTransactionStorage(data_dir=tmp_path, retry_attempts=1)
        assert storage.save_transactions("ledger.json", HISTORY) is True
        assert storage.load_transactions("ledger.json") == HISTORY

    def test_round_trip_empty_history(self, tmp_path):
        storage = JsonFileTransactionStorage(data_dir=tmp_path, retry_attempts=1)
        storage.save_transactions("empty", [])
        assert storage.load_transactions("empty") == []

    def test_relative_destination_resolves_in_data_dir(self, tmp_path):
        """Test relative names land inside the data directory."""
        storage = JsonFileTransactionStorage(data_dir=tmp_path / "nested", retry_attempts=1)
        storage.save_transactions("x", HISTORY)
        assert (tmp_path / "nested" / "x").exists()

    def test_absolute_destination_used_as_is(self, tmp_path):
        storage = JsonFileTransactionStorage(data_dir=tmp_path / "unused", retry_attempts=1)
        target = tmp_path / "abs.json"
        storage.save_transactions(str(target), HISTORY)
        assert target.exists()

    def test_file_is_versioned_json(self, tmp_path):
        """Test the on-disk document layout."""
        storage = JsonFileTransactionStorage(data_dir=tmp_path, retry_attempts=1)
        storage.save_transactions("doc.json", HISTORY[:1])
        document = json.loads((tmp_path / "doc.json").read_text(encoding="utf-8"))
        assert document["format_version"] == 1
        assert document["transactions"] == [{"amount": 100, "date": "2024-01-05"}]

    def test_missing_file(self, tmp_path):
        """Test loading a destination that was never saved."""
        storage = JsonFileTransactionStorage(data_dir=tmp_path, retry_attempts=1)
        with pytest.raises(DestinationNotFoundError):
            storage.load_transactions("nope.json")

    def test_corrupt_file(self, tmp_path):
        """Test undecodable content raises CorruptDataError."""
        (tmp_path / "bad.json").write_text("{not json", encoding="utf-8")
        storage = JsonFileTransactionStorage(data_dir=tmp_path, retry_attempts=1)
        with pytest.raises(CorruptDataError):
            storage.load_transactions("bad.json")

    def test_invalid_utf8_is_corrupt(self, tmp_path):
        """Test bytes that are not UTF-8 raise CorruptDataError, not UnicodeDecodeError."""
        (tmp_path / "bad.json").write_bytes(b"\xff\xfe\x00garbage")
        storage = JsonFileTransactionStorage(data_dir=tmp_path, retry_attempts=1)
        with pytest.raises(CorruptDataError):
            storage.load_transactions("bad.json")

    def test_zero_amount_in_file_is_corrupt(self, tmp_path):
        """Test model validation applies to loaded data."""
        (tmp_path / "zero.json").write_text(
            json.dumps({"format_version": 1, "transactions": [{"amount": 0, "date": "2024-01-01"}]}),
            encoding="utf-8",
        )
        storage = JsonFileTransactionStorage(data_dir=tmp_path, retry_attempts=1)
        with pytest.raises(CorruptDataError):
            storage.load_transactions("zero.json")

    def test_unknown_format_version(self, tmp_path):
        (tmp_path / "v9.json").write_text(
            json.dumps({"format_version": 9, "transactions": []}),
            encoding="utf-8",
        )
        storage = JsonFileTransactionStorage(data_dir=tmp_path, retry_attempts=1)
        with pytest.raises(CorruptDataError, match="version 9"):
            storage.load_transactions("v9.json")

    def test_destination_is_directory(self, tmp_path):
        """Test OS errors surface as StorageError."""
        (tmp_path / "folder").mkdir()
        storage = JsonFileTransactionStorage(data_dir=tmp_path, retry_attempts=1)
        with pytest.raises(StorageError):
            storage.save_transactions("folder", HISTORY)

    def test_empty_destination(self, tmp_path):
        storage = JsonFileTransactionStorage(data_dir=tmp_path, retry_attempts=1)
        with pytest.raises(StorageError, match="empty"):
            storage.save_transactions("   ", HISTORY)


class TestInMemoryStorage:
    """Tests for the in-memory backend."""

    def test_round_trip(self):
        storage = InMemoryTransactionStorage()
        storage.save_transactions("a", HISTORY)
        assert storage.load_transactions("a") == HISTORY
        assert storage.destinations() == ["a"]

    def test_saved_history_is_detached(self):
        """Test mutating the saved list afterwards does not change storage."""
        storage = InMemoryTransactionStorage()
        history = list(HISTORY)
        storage.save_transactions("a", history)
        history.clear()
        assert storage.load_transactions("a") == HISTORY

    def test_missing_destination(self):
        with pytest.raises(DestinationNotFoundError):
            InMemoryTransactionStorage().load_transactions("missing")


class FakeWorksheet:
    """Just enough of gspread.Worksheet for the storage backend."""

    def __init__(self, rows=None):
        self.rows = [list(r) for r in rows or []]

    def clear(self):
        self.rows = []

    def append_row(self, row, **kwargs):
        self.rows.append(list(row))

    def append_rows(self, rows, **kwargs):
        self.rows.extend(list(r) for r in rows)

    def get_all_values(self):
        return [list(r) for r in self.rows]


class FakeSheetsClient:
    """Stands in for GoogleSheetsClient with worksheets held in a dict."""

    def __init__(self):
        self.worksheets = {}

    def get_worksheet(self, title, create=False):
        if title not in self.worksheets:
            if not create:
                raise DestinationNotFoundError(f"Worksheet not found: {title}")
            self.worksheets[title] = FakeWorksheet([TRANSACTION_COLUMNS])
        return self.worksheets[title]


class TestGoogleSheetsStorage:
    """Tests for the Google Sheets backend with a fake client."""

    def test_round_trip(self):
        """Test worksheet rows round-trip to the same history."""
        storage = GoogleSheetsTransactionStorage(client=FakeSheetsClient())
        storage.save_transactions("January", HISTORY)
        assert storage.load_transactions("January") == HISTORY

    def test_rows_written(self):
        """Test the header and row layout."""
        client = FakeSheetsClient()
        storage = GoogleSheetsTransactionStorage(client=client)
        storage.save_transactions("Sheet", HISTORY[:2])
        assert client.worksheets["Sheet"].rows == [
            ["amount", "date"],
            ["100", "2024-01-05"],
            ["-30", "2024-01-05"],
        ]

    def test_save_overwrites(self):
        """Test a second save replaces the first."""
        storage = GoogleSheetsTransactionStorage(client=FakeSheetsClient())
        storage.save_transactions("S", HISTORY)
        storage.save_transactions("S", HISTORY[:1])
        assert storage.load_transactions("S") == HISTORY[:1]

    def test_missing_worksheet(self):
        storage = GoogleSheetsTransactionStorage(client=FakeSheetsClient())
        with pytest.raises(DestinationNotFoundError):
            storage.load_transactions("nope")

    def test_malformed_row(self):
        """Test a bad row raises CorruptDataError instead of being skipped."""
        client = FakeSheetsClient()
        client.worksheets["S"] = FakeWorksheet([TRANSACTION_COLUMNS, ["abc", "2024-01-01"]])
        storage = GoogleSheetsTransactionStorage(client=client)
        with pytest.raises(CorruptDataError, match="Row 2"):
            storage.load_transactions("S")

    def test_missing_header(self):
        client = FakeSheetsClient()
        client.worksheets["S"] = FakeWorksheet([["10", "2024-01-01"]])
        storage = GoogleSheetsTransactionStorage(client=client)
        with pytest.raises(CorruptDataError, match="header"):
            storage.load_transactions("S")

    def test_blank_rows_skipped(self):
        client = FakeSheetsClient()
        client.worksheets["S"] = FakeWorksheet(
            [TRANSACTION_COLUMNS, ["10", "2024-01-01"], ["", ""]]
        )
        storage = GoogleSheetsTransactionStorage(client=client)
        assert storage.load_transactions("S") == [new_transaction(10, date(2024, 1, 1))]

    def test_api_error_wrapped(self):
        """Test unexpected client errors become StorageError."""
        client = MagicMock()
        client.get_worksheet.side_effect = RuntimeError("quota exceeded")
        storage = GoogleSheetsTransactionStorage(client=client)
        with pytest.raises(StorageError, match="quota exceeded"):
            storage.save_transactions("S", HISTORY)


class TestGoogleSheetsClient:
    """Tests for worksheet lookup on the low-level client."""

    def _client_with_spreadsheet(self, spreadsheet):
        client = GoogleSheetsClient(settings=MagicMock())
        client._spreadsheet = spreadsheet
        return client

    def test_get_existing_worksheet(self):
        spreadsheet = MagicMock()
        client = self._client_with_spreadsheet(spreadsheet)
        assert client.get_worksheet("S") is spreadsheet.worksheet.return_value

    def test_missing_worksheet_not_created(self):
        spreadsheet = MagicMock()
        spreadsheet.worksheet.side_effect = gspread.WorksheetNotFound("S")
        client = self._client_with_spreadsheet(spreadsheet)
        with pytest.raises(DestinationNotFoundError):
            client.get_worksheet("S")
        spreadsheet.add_worksheet.assert_not_called()

    def test_missing_worksheet_created_with_header(self):
        spreadsheet = MagicMock()
        spreadsheet.worksheet.side_effect = gspread.WorksheetNotFound("S")
        client = self._client_with_spreadsheet(spreadsheet)
        sheet = client.get_worksheet("S", create=True)
        spreadsheet.add_worksheet.assert_called_once_with(title="S", rows=1000, cols=2)
        sheet.append_row.assert_called_once_with(TRANSACTION_COLUMNS)
