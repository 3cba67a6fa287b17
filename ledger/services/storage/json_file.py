"""
JSON File Storage Implementation

DESIGN DECISION: A local JSON file is the default backend because:
1. No account or network access is needed
2. The file is human-readable and easy to back up
3. Pydantic gives us exact round-trips of dates and amounts

Each destination is one file holding a versioned document:

    {"format_version": 1, "saved_at": "...", "transactions": [...]}

Relative destinations resolve against the configured data directory.
"""

from collections.abc import Sequence
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field, ValidationError
from tenacity import (
    Retrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from ledger.config import get_settings
from ledger.models.transaction import Transaction
from ledger.services.storage.interface import (
    CorruptDataError,
    DestinationNotFoundError,
    StorageError,
    TransactionStorageInterface,
)


FORMAT_VERSION = 1

# Errors worth another attempt; everything else fails immediately.
_TRANSIENT_ERRORS = (BlockingIOError, InterruptedError, TimeoutError)


class TransactionFile(BaseModel):
    """On-disk document for one destination."""

    format_version: int = FORMAT_VERSION
    saved_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc)
    )
    transactions: list[Transaction] = Field(default_factory=list)


class JsonFileTransactionStorage(TransactionStorageInterface):
    """
    JSON file implementation of transaction storage.

    One destination = one file. Saving overwrites the whole file.
    """

    def __init__(
        self,
        data_dir: Optional[Path] = None,
        retry_attempts: Optional[int] = None,
    ):
        if data_dir is None or retry_attempts is None:
            storage_settings = get_settings().storage
            data_dir = data_dir if data_dir is not None else storage_settings.data_dir
            retry_attempts = retry_attempts or storage_settings.retry_attempts
        self._data_dir = Path(data_dir)
        self._retry_attempts = retry_attempts

    @property
    def data_dir(self) -> Path:
        return self._data_dir

    def resolve(self, destination: str) -> Path:
        """Map a destination name to the file it lives in."""
        name = destination.strip()
        if not name:
            raise StorageError("Destination name cannot be empty")
        path = Path(name).expanduser()
        if not path.is_absolute():
            path = self._data_dir / path
        return path

    def _retrying(self) -> Retrying:
        return Retrying(
            stop=stop_after_attempt(self._retry_attempts),
            wait=wait_exponential(multiplier=0.1, max=2),
            retry=retry_if_exception_type(_TRANSIENT_ERRORS),
            reraise=True,
        )

    def save_transactions(
        self,
        destination: str,
        transactions: Sequence[Transaction],
    ) -> bool:
        """Write the history to the destination file, replacing it."""
        path = self.resolve(destination)
        document = TransactionFile(transactions=list(transactions))
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            self._retrying()(
                path.write_text,
                document.model_dump_json(indent=2),
                encoding="utf-8",
            )
        except OSError as e:
            raise StorageError(f"Failed to write {path}: {e}") from e
        return True

    def load_transactions(self, destination: str) -> list[Transaction]:
        """Read the history back from the destination file."""
        path = self.resolve(destination)
        try:
            raw = self._retrying()(path.read_text, encoding="utf-8")
        except FileNotFoundError as e:
            raise DestinationNotFoundError(f"No such file: {path}") from e
        except UnicodeDecodeError as e:
            raise CorruptDataError(f"{path} is not valid UTF-8: {e}") from e
        except OSError as e:
            raise StorageError(f"Failed to read {path}: {e}") from e

        try:
            document = TransactionFile.model_validate_json(raw)
        except ValidationError as e:
            raise CorruptDataError(
                f"{path} is not a valid transaction file: "
                f"{e.error_count()} validation error(s)"
            ) from e

        if document.format_version != FORMAT_VERSION:
            raise CorruptDataError(
                f"{path} has unsupported format version {document.format_version}"
            )
        return list(document.transactions)
