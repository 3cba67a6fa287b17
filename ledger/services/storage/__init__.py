"""
Storage Services Package

Provides the abstract transaction storage interface and its implementations.
JSON files are the default backend; in-memory and Google Sheets are swappable.
"""

from ledger.services.storage.interface import (
    ConnectionError,
    CorruptDataError,
    DestinationNotFoundError,
    StorageError,
    TransactionStorageInterface,
)
from ledger.services.storage.json_file import JsonFileTransactionStorage
from ledger.services.storage.memory import InMemoryTransactionStorage
from ledger.services.storage.google_sheets import (
    GoogleSheetsClient,
    GoogleSheetsTransactionStorage,
)

__all__ = [
    # Interfaces
    "TransactionStorageInterface",
    # Exceptions
    "ConnectionError",
    "CorruptDataError",
    "DestinationNotFoundError",
    "StorageError",
    # Implementations
    "GoogleSheetsClient",
    "GoogleSheetsTransactionStorage",
    "InMemoryTransactionStorage",
    "JsonFileTransactionStorage",
]
