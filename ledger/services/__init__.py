"""Services package."""

from ledger.services.storage import (
    ConnectionError,
    CorruptDataError,
    DestinationNotFoundError,
    GoogleSheetsClient,
    GoogleSheetsTransactionStorage,
    InMemoryTransactionStorage,
    JsonFileTransactionStorage,
    StorageError,
    TransactionStorageInterface,
)

__all__ = [
    "ConnectionError",
    "CorruptDataError",
    "DestinationNotFoundError",
    "GoogleSheetsClient",
    "GoogleSheetsTransactionStorage",
    "InMemoryTransactionStorage",
    "JsonFileTransactionStorage",
    "StorageError",
    "TransactionStorageInterface",
]
