"""
Component Wiring for Personal Ledger

Builds the storage backend named in configuration and hands it, with an
audit logger, to a Ledger. Drivers (the console menu, tests, scripts)
get everything they need from ``create_app_components``.
"""

from collections.abc import Callable
from datetime import date
from typing import Optional

from ledger.account import Ledger
from ledger.audit import AuditLogger
from ledger.config import StorageSettings, get_settings
from ledger.queries import QueryExecutor
from ledger.services.storage import (
    GoogleSheetsClient,
    GoogleSheetsTransactionStorage,
    InMemoryTransactionStorage,
    JsonFileTransactionStorage,
    TransactionStorageInterface,
)


def create_storage(
    storage_settings: Optional[StorageSettings] = None,
) -> TransactionStorageInterface:
    """Instantiate the configured storage backend."""
    storage_settings = storage_settings or get_settings().storage

    if storage_settings.backend == "memory":
        return InMemoryTransactionStorage()
    if storage_settings.backend == "sheets":
        return GoogleSheetsTransactionStorage(
            GoogleSheetsClient(get_settings().google_sheets)
        )
    return JsonFileTransactionStorage(
        data_dir=storage_settings.data_dir,
        retry_attempts=storage_settings.retry_attempts,
    )


def create_app_components(
    storage: Optional[TransactionStorageInterface] = None,
    storage_settings: Optional[StorageSettings] = None,
    today: Callable[[], date] = date.today,
) -> tuple[Ledger, QueryExecutor, AuditLogger]:
    """
    Create the ledger and its collaborators.

    Args:
        storage: Use this backend instead of the configured one.
        storage_settings: Override the configured storage section.
        today: Clock for dating new transactions.

    Returns:
        (ledger, query_executor, audit_logger)
    """
    app_settings = get_settings().app

    audit_logger = AuditLogger(trail_size=app_settings.audit_trail_size)
    ledger = Ledger(
        storage=storage or create_storage(storage_settings),
        audit_logger=audit_logger,
        today=today,
        reset_history_on_failed_load=app_settings.reset_history_on_failed_load,
    )
    return ledger, QueryExecutor(ledger), audit_logger
