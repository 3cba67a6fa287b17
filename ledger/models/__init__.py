"""
Data Models Package

This package contains all Pydantic models used by the Personal Ledger.
All data flowing through the ledger must conform to these schemas.
"""

from ledger.models.transaction import (
    QueryResult,
    QueryScope,
    Transaction,
    TransactionQuery,
    new_transaction,
)
from ledger.models.audit import (
    EventSeverity,
    LedgerEvent,
    LedgerEventBuilder,
    LedgerEventType,
)

__all__ = [
    # Transaction models
    "QueryResult",
    "QueryScope",
    "Transaction",
    "TransactionQuery",
    "new_transaction",
    # Audit models
    "EventSeverity",
    "LedgerEvent",
    "LedgerEventBuilder",
    "LedgerEventType",
]
