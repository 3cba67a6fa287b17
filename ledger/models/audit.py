"""
Audit Models for Personal Ledger

Every ledger operation produces a LedgerEvent. The event is both:
1. The notification returned to whoever called the ledger
2. The record written to the structured audit log

DESIGN DECISION: Rejections are events, not exceptions.
A refused withdrawal or a failed load leaves the ledger usable;
the caller decides how to show the event's description.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, Field


class LedgerEventType(str, Enum):
    """Types of events the ledger emits."""
    # Balance changes
    DEPOSITED = "deposited"
    WITHDRAWN = "withdrawn"
    WITHDRAWAL_REJECTED = "withdrawal_rejected"

    # History maintenance
    TRANSACTIONS_DELETED = "transactions_deleted"
    DELETE_REJECTED = "delete_rejected"

    # Persistence
    HISTORY_SAVED = "history_saved"
    SAVE_FAILED = "save_failed"
    HISTORY_LOADED = "history_loaded"
    LOAD_FAILED = "load_failed"


class EventSeverity(str, Enum):
    """Severity level for ledger events."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


class LedgerEvent(BaseModel):
    """
    A single ledger event.

    ``description`` is the human-readable notification text.
    ``error_code`` is set only for rejections and failures.
    """

    # Identity
    event_id: UUID = Field(
        default_factory=uuid4,
        description="Unique event identifier"
    )
    timestamp: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="When the event occurred (UTC)"
    )

    # Event classification
    event_type: LedgerEventType
    severity: EventSeverity = EventSeverity.INFO

    description: str = Field(
        ...,
        max_length=500,
        description="Human-readable description of what happened"
    )
    details: dict[str, Any] = Field(default_factory=dict)

    # Error information (if applicable)
    error_code: Optional[str] = None
    error_message: Optional[str] = None

    @property
    def succeeded(self) -> bool:
        return self.error_code is None

    def to_log_dict(self) -> dict:
        """
        Convert to a dictionary suitable for structured logging.
        """
        return {
            "event_id": str(self.event_id),
            "timestamp": self.timestamp.isoformat(),
            "event_type": self.event_type.value,
            "severity": self.severity.value,
            "description": self.description,
            "details": self.details,
            "error_code": self.error_code,
            "error_message": self.error_message,
        }


# Longest destination / error text interpolated into a description.
# The full values stay in details and error_message.
DESTINATION_PREVIEW = 120
ERROR_PREVIEW = 240


def _clip(text: str, limit: int) -> str:
    if len(text) <= limit:
        return text
    return text[: limit - 3] + "..."


class LedgerEventBuilder:
    """
    Helper class to build ledger events with common patterns.

    Usage:
        event = LedgerEventBuilder.deposited(amount=100, balance=100)
        event = LedgerEventBuilder.load_failed("x.json", "file not found", history_reset=True)
    """

    @staticmethod
    def deposited(amount: int, balance: int) -> LedgerEvent:
        return LedgerEvent(
            event_type=LedgerEventType.DEPOSITED,
            description=f"Deposited: {amount}",
            details={"amount": amount, "balance": balance},
        )

    @staticmethod
    def withdrawn(amount: int, balance: int) -> LedgerEvent:
        return LedgerEvent(
            event_type=LedgerEventType.WITHDRAWN,
            description=f"Withdrawn: {amount}",
            details={"amount": amount, "balance": balance},
        )

    @staticmethod
    def withdrawal_rejected(
        amount: int,
        balance: int,
        error_code: str,
        reason: str,
    ) -> LedgerEvent:
        return LedgerEvent(
            event_type=LedgerEventType.WITHDRAWAL_REJECTED,
            severity=EventSeverity.WARNING,
            description=reason,
            details={"amount": amount, "balance": balance},
            error_code=error_code,
            error_message=reason,
        )

    @staticmethod
    def transactions_deleted(removed: int, balance: int) -> LedgerEvent:
        return LedgerEvent(
            event_type=LedgerEventType.TRANSACTIONS_DELETED,
            description=f"Deleted {removed} transaction(s).",
            details={"removed": removed, "balance": balance},
        )

    @staticmethod
    def delete_rejected(matched: int, resulting_balance: int) -> LedgerEvent:
        reason = (
            f"Cannot delete {matched} transaction(s): "
            f"balance would become {resulting_balance}."
        )
        return LedgerEvent(
            event_type=LedgerEventType.DELETE_REJECTED,
            severity=EventSeverity.WARNING,
            description=reason,
            details={"matched": matched, "resulting_balance": resulting_balance},
            error_code="insufficient_funds",
            error_message=reason,
        )

    @staticmethod
    def history_saved(destination: str, count: int) -> LedgerEvent:
        return LedgerEvent(
            event_type=LedgerEventType.HISTORY_SAVED,
            description=f"Saved {count} transaction(s) to {_clip(destination, DESTINATION_PREVIEW)}.",
            details={"destination": destination, "count": count},
        )

    @staticmethod
    def save_failed(destination: str, error: str) -> LedgerEvent:
        return LedgerEvent(
            event_type=LedgerEventType.SAVE_FAILED,
            severity=EventSeverity.ERROR,
            description=(
                f"Error saving {_clip(destination, DESTINATION_PREVIEW)}: "
                f"{_clip(error, ERROR_PREVIEW)}"
            ),
            details={"destination": destination},
            error_code="storage_failure",
            error_message=error,
        )

    @staticmethod
    def history_loaded(destination: str, count: int, balance: int) -> LedgerEvent:
        return LedgerEvent(
            event_type=LedgerEventType.HISTORY_LOADED,
            description=f"Loaded {count} transaction(s) from {_clip(destination, DESTINATION_PREVIEW)}.",
            details={"destination": destination, "count": count, "balance": balance},
        )

    @staticmethod
    def load_failed(destination: str, error: str, history_reset: bool) -> LedgerEvent:
        description = (
            f"Error loading {_clip(destination, DESTINATION_PREVIEW)}: "
            f"{_clip(error, ERROR_PREVIEW)}"
        )
        if history_reset:
            description += " History has been cleared."
        return LedgerEvent(
            event_type=LedgerEventType.LOAD_FAILED,
            severity=EventSeverity.ERROR,
            description=description,
            details={"destination": destination, "history_reset": history_reset},
            error_code="storage_failure",
            error_message=error,
        )
