"""
The Ledger

Owns the balance and the ordered transaction history of one account.

INVARIANTS (hold after every operation):
- balance == sum(t.amount for t in history)
- balance >= 0

DESIGN DECISION: The balance is updated incrementally on deposit and
withdraw, and recomputed from the history after delete and load.
Operations that would break an invariant are rejected and leave the
state unchanged. Rejections and storage failures come back as
LedgerEvents; nothing in here raises into the caller.

Persistence goes through an injected TransactionStorageInterface,
so the ledger never knows how (or where) history is encoded.
"""

import threading
from collections.abc import Callable
from datetime import date
from typing import Optional

from ledger.audit import AuditLogger
from ledger.config import get_settings
from ledger.models.audit import LedgerEvent, LedgerEventBuilder
from ledger.models.transaction import Transaction, new_transaction
from ledger.queries.predicates import TransactionPredicate
from ledger.services.storage import (
    CorruptDataError,
    StorageError,
    TransactionStorageInterface,
)


class LedgerError(Exception):
    """Base exception for rejected ledger operations."""

    error_code = "ledger_error"


class InvalidAmountError(LedgerError):
    """Amount is zero or negative."""

    error_code = "invalid_amount"


class InsufficientFundsError(LedgerError):
    """Operation would drive the balance below zero."""

    error_code = "insufficient_funds"


class Ledger:
    """
    Single-account ledger.

    Usage:
        ledger = Ledger(storage=JsonFileTransactionStorage())
        ledger.deposit(100)
        ledger.withdraw(30)
        ledger.query(match_month(2024, 1))
        ledger.save("january.json")
    """

    def __init__(
        self,
        storage: TransactionStorageInterface,
        audit_logger: Optional[AuditLogger] = None,
        today: Callable[[], date] = date.today,
        reset_history_on_failed_load: Optional[bool] = None,
    ):
        """
        Args:
            storage: Backend that save/load delegate to.
            audit_logger: Where events are logged. A private one if None.
            today: Clock used to date new transactions.
            reset_history_on_failed_load: Clear the history when a load
                fails. Read from AppSettings if None.
        """
        if reset_history_on_failed_load is None:
            reset_history_on_failed_load = get_settings().app.reset_history_on_failed_load

        self._storage = storage
        self._audit_logger = audit_logger or AuditLogger()
        self._today = today
        self._reset_history_on_failed_load = reset_history_on_failed_load

        self._lock = threading.RLock()
        self._balance = 0
        self._history: list[Transaction] = []

    # -------------------------------------------------------------------------
    # Reads
    # -------------------------------------------------------------------------

    @property
    def balance(self) -> int:
        return self._balance

    def get_balance(self) -> int:
        return self._balance

    @property
    def history(self) -> list[Transaction]:
        """A copy of the history, in insertion order."""
        with self._lock:
            return list(self._history)

    def query(self, predicate: TransactionPredicate) -> list[Transaction]:
        """Every transaction matching ``predicate``, in history order."""
        with self._lock:
            return [t for t in self._history if predicate(t)]

    # -------------------------------------------------------------------------
    # Balance changes
    # -------------------------------------------------------------------------

    def deposit(self, amount: int) -> Optional[LedgerEvent]:
        """
        Add ``amount`` to the balance.

        A non-positive amount is ignored: nothing changes and None is returned.
        """
        if amount <= 0:
            self._audit_logger.debug("deposit_ignored", amount=amount)
            return None

        with self._lock:
            self._history.append(new_transaction(amount, self._today()))
            self._balance += amount
            return self._notify(LedgerEventBuilder.deposited(amount, self._balance))

    def withdraw(self, amount: int) -> LedgerEvent:
        """
        Take ``amount`` from the balance.

        Rejected (state unchanged) if the amount is not positive or
        exceeds the balance; the returned event carries the reason.
        """
        with self._lock:
            try:
                self._check_withdrawal(amount)
            except LedgerError as e:
                return self._notify(
                    LedgerEventBuilder.withdrawal_rejected(
                        amount=amount,
                        balance=self._balance,
                        error_code=e.error_code,
                        reason=str(e),
                    )
                )

            self._history.append(new_transaction(-amount, self._today()))
            self._balance -= amount
            return self._notify(LedgerEventBuilder.withdrawn(amount, self._balance))

    def _check_withdrawal(self, amount: int) -> None:
        if amount <= 0:
            raise InvalidAmountError(f"Invalid amount: {amount}. Amount must be positive.")
        if amount > self._balance:
            raise InsufficientFundsError(
                f"Insufficient funds: balance is {self._balance}, requested {amount}."
            )

    # -------------------------------------------------------------------------
    # History maintenance
    # -------------------------------------------------------------------------

    def delete(self, predicate: TransactionPredicate) -> LedgerEvent:
        """
        Remove every transaction matching ``predicate`` and recompute the balance.

        Rejected if the remaining history would sum to a negative balance.
        """
        with self._lock:
            kept = [t for t in self._history if not predicate(t)]
            removed = len(self._history) - len(kept)
            remaining_balance = _fold(kept)

            if remaining_balance < 0:
                return self._notify(
                    LedgerEventBuilder.delete_rejected(removed, remaining_balance)
                )

            self._history[:] = kept
            self._balance = remaining_balance
            return self._notify(
                LedgerEventBuilder.transactions_deleted(removed, self._balance)
            )

    # -------------------------------------------------------------------------
    # Persistence
    # -------------------------------------------------------------------------

    def save(self, destination: str) -> LedgerEvent:
        """Store the history (not the balance) under ``destination``."""
        with self._lock:
            snapshot = list(self._history)

        try:
            self._storage.save_transactions(destination, snapshot)
        except StorageError as e:
            return self._notify(LedgerEventBuilder.save_failed(destination, str(e)))
        except Exception as e:
            self._audit_logger.error(
                "unexpected_storage_error",
                operation="save",
                destination=destination,
                error=repr(e),
            )
            return self._notify(LedgerEventBuilder.save_failed(destination, str(e)))

        return self._notify(LedgerEventBuilder.history_saved(destination, len(snapshot)))

    def load(self, destination: str) -> LedgerEvent:
        """
        Replace the history with the one stored under ``destination``.

        The balance is recomputed from the loaded history. On failure the
        history is cleared, or kept when reset_history_on_failed_load is off.
        """
        with self._lock:
            try:
                loaded = list(self._storage.load_transactions(destination))
                loaded_balance = _fold(loaded)
                if loaded_balance < 0:
                    raise CorruptDataError(
                        f"History sums to a negative balance ({loaded_balance})"
                    )
            except Exception as e:
                if not isinstance(e, StorageError):
                    self._audit_logger.error(
                        "unexpected_storage_error",
                        operation="load",
                        destination=destination,
                        error=repr(e),
                    )
                if self._reset_history_on_failed_load:
                    self._history = []
                    self._balance = 0
                return self._notify(
                    LedgerEventBuilder.load_failed(
                        destination,
                        str(e),
                        history_reset=self._reset_history_on_failed_load,
                    )
                )

            self._history = loaded
            self._balance = loaded_balance
            return self._notify(
                LedgerEventBuilder.history_loaded(destination, len(loaded), loaded_balance)
            )

    def _notify(self, event: LedgerEvent) -> LedgerEvent:
        self._audit_logger.log(event)
        return event


def _fold(transactions: list[Transaction]) -> int:
    return sum(t.amount for t in transactions)
