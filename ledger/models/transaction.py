"""
Core Data Models for Personal Ledger

These models define the strict schemas for the data held by the ledger.
They are designed to:
1. Be immutable once created
2. Compare by value, so a saved and reloaded history can be checked with ==
3. Be serializable for storage and logging

DESIGN DECISION: A Transaction is a frozen Pydantic model.
Nothing in the system can change an amount or date after the fact;
corrections are new transactions or deletions.
"""

from datetime import date
from enum import Enum
from typing import Optional

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    field_validator,
    model_validator,
)


# =============================================================================
# TRANSACTION
# =============================================================================

class Transaction(BaseModel):
    """
    One deposit or withdrawal.

    Positive amounts are deposits, negative amounts are withdrawals.
    A zero amount never reaches the ledger and is rejected here too.
    """
    model_config = ConfigDict(frozen=True)

    amount: int = Field(
        ...,
        description="Signed amount (positive = deposit, negative = withdrawal)"
    )
    date: date

    @field_validator('amount')
    @classmethod
    def amount_not_zero(cls, v: int) -> int:
        if v == 0:
            raise ValueError("Transaction amount cannot be zero")
        return v

    @property
    def is_deposit(self) -> bool:
        return self.amount > 0

    @property
    def is_withdrawal(self) -> bool:
        return self.amount < 0

    def describe(self) -> str:
        """Single-line rendering used by the console menu."""
        return f"Amount: {self.amount} Date: {self.date.isoformat()}"


def new_transaction(amount: int, on: date) -> Transaction:
    """Create a transaction. The caller guarantees a non-zero amount."""
    return Transaction(amount=amount, date=on)


# =============================================================================
# QUERY MODELS
# =============================================================================

class QueryScope(str, Enum):
    """Date scopes a transaction query can be restricted to."""
    ALL = "all"
    DAY = "day"
    MONTH = "month"
    YEAR = "year"


class TransactionQuery(BaseModel):
    """
    A structured, validated query over the ledger history.

    Only the fields belonging to the chosen scope may be set:
    - DAY needs ``day``
    - MONTH needs ``year`` and ``month``
    - YEAR needs ``year``
    """

    scope: QueryScope = Field(
        default=QueryScope.ALL,
        description="Which part of the history to select"
    )
    day: Optional[date] = None
    year: Optional[int] = Field(default=None, ge=1)
    month: Optional[int] = Field(default=None, ge=1, le=12)

    @model_validator(mode='after')
    def validate_scope_fields(self) -> 'TransactionQuery':
        """Each scope carries exactly the parameters it needs."""
        if self.scope == QueryScope.DAY:
            if self.day is None:
                raise ValueError("A day query needs a day")
            if self.year is not None or self.month is not None:
                raise ValueError("A day query takes no year or month")
        elif self.scope == QueryScope.MONTH:
            if self.year is None or self.month is None:
                raise ValueError("A month query needs a year and a month")
            if self.day is not None:
                raise ValueError("A month query takes no day")
        elif self.scope == QueryScope.YEAR:
            if self.year is None:
                raise ValueError("A year query needs a year")
            if self.day is not None or self.month is not None:
                raise ValueError("A year query takes no day or month")
        elif any(v is not None for v in (self.day, self.year, self.month)):
            raise ValueError("An 'all' query takes no parameters")
        return self

    @classmethod
    def all(cls) -> 'TransactionQuery':
        return cls(scope=QueryScope.ALL)

    @classmethod
    def for_day(cls, day: date) -> 'TransactionQuery':
        return cls(scope=QueryScope.DAY, day=day)

    @classmethod
    def for_month(cls, year: int, month: int) -> 'TransactionQuery':
        return cls(scope=QueryScope.MONTH, year=year, month=month)

    @classmethod
    def for_year(cls, year: int) -> 'TransactionQuery':
        return cls(scope=QueryScope.YEAR, year=year)

    def describe(self) -> str:
        """Human-readable description of what is selected."""
        if self.scope == QueryScope.DAY:
            return f"Transactions on {self.day.isoformat()}"
        if self.scope == QueryScope.MONTH:
            return f"Transactions for {self.year:04d}-{self.month:02d}"
        if self.scope == QueryScope.YEAR:
            return f"Transactions for {self.year}"
        return "All transactions"


class QueryResult(BaseModel):
    """Result of executing a TransactionQuery against a ledger."""

    query: TransactionQuery
    query_description: str = Field(
        ...,
        description="Human-readable description of what was queried"
    )
    transactions: list[Transaction] = Field(default_factory=list)

    # Aggregates over the matched transactions
    total_deposited: int = Field(default=0, ge=0)
    total_withdrawn: int = Field(default=0, ge=0)

    @property
    def result_count(self) -> int:
        return len(self.transactions)

    @property
    def data_found(self) -> bool:
        return bool(self.transactions)

    @property
    def net(self) -> int:
        return self.total_deposited - self.total_withdrawn
