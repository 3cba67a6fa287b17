"""
Transaction Predicates

A predicate is a pure boolean test over a Transaction. The ledger applies
predicates for both ``query`` and ``delete``; callers build them with the
named constructors below instead of writing ad hoc lambdas.
"""

from collections.abc import Callable
from datetime import date

from ledger.models.transaction import Transaction


TransactionPredicate = Callable[[Transaction], bool]


def match_all() -> TransactionPredicate:
    """Every transaction."""
    return lambda transaction: True


def match_day(day: date) -> TransactionPredicate:
    """Transactions dated exactly ``day``."""
    return lambda transaction: transaction.date == day


def match_month(year: int, month: int) -> TransactionPredicate:
    """Transactions in the given calendar month, any day."""
    _check_year(year)
    if not 1 <= month <= 12:
        raise ValueError(f"Month must be between 1 and 12, got {month}")
    return lambda transaction: (
        transaction.date.year == year and transaction.date.month == month
    )


def match_year(year: int) -> TransactionPredicate:
    """Transactions in the given calendar year, any month or day."""
    _check_year(year)
    return lambda transaction: transaction.date.year == year


def match_deposits() -> TransactionPredicate:
    return lambda transaction: transaction.amount > 0


def match_withdrawals() -> TransactionPredicate:
    return lambda transaction: transaction.amount < 0


def all_of(*predicates: TransactionPredicate) -> TransactionPredicate:
    """Matches when every given predicate matches (all transactions if none given)."""
    return lambda transaction: all(p(transaction) for p in predicates)


def _check_year(year: int) -> None:
    if year < 1:
        raise ValueError(f"Year must be positive, got {year}")
