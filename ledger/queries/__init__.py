"""Query package: predicates and the structured query executor."""

from ledger.queries.predicates import (
    TransactionPredicate,
    all_of,
    match_all,
    match_day,
    match_deposits,
    match_month,
    match_withdrawals,
    match_year,
)
from ledger.queries.executor import QueryExecutor, build_predicate

__all__ = [
    "QueryExecutor",
    "TransactionPredicate",
    "all_of",
    "build_predicate",
    "match_all",
    "match_day",
    "match_deposits",
    "match_month",
    "match_withdrawals",
    "match_year",
]
