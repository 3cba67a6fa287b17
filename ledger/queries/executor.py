"""
Query Execution Engine

Turns a structured TransactionQuery into a predicate, runs it against
the ledger and aggregates what matched. The console menu goes through
here for every "show" and "delete" command, so the date-scope logic
lives in exactly one place.
"""

from typing import TYPE_CHECKING

from ledger.models.audit import LedgerEvent
from ledger.models.transaction import (
    QueryResult,
    QueryScope,
    TransactionQuery,
)
from ledger.queries.predicates import (
    TransactionPredicate,
    match_all,
    match_day,
    match_month,
    match_year,
)

if TYPE_CHECKING:
    from ledger.account import Ledger


def build_predicate(query: TransactionQuery) -> TransactionPredicate:
    """Map a query's scope to the matching predicate constructor."""
    if query.scope == QueryScope.DAY:
        return match_day(query.day)
    if query.scope == QueryScope.MONTH:
        return match_month(query.year, query.month)
    if query.scope == QueryScope.YEAR:
        return match_year(query.year)
    return match_all()


class QueryExecutor:
    """
    Executes structured queries against a ledger.

    GUARANTEES:
    - Only returns transactions actually in the history
    - Preserves history order
    - Never mutates the ledger except through ``delete``
    """

    def __init__(self, ledger: "Ledger"):
        self._ledger = ledger

    def execute(self, query: TransactionQuery) -> QueryResult:
        """Run a query and return matching transactions with totals."""
        transactions = self._ledger.query(build_predicate(query))
        return QueryResult(
            query=query,
            query_description=query.describe(),
            transactions=transactions,
            total_deposited=sum(t.amount for t in transactions if t.amount > 0),
            total_withdrawn=-sum(t.amount for t in transactions if t.amount < 0),
        )

    def delete(self, query: TransactionQuery) -> LedgerEvent:
        """Delete everything the query selects."""
        return self._ledger.delete(build_predicate(query))
