"""
Console Menu for Personal Ledger

The interactive driver. It owns everything the ledger deliberately does
not: prompting, parsing and re-prompting on bad input, and printing.
The ledger only ever sees parsed values and predicates.

Run with ``ledger`` (console script) or ``python -m ledger``.
"""

import argparse
import json
import sys
from collections.abc import Callable
from pathlib import Path
from typing import Optional, TypeVar

from ledger.account import Ledger
from ledger.audit import AuditLogger, configure_logging
from ledger.config import StorageSettings, get_settings, validate_all_settings
from ledger.models.audit import LedgerEvent
from ledger.models.transaction import TransactionQuery
from ledger.orchestrator import create_app_components
from ledger.queries import QueryExecutor
from ledger.validation import (
    DAY_FORMAT,
    MONTH_FORMAT,
    InputParseError,
    parse_amount,
    parse_day,
    parse_destination,
    parse_month,
    parse_year,
)

T = TypeVar("T")

MENU = """
1: Check balance
2: Deposit
3: Withdraw
4: Show all transactions
5: Show by day
6: Show by month
7: Show by year
8: Save
9: Load
A: Delete by day
B: Delete all
R: Recent activity
0: Exit"""


class LedgerMenu:
    """
    Menu loop over a ledger.

    ``read`` and ``write`` default to input/print and are injectable so
    the loop can be driven from tests.
    """

    def __init__(
        self,
        ledger: Ledger,
        executor: QueryExecutor,
        audit_logger: Optional[AuditLogger] = None,
        read: Optional[Callable[[str], str]] = None,
        write: Optional[Callable[[str], None]] = None,
    ):
        self._ledger = ledger
        self._executor = executor
        self._audit_logger = audit_logger
        self._read = read or input
        self._write = write or print
        self._actions: dict[str, Callable[[], None]] = {
            "1": self.show_balance,
            "2": self.deposit,
            "3": self.withdraw,
            "4": lambda: self.show(TransactionQuery.all()),
            "5": lambda: self.show(TransactionQuery.for_day(self._ask_day())),
            "6": lambda: self.show(TransactionQuery.for_month(*self._ask_month())),
            "7": lambda: self.show(TransactionQuery.for_year(self._ask_year())),
            "8": self.save,
            "9": self.load,
            "A": lambda: self.delete(TransactionQuery.for_day(self._ask_day())),
            "B": lambda: self.delete(TransactionQuery.all()),
            "R": self.show_recent_activity,
        }

    def run(self) -> None:
        """Loop until the user exits or input runs out."""
        while True:
            self._write(MENU)
            try:
                choice = self._read("Choose action: ").strip().upper()[:1]
                if choice == "0":
                    break
                action = self._actions.get(choice)
                if action is None:
                    self._write("Invalid choice.")
                    continue
                action()
            except EOFError:
                break
        self._write("Exiting...")

    # -------------------------------------------------------------------------
    # Prompting
    # -------------------------------------------------------------------------

    def _ask(self, prompt: str, parser: Callable[[str], T]) -> T:
        """Prompt until ``parser`` accepts the answer."""
        while True:
            raw = self._read(prompt)
            try:
                return parser(raw)
            except InputParseError as e:
                self._write(str(e))

    def _ask_day(self):
        return self._ask(f"Enter date ({DAY_FORMAT}): ", parse_day)

    def _ask_month(self) -> tuple[int, int]:
        return self._ask(f"Enter month ({MONTH_FORMAT}): ", parse_month)

    def _ask_year(self) -> int:
        return self._ask("Enter year: ", parse_year)

    # -------------------------------------------------------------------------
    # Actions
    # -------------------------------------------------------------------------

    def show_balance(self) -> None:
        self._write(f"Balance: {self._ledger.get_balance()}")

    def deposit(self) -> None:
        amount = self._ask("Enter amount: ", parse_amount)
        self._report(self._ledger.deposit(amount))

    def withdraw(self) -> None:
        amount = self._ask("Enter amount: ", parse_amount)
        self._report(self._ledger.withdraw(amount))

    def show(self, query: TransactionQuery) -> None:
        result = self._executor.execute(query)
        self._write(f"{result.query_description}:")
        if not result.data_found:
            self._write("No transactions found.")
            return
        for transaction in result.transactions:
            self._write(transaction.describe())
        self._write(
            f"{result.result_count} transaction(s) | "
            f"deposited {result.total_deposited} | "
            f"withdrawn {result.total_withdrawn} | "
            f"net {result.net}"
        )

    def save(self) -> None:
        destination = self._ask("Enter filename: ", parse_destination)
        self._report(self._ledger.save(destination))

    def load(self) -> None:
        destination = self._ask("Enter filename: ", parse_destination)
        self._report(self._ledger.load(destination))

    def delete(self, query: TransactionQuery) -> None:
        event = self._executor.delete(query)
        self._report(event)
        if not event.succeeded:
            # Deletion is all-or-nothing; a rejected delete removes nothing.
            self._write(
                "Nothing was deleted: the remaining transactions would leave "
                "a negative balance. Delete the later withdrawals first."
            )

    def show_recent_activity(self) -> None:
        events = self._audit_logger.recent_events(limit=10) if self._audit_logger else []
        if not events:
            self._write("No recent activity.")
            return
        for event in events:
            self._write(f"{event.timestamp:%Y-%m-%d %H:%M:%S} {event.description}")

    def _report(self, event: Optional[LedgerEvent]) -> None:
        if event is not None:
            self._write(event.description)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ledger",
        description="Personal Ledger - single-account transaction ledger",
    )
    parser.add_argument(
        "--backend",
        choices=["json", "memory", "sheets"],
        help="Storage backend (default: LEDGER_STORAGE_BACKEND or json)",
    )
    parser.add_argument(
        "--data-dir",
        type=Path,
        help="Directory for JSON destinations (default: LEDGER_STORAGE_DATA_DIR or ./data)",
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        type=str.upper,
        help="Log level (default: LOG_LEVEL or WARNING)",
    )
    parser.add_argument(
        "--check-config",
        action="store_true",
        help="Validate configuration and exit",
    )
    return parser


def main(argv: Optional[list[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    app_settings = get_settings().app
    configure_logging(args.log_level or app_settings.log_level, app_settings.json_logs)

    if args.check_config:
        results = validate_all_settings()
        print(json.dumps(results, indent=2))
        return 0 if results["storage"] and results["app"] else 1

    overrides = {"backend": args.backend, "data_dir": args.data_dir}
    try:
        storage_settings = StorageSettings(
            **{key: value for key, value in overrides.items() if value is not None}
        )
        ledger, executor, audit_logger = create_app_components(
            storage_settings=storage_settings,
        )
    except Exception as e:
        print(f"Failed to initialize: {e}", file=sys.stderr)
        return 1

    try:
        LedgerMenu(ledger, executor, audit_logger).run()
    except KeyboardInterrupt:
        print("\nExiting...")
        return 130
    return 0
