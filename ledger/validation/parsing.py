"""
Input Parsing

Converts raw console text into the already-validated values the ledger
takes: positive amounts, calendar days, (year, month) pairs, years and
destination names.

IMPORTANT: Parsing NEVER guesses. "2024-1-5" is not a day and " 12abc"
is not an amount; both raise InputParseError with a message the
console can show before asking again.
"""

import re
from datetime import date


DAY_FORMAT = "YYYY-MM-DD"
MONTH_FORMAT = "YYYY-MM"

_DAY_PATTERN = re.compile(r"^(\d{4})-(\d{2})-(\d{2})$")
_MONTH_PATTERN = re.compile(r"^(\d{4})-(\d{2})$")
_INTEGER_PATTERN = re.compile(r"^[+-]?\d+$")


class InputParseError(ValueError):
    """Raw input could not be turned into the requested value."""
    pass


def parse_int(raw: str) -> int:
    """Parse a plain base-10 integer."""
    text = raw.strip()
    if not _INTEGER_PATTERN.match(text):
        raise InputParseError("Invalid input. Enter an integer.")
    return int(text)


def parse_amount(raw: str) -> int:
    """Parse a strictly positive amount."""
    amount = parse_int(raw)
    if amount <= 0:
        raise InputParseError("Amount must be greater than zero.")
    return amount


def parse_day(raw: str) -> date:
    """Parse ``YYYY-MM-DD`` into a date."""
    match = _DAY_PATTERN.match(raw.strip())
    if not match:
        raise InputParseError(f"Invalid date. Use {DAY_FORMAT}.")
    year, month, day = (int(part) for part in match.groups())
    try:
        return date(year, month, day)
    except ValueError as e:
        raise InputParseError(f"Invalid date: {e}.") from e


def parse_month(raw: str) -> tuple[int, int]:
    """Parse ``YYYY-MM`` into (year, month)."""
    match = _MONTH_PATTERN.match(raw.strip())
    if not match:
        raise InputParseError(f"Invalid month. Use {MONTH_FORMAT}.")
    year, month = (int(part) for part in match.groups())
    if year < 1:
        raise InputParseError("Year must be positive.")
    if not 1 <= month <= 12:
        raise InputParseError("Month must be between 01 and 12.")
    return year, month


def parse_year(raw: str) -> int:
    """Parse a positive calendar year."""
    year = parse_int(raw)
    if not 1 <= year <= date.max.year:
        raise InputParseError(f"Year must be between 1 and {date.max.year}.")
    return year


def parse_destination(raw: str) -> str:
    """A destination is any non-blank name, trimmed."""
    name = raw.strip()
    if not name:
        raise InputParseError("Destination name cannot be empty.")
    return name
