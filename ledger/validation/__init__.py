"""Input parsing package."""

from ledger.validation.parsing import (
    DAY_FORMAT,
    MONTH_FORMAT,
    InputParseError,
    parse_amount,
    parse_day,
    parse_destination,
    parse_int,
    parse_month,
    parse_year,
)

__all__ = [
    "DAY_FORMAT",
    "MONTH_FORMAT",
    "InputParseError",
    "parse_amount",
    "parse_day",
    "parse_destination",
    "parse_int",
    "parse_month",
    "parse_year",
]
