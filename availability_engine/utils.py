"""Shared date helpers used across the availability engine."""

from datetime import date, datetime, timedelta
from typing import Iterator

ISO_DATE_FORMAT = "%Y-%m-%d"


def parse_iso_date(value: str) -> date:
    """Parse a ``YYYY-MM-DD`` string into a date.

    Raises:
        ValueError: If the string is not a well-formed calendar date.

    Examples:
        >>> parse_iso_date("2026-01-15")
        datetime.date(2026, 1, 15)
    """
    return datetime.strptime(value.strip(), ISO_DATE_FORMAT).date()


def format_date(value: date) -> str:
    """Format a date as the ISO key used by calendar snapshots."""
    return value.strftime(ISO_DATE_FORMAT)


def iter_dates(start: date, end: date) -> Iterator[date]:
    """Yield every date from start to end inclusive."""
    current = start
    while current <= end:
        yield current
        current += timedelta(days=1)


def inclusive_span_days(start: date, end: date) -> int:
    """Number of calendar days covered by an inclusive range."""
    return (end - start).days + 1
