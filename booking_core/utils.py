"""Shared utilities used across the booking core."""

import re
from datetime import date, datetime
from typing import Union

EMAIL_PATTERN = re.compile(r"\S+@\S+\.\S+")
DIGITS_PATTERN = re.compile(r"^\d+$")

DATE_FORMAT = "%Y-%m-%d"


def is_valid_email(value: str) -> bool:
    """Basic syntactic email check.

    Examples:
        >>> is_valid_email("jane@example.com")
        True
        >>> is_valid_email("foo")
        False
    """
    return bool(EMAIL_PATTERN.search(value.strip()))


def is_digits_only(value: str) -> bool:
    """True when the value is a non-empty run of ASCII digits."""
    return bool(DIGITS_PATTERN.match(value))


def normalize_date(value: Union[date, str]) -> str:
    """Canonical "YYYY-MM-DD" form of a date or date string.

    Examples:
        >>> normalize_date(date(2026, 3, 2))
        '2026-03-02'
        >>> normalize_date(" 2026-03-02 ")
        '2026-03-02'
    """
    return parse_date(value).strftime(DATE_FORMAT)


def parse_date(value: Union[date, str]) -> date:
    """Parse a "YYYY-MM-DD" string; dates (and datetimes) pass through as dates."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return datetime.strptime(value.strip(), DATE_FORMAT).date()
