"""Date and time parsing utilities."""

import re
from datetime import date, datetime
from typing import Optional, Union

from dateutil import parser as dateutil_parser

from chronoplan.config.constants import TIME_PATTERN

# Compiled pattern for 24-hour clock values (H:mm or HH:mm)
CLOCK_PATTERN = re.compile(TIME_PATTERN)

# Full calendar date, optionally followed by a time part
ISO_DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}(T.+)?$")

DateLike = Union[date, datetime, str]


def to_local_date(value: DateLike) -> date:
    """Reduce a date-like value to its calendar day at local midnight.

    Strings are read literally: ``"2024-06-01"`` and
    ``"2024-06-01T23:30:00Z"`` are both June 1, whatever the offset of the
    running machine. No timezone conversion happens.

    Args:
        value: A ``date``, ``datetime`` or ISO 8601 string.

    Returns:
        The calendar day.

    Raises:
        ValueError: If the string does not start with a full
            ``YYYY-MM-DD`` date.
        TypeError: If the value is of another type.
    """
    # datetime is a subclass of date, so check it first
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        text = value.strip()
        if not text:
            raise ValueError("Empty date string")
        if not ISO_DATE_PATTERN.match(text):
            raise ValueError(f"Expected YYYY-MM-DD, got {value!r}")
        return dateutil_parser.isoparse(text).date()
    raise TypeError(f"Unsupported date value: {value!r}")


def parse_clock_time(value: Optional[str]) -> Optional[str]:
    """Normalize a 24-hour clock string to ``HH:mm``.

    Args:
        value: Raw time such as ``"9:05"`` or ``"19:30"``; blank means absent.

    Returns:
        The zero-padded ``HH:mm`` string, or None for blank input.

    Raises:
        ValueError: If the value is not a valid 24-hour time.
    """
    if value is None:
        return None
    text = str(value).strip()
    if not text:
        return None

    match = CLOCK_PATTERN.match(text)
    if not match:
        raise ValueError(f"Not a 24-hour HH:mm time: {value!r}")
    return f"{int(match.group(1)):02d}:{match.group(2)}"


def parse_month_argument(value: str) -> date:
    """Parse a ``YYYY-MM`` month argument into the first day of that month."""
    match = re.match(r"^\s*(\d{4})-(\d{1,2})\s*$", value)
    if not match:
        raise ValueError(f"Expected YYYY-MM, got {value!r}")
    return date(int(match.group(1)), int(match.group(2)), 1)
