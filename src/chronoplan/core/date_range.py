"""Month grid generation and date-range helpers.

Everything here works on calendar days (``datetime.date``). Values that
carry a time of day are reduced to their local calendar day first, so an
event dated ``2024-06-01`` always lands on June 1.
"""

import calendar
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta
from typing import List, Optional, Tuple

from chronoplan.config.constants import GRID_CELL_COUNT
from chronoplan.core.event_model import CalendarEvent
from chronoplan.utils.date_parsing import DateLike, to_local_date


@dataclass(frozen=True)
class DateCell:
    """One day's slot in the 42-day month grid."""

    date: date
    is_current_month: bool
    is_today: bool


def start_of_day(value: DateLike) -> datetime:
    """Return local midnight of the day ``value`` falls on."""
    return datetime.combine(to_local_date(value), time.min)


def end_of_day(value: DateLike) -> datetime:
    """Return the last representable instant of the day ``value`` falls on."""
    return datetime.combine(to_local_date(value), time.max)


def days_in_month(year: int, month: int) -> int:
    return calendar.monthrange(year, month)[1]


def sunday_weekday(day: date) -> int:
    """Weekday index with 0=Sunday .. 6=Saturday."""
    return (day.weekday() + 1) % 7


def shift_month(year: int, month: int, delta: int) -> Tuple[int, int]:
    """Move ``delta`` months forward (or back when negative).

    Args:
        year: Starting year.
        month: Starting month, 1-12.
        delta: Number of months to move.

    Returns:
        The resulting ``(year, month)`` pair.
    """
    index = year * 12 + (month - 1) + delta
    return index // 12, index % 12 + 1


def build_month_grid(
    year: int,
    month: int,
    today: Optional[DateLike] = None,
) -> List[DateCell]:
    """Build the 6x7 grid of cells shown for a month.

    The grid starts on the Sunday on or before the first of the month,
    fills in every day of the month, then pads with days of the next month
    until it holds exactly 42 cells.

    Args:
        year: Year to display.
        month: Month to display, 1-12.
        today: Reference day for the ``is_today`` flag (default: today).

    Returns:
        Exactly 42 ``DateCell`` objects in display order.
    """
    reference = to_local_date(today) if today is not None else date.today()
    first = date(year, month, 1)
    start_offset = sunday_weekday(first)

    cells: List[DateCell] = []

    # Previous month filler
    for back in range(start_offset, 0, -1):
        cells.append(DateCell(first - timedelta(days=back), False, False))

    # Current month
    for day_number in range(1, days_in_month(year, month) + 1):
        day = date(year, month, day_number)
        cells.append(DateCell(day, True, day == reference))

    # Next month filler
    next_year, next_month = shift_month(year, month, 1)
    for day_number in range(1, GRID_CELL_COUNT - len(cells) + 1):
        cells.append(DateCell(date(next_year, next_month, day_number), False, False))

    return cells


def event_covers_date(event: CalendarEvent, day: DateLike) -> bool:
    """Check whether ``day`` falls inside the event's inclusive date range."""
    moment = start_of_day(day)
    return start_of_day(event.start_date) <= moment <= end_of_day(event.end_date)


def is_multi_day(event: CalendarEvent) -> bool:
    return to_local_date(event.start_date) != to_local_date(event.end_date)


def is_start_cell(event: CalendarEvent, cell_date: DateLike) -> bool:
    return to_local_date(cell_date) == to_local_date(event.start_date)


def is_end_cell(event: CalendarEvent, cell_date: DateLike) -> bool:
    return to_local_date(cell_date) == to_local_date(event.end_date)


def month_label(day: DateLike) -> str:
    """Human label for the month of ``day``, e.g. ``"June 2024"``."""
    value = to_local_date(day)
    return f"{calendar.month_name[value.month]} {value.year}"


def short_day_label(day: date) -> str:
    return f"{day.day} {calendar.month_abbr[day.month]}"


def format_date_range(start: DateLike, end: DateLike) -> str:
    """Compact label for an event's date range.

    ``"10 Jun"`` for a single day, ``"10 - 12 Jun"`` inside one month and
    ``"29 Jun - 2 Jul"`` across months.
    """
    start_day = to_local_date(start)
    end_day = to_local_date(end)

    if start_day == end_day:
        return short_day_label(start_day)

    if (start_day.year, start_day.month) == (end_day.year, end_day.month):
        return f"{start_day.day} - {end_day.day} {calendar.month_abbr[start_day.month]}"

    return f"{short_day_label(start_day)} - {short_day_label(end_day)}"
