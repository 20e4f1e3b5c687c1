"""Sorted, month-grouped event list for the side panel."""

from dataclasses import dataclass
from typing import Iterable, List, Optional, Tuple

from chronoplan.core.date_range import month_label
from chronoplan.core.event_model import CalendarEvent


@dataclass(frozen=True)
class MonthGroup:
    label: str
    events: Tuple[CalendarEvent, ...]


def group_by_month(events: Iterable[CalendarEvent]) -> List[MonthGroup]:
    """Group events by the month of their start date.

    Events are stable-sorted by start date first, so two events on the
    same day keep their original relative order and every month forms one
    contiguous run.

    Args:
        events: Any iterable of events.

    Returns:
        Groups in ascending month order; empty for an empty collection.
    """
    ordered = sorted(events, key=lambda event: event.start_date)

    groups: List[MonthGroup] = []
    current_label: Optional[str] = None
    current: List[CalendarEvent] = []

    for event in ordered:
        label = month_label(event.start_date)
        if label != current_label and current:
            groups.append(MonthGroup(current_label, tuple(current)))
            current = []
        current_label = label
        current.append(event)

    if current:
        groups.append(MonthGroup(current_label, tuple(current)))

    return groups


def format_time_range(event: CalendarEvent) -> Optional[str]:
    """Time badge shown beside the date range, if the event has a start time."""
    if not event.start_time:
        return None
    if event.end_time:
        return f"{event.start_time} - {event.end_time}"
    return event.start_time
