"""Place events onto the cells of a month grid."""

from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence, Tuple

from chronoplan.config.constants import TAG_CONTINUATION, TAG_END, TAG_START
from chronoplan.core.date_range import (
    DateCell,
    event_covers_date,
    is_end_cell,
    is_multi_day,
    is_start_cell,
)
from chronoplan.core.event_model import CalendarEvent
from chronoplan.utils.date_parsing import DateLike

SEGMENT_START = "start"
SEGMENT_END = "end"
SEGMENT_CONTINUATION = "continuation"

_SEGMENT_TAGS = {
    SEGMENT_START: TAG_START,
    SEGMENT_END: TAG_END,
    SEGMENT_CONTINUATION: TAG_CONTINUATION,
}


@dataclass(frozen=True)
class EventPlacement:
    """An event as drawn inside one cell."""

    event: CalendarEvent
    show_time: bool
    segment: Optional[str]

    @property
    def tag(self) -> str:
        if self.segment is None:
            return ""
        return _SEGMENT_TAGS[self.segment]

    @property
    def label(self) -> str:
        parts = []
        if self.show_time:
            parts.append(self.event.start_time)
        parts.append(self.event.title)
        if self.tag:
            parts.append(self.tag)
        return " ".join(parts)


@dataclass(frozen=True)
class CellEvents:
    cell: DateCell
    placements: Tuple[EventPlacement, ...]


def cell_order_key(event: CalendarEvent) -> Tuple:
    """Sort key for events sharing a cell.

    Earlier-starting events come first, then untimed before timed, then
    start time, then title. Full ties keep source order (sorts are stable).
    """
    return (
        event.start_date,
        event.start_time is not None,
        event.start_time or "",
        event.title.casefold(),
    )


def place_event(event: CalendarEvent, cell_date: DateLike) -> EventPlacement:
    """Derive how ``event`` is labelled on the cell for ``cell_date``."""
    starts_here = is_start_cell(event, cell_date)
    multi_day = is_multi_day(event)

    if not multi_day:
        segment = None
    elif starts_here:
        segment = SEGMENT_START
    elif is_end_cell(event, cell_date):
        segment = SEGMENT_END
    else:
        segment = SEGMENT_CONTINUATION

    show_time = bool(event.start_time) and (starts_here or not multi_day)
    return EventPlacement(event=event, show_time=show_time, segment=segment)


def events_for_date(events: Iterable[CalendarEvent], day: DateLike) -> List[CalendarEvent]:
    """Events covering ``day``, in cell display order."""
    covering = [event for event in events if event_covers_date(event, day)]
    return sorted(covering, key=cell_order_key)


def render(grid: Sequence[DateCell], events: Iterable[CalendarEvent]) -> List[CellEvents]:
    """Map a snapshot of events onto every cell of ``grid``.

    Args:
        grid: Cells from ``build_month_grid``.
        events: The event collection to place.

    Returns:
        One ``CellEvents`` per grid cell, in grid order.
    """
    snapshot = list(events)
    return [
        CellEvents(
            cell=cell,
            placements=tuple(
                place_event(event, cell.date)
                for event in events_for_date(snapshot, cell.date)
            ),
        )
        for cell in grid
    ]
