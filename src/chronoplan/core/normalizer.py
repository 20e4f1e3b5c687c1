"""Validate and normalize event drafts into canonical events."""

import logging
import uuid
from datetime import date
from typing import Any, Callable, Collection, Mapping, Optional

from chronoplan.core.event_model import DEFAULT_COLOR, CalendarEvent, EventColor
from chronoplan.exceptions.errors import EventValidationError
from chronoplan.utils.date_parsing import parse_clock_time, to_local_date

logger = logging.getLogger(__name__)

# Draft field -> accepted spellings (Intent Parser camelCase, form snake_case)
FIELD_ALIASES = {
    "title": ("title",),
    "description": ("description",),
    "start_date": ("startDate", "start_date"),
    "end_date": ("endDate", "end_date"),
    "start_time": ("startTime", "start_time"),
    "end_time": ("endTime", "end_time"),
    "color": ("color",),
}


def _field(draft: Mapping[str, Any], name: str) -> Any:
    for key in FIELD_ALIASES[name]:
        if key in draft and draft[key] is not None:
            return draft[key]
    return None


def _parse_date(draft: Mapping[str, Any], name: str) -> date:
    raw = _field(draft, name)
    if raw is None or (isinstance(raw, str) and not raw.strip()):
        raise EventValidationError("missing-date", f"{name} is required", field=name)
    try:
        return to_local_date(raw)
    except (ValueError, TypeError, OverflowError) as e:
        raise EventValidationError(
            "invalid-date", f"{name} is not a valid date: {raw!r}", field=name
        ) from e


def _parse_time(draft: Mapping[str, Any], name: str) -> Optional[str]:
    raw = _field(draft, name)
    try:
        return parse_clock_time(raw)
    except ValueError as e:
        raise EventValidationError(
            "invalid-time", f"{name} must be HH:mm, got {raw!r}", field=name
        ) from e


def new_event_id(existing_ids: Collection[str] = ()) -> str:
    """Generate an id that does not collide with ``existing_ids``."""
    while True:
        candidate = str(uuid.uuid4())
        if candidate not in existing_ids:
            return candidate


def normalize(
    draft: Mapping[str, Any],
    existing: Optional[CalendarEvent] = None,
    existing_ids: Collection[str] = (),
    id_factory: Callable[[Collection[str]], str] = new_event_id,
) -> CalendarEvent:
    """Turn a form submission or parsed draft into a canonical event.

    Args:
        draft: Raw fields. camelCase keys (``startDate``) and snake_case
            keys (``start_date``) are both accepted.
        existing: The event being edited. Its id is kept and the returned
            record replaces it whole.
        existing_ids: Ids already in use, avoided when creating.
        id_factory: Id generator for creates.

    Returns:
        A validated ``CalendarEvent``.

    Raises:
        EventValidationError: If a required field is missing or malformed,
            the end date precedes the start date, or a single-day event
            ends before it starts.
    """
    title = str(_field(draft, "title") or "").strip()
    if not title:
        raise EventValidationError("missing-title", "title is required", field="title")

    start_date = _parse_date(draft, "start_date")
    end_date = _parse_date(draft, "end_date")
    if end_date < start_date:
        raise EventValidationError(
            "end-before-start",
            f"End date {end_date.isoformat()} is before start date {start_date.isoformat()}",
            field="end_date",
        )

    start_time = _parse_time(draft, "start_time")
    end_time = _parse_time(draft, "end_time")
    # Zero-padded HH:mm compares correctly as text
    if start_date == end_date and start_time and end_time and end_time < start_time:
        raise EventValidationError(
            "end-time-before-start",
            f"End time {end_time} is before start time {start_time}",
            field="end_time",
        )

    raw_color = _field(draft, "color")
    color = EventColor.lookup(raw_color)
    if color is None:
        if raw_color is not None:
            logger.debug("Unknown color %r, using %s", raw_color, DEFAULT_COLOR.value)
        color = DEFAULT_COLOR

    description = str(_field(draft, "description") or "").strip() or None

    if existing is not None:
        event_id = existing.id
    else:
        event_id = id_factory(existing_ids)

    return CalendarEvent(
        id=event_id,
        title=title,
        start_date=start_date,
        end_date=end_date,
        start_time=start_time,
        end_time=end_time,
        description=description,
        color=color,
    )
