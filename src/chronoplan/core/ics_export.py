"""Export calendar events as an iCalendar document."""

import logging
from datetime import datetime, time, timedelta, timezone
from typing import Iterable, Optional

from icalendar import Calendar, Event, vText

from chronoplan.config.constants import ICS_CALSCALE, ICS_PRODID, ICS_VERSION
from chronoplan.core.event_model import CalendarEvent

logger = logging.getLogger(__name__)

# Domain suffix that makes event ids globally unique UIDs
UID_DOMAIN = "chronoplan"


def _clock(value: str) -> time:
    hours, minutes = value.split(":")
    return time(int(hours), int(minutes))


def _create_ics_calendar() -> Calendar:
    cal = Calendar()
    cal.add("PRODID", ICS_PRODID)
    cal.add("VERSION", ICS_VERSION)
    cal.add("CALSCALE", ICS_CALSCALE)
    return cal


def _create_ics_event(event: CalendarEvent, stamp: datetime) -> Event:
    """Create a VEVENT for one calendar event.

    Events without a start time become all-day entries spanning their date
    range (``DTEND`` is exclusive, so it is the day after ``end_date``).
    Timed events use floating local times: start time on the start date,
    end time on the end date.
    """
    ve = Event()
    ve.add("UID", f"{event.id}@{UID_DOMAIN}")
    ve.add("DTSTAMP", stamp)
    ve.add("SUMMARY", vText(event.title))

    if event.start_time:
        start = datetime.combine(event.start_date, _clock(event.start_time))
        end: Optional[datetime] = None
        if event.end_time:
            end = datetime.combine(event.end_date, _clock(event.end_time))
        elif event.end_date != event.start_date:
            end = datetime.combine(event.end_date + timedelta(days=1), time.min)
        else:
            end = start + timedelta(hours=1)
        ve.add("DTSTART", start)
        ve.add("DTEND", end)
    else:
        ve.add("DTSTART", event.start_date)
        ve.add("DTEND", event.end_date + timedelta(days=1))

    if event.description:
        ve.add("DESCRIPTION", vText(event.description))
    ve.add("CATEGORIES", [event.color.value])
    return ve


def _format_ics_output(cal: Calendar) -> str:
    """Serialize with CRLF line endings per RFC 5545."""
    decoded_ical = cal.to_ical().decode("utf-8", errors="replace")
    return decoded_ical.replace("\r\n", "\n").replace("\n", "\r\n")


def build_ics(events: Iterable[CalendarEvent], stamp: Optional[datetime] = None) -> str:
    """Build one iCalendar document holding every event.

    Args:
        events: Events to export.
        stamp: ``DTSTAMP`` value (default: now, UTC).

    Returns:
        ICS content string.
    """
    stamp = stamp or datetime.now(timezone.utc)
    cal = _create_ics_calendar()
    count = 0
    for event in events:
        cal.add_component(_create_ics_event(event, stamp))
        count += 1
    logger.debug("Built ICS document with %d event(s)", count)
    return _format_ics_output(cal)
