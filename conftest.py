from datetime import date
from typing import Callable, Optional

import pytest

from chronoplan.core.event_model import CalendarEvent, EventColor


@pytest.fixture
def make_event() -> Callable[..., CalendarEvent]:
    counter = {"n": 0}

    def factory(
        start: date,
        end: Optional[date] = None,
        title: Optional[str] = None,
        start_time: Optional[str] = None,
        end_time: Optional[str] = None,
        color: EventColor = EventColor.BLUE,
        event_id: Optional[str] = None,
    ) -> CalendarEvent:
        counter["n"] += 1
        return CalendarEvent(
            id=event_id or f"evt-{counter['n']}",
            title=title or f"Event {counter['n']}",
            start_date=start,
            end_date=end or start,
            start_time=start_time,
            end_time=end_time,
            color=color,
        )

    return factory
