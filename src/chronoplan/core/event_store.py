"""In-memory event collection owned by the application shell."""

import logging
from typing import Iterable, Iterator, List, Optional, Set

from chronoplan.core.event_model import CalendarEvent
from chronoplan.exceptions.errors import EventValidationError

logger = logging.getLogger(__name__)


class EventStore:
    """Ordered collection of events keyed by ``id``.

    Every mutation builds a new list and swaps it in, so snapshots handed
    out by ``list()`` are never modified afterwards.
    """

    def __init__(self, events: Optional[Iterable[CalendarEvent]] = None):
        self._events: List[CalendarEvent] = []
        if events is not None:
            self.replace_all(events)

    def __len__(self) -> int:
        return len(self._events)

    def __iter__(self) -> Iterator[CalendarEvent]:
        return iter(self.list())

    def __contains__(self, event_id: object) -> bool:
        return any(event.id == event_id for event in self._events)

    def list(self) -> List[CalendarEvent]:
        """Return a snapshot of the events in insertion order."""
        return list(self._events)

    def ids(self) -> Set[str]:
        return {event.id for event in self._events}

    def get(self, event_id: str) -> Optional[CalendarEvent]:
        for event in self._events:
            if event.id == event_id:
                return event
        return None

    def upsert(self, event: CalendarEvent) -> bool:
        """Insert ``event`` or replace the record that has the same id.

        A replaced record keeps its position in the collection.

        Args:
            event: The complete new record.

        Returns:
            True if an existing record was replaced, False if appended.
        """
        if event.id in self:
            self._events = [event if e.id == event.id else e for e in self._events]
            logger.debug("Replaced event %s", event.id)
            return True

        self._events = self._events + [event]
        logger.debug("Added event %s", event.id)
        return False

    def delete(self, event_id: str) -> bool:
        """Remove the event with ``event_id``.

        Returns:
            True if something was removed.
        """
        remaining = [e for e in self._events if e.id != event_id]
        removed = len(remaining) != len(self._events)
        if removed:
            self._events = remaining
            logger.debug("Deleted event %s", event_id)
        else:
            logger.debug("Delete ignored, no event with id %s", event_id)
        return removed

    def replace_all(self, events: Iterable[CalendarEvent]) -> None:
        """Swap in a whole new collection.

        Raises:
            EventValidationError: If two events share an id. The store is
                left unchanged.
        """
        incoming = list(events)
        seen: Set[str] = set()
        for event in incoming:
            if event.id in seen:
                raise EventValidationError(
                    "duplicate-id",
                    f"Event id {event.id!r} appears more than once",
                    field="id",
                )
            seen.add(event.id)
        self._events = incoming
