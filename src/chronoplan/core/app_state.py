"""Application shell state: visible month, access flag and event store."""

import logging
from datetime import date
from typing import Any, Callable, List, Mapping, Optional

from chronoplan.core.date_range import DateCell, build_month_grid, month_label, shift_month
from chronoplan.core.event_model import CalendarEvent
from chronoplan.core.event_store import EventStore
from chronoplan.core.grid_builder import CellEvents, render
from chronoplan.core.intent_parser import IntentParser
from chronoplan.core.normalizer import normalize
from chronoplan.core.side_panel import MonthGroup, group_by_month
from chronoplan.exceptions.errors import EventValidationError, IntentParseError

logger = logging.getLogger(__name__)


class CalendarApp:
    """Holds what the calendar screen shows and applies user actions.

    The grid and the side-panel groups are recomputed from a store snapshot
    on every call. Mutating actions are refused (they return None and
    leave everything untouched) while ``read_only`` is set.
    """

    def __init__(
        self,
        store: Optional[EventStore] = None,
        today: Optional[date] = None,
        read_only: bool = False,
        parser: Optional[IntentParser] = None,
        today_provider: Callable[[], date] = date.today,
    ):
        self.store = store if store is not None else EventStore()
        self.today_provider = today_provider
        self._today = today
        self.read_only = read_only
        self.parser = parser

        reference = self.today
        self.current_year = reference.year
        self.current_month = reference.month

    @property
    def today(self) -> date:
        return self._today or self.today_provider()

    @property
    def title(self) -> str:
        return month_label(date(self.current_year, self.current_month, 1))

    def prev_month(self) -> None:
        self.current_year, self.current_month = shift_month(
            self.current_year, self.current_month, -1
        )

    def next_month(self) -> None:
        self.current_year, self.current_month = shift_month(
            self.current_year, self.current_month, 1
        )

    def go_to(self, day: date) -> None:
        self.current_year, self.current_month = day.year, day.month

    def toggle_read_only(self) -> bool:
        self.read_only = not self.read_only
        logger.info("Read-only mode %s", "on" if self.read_only else "off")
        return self.read_only

    def grid(self) -> List[DateCell]:
        return build_month_grid(self.current_year, self.current_month, today=self.today)

    def placements(self) -> List[CellEvents]:
        return render(self.grid(), self.store.list())

    def groups(self) -> List[MonthGroup]:
        return group_by_month(self.store.list())

    def _refuse_if_read_only(self, action: str) -> bool:
        if self.read_only:
            logger.warning("Ignoring %s: calendar is read-only", action)
            return True
        return False

    def save_event(
        self,
        draft: Mapping[str, Any],
        editing_id: Optional[str] = None,
    ) -> Optional[CalendarEvent]:
        """Create or edit an event from a form draft.

        Args:
            draft: Form fields.
            editing_id: Id of the event being edited; None to create.

        Returns:
            The stored event, or None when read-only.

        Raises:
            EventValidationError: If the draft is invalid, or
                ``editing_id`` names no event. The store is unchanged.
        """
        if self._refuse_if_read_only("save"):
            return None

        existing = None
        if editing_id is not None:
            existing = self.store.get(editing_id)
            if existing is None:
                raise EventValidationError(
                    "unknown-id", f"No event with id {editing_id!r}", field="id"
                )

        event = normalize(draft, existing=existing, existing_ids=self.store.ids())
        self.store.upsert(event)
        return event

    def delete_event(self, event_id: str) -> bool:
        if self._refuse_if_read_only("delete"):
            return False
        return self.store.delete(event_id)

    def add_from_text(self, text: str) -> Optional[CalendarEvent]:
        """Create an event from free text and jump to its month.

        Returns:
            The new event, or None when read-only.

        Raises:
            IntentParseError: If no parser is configured or it failed.
            EventValidationError: If the parsed draft is invalid.
        """
        if self._refuse_if_read_only("AI add"):
            return None
        if self.parser is None:
            raise IntentParseError("No intent parser is configured.")

        draft = self.parser.parse(text)
        event = normalize(draft, existing_ids=self.store.ids())
        self.store.upsert(event)
        self.go_to(event.start_date)
        logger.info("Added %r from free text", event.title)
        return event
