"""Event data model for calendar events."""

from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Any, Dict, NamedTuple, Optional

from chronoplan.utils.date_parsing import to_local_date


class EventColor(str, Enum):
    """Closed palette of label colors an event can carry."""

    BLUE = "blue"
    RED = "red"
    GREEN = "green"
    PURPLE = "purple"
    ORANGE = "orange"
    GRAY = "gray"
    PINK = "pink"
    INDIGO = "indigo"

    @classmethod
    def lookup(cls, value: Any) -> Optional["EventColor"]:
        """Return the palette member for ``value``, or None if it is not one."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls(value.strip().lower())
            except ValueError:
                return None
        return None

    @classmethod
    def coerce(cls, value: Any) -> "EventColor":
        """Like ``lookup`` but falls back to the default color."""
        return cls.lookup(value) or DEFAULT_COLOR


DEFAULT_COLOR = EventColor.BLUE


class ColorStyle(NamedTuple):
    """Display attributes for one palette color."""

    bg: str
    text: str
    border: str
    ring: str
    dot: str
    ansi: str


def _style(name: str, ansi: str) -> ColorStyle:
    return ColorStyle(
        bg=f"bg-{name}-100",
        text=f"text-{name}-700",
        border=f"border-{name}-200",
        ring=f"ring-{name}-500",
        dot=f"bg-{name}-500",
        ansi=ansi,
    )


# Pure configuration: one style record per palette color
COLOR_STYLES: Dict[EventColor, ColorStyle] = {
    EventColor.BLUE: _style("blue", "\033[34m"),
    EventColor.RED: _style("red", "\033[31m"),
    EventColor.GREEN: _style("green", "\033[32m"),
    EventColor.PURPLE: _style("purple", "\033[35m"),
    EventColor.ORANGE: _style("orange", "\033[33m"),
    EventColor.GRAY: _style("gray", "\033[90m"),
    EventColor.PINK: _style("pink", "\033[95m"),
    EventColor.INDIGO: _style("indigo", "\033[94m"),
}


@dataclass(frozen=True)
class CalendarEvent:
    """A titled, colored, date-ranged calendar item.

    Instances are immutable; an edit produces a new record with the same
    ``id`` that replaces the old one in the store.
    """

    id: str
    title: str
    start_date: date
    end_date: date
    start_time: Optional[str] = None
    end_time: Optional[str] = None
    description: Optional[str] = None
    color: EventColor = DEFAULT_COLOR

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "CalendarEvent":
        """Rebuild an event from its ``to_dict`` form.

        This trusts its input; drafts from users or the language model go
        through ``chronoplan.core.normalizer.normalize`` instead.

        Args:
            data: Dictionary with camelCase keys as written by ``to_dict``.

        Returns:
            The event.

        Raises:
            KeyError: If a required key is missing.
            ValueError: If a date is malformed.
        """
        return cls(
            id=str(data["id"]),
            title=str(data["title"]),
            start_date=to_local_date(data["startDate"]),
            end_date=to_local_date(data["endDate"]),
            start_time=data.get("startTime") or None,
            end_time=data.get("endTime") or None,
            description=data.get("description") or None,
            color=EventColor.coerce(data.get("color")),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the JSON-friendly draft shape.

        Returns:
            Dictionary representation of the event.
        """
        result: Dict[str, Any] = {
            "id": self.id,
            "title": self.title,
            "startDate": self.start_date.isoformat(),
            "endDate": self.end_date.isoformat(),
            "color": self.color.value,
        }
        if self.start_time:
            result["startTime"] = self.start_time
        if self.end_time:
            result["endTime"] = self.end_time
        if self.description:
            result["description"] = self.description
        return result

    @property
    def style(self) -> ColorStyle:
        return COLOR_STYLES[self.color]
