"""Plain-text rendering of the month view and the side panel."""

from typing import List, Sequence

from chronoplan.config.constants import (
    DAYS_OF_WEEK,
    EMPTY_STATE_HINT,
    EMPTY_STATE_MESSAGE,
    GRID_COLUMNS,
)
from chronoplan.core.date_range import format_date_range
from chronoplan.core.event_model import CalendarEvent
from chronoplan.core.grid_builder import CellEvents, EventPlacement
from chronoplan.core.side_panel import MonthGroup, format_time_range

CELL_WIDTH = 16
ANSI_RESET = "\033[0m"


def _fit(text: str, width: int = CELL_WIDTH) -> str:
    if len(text) > width:
        return text[: width - 1] + "~"
    return text.ljust(width)


def _day_header(cell_events: CellEvents) -> str:
    cell = cell_events.cell
    number = str(cell.date.day)
    if cell.is_today:
        number = f"[{number}]"
    elif not cell.is_current_month:
        number = f"({number})"
    return number


def _placement_text(placement: EventPlacement, use_color: bool) -> str:
    text = _fit(placement.label)
    if use_color:
        return f"{placement.event.style.ansi}{text}{ANSI_RESET}"
    return text


def render_month(title: str, cells: Sequence[CellEvents], use_color: bool = False) -> str:
    """Render a 42-cell month as week rows.

    Each row prints the day numbers, then one line per event slot.
    Today is shown as ``[n]`` and days outside the month as ``(n)``.

    Args:
        title: Heading, e.g. ``"June 2024"``.
        cells: Output of ``grid_builder.render``.
        use_color: Wrap labels in ANSI colors from the palette.

    Returns:
        The rendered text.
    """
    border = "+" + "+".join("-" * CELL_WIDTH for _ in range(GRID_COLUMNS)) + "+"
    lines: List[str] = [title, border]
    lines.append("|" + "|".join(_fit(day) for day in DAYS_OF_WEEK) + "|")
    lines.append(border)

    for row_start in range(0, len(cells), GRID_COLUMNS):
        week = cells[row_start:row_start + GRID_COLUMNS]
        lines.append("|" + "|".join(_fit(_day_header(c)) for c in week) + "|")

        depth = max((len(c.placements) for c in week), default=0)
        for slot in range(depth):
            row = []
            for c in week:
                if slot < len(c.placements):
                    row.append(_placement_text(c.placements[slot], use_color))
                else:
                    row.append(" " * CELL_WIDTH)
            lines.append("|" + "|".join(row) + "|")
        lines.append(border)

    return "\n".join(lines)


def render_event_line(event: CalendarEvent) -> str:
    parts = [format_date_range(event.start_date, event.end_date)]
    time_range = format_time_range(event)
    if time_range:
        parts.append(time_range)
    parts.append(event.title)
    parts.append(f"<{event.color.value}>")
    parts.append(f"id={event.id}")
    return "  ".join(parts)


def render_groups(groups: Sequence[MonthGroup], read_only: bool = False) -> str:
    """Render the side-panel list, or the empty-state message."""
    if not groups:
        lines = [EMPTY_STATE_MESSAGE]
        if not read_only:
            lines.append(EMPTY_STATE_HINT)
        return "\n".join(lines)

    lines = []
    for group in groups:
        lines.append(group.label.upper())
        for event in group.events:
            lines.append("  " + render_event_line(event))
            if event.description:
                lines.append("    " + event.description)
        lines.append("")
    return "\n".join(lines).rstrip("\n")
