"""Core calendar logic for ChronoPlan."""

from chronoplan.core.date_range import (
    DateCell,
    build_month_grid,
    event_covers_date,
    format_date_range,
    is_end_cell,
    is_multi_day,
    is_start_cell,
    month_label,
    shift_month,
)
from chronoplan.core.event_model import COLOR_STYLES, CalendarEvent, EventColor
from chronoplan.core.event_store import EventStore
from chronoplan.core.grid_builder import CellEvents, EventPlacement, render
from chronoplan.core.normalizer import normalize
from chronoplan.core.side_panel import MonthGroup, group_by_month
from chronoplan.core.intent_parser import GeminiIntentParser, IntentParser
from chronoplan.core.app_state import CalendarApp
from chronoplan.core.ics_export import build_ics

__all__ = [
    "DateCell",
    "build_month_grid",
    "event_covers_date",
    "format_date_range",
    "is_end_cell",
    "is_multi_day",
    "is_start_cell",
    "month_label",
    "shift_month",
    "COLOR_STYLES",
    "CalendarEvent",
    "EventColor",
    "EventStore",
    "CellEvents",
    "EventPlacement",
    "render",
    "normalize",
    "MonthGroup",
    "group_by_month",
    "GeminiIntentParser",
    "IntentParser",
    "CalendarApp",
    "build_ics",
]
