"""
ChronoPlan - Month Calendar with AI Event Entry

Builds month grids, places date-ranged events on them, groups events for
the side panel and turns free text into events using Google's Gemini AI.
"""

__version__ = "1.0.0"

# Public API - import commonly used components
from chronoplan.config.settings import API_CONFIG, CALENDAR_CONFIG
from chronoplan.exceptions.errors import (
    CalendarAPIError,
    EventValidationError,
    IntentParseError,
    RetryExhaustedError,
)
from chronoplan.core.app_state import CalendarApp
from chronoplan.core.date_range import (
    DateCell,
    build_month_grid,
    event_covers_date,
    format_date_range,
)
from chronoplan.core.event_model import CalendarEvent, EventColor
from chronoplan.core.event_store import EventStore
from chronoplan.core.grid_builder import render
from chronoplan.core.intent_parser import GeminiIntentParser
from chronoplan.core.normalizer import normalize
from chronoplan.core.side_panel import group_by_month

__all__ = [
    # Version
    "__version__",
    # Config
    "API_CONFIG",
    "CALENDAR_CONFIG",
    # Exceptions
    "CalendarAPIError",
    "EventValidationError",
    "IntentParseError",
    "RetryExhaustedError",
    # Core
    "CalendarApp",
    "DateCell",
    "build_month_grid",
    "event_covers_date",
    "format_date_range",
    "CalendarEvent",
    "EventColor",
    "EventStore",
    "render",
    "GeminiIntentParser",
    "normalize",
    "group_by_month",
]
