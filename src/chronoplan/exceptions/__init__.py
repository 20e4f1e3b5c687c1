"""Custom exceptions for ChronoPlan."""

from chronoplan.exceptions.errors import (
    ChronoPlanError,
    EventValidationError,
    IntentParseError,
    CalendarAPIError,
    RetryExhaustedError,
    EventFileError,
)

__all__ = [
    "ChronoPlanError",
    "EventValidationError",
    "IntentParseError",
    "CalendarAPIError",
    "RetryExhaustedError",
    "EventFileError",
]
