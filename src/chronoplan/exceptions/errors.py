"""Exception hierarchy for ChronoPlan."""

from typing import Optional


class ChronoPlanError(Exception):
    """Base class for all ChronoPlan errors."""


class EventValidationError(ChronoPlanError):
    """Raised when an event draft violates an event invariant.

    Attributes:
        reason: Stable machine-readable code, e.g. ``"end-before-start"``.
        field: Name of the offending draft field, when there is one.
    """

    def __init__(
        self,
        reason: str,
        message: Optional[str] = None,
        field: Optional[str] = None,
    ):
        self.reason = reason
        self.field = field
        super().__init__(message or reason)


class IntentParseError(ChronoPlanError):
    """Raised when free text could not be turned into an event draft."""


class CalendarAPIError(IntentParseError):
    """Permanent failure talking to the language model (bad key, no access)."""


class RetryExhaustedError(IntentParseError):
    """Raised when every retry of a transient failure has been used up."""

    def __init__(self, attempts: int, last_error: Optional[Exception] = None):
        self.attempts = attempts
        self.last_error = last_error
        super().__init__(
            f"Gave up after {attempts} attempt(s): {last_error}"
        )


class EventFileError(ChronoPlanError):
    """Raised when the events file exists but cannot be read."""
