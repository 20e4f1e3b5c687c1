"""User-friendly error message handling."""

from chronoplan.exceptions.errors import (
    CalendarAPIError,
    EventFileError,
    EventValidationError,
    IntentParseError,
    RetryExhaustedError,
)

# Validation reasons mapped to messages for re-prompting the user
VALIDATION_MESSAGES = {
    "missing-title": "Please give the event a title.",
    "missing-date": "Please enter both a start date and an end date.",
    "invalid-date": "Dates must be real calendar days in YYYY-MM-DD form.",
    "invalid-time": "Times must use the 24-hour HH:mm format.",
    "end-before-start": "End date cannot be before start date.",
    "end-time-before-start": "End time cannot be before start time on a single-day event.",
    "duplicate-id": "Two events share the same id.",
    "unknown-id": "That event no longer exists.",
}

# Error message mappings for user-friendly display
ERROR_MAPPINGS = {
    "api key": "Your API key appears to be invalid or expired. Please check your settings.",
    "rate limit": "Too many requests. Please wait a moment and try again.",
    "network": "Network error. Please check your internet connection.",
    "timeout": "Request timed out. Please try again.",
    "quota": "API quota exceeded. Please try again later or check your API plan.",
    "invalid json": "The AI returned an unexpected response. Please try rephrasing your event description.",
    "empty response": "No response received from the AI. Please try again.",
}

INTENT_FALLBACK = "Failed to understand the event. Please try again."


def get_user_friendly_error(error: Exception) -> str:
    """Convert an exception to a user-facing notice.

    Args:
        error: The exception to convert.

    Returns:
        A short message suitable for the status line.
    """
    if isinstance(error, EventValidationError):
        return VALIDATION_MESSAGES.get(error.reason, str(error))

    if isinstance(error, RetryExhaustedError):
        last = get_user_friendly_error(error.last_error) if error.last_error else "Unknown"
        return f"Failed after multiple attempts. Last error: {last}"

    if isinstance(error, CalendarAPIError):
        return ERROR_MAPPINGS["api key"]

    if isinstance(error, EventFileError):
        return f"Could not load your events: {error}"

    error_str = str(error).lower()
    for pattern, message in ERROR_MAPPINGS.items():
        if pattern in error_str:
            return message

    if isinstance(error, IntentParseError):
        return INTENT_FALLBACK

    return f"An error occurred: {error}"
