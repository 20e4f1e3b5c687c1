"""Retry logic and error classification for language model calls."""

import logging

from chronoplan.config.constants import (
    NON_RETRYABLE_ERROR_PATTERNS,
    RETRYABLE_ERROR_PATTERNS,
    API_KEY_ERROR_PATTERNS,
)
from chronoplan.exceptions.errors import CalendarAPIError

logger = logging.getLogger(__name__)


def _matches(error: BaseException, patterns) -> bool:
    error_str = str(error).lower()
    error_type = type(error).__name__.lower()
    return any(pattern in error_str or pattern in error_type for pattern in patterns)


def is_retryable_error(error: Exception) -> bool:
    """Determine if an error should be retried based on error type and message.

    Checks both the error and its ``__cause__`` so wrapped failures are
    classified by their root.

    Args:
        error: The exception to check.

    Returns:
        True if the error is retryable (transient), False if permanent.
    """
    # CalendarAPIError already means "permanent"
    if isinstance(error, CalendarAPIError):
        return False

    if _matches(error, NON_RETRYABLE_ERROR_PATTERNS):
        return False
    if error.__cause__ is not None and _matches(error.__cause__, NON_RETRYABLE_ERROR_PATTERNS):
        return False

    if _matches(error, RETRYABLE_ERROR_PATTERNS):
        return True

    logger.debug(
        "Unknown error type, defaulting to retry: %s - %s",
        type(error).__name__,
        error
    )
    return True


def is_api_key_error(error: Exception) -> bool:
    """Check if error is related to API key issues."""
    error_str = str(error).lower()
    return any(pattern in error_str for pattern in API_KEY_ERROR_PATTERNS)


def wrap_api_key_error(error: Exception, masked_key: str) -> CalendarAPIError:
    """Wrap API key errors with a user-friendly message.

    Args:
        error: The original exception.
        masked_key: The masked API key for logging.

    Returns:
        A CalendarAPIError with a user-friendly message.
    """
    if "expired" in str(error).lower():
        msg = "API key has expired. Please renew your Gemini API key."
    else:
        msg = "API key is invalid. Please check your Gemini API key."

    logger.error("API key error (%s): %s", masked_key, error)
    return CalendarAPIError(msg)
