"""Centralized constants for ChronoPlan."""

# Key storage constants
KEYRING_SERVICE_NAME = "ChronoPlan"
KEYRING_ACCOUNT_NAME = "gemini_api_key"

# Environment variable names (app-specific key wins over the generic one)
PREFERRED_ENV_VAR = "CHRONOPLAN_API_KEY"
PRIMARY_ENV_VAR = "GEMINI_API_KEY"

# Settings overrides
MODEL_ENV_VAR = "CHRONOPLAN_MODEL"
EVENTS_FILE_ENV_VAR = "CHRONOPLAN_EVENTS_FILE"
READ_ONLY_ENV_VAR = "CHRONOPLAN_READ_ONLY"

APP_DIR_NAME = "ChronoPlan"
EVENTS_FILE_NAME = "events.json"

# Month grid layout: 6 rows x 7 columns, weeks start on Sunday
GRID_COLUMNS = 7
GRID_ROWS = 6
GRID_CELL_COUNT = GRID_COLUMNS * GRID_ROWS
DAYS_OF_WEEK = ["Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat"]

# Multi-day segment tags shown next to the title in a cell
TAG_START = "(Start)"
TAG_END = "(End)"
TAG_CONTINUATION = "(Cont.)"

# Clock times are HH:mm, 24-hour
TIME_PATTERN = r"^([01]?\d|2[0-3]):([0-5]\d)$"

# ICS export constants
ICS_PRODID = "-//ChronoPlan AI//EN"
ICS_VERSION = "2.0"
ICS_CALSCALE = "GREGORIAN"

# Side panel texts
EMPTY_STATE_MESSAGE = "No events scheduled yet."
EMPTY_STATE_HINT = "Try adding one from the calendar or ask the AI."

# Status callback messages
STATUS_ATTEMPTING = "Asking the AI to read your event... (Try {attempt}/{max_retries})"
STATUS_SUCCESS = "Event understood: {title}"
STATUS_MAX_RETRIES = "Error: Max retries reached. Failed to understand the event."
STATUS_NON_RETRYABLE = "Error: {error_type} - this error cannot be retried."
STATUS_RETRYING = "Error occurred ({error_type}), retrying in {delay:.0f} seconds..."

# Error classification patterns for smart retry logic
# These errors should NOT be retried (permanent failures)
NON_RETRYABLE_ERROR_PATTERNS = [
    "invalid api key",
    "api_key_invalid",
    "api key expired",
    "permission denied",
    "quota exceeded",
    "invalid argument",
    "authentication",
    "unauthorized",
]

# These errors SHOULD be retried (transient failures)
RETRYABLE_ERROR_PATTERNS = [
    "timeout",
    "deadline exceeded",
    "service unavailable",
    "resource exhausted",
    "connection",
    "network",
    "temporarily unavailable",
    "invalid json",
    "empty response",
]

# API key error patterns for centralized detection
API_KEY_ERROR_PATTERNS = [
    "api key expired",
    "api_key_invalid",
    "invalid api key",
]
