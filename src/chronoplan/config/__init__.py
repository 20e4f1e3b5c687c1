"""Configuration module for ChronoPlan."""

from chronoplan.config.settings import (
    API_CONFIG,
    CALENDAR_CONFIG,
    APIConfig,
    CalendarConfig,
    get_user_config_dir,
)
from chronoplan.config.constants import (
    KEYRING_SERVICE_NAME,
    KEYRING_ACCOUNT_NAME,
    PREFERRED_ENV_VAR,
    PRIMARY_ENV_VAR,
    GRID_CELL_COUNT,
    ICS_PRODID,
)

__all__ = [
    "API_CONFIG",
    "CALENDAR_CONFIG",
    "APIConfig",
    "CalendarConfig",
    "get_user_config_dir",
    "KEYRING_SERVICE_NAME",
    "KEYRING_ACCOUNT_NAME",
    "PREFERRED_ENV_VAR",
    "PRIMARY_ENV_VAR",
    "GRID_CELL_COUNT",
    "ICS_PRODID",
]
