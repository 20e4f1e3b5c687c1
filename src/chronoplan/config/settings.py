"""Runtime settings for ChronoPlan.

Values come from dataclass defaults and can be overridden through
environment variables. The module-level singletons are what the rest of
the package imports.
"""

import os
import sys
from dataclasses import dataclass, field
from pathlib import Path

from chronoplan.config.constants import (
    APP_DIR_NAME,
    EVENTS_FILE_ENV_VAR,
    EVENTS_FILE_NAME,
    MODEL_ENV_VAR,
    READ_ONLY_ENV_VAR,
)


def get_user_config_dir() -> Path:
    """Return a per-user config directory that works across platforms.

    Returns:
        Path to the user's config directory for this application.
    """
    if sys.platform.startswith("win"):
        base_str = os.environ.get("APPDATA") or os.environ.get("LOCALAPPDATA")
        base = Path(base_str) if base_str else (Path.home() / "AppData" / "Roaming")
        return base / APP_DIR_NAME

    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / APP_DIR_NAME

    # Linux and other Unix-like systems
    base_str = os.environ.get("XDG_CONFIG_HOME")
    base = Path(base_str) if base_str else (Path.home() / ".config")
    return base / APP_DIR_NAME


def _env_flag(name: str) -> bool:
    return os.environ.get(name, "").strip().lower() in {"1", "true", "yes", "on"}


def _default_events_file() -> Path:
    override = os.environ.get(EVENTS_FILE_ENV_VAR)
    if override:
        return Path(override).expanduser()
    return get_user_config_dir() / EVENTS_FILE_NAME


@dataclass(frozen=True)
class APIConfig:
    """Settings for the Gemini intent parser."""

    model_name: str = field(
        default_factory=lambda: os.environ.get(MODEL_ENV_VAR, "gemini-2.5-flash")
    )
    temperature: float = 0.2
    top_p: float = 0.95
    top_k: int = 40
    max_output_tokens: int = 1024
    max_retries: int = 3
    base_delay: float = 1.0
    max_backoff: float = 8.0


@dataclass(frozen=True)
class CalendarConfig:
    """Settings for the calendar shell."""

    events_file: Path = field(default_factory=_default_events_file)
    read_only: bool = field(default_factory=lambda: _env_flag(READ_ONLY_ENV_VAR))


API_CONFIG = APIConfig()
CALENDAR_CONFIG = CalendarConfig()
