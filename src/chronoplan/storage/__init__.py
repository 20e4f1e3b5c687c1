"""API key and event file storage for ChronoPlan."""

from chronoplan.storage.key_manager import (
    load_api_key,
    save_api_key,
    get_api_key_source,
)
from chronoplan.storage.env_storage import get_env_file_path
from chronoplan.storage.event_file import load_events, save_events

__all__ = [
    "load_api_key",
    "save_api_key",
    "get_api_key_source",
    "get_env_file_path",
    "load_events",
    "save_events",
]
