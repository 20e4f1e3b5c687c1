"""High-level API key management."""

import logging
import os
from typing import Optional, Tuple

from chronoplan.config.constants import PREFERRED_ENV_VAR, PRIMARY_ENV_VAR
from chronoplan.storage.keyring_storage import load_from_keyring, save_to_keyring
from chronoplan.storage.env_storage import (
    get_env_file_path,
    load_from_env_file,
    store_in_env_file,
)

logger = logging.getLogger(__name__)


def get_api_key_source() -> Tuple[Optional[str], str]:
    """Determine which storage location currently provides the API key.

    Priority:
        1. CHRONOPLAN_API_KEY environment variable
        2. GEMINI_API_KEY environment variable
        3. OS keyring
        4. User config .env

    Returns:
        Tuple of (api_key, source_description).
    """
    for name in (PREFERRED_ENV_VAR, PRIMARY_ENV_VAR):
        env_key = os.environ.get(name)
        if env_key:
            return env_key, f"Environment Variable ({name})"

    keyring_key = load_from_keyring()
    if keyring_key:
        return keyring_key, "OS Keyring"

    env_file_key = load_from_env_file(get_env_file_path())
    if env_file_key:
        return env_file_key, f"User Config: {get_env_file_path()}"

    return None, "No API Key Found"


def load_api_key() -> Optional[str]:
    """Load the Gemini API key from the first source that has one."""
    api_key, source = get_api_key_source()
    logger.debug("API key source: %s", source)
    return api_key


def save_api_key(api_key: str) -> bool:
    """Save the API key.

    Primary: OS keyring. A copy always goes to the per-user .env file so
    the key survives on machines without a working keyring.

    Args:
        api_key: The API key to save.

    Returns:
        True if saved successfully, False otherwise.
    """
    api_key = api_key.strip().strip("'\"").strip()
    if not api_key:
        logger.error("Refusing to save an empty API key")
        return False

    if save_to_keyring(api_key):
        logger.info("API key saved to keyring successfully")
    else:
        logger.warning("Keyring unavailable, using file storage instead")

    try:
        path = store_in_env_file(api_key)
    except OSError as e:
        logger.error("Failed to save API key: %s", e)
        return False

    logger.debug("API key copy written to %s", path)
    # Make the key visible to the current process right away
    os.environ[PREFERRED_ENV_VAR] = api_key
    return True
