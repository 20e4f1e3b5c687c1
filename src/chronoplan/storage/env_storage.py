"""Environment file storage for the Gemini API key."""

import logging
import os
from pathlib import Path
from typing import Optional

from dotenv import dotenv_values, set_key

from chronoplan.config.constants import PREFERRED_ENV_VAR, PRIMARY_ENV_VAR
from chronoplan.config.settings import get_user_config_dir

logger = logging.getLogger(__name__)


def get_env_file_path() -> Path:
    """Get managed .env path under the user config directory."""
    return get_user_config_dir() / ".env"


def harden_permissions(path: Path, mode: int) -> None:
    """Best-effort: restrict permissions to the current user on POSIX.

    Args:
        path: File or directory to secure.
        mode: Permission bits, e.g. ``0o600``.
    """
    if os.name != "posix":
        return
    try:
        path.chmod(mode)
    except OSError as e:
        logger.warning("Could not tighten permissions on %s: %s", path, e)


def load_from_env_file(path: Path) -> Optional[str]:
    """Load the API key from an environment file.

    Args:
        path: Path to the .env file.

    Returns:
        The API key if found, None otherwise.
    """
    if not path.exists():
        return None

    # Parse without mutating os.environ (avoids leaking secrets to child processes).
    values = dotenv_values(path)
    key = values.get(PREFERRED_ENV_VAR) or values.get(PRIMARY_ENV_VAR)
    if not key:
        return None
    return str(key).strip().strip("'\"").strip()


def store_in_env_file(api_key: str, path: Optional[Path] = None) -> Path:
    """Write the API key to the per-user config .env with secure permissions.

    Args:
        api_key: The API key to store.
        path: Target file (default: ``get_env_file_path()``).

    Returns:
        The path written.
    """
    env_path = path or get_env_file_path()

    env_path.parent.mkdir(parents=True, exist_ok=True, mode=0o700)
    harden_permissions(env_path.parent, 0o700)

    # Create file with secure permissions atomically
    if not env_path.exists():
        try:
            fd = os.open(str(env_path), os.O_CREAT | os.O_WRONLY | os.O_EXCL, 0o600)
            os.close(fd)
        except FileExistsError:
            pass
    harden_permissions(env_path, 0o600)

    set_key(str(env_path), PREFERRED_ENV_VAR, api_key)
    return env_path
