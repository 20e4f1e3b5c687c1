"""Hide secrets before they reach log lines."""

from typing import Optional

MASK = "****"


def mask_key(key: Optional[str], visible: int = 4) -> str:
    """Reduce an API key to its last ``visible`` characters.

    Short keys are hidden entirely so a tail never reveals most of a secret.
    """
    if not key:
        return "<none>"
    if len(key) <= visible * 2:
        return MASK
    return MASK + key[-visible:]
