"""JSON file persistence for the event collection."""

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Iterable, List

from chronoplan.core.event_model import CalendarEvent
from chronoplan.core.normalizer import normalize
from chronoplan.exceptions.errors import EventFileError, EventValidationError

logger = logging.getLogger(__name__)


def load_events(path: Path) -> List[CalendarEvent]:
    """Read events written by ``save_events``.

    Args:
        path: The events file. A missing file means no events.

    Returns:
        The events in file order.

    Raises:
        EventFileError: If the file cannot be read or decoded, or a record
            breaks an event rule.
    """
    if not path.exists():
        logger.debug("No events file at %s", path)
        return []

    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        raise EventFileError(f"Could not read events from {path}: {e}") from e

    if not isinstance(raw, list):
        raise EventFileError(f"Events file {path} must hold a JSON list")

    events = []
    for item in raw:
        try:
            record = CalendarEvent.from_dict(item)
            # Stored records obey the same rules as new drafts
            events.append(normalize(item, existing=record))
        except (KeyError, TypeError, ValueError, EventValidationError) as e:
            raise EventFileError(f"Malformed event in {path}: {e}") from e

    logger.debug("Loaded %d event(s) from %s", len(events), path)
    return events


def save_events(path: Path, events: Iterable[CalendarEvent]) -> None:
    """Write events atomically: a temp file in the same directory is
    renamed over ``path`` once fully written."""
    payload = [event.to_dict() for event in events]
    path.parent.mkdir(parents=True, exist_ok=True)

    fd, tmp_name = tempfile.mkstemp(prefix=".events-", suffix=".json", dir=str(path.parent))
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as handle:
            json.dump(payload, handle, indent=2, ensure_ascii=False)
            handle.write("\n")
        os.replace(tmp_name, path)
    except BaseException:
        if os.path.exists(tmp_name):
            os.unlink(tmp_name)
        raise

    logger.debug("Saved %d event(s) to %s", len(payload), path)
