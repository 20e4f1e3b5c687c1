"""Entry point for running chronoplan as a module.

Usage: python -m chronoplan [--events-file PATH] [--read-only] COMMAND ...
"""

import argparse
import logging
import sys
from datetime import date
from pathlib import Path
from typing import Any, Dict, List, Optional

from chronoplan.config.settings import CALENDAR_CONFIG
from chronoplan.core.app_state import CalendarApp
from chronoplan.core.event_model import EventColor
from chronoplan.core.event_store import EventStore
from chronoplan.core.ics_export import build_ics
from chronoplan.core.intent_parser import GeminiIntentParser
from chronoplan.exceptions.errors import ChronoPlanError
from chronoplan.storage.event_file import load_events, save_events
from chronoplan.storage.key_manager import load_api_key, save_api_key
from chronoplan.ui.error_messages import get_user_friendly_error
from chronoplan.ui.terminal import render_event_line, render_groups, render_month
from chronoplan.utils.date_parsing import parse_month_argument

logger = logging.getLogger("chronoplan")

# CLI option -> draft key
DRAFT_OPTIONS = {
    "title": "title",
    "start": "startDate",
    "end": "endDate",
    "start_time": "startTime",
    "end_time": "endTime",
    "description": "description",
    "color": "color",
}


def _add_event_options(parser: argparse.ArgumentParser, required: bool) -> None:
    parser.add_argument("--title", required=required)
    parser.add_argument("--start", required=required, help="start date, YYYY-MM-DD")
    parser.add_argument("--end", help="end date, YYYY-MM-DD (default: start date)")
    parser.add_argument("--start-time", help="HH:mm")
    parser.add_argument("--end-time", help="HH:mm")
    parser.add_argument("--description")
    parser.add_argument("--color", choices=[c.value for c in EventColor])


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="chronoplan", description="Month calendar with AI event entry.")
    parser.add_argument("--events-file", type=Path, default=CALENDAR_CONFIG.events_file)
    parser.add_argument("--read-only", action="store_true", default=CALENDAR_CONFIG.read_only)
    parser.add_argument("--color-output", action="store_true", help="colorize event labels")
    parser.add_argument("-v", "--verbose", action="store_true")

    commands = parser.add_subparsers(dest="command", required=True)

    month = commands.add_parser("month", help="show a month grid")
    month.add_argument("month", nargs="?", help="YYYY-MM (default: current month)")

    commands.add_parser("list", help="list all events grouped by month")

    add = commands.add_parser("add", help="create an event")
    _add_event_options(add, required=True)

    edit = commands.add_parser("edit", help="replace fields of an event")
    edit.add_argument("id")
    _add_event_options(edit, required=False)

    delete = commands.add_parser("delete", help="delete an event")
    delete.add_argument("id")

    ask = commands.add_parser("ask", help="create an event from free text with Gemini")
    ask.add_argument("text", nargs="+")

    export = commands.add_parser("export", help="write all events to an .ics file")
    export.add_argument("path", type=Path)

    set_key = commands.add_parser("set-key", help="store the Gemini API key")
    set_key.add_argument("key")

    return parser


def _draft_from_args(args: argparse.Namespace, base: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    draft = dict(base or {})
    for option, key in DRAFT_OPTIONS.items():
        value = getattr(args, option, None)
        if value is not None:
            draft[key] = value
    if "endDate" not in draft and "startDate" in draft:
        draft["endDate"] = draft["startDate"]
    return draft


def _make_parser():
    """Build the Gemini intent parser, or None when no key is stored."""
    api_key = load_api_key()
    if not api_key:
        return None
    return GeminiIntentParser(api_key)


def run(args: argparse.Namespace) -> int:
    if args.command == "set-key":
        if save_api_key(args.key):
            print("API key saved.")
            return 0
        print("Failed to save the API key.", file=sys.stderr)
        return 1

    store = EventStore(load_events(args.events_file))
    app = CalendarApp(store, read_only=args.read_only)
    mutating = args.command in {"add", "edit", "delete", "ask"}

    if mutating and app.read_only:
        print("Calendar is read-only; switch off --read-only to change events.", file=sys.stderr)
        return 1

    if args.command == "month":
        if args.month:
            try:
                app.go_to(parse_month_argument(args.month))
            except ValueError as e:
                print(f"Invalid argument: {e}", file=sys.stderr)
                return 2
        print(render_month(app.title, app.placements(), use_color=args.color_output))
        return 0

    if args.command == "list":
        print(render_groups(app.groups(), read_only=app.read_only))
        return 0

    if args.command == "export":
        args.path.write_text(build_ics(store.list()), encoding="utf-8", newline="")
        print(f"Exported {len(store)} event(s) to {args.path}")
        return 0

    if args.command == "add":
        event = app.save_event(_draft_from_args(args))
    elif args.command == "edit":
        current = store.get(args.id)
        base = current.to_dict() if current else {}
        event = app.save_event(_draft_from_args(args, base), editing_id=args.id)
    elif args.command == "delete":
        if not app.delete_event(args.id):
            print(f"No event with id {args.id}", file=sys.stderr)
            return 1
        event = None
    else:
        app.parser = _make_parser()
        if app.parser is None:
            print("No Gemini API key found. Run 'chronoplan set-key KEY' first.", file=sys.stderr)
            return 1
        event = app.add_from_text(" ".join(args.text))

    save_events(args.events_file, store.list())
    if event is not None:
        print(render_event_line(event))
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the application."""
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )
    logger.debug("Running %s on %s (today is %s)", args.command, args.events_file, date.today())

    try:
        return run(args)
    except ChronoPlanError as e:
        logger.debug("Command failed", exc_info=True)
        print(get_user_friendly_error(e), file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
