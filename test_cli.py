import json
from pathlib import Path

import pytest

import chronoplan.__main__ as cli
from chronoplan.exceptions import (
    CalendarAPIError,
    EventFileError,
    EventValidationError,
    IntentParseError,
    RetryExhaustedError,
)
from chronoplan.ui.error_messages import INTENT_FALLBACK, get_user_friendly_error


@pytest.fixture
def events_file(tmp_path: Path) -> Path:
    return tmp_path / "events.json"


def _run(events_file: Path, *argv: str) -> int:
    return cli.main(["--events-file", str(events_file), *argv])


def _stored(events_file: Path):
    return json.loads(events_file.read_text(encoding="utf-8"))


def test_add_then_list(events_file, capsys) -> None:
    code = _run(
        events_file, "add", "--title", "Design Sprint", "--start", "2024-06-10",
        "--end", "2024-06-12", "--start-time", "9:00", "--color", "indigo",
    )

    assert code == 0
    (stored,) = _stored(events_file)
    assert stored["startTime"] == "09:00"
    assert stored["color"] == "indigo"

    capsys.readouterr()
    assert _run(events_file, "list") == 0
    out = capsys.readouterr().out
    assert out.splitlines()[0] == "JUNE 2024"
    assert "10 - 12 Jun  09:00  Design Sprint  <indigo>" in out


def test_add_defaults_end_date_to_start(events_file) -> None:
    assert _run(events_file, "add", "--title", "Lunch", "--start", "2024-06-14") == 0
    assert _stored(events_file)[0]["endDate"] == "2024-06-14"


def test_invalid_add_reports_reason_and_keeps_file(events_file, capsys) -> None:
    code = _run(events_file, "add", "--title", "Bad", "--start", "2024-06-05", "--end", "2024-06-01")

    assert code == 1
    assert "End date cannot be before start date." in capsys.readouterr().err
    assert not events_file.exists()


def test_edit_keeps_id_and_unchanged_fields(events_file) -> None:
    _run(events_file, "add", "--title", "Sync", "--start", "2024-06-12", "--description", "Weekly")
    event_id = _stored(events_file)[0]["id"]

    assert _run(events_file, "edit", event_id, "--title", "Sync (moved)") == 0

    (stored,) = _stored(events_file)
    assert stored["id"] == event_id
    assert stored["title"] == "Sync (moved)"
    assert stored["description"] == "Weekly"


def test_edit_unknown_id(events_file, capsys) -> None:
    assert _run(events_file, "edit", "missing", "--title", "X", "--start", "2024-06-01") == 1
    assert "no longer exists" in capsys.readouterr().err


def test_delete(events_file, capsys) -> None:
    _run(events_file, "add", "--title", "Sync", "--start", "2024-06-12")
    event_id = _stored(events_file)[0]["id"]

    assert _run(events_file, "delete", event_id) == 0
    assert _stored(events_file) == []
    assert _run(events_file, "delete", event_id) == 1
    assert f"No event with id {event_id}" in capsys.readouterr().err


def test_read_only_refuses_changes(events_file, capsys) -> None:
    code = cli.main(["--events-file", str(events_file), "--read-only", "add", "--title", "X", "--start", "2024-06-01"])

    assert code == 1
    assert "read-only" in capsys.readouterr().err
    assert not events_file.exists()

    assert cli.main(["--events-file", str(events_file), "--read-only", "list"]) == 0
    assert capsys.readouterr().out.strip() == "No events scheduled yet."


def test_month_view(events_file, capsys) -> None:
    _run(events_file, "add", "--title", "Trip", "--start", "2024-05-31", "--end", "2024-06-02")
    capsys.readouterr()

    assert _run(events_file, "month", "2024-06") == 0

    out = capsys.readouterr().out
    assert out.splitlines()[0] == "June 2024"
    assert "(31)" in out
    assert "Trip (Start)" in out
    assert "Trip (End)" in out


def test_bad_month_argument(events_file, capsys) -> None:
    assert _run(events_file, "month", "June") == 2
    assert "Expected YYYY-MM" in capsys.readouterr().err


def test_ask_uses_the_intent_parser(events_file, monkeypatch, capsys) -> None:
    class StubParser:
        def parse(self, text):
            assert text == "Project Sync next Monday at 10am"
            return {"title": "Project Sync", "startDate": "2024-06-17", "endDate": "2024-06-17",
                    "startTime": "10:00", "color": "purple"}

    monkeypatch.setattr(cli, "_make_parser", StubParser)

    assert _run(events_file, "ask", "Project", "Sync", "next", "Monday", "at", "10am") == 0
    assert "Project Sync  <purple>" in capsys.readouterr().out
    assert _stored(events_file)[0]["color"] == "purple"


def test_ask_without_key(events_file, monkeypatch, capsys) -> None:
    monkeypatch.setattr(cli, "_make_parser", lambda: None)
    assert _run(events_file, "ask", "Lunch") == 1
    assert "set-key" in capsys.readouterr().err


def test_export(events_file, tmp_path, capsys) -> None:
    _run(events_file, "add", "--title", "Sync", "--start", "2024-06-12")
    target = tmp_path / "out.ics"

    assert _run(events_file, "export", str(target)) == 0

    assert "SUMMARY:Sync" in target.read_text(encoding="utf-8")
    assert "Exported 1 event(s)" in capsys.readouterr().out


def test_corrupt_events_file(events_file, capsys) -> None:
    events_file.write_text("{broken", encoding="utf-8")
    assert _run(events_file, "list") == 1
    assert "Could not load your events" in capsys.readouterr().err


def test_export_refuses_invalid_stored_event(events_file, tmp_path, capsys) -> None:
    events_file.write_text(json.dumps([{
        "id": "a", "title": "Sync", "startDate": "2024-06-05",
        "endDate": "2024-06-05", "startTime": "9am",
    }]), encoding="utf-8")
    target = tmp_path / "out.ics"

    assert _run(events_file, "export", str(target)) == 1

    assert "Could not load your events" in capsys.readouterr().err
    assert not target.exists()


def test_internal_value_errors_are_not_reported_as_bad_input(events_file, monkeypatch) -> None:
    def broken(events, stamp=None):
        raise ValueError("internal failure")

    monkeypatch.setattr(cli, "build_ics", broken)

    with pytest.raises(ValueError, match="internal failure"):
        _run(events_file, "export", "out.ics")


@pytest.mark.parametrize(
    "error, expected",
    [
        (EventValidationError("missing-title"), "Please give the event a title."),
        (EventValidationError("something-new", "Raw text"), "Raw text"),
        (CalendarAPIError("API key is invalid."), "Your API key appears to be invalid or expired. Please check your settings."),
        (RetryExhaustedError(3, TimeoutError("timeout")), "Failed after multiple attempts. Last error: Request timed out. Please try again."),
        (IntentParseError("model said no"), INTENT_FALLBACK),
        (EventFileError("bad file"), "Could not load your events: bad file"),
        (RuntimeError("boom"), "An error occurred: boom"),
    ],
)
def test_user_friendly_errors(error, expected) -> None:
    assert get_user_friendly_error(error) == expected
