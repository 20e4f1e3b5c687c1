from datetime import date

import pytest

from chronoplan.core import normalizer
from chronoplan.core.event_model import EventColor
from chronoplan.core.normalizer import normalize
from chronoplan.exceptions import EventValidationError


def _draft(**overrides):
    draft = {
        "title": "Product Strategy Meeting",
        "startDate": "2024-06-05",
        "endDate": "2024-06-05",
        "startTime": "10:00",
        "endTime": "11:30",
        "color": "blue",
    }
    draft.update(overrides)
    return draft


def test_end_before_start_is_rejected() -> None:
    with pytest.raises(EventValidationError) as excinfo:
        normalize(_draft(startDate="2024-06-05", endDate="2024-06-01"))

    assert excinfo.value.reason == "end-before-start"
    assert excinfo.value.field == "end_date"


def test_equal_dates_make_a_single_day_event() -> None:
    event = normalize(_draft())

    assert event.start_date == event.end_date == date(2024, 6, 5)
    assert event.title == "Product Strategy Meeting"
    assert (event.start_time, event.end_time) == ("10:00", "11:30")
    assert event.color is EventColor.BLUE


def test_dates_are_read_at_local_midnight() -> None:
    event = normalize(_draft(startDate="2024-06-01T23:30:00-07:00", endDate="2024-06-01"))
    assert event.start_date == date(2024, 6, 1)


def test_form_style_keys_and_date_objects() -> None:
    event = normalize({
        "title": "  Code Freeze  ",
        "start_date": date(2024, 6, 20),
        "end_date": "2024-06-21",
        "start_time": "",
        "description": "   ",
    })

    assert event.title == "Code Freeze"
    assert event.start_date == date(2024, 6, 20)
    assert event.end_date == date(2024, 6, 21)
    assert event.start_time is None
    assert event.description is None
    assert event.color is EventColor.BLUE


@pytest.mark.parametrize(
    "overrides, reason",
    [
        ({"title": "   "}, "missing-title"),
        ({"title": None}, "missing-title"),
        ({"startDate": None}, "missing-date"),
        ({"endDate": ""}, "missing-date"),
        ({"startDate": "2024-02-30"}, "invalid-date"),
        ({"endDate": "next tuesday"}, "invalid-date"),
        ({"startDate": "2024-06"}, "invalid-date"),
        ({"startDate": "2024"}, "invalid-date"),
        ({"startDate": "20240601"}, "invalid-date"),
        ({"startDate": "2024-W23"}, "invalid-date"),
        ({"startTime": "25:00"}, "invalid-time"),
        ({"endTime": "7pm"}, "invalid-time"),
        ({"startTime": "14:00", "endTime": "13:00"}, "end-time-before-start"),
    ],
)
def test_invalid_drafts(overrides, reason) -> None:
    with pytest.raises(EventValidationError) as excinfo:
        normalize(_draft(**overrides))
    assert excinfo.value.reason == reason


def test_multi_day_event_may_end_earlier_in_the_day() -> None:
    event = normalize(_draft(endDate="2024-06-07", startTime="14:00", endTime="09:00"))
    assert (event.start_time, event.end_time) == ("14:00", "09:00")


def test_times_are_zero_padded() -> None:
    event = normalize(_draft(startTime="9:05", endTime=" 17:45 "))
    assert (event.start_time, event.end_time) == ("09:05", "17:45")


def test_color_falls_back_to_default() -> None:
    assert normalize(_draft(color="RED")).color is EventColor.RED
    assert normalize(_draft(color="teal")).color is EventColor.BLUE
    assert normalize(_draft(color=None)).color is EventColor.BLUE
    assert normalize(_draft(color=EventColor.INDIGO)).color is EventColor.INDIGO


def test_edit_keeps_id_and_replaces_every_field() -> None:
    original = normalize(_draft(description="Discuss Q4 roadmap"))

    edited = normalize(
        {"title": "Roadmap review", "startDate": "2024-06-06", "endDate": "2024-06-06"},
        existing=original,
    )

    assert edited.id == original.id
    assert edited.title == "Roadmap review"
    assert edited.start_time is None
    assert edited.description is None


def test_create_never_reuses_an_existing_id(monkeypatch: pytest.MonkeyPatch) -> None:
    candidates = iter(["taken-id", "fresh-id"])
    monkeypatch.setattr(normalizer.uuid, "uuid4", lambda: next(candidates))

    event = normalize(_draft(), existing_ids={"taken-id"})

    assert event.id == "fresh-id"


def test_draft_id_is_ignored_on_create() -> None:
    event = normalize(_draft(id="from-the-model"))
    assert event.id != "from-the-model"
