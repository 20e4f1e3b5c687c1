from datetime import date

from chronoplan.core.date_range import build_month_grid
from chronoplan.core.grid_builder import (
    SEGMENT_CONTINUATION,
    SEGMENT_END,
    SEGMENT_START,
    events_for_date,
    place_event,
    render,
)


def _cell(rendered, day: date):
    return next(c for c in rendered if c.cell.date == day)


def test_multi_day_event_labels(make_event) -> None:
    sprint = make_event(date(2024, 6, 10), date(2024, 6, 12), title="Design Sprint", start_time="09:00")
    rendered = render(build_month_grid(2024, 6, today=date(2024, 6, 1)), [sprint])

    start = _cell(rendered, date(2024, 6, 10)).placements[0]
    middle = _cell(rendered, date(2024, 6, 11)).placements[0]
    end = _cell(rendered, date(2024, 6, 12)).placements[0]

    assert (start.segment, start.show_time, start.label) == (
        SEGMENT_START, True, "09:00 Design Sprint (Start)"
    )
    assert (middle.segment, middle.show_time, middle.label) == (
        SEGMENT_CONTINUATION, False, "Design Sprint (Cont.)"
    )
    assert (end.segment, end.show_time, end.label) == (
        SEGMENT_END, False, "Design Sprint (End)"
    )
    assert _cell(rendered, date(2024, 6, 13)).placements == ()


def test_single_day_event_shows_time_without_tag(make_event) -> None:
    lunch = make_event(date(2024, 6, 14), title="Lunch with Client", start_time="12:30")

    placement = place_event(lunch, date(2024, 6, 14))

    assert placement.segment is None
    assert placement.tag == ""
    assert placement.label == "12:30 Lunch with Client"


def test_untimed_event_label_is_just_the_title(make_event) -> None:
    freeze = make_event(date(2024, 6, 20), title="Code Freeze")
    assert place_event(freeze, date(2024, 6, 20)).label == "Code Freeze"


def test_event_starting_on_previous_month_filler_cell(make_event) -> None:
    trip = make_event(date(2024, 5, 31), date(2024, 6, 2), title="Trip")
    rendered = render(build_month_grid(2024, 6, today=date(2024, 6, 1)), [trip])

    filler = _cell(rendered, date(2024, 5, 31))
    assert not filler.cell.is_current_month
    assert filler.placements[0].segment == SEGMENT_START
    assert _cell(rendered, date(2024, 6, 2)).placements[0].segment == SEGMENT_END


def test_render_covers_every_cell(make_event) -> None:
    grid = build_month_grid(2024, 6, today=date(2024, 6, 1))
    rendered = render(grid, [make_event(date(2024, 6, 3))])

    assert len(rendered) == 42
    assert [c.cell for c in rendered] == grid
    assert sum(len(c.placements) for c in rendered) == 1


def test_cell_order_is_deterministic(make_event) -> None:
    timed = make_event(date(2024, 6, 10), title="b standup", start_time="10:00")
    early = make_event(date(2024, 6, 10), title="a review", start_time="08:00")
    untimed = make_event(date(2024, 6, 10), title="Holiday")
    ongoing = make_event(date(2024, 6, 8), date(2024, 6, 11), title="Conference")

    ordered = events_for_date([timed, early, untimed, ongoing], date(2024, 6, 10))

    assert [e.title for e in ordered] == ["Conference", "Holiday", "a review", "b standup"]


def test_full_ties_keep_source_order(make_event) -> None:
    first = make_event(date(2024, 6, 10), title="Same", event_id="first")
    second = make_event(date(2024, 6, 10), title="same", event_id="second")

    assert [e.id for e in events_for_date([first, second], date(2024, 6, 10))] == ["first", "second"]
    assert [e.id for e in events_for_date([second, first], date(2024, 6, 10))] == ["second", "first"]
