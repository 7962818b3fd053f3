from __future__ import annotations

from datetime import date

from src.absence_calendar.absence_calendar.calendar_view.presenter import build_month_grid, leading_blanks
from src.absence_calendar.absence_calendar.calendar_view.reducer import reduce_month, sorted_days
from src.absence_calendar.absence_calendar.core.constants import UNEXCUSED_ABSENCE_REASON
from tests.fakes import make_leave, make_log

TODAY = date(2024, 3, 20)


def _cells(grid):
    return [c for week in grid["weeks"] for c in week if c is not None]


def test_leading_blanks_match_first_weekday():
    # 2024-03-01 is a Friday, 2024-09-01 a Sunday.
    assert leading_blanks(2024, 2) == 5
    assert leading_blanks(2024, 8) == 0


def test_grid_shape_and_padding():
    days = sorted_days(reduce_month(2024, 2, [], [], single_user=False, today=TODAY))
    grid = build_month_grid(days, 2024, 2, single_user=False, today=TODAY)

    assert grid["title"] == "March 2024"
    assert grid["weekdays"][0] == "Sun"
    assert all(len(week) == 7 for week in grid["weeks"])
    assert grid["weeks"][0][:5] == [None] * 5
    assert grid["weeks"][0][5]["day"] == 1
    assert len(_cells(grid)) == 31


def test_aggregate_badges_show_non_zero_counts_and_are_clickable():
    day = date(2024, 3, 12)
    stats = reduce_month(
        2024,
        2,
        [make_log(1, day), make_log(2, day)],
        [make_leave(3, day, reason=UNEXCUSED_ABSENCE_REASON)],
        single_user=False,
        today=TODAY,
    )
    grid = build_month_grid(sorted_days(stats), 2024, 2, single_user=False, today=TODAY)
    cell = next(c for c in _cells(grid) if c["date"] == "2024-03-12")

    assert cell["clickable"] is True
    assert [(b["label"], b["count"]) for b in cell["badges"]] == [("Present", 2), ("Absent", 1)]


def test_single_user_has_one_badge_and_no_click():
    stats = reduce_month(2024, 2, [], [make_leave(1, date(2024, 3, 13))], single_user=True, today=TODAY)
    grid = build_month_grid(sorted_days(stats), 2024, 2, single_user=True, today=TODAY)
    cells = {c["date"]: c for c in _cells(grid)}

    assert cells["2024-03-13"]["badges"] == [{"kind": "leave", "label": "Leave"}]
    assert cells["2024-03-14"]["badges"] == []
    assert not cells["2024-03-13"]["clickable"]


def test_weekends_never_carry_badges():
    saturday = date(2024, 3, 9)
    stats = reduce_month(2024, 2, [make_log(1, saturday)], [], single_user=False, today=TODAY)
    grid = build_month_grid(sorted_days(stats), 2024, 2, single_user=False, today=TODAY)
    cell = next(c for c in _cells(grid) if c["date"] == "2024-03-09")

    assert cell["is_weekend"]
    assert cell["badges"] == []


def test_today_is_flagged():
    days = sorted_days(reduce_month(2024, 2, [], [], single_user=False, today=TODAY))
    grid = build_month_grid(days, 2024, 2, single_user=False, today=TODAY)
    assert [c["date"] for c in _cells(grid) if c["is_today"]] == ["2024-03-20"]
