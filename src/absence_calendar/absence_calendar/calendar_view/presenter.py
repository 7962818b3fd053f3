from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

from ..common.datetime_utils import is_weekend, month_bounds, parse_iso_date, to_local_iso_string, today_local
from ..core.constants import WEEKDAY_LABELS
from ..core.enums import DayKind
from .day_status import DayStatus

_BADGE_LABELS = {
    DayKind.PRESENT: "Present",
    DayKind.LEAVE: "Leave",
    DayKind.ABSENT: "Absent",
}


def leading_blanks(year: int, month_index: int) -> int:
    """Empty cells before day 1 in a Sunday-first week."""
    first, _ = month_bounds(year, month_index)
    return (first.weekday() + 1) % 7


def _badges(day: DayStatus, *, single_user: bool) -> list[dict]:
    if single_user:
        label = _BADGE_LABELS.get(day.kind)
        return [{"kind": day.status, "label": label}] if label else []

    out = []
    for kind, count in (
        (DayKind.PRESENT, day.present),
        (DayKind.LEAVE, day.leaves),
        (DayKind.ABSENT, day.absent_marked),
    ):
        if count > 0:
            out.append({"kind": kind.label, "label": _BADGE_LABELS[kind], "count": count})
    return out


def build_month_grid(
    days: Sequence[DayStatus],
    year: int,
    month_index: int,
    *,
    single_user: bool,
    today: Optional[date] = None,
) -> dict:
    """Lay the reduced days out as Sunday-first weeks of seven cells.

    Cells before day 1 and after the last day are ``None``. Weekend cells
    never carry badges; only aggregate cells are clickable.
    """
    today_str = to_local_iso_string(today or today_local())
    first, _ = month_bounds(year, month_index)

    cells: list[Optional[dict]] = [None] * leading_blanks(year, month_index)
    for day in sorted(days, key=lambda d: d.date):
        d = parse_iso_date(day.date)
        weekend = is_weekend(d)
        cells.append(
            {
                "date": day.date,
                "day": d.day,
                "is_today": day.date == today_str,
                "is_weekend": weekend,
                "clickable": not single_user,
                "badges": [] if weekend else _badges(day, single_user=single_user),
            }
        )

    if len(cells) % 7:
        cells.extend([None] * (7 - len(cells) % 7))

    return {
        "title": first.strftime("%B %Y"),
        "weekdays": list(WEEKDAY_LABELS),
        "weeks": [cells[i : i + 7] for i in range(0, len(cells), 7)],
    }
