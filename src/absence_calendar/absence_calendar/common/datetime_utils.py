from __future__ import annotations

import calendar
from datetime import MAXYEAR, MINYEAR, date, datetime, timedelta, tzinfo
from typing import Iterator, Optional, Union

from ..core.constants import DATE_FORMAT
from ..core.exceptions import ValidationError


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    try:
        return datetime.strptime(value, DATE_FORMAT).date()
    except (TypeError, ValueError):
        raise ValidationError(f"Invalid date (YYYY-MM-DD): {value!r}")


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()


def today_local() -> date:
    return now_local().date()


def to_local_iso_string(value: Optional[Union[date, datetime]] = None, *, tz: Optional[tzinfo] = None) -> str:
    """Return the local calendar day of ``value`` as ``YYYY-MM-DD``.

    ``None`` means "now". Naive datetimes are host wall-clock time and aware
    datetimes keep the wall clock of their own zone; the day is read off that
    wall clock, never off UTC. Pass ``tz`` to move an aware value into another
    zone first (e.g. a UTC ``clock_in`` into the office zone).
    """
    if value is None:
        value = now_local()
    if isinstance(value, datetime):
        if tz is not None and value.tzinfo is not None:
            value = value.astimezone(tz)
        value = value.date()
    return value.strftime(DATE_FORMAT)


def require_year(year: int) -> int:
    try:
        year = int(year)
    except (TypeError, ValueError):
        raise ValidationError(f"Year must be an integer, got {year!r}")
    if not MINYEAR <= year <= MAXYEAR:
        raise ValidationError(f"Year must be {MINYEAR}-{MAXYEAR}, got {year}")
    return year


def require_month_index(month_index: int) -> int:
    try:
        month_index = int(month_index)
    except (TypeError, ValueError):
        raise ValidationError(f"Month index must be an integer, got {month_index!r}")
    if not 0 <= month_index <= 11:
        raise ValidationError(f"Month index must be 0-11, got {month_index}")
    return month_index


def days_in_month(year: int, month_index: int) -> int:
    return calendar.monthrange(require_year(year), require_month_index(month_index) + 1)[1]


def month_bounds(year: int, month_index: int) -> tuple[date, date]:
    """First and last day of a month given a zero-based month index."""
    year = require_year(year)
    month = require_month_index(month_index) + 1
    return date(year, month, 1), date(year, month, days_in_month(year, month_index))


def add_months(year: int, month_index: int, delta: int) -> tuple[int, int]:
    total = int(year) * 12 + require_month_index(month_index) + int(delta)
    return total // 12, total % 12


def iter_days(start: date, end: date) -> Iterator[date]:
    """Every calendar day in ``[start, end]`` inclusive."""
    curr = start
    while curr <= end:
        yield curr
        if curr == end:
            break
        curr += timedelta(days=1)


def is_weekend(day: date) -> bool:
    return day.weekday() >= 5
