from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional, Sequence

from ..attendance.model import AttendanceLog
from ..attendance.repository import AttendanceRepository
from ..common.datetime_utils import month_bounds
from ..core.enums import ACTIVE_ROLES
from ..holidays.model import HolidayEvent
from ..holidays.repository import HolidayRepository
from ..leaves.model import LeaveRequest
from ..leaves.repository import LeaveRepository
from ..users.model import Profile
from ..users.repository import ProfileRepository


@dataclass(frozen=True)
class MonthRecords:
    logs: Sequence[AttendanceLog]
    leaves: Sequence[LeaveRequest]


@dataclass(frozen=True)
class DayRecords:
    profiles: Sequence[Profile]
    logs: Sequence[AttendanceLog]
    leaves: Sequence[LeaveRequest]
    holidays: Sequence[HolidayEvent]


class RecordFetcher:
    """Reads the raw records behind the calendar; computes nothing.

    Backend errors propagate to the caller.
    """

    def __init__(
        self,
        attendance: AttendanceRepository,
        leaves: LeaveRepository,
        holidays: HolidayRepository,
        profiles: ProfileRepository,
    ):
        self._attendance = attendance
        self._leaves = leaves
        self._holidays = holidays
        self._profiles = profiles

    def fetch_month(self, year: int, month_index: int, user_id: Optional[int] = None) -> MonthRecords:
        start, end = month_bounds(year, month_index)
        logs = self._attendance.list_between(start_date=start, end_date=end, user_id=user_id)
        leaves = self._leaves.list_approved_overlapping(start_date=start, end_date=end, user_id=user_id)
        return MonthRecords(logs=list(logs), leaves=list(leaves))

    def fetch_day(self, day: date) -> DayRecords:
        return DayRecords(
            profiles=list(self._profiles.list_by_roles(ACTIVE_ROLES)),
            logs=list(self._attendance.list_for_date(day)),
            leaves=list(self._leaves.list_approved_covering(day)),
            holidays=list(self._holidays.list_for_date(day)),
        )
