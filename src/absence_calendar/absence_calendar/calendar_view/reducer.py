from __future__ import annotations

from datetime import date
from typing import Iterable, Optional, Sequence

from ..attendance.model import AttendanceLog
from ..common.datetime_utils import iter_days, month_bounds, to_local_iso_string, today_local
from ..core.constants import NO_RECORD_DETAILS
from ..core.enums import ApprovalStatus, DailyStatusKind, DayKind
from ..holidays.model import HolidayEvent
from ..leaves.model import LeaveRequest
from ..users.model import Profile
from .day_status import DailyStatus, DayStatus


def empty_month(year: int, month_index: int) -> dict[str, DayStatus]:
    start, end = month_bounds(year, month_index)
    return {key: DayStatus(date=key) for key in map(to_local_iso_string, iter_days(start, end))}


def reduce_month(
    year: int,
    month_index: int,
    logs: Iterable[AttendanceLog],
    leaves: Iterable[LeaveRequest],
    *,
    single_user: bool,
    today: Optional[date] = None,
) -> dict[str, DayStatus]:
    """Merge attendance logs and approved leaves into one status per day.

    Every day of the month gets an entry. Future-dated logs are dropped as bad
    data and only approved logs count as presence. Leave ranges are walked day
    by day and clipped to the month; unexcused absences count separately from
    ordinary leave. Counters are additive; the single-user ``kind`` goes
    through ``merge`` so presence is never overwritten by a leave row.
    """
    today = today or today_local()
    month_start, month_end = month_bounds(year, month_index)
    stats = empty_month(year, month_index)

    for log in logs:
        if log.work_date > today:
            continue
        if not log.is_approved:
            continue
        day = stats.get(to_local_iso_string(log.work_date))
        if day is None:
            continue
        day.present += 1
        if single_user:
            day.apply(DayKind.PRESENT)

    for leave in leaves:
        if not leave.is_approved:
            continue
        kind = DayKind.ABSENT if leave.is_unexcused else DayKind.LEAVE
        for d in iter_days(max(leave.start_date, month_start), min(leave.end_date, month_end)):
            day = stats[to_local_iso_string(d)]
            if leave.is_unexcused:
                day.absent_marked += 1
            else:
                day.leaves += 1
            if single_user:
                day.apply(kind)

    return stats


def sorted_days(stats: dict[str, DayStatus]) -> list[DayStatus]:
    return [stats[k] for k in sorted(stats)]


def reduce_day(
    day: date,
    profiles: Sequence[Profile],
    logs: Iterable[AttendanceLog],
    leaves: Iterable[LeaveRequest],
    holidays: Sequence[HolidayEvent],
) -> list[DailyStatus]:
    """Status of every rostered person on ``day``.

    Per person the first match wins: attendance log, then approved leave
    covering the day, then the company holiday, then "absent" (no record).
    A personal record always beats the holiday.
    """
    log_by_user: dict[int, AttendanceLog] = {}
    for log in logs:
        if log.work_date != day or log.status == ApprovalStatus.REJECTED:
            continue
        log_by_user.setdefault(log.user_id, log)

    leave_by_user: dict[int, LeaveRequest] = {}
    for leave in leaves:
        if leave.is_approved and leave.covers(day):
            leave_by_user.setdefault(leave.user_id, leave)

    holiday_title = holidays[0].title if holidays else None

    out: list[DailyStatus] = []
    for p in profiles:
        log = log_by_user.get(p.user_id)
        leave = leave_by_user.get(p.user_id)
        if log is not None:
            status, details = DailyStatusKind.PRESENT, log.clock_in.strftime("%H:%M")
        elif leave is not None:
            status = DailyStatusKind.ABSENT_MARKED if leave.is_unexcused else DailyStatusKind.LEAVE
            details = leave.reason
        elif holiday_title is not None:
            status, details = DailyStatusKind.HOLIDAY, holiday_title
        else:
            status, details = DailyStatusKind.ABSENT, NO_RECORD_DETAILS
        out.append(
            DailyStatus(
                user_id=p.user_id,
                full_name=p.full_name,
                avatar_url=p.avatar_url,
                status=status,
                details=details,
            )
        )
    return out
