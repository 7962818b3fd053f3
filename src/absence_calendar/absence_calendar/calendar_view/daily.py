from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, datetime
from typing import Callable, Optional

from ..attendance.repository import AttendanceRepository
from ..audit.service import AuditService
from ..common.datetime_utils import to_local_iso_string, today_local
from ..core.constants import MANUAL_CLOCK_IN, MANUAL_CLOCK_OUT, PRESENT_OVERRIDE_COMMENT, UNEXCUSED_ABSENCE_REASON
from ..core.enums import ApprovalStatus, DailyStatusKind, WorkMode
from ..core.exceptions import ValidationError
from ..leaves.repository import LeaveRepository
from .day_status import DailyRoster, DailyStatus
from .fetcher import RecordFetcher
from .reducer import reduce_day

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class OverrideResult:
    """Outcome of a manual override: rows touched plus the re-read roster."""

    affected: int
    roster: DailyRoster

    def to_dict(self) -> dict:
        return {"affected": self.affected, **self.roster.to_dict()}


class DailyAttendanceService:
    """Single-day drill-down: who is present, on leave, absent, or unaccounted.

    Overrides write to the backend and then re-read the day, so callers
    always get the persisted state back rather than a locally patched copy.
    """

    def __init__(
        self,
        fetcher: RecordFetcher,
        attendance: AttendanceRepository,
        leaves: LeaveRepository,
        audit: AuditService,
        *,
        clock: Callable[[], date] = today_local,
    ):
        self._fetcher = fetcher
        self._attendance = attendance
        self._leaves = leaves
        self._audit = audit
        self._clock = clock

    def _load(self, day: date) -> DailyRoster:
        records = self._fetcher.fetch_day(day)
        statuses = reduce_day(day, records.profiles, records.logs, records.leaves, records.holidays)
        return DailyRoster(
            date=to_local_iso_string(day),
            statuses=tuple(statuses),
            holiday_title=records.holidays[0].title if records.holidays else None,
        )

    def get_daily_roster(self, day: date, search: Optional[str] = None) -> DailyRoster:
        roster = self._load(day)
        term = (search or "").strip().lower()
        if not term:
            return roster
        return DailyRoster(
            date=roster.date,
            statuses=tuple(s for s in roster.statuses if term in s.full_name.lower()),
            holiday_title=roster.holiday_title,
        )

    def _require_member(self, roster: DailyRoster, user_id: int) -> DailyStatus:
        current = roster.find(int(user_id))
        if current is None:
            raise ValidationError("Employee is not on the active roster")
        return current

    def mark_present(self, *, actor_id: int, user_id: int, day: date) -> OverrideResult:
        if day > self._clock():
            raise ValidationError("Cannot mark a future day as present")

        current = self._require_member(self._load(day), user_id)
        if current.status == DailyStatusKind.PRESENT:
            raise ValidationError("Employee is already marked present")

        rejected = 0
        if current.status in (DailyStatusKind.LEAVE, DailyStatusKind.ABSENT_MARKED):
            rejected = self._leaves.reject_approved_covering(
                user_id=int(user_id),
                day=day,
                hr_comment=PRESENT_OVERRIDE_COMMENT,
            )

        self._attendance.create_log(
            user_id=int(user_id),
            work_date=day,
            clock_in=datetime.combine(day, MANUAL_CLOCK_IN),
            clock_out=datetime.combine(day, MANUAL_CLOCK_OUT),
            status=ApprovalStatus.APPROVED,
            mode=WorkMode.ONSITE,
        )
        log.info("user %s marked present on %s by %s (rejected %d leave rows)", user_id, day, actor_id, rejected)
        self._audit.record(
            actor_id,
            "ATTENDANCE_MARKED_PRESENT",
            "attendance_logs",
            user_id=int(user_id),
            work_date=day.isoformat(),
            previous_status=current.status.value,
            leaves_rejected=rejected,
        )
        return OverrideResult(affected=1, roster=self._load(day))

    def mark_absent(self, *, actor_id: int, user_id: int, day: date) -> OverrideResult:
        if day >= self._clock():
            raise ValidationError("Only past days can be marked absent")

        current = self._require_member(self._load(day), user_id)
        if current.status == DailyStatusKind.PRESENT:
            raise ValidationError("Employee has an attendance record for this day")
        if current.status == DailyStatusKind.ABSENT_MARKED:
            raise ValidationError("Employee is already marked absent")
        if current.status == DailyStatusKind.LEAVE:
            raise ValidationError("Employee is on approved leave for this day")

        self._leaves.create_leave(
            user_id=int(user_id),
            start_date=day,
            end_date=day,
            reason=UNEXCUSED_ABSENCE_REASON,
            status=ApprovalStatus.APPROVED,
            hr_comment=f"Marked absent by HR on {self._clock().isoformat()}",
        )
        log.info("user %s marked absent on %s by %s", user_id, day, actor_id)
        self._audit.record(
            actor_id,
            "ATTENDANCE_MARKED_ABSENT",
            "leave_requests",
            user_id=int(user_id),
            work_date=day.isoformat(),
            previous_status=current.status.value,
        )
        return OverrideResult(affected=1, roster=self._load(day))

    def bulk_mark_absent(self, *, actor_id: int, day: date) -> OverrideResult:
        """Mark every unaccounted person absent for a past day."""
        if day >= self._clock():
            raise ValidationError("Only past days can be marked absent")

        roster = self._load(day)
        pending = [s.user_id for s in roster.statuses if s.status == DailyStatusKind.ABSENT]
        if not pending:
            return OverrideResult(affected=0, roster=roster)

        affected = self._leaves.create_unexcused_absences(
            user_ids=pending,
            day=day,
            hr_comment=f"Bulk marked absent by HR on {self._clock().isoformat()}",
        )
        log.info("bulk marked %d users absent on %s by %s", affected, day, actor_id)
        self._audit.record(
            actor_id,
            "ATTENDANCE_BULK_MARKED_ABSENT",
            "leave_requests",
            work_date=day.isoformat(),
            affected_rows=affected,
        )
        return OverrideResult(affected=affected, roster=self._load(day))
