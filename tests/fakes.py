from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, time
from typing import Optional

from src.absence_calendar.absence_calendar.attendance.model import AttendanceLog
from src.absence_calendar.absence_calendar.container import wire
from src.absence_calendar.absence_calendar.core.constants import UNEXCUSED_ABSENCE_REASON
from src.absence_calendar.absence_calendar.core.enums import ApprovalStatus, Role, WorkMode
from src.absence_calendar.absence_calendar.core.exceptions import BackendError
from src.absence_calendar.absence_calendar.holidays.model import HolidayEvent
from src.absence_calendar.absence_calendar.leaves.model import LeaveRequest
from src.absence_calendar.absence_calendar.maintenance.repository import ProcedureUnavailable
from src.absence_calendar.absence_calendar.users.model import Profile


def make_log(user_id: int, work_date: date, status: ApprovalStatus = ApprovalStatus.APPROVED, log_id: int = 0) -> AttendanceLog:
    return AttendanceLog(
        log_id=log_id,
        user_id=user_id,
        work_date=work_date,
        clock_in=datetime.combine(work_date, time(8, 45)),
        clock_out=None,
        status=status,
        mode=WorkMode.ONSITE,
    )


def make_leave(
    user_id: int,
    start: date,
    end: Optional[date] = None,
    reason: str = "Vacation",
    status: ApprovalStatus = ApprovalStatus.APPROVED,
    request_id: int = 0,
) -> LeaveRequest:
    return LeaveRequest(
        request_id=request_id,
        user_id=user_id,
        start_date=start,
        end_date=end or start,
        reason=reason,
        status=status,
    )


@dataclass
class InMemoryProfiles:
    profiles: list[Profile] = field(default_factory=list)

    def list_by_roles(self, roles):
        roles = {Role(r) for r in roles}
        return sorted((p for p in self.profiles if p.role in roles), key=lambda p: p.full_name)


@dataclass
class InMemoryAttendance:
    logs: list[AttendanceLog] = field(default_factory=list)
    fail: bool = False
    calls: list[dict] = field(default_factory=list)

    def list_between(self, *, start_date, end_date, user_id=None):
        if self.fail:
            raise BackendError("attendance query failed")
        self.calls.append({"start_date": start_date, "end_date": end_date, "user_id": user_id})
        return [
            l
            for l in self.logs
            if start_date <= l.work_date <= end_date and (user_id is None or l.user_id == user_id)
        ]

    def list_for_date(self, work_date):
        return [l for l in self.logs if l.work_date == work_date]

    def create_log(self, *, user_id, work_date, clock_in, clock_out, status, mode=WorkMode.ONSITE):
        log_id = len(self.logs) + 1
        self.logs.append(
            AttendanceLog(
                log_id=log_id,
                user_id=user_id,
                work_date=work_date,
                clock_in=clock_in,
                clock_out=clock_out,
                status=status,
                mode=mode,
            )
        )
        return log_id


@dataclass
class InMemoryLeaves:
    leaves: list[LeaveRequest] = field(default_factory=list)
    fail_delete: bool = False
    calls: list[dict] = field(default_factory=list)

    def _next_id(self):
        return len(self.leaves) + 1

    def list_approved_overlapping(self, *, start_date, end_date, user_id=None):
        self.calls.append({"start_date": start_date, "end_date": end_date, "user_id": user_id})
        return [
            l
            for l in self.leaves
            if l.status == ApprovalStatus.APPROVED
            and l.start_date <= end_date
            and l.end_date >= start_date
            and (user_id is None or l.user_id == user_id)
        ]

    def list_approved_covering(self, day):
        return self.list_approved_overlapping(start_date=day, end_date=day)

    def create_leave(self, *, user_id, start_date, end_date, reason, status, hr_comment=None):
        rid = self._next_id()
        self.leaves.append(
            LeaveRequest(
                request_id=rid,
                user_id=user_id,
                start_date=start_date,
                end_date=end_date,
                reason=reason,
                status=status,
                hr_comment=hr_comment,
            )
        )
        return rid

    def create_unexcused_absences(self, *, user_ids, day, hr_comment):
        for uid in user_ids:
            self.create_leave(
                user_id=uid,
                start_date=day,
                end_date=day,
                reason=UNEXCUSED_ABSENCE_REASON,
                status=ApprovalStatus.APPROVED,
                hr_comment=hr_comment,
            )
        return len(user_ids)

    def reject_approved_covering(self, *, user_id, day, hr_comment):
        count = 0
        for i, l in enumerate(self.leaves):
            if l.user_id == user_id and l.status == ApprovalStatus.APPROVED and l.covers(day):
                self.leaves[i] = LeaveRequest(
                    request_id=l.request_id,
                    user_id=l.user_id,
                    start_date=l.start_date,
                    end_date=l.end_date,
                    reason=l.reason,
                    status=ApprovalStatus.REJECTED,
                    hr_comment=hr_comment,
                )
                count += 1
        return count

    def delete_unexcused_from(self, start_date):
        if self.fail_delete:
            raise BackendError("delete failed")
        before = len(self.leaves)
        self.leaves = [l for l in self.leaves if not (l.is_unexcused and l.start_date >= start_date)]
        return before - len(self.leaves)


@dataclass
class InMemoryHolidays:
    events: list[HolidayEvent] = field(default_factory=list)

    def list_for_date(self, event_date):
        return [e for e in self.events if e.event_date == event_date]


@dataclass
class InMemoryAudit:
    entries: list[dict] = field(default_factory=list)
    fail: bool = False

    def insert(self, *, actor_id, action, table_name, details):
        if self.fail:
            raise BackendError("audit insert failed")
        self.entries.append({"actor_id": actor_id, "action": action, "table_name": table_name, "details": dict(details)})
        return len(self.entries)


@dataclass
class FakeMaintenanceGateway:
    cleanup_available: bool = True
    fail_mark: bool = False
    cleanup_calls: int = 0
    mark_calls: list[tuple[date, date]] = field(default_factory=list)

    def cleanup_future_absences(self):
        self.cleanup_calls += 1
        if not self.cleanup_available:
            raise ProcedureUnavailable("cleanup_future_absences")
        return 0

    def mark_absent_for_missing_days(self, *, check_from_date, check_to_date):
        if self.fail_mark:
            raise BackendError("mark_absent_for_missing_days failed")
        self.mark_calls.append((check_from_date, check_to_date))
        return 0


def build_fake_container(
    *,
    profiles: Optional[InMemoryProfiles] = None,
    attendance: Optional[InMemoryAttendance] = None,
    leaves: Optional[InMemoryLeaves] = None,
    holidays: Optional[InMemoryHolidays] = None,
    audit: Optional[InMemoryAudit] = None,
    maintenance: Optional[FakeMaintenanceGateway] = None,
):
    return wire(
        profiles=profiles or InMemoryProfiles(),
        attendance=attendance or InMemoryAttendance(),
        leaves=leaves or InMemoryLeaves(),
        holidays=holidays or InMemoryHolidays(),
        audit=audit or InMemoryAudit(),
        maintenance=maintenance or FakeMaintenanceGateway(),
    )
