from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.repository import AttendanceRepository
from .audit.mysql_audit_repository import MySQLAuditRepository
from .audit.repository import AuditRepository
from .audit.service import AuditService
from .calendar_view.daily import DailyAttendanceService
from .calendar_view.fetcher import RecordFetcher
from .calendar_view.service import MonthStatsService
from .database.connection import DatabaseConnection, DBConfig
from .holidays.mysql_holiday_repository import MySQLHolidayRepository
from .holidays.repository import HolidayRepository
from .leaves.mysql_leave_repository import MySQLLeaveRepository
from .leaves.repository import LeaveRepository
from .maintenance.mysql_maintenance_gateway import MySQLMaintenanceGateway
from .maintenance.repository import MaintenanceGateway
from .maintenance.service import AbsenceAutoMarker
from .users.mysql_profile_repository import MySQLProfileRepository
from .users.repository import ProfileRepository


@dataclass(frozen=True)
class Container:
    conn: Optional[DatabaseConnection]

    profiles_repo: ProfileRepository
    attendance_repo: AttendanceRepository
    leaves_repo: LeaveRepository
    holidays_repo: HolidayRepository
    audit_repo: AuditRepository
    maintenance_gateway: MaintenanceGateway

    audit_service: AuditService
    record_fetcher: RecordFetcher
    absence_auto_marker: AbsenceAutoMarker
    month_stats_service: MonthStatsService
    daily_attendance_service: DailyAttendanceService


def wire(
    *,
    profiles: ProfileRepository,
    attendance: AttendanceRepository,
    leaves: LeaveRepository,
    holidays: HolidayRepository,
    audit: AuditRepository,
    maintenance: MaintenanceGateway,
    conn: Optional[DatabaseConnection] = None,
) -> Container:
    """Build services on top of any repository implementations."""
    audit_service = AuditService(audit)
    fetcher = RecordFetcher(attendance, leaves, holidays, profiles)
    auto_marker = AbsenceAutoMarker(maintenance, leaves)

    return Container(
        conn=conn,
        profiles_repo=profiles,
        attendance_repo=attendance,
        leaves_repo=leaves,
        holidays_repo=holidays,
        audit_repo=audit,
        maintenance_gateway=maintenance,
        audit_service=audit_service,
        record_fetcher=fetcher,
        absence_auto_marker=auto_marker,
        month_stats_service=MonthStatsService(fetcher, auto_marker),
        daily_attendance_service=DailyAttendanceService(fetcher, attendance, leaves, audit_service),
    )


def build_container(*, db_config: dict) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_settings(db_config))
    return wire(
        profiles=MySQLProfileRepository(conn),
        attendance=MySQLAttendanceRepository(conn),
        leaves=MySQLLeaveRepository(conn),
        holidays=MySQLHolidayRepository(conn),
        audit=MySQLAuditRepository(conn),
        maintenance=MySQLMaintenanceGateway(conn),
        conn=conn,
    )
