from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Sequence

from ..core.enums import ApprovalStatus, WorkMode
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall
from .model import AttendanceLog
from .repository import AttendanceRepository

_COLUMNS = "log_id, user_id, work_date, clock_in, clock_out, status, mode"


def _to_log(r: dict) -> AttendanceLog:
    return AttendanceLog(
        log_id=int(r["log_id"]),
        user_id=int(r["user_id"]),
        work_date=r["work_date"],
        clock_in=r["clock_in"],
        clock_out=r.get("clock_out"),
        status=ApprovalStatus(r["status"]),
        mode=WorkMode(r.get("mode") or WorkMode.ONSITE.value),
    )


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_between(
        self,
        *,
        start_date: date,
        end_date: date,
        user_id: Optional[int] = None,
    ) -> Sequence[AttendanceLog]:
        clauses = ["work_date >= %s", "work_date <= %s"]
        params: list[object] = [start_date, end_date]
        if user_id is not None:
            clauses.append("user_id=%s")
            params.append(int(user_id))

        where = " AND ".join(clauses)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance_logs
                WHERE {where}
                """,
                tuple(params),
            )
            return [_to_log(r) for r in fetchall(cur)]

    def list_for_date(self, work_date: date) -> Sequence[AttendanceLog]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance_logs
                WHERE work_date=%s
                ORDER BY clock_in
                """,
                (work_date,),
            )
            return [_to_log(r) for r in fetchall(cur)]

    def create_log(
        self,
        *,
        user_id: int,
        work_date: date,
        clock_in: datetime,
        clock_out: Optional[datetime],
        status: ApprovalStatus,
        mode: WorkMode = WorkMode.ONSITE,
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO attendance_logs(user_id, work_date, clock_in, clock_out, status, mode)
                VALUES(%s,%s,%s,%s,%s,%s)
                """,
                (int(user_id), work_date, clock_in, clock_out, status.value, mode.value),
            )
            return int(cur.lastrowid)
