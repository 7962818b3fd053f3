from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

from ..core.constants import UNEXCUSED_ABSENCE_REASON
from ..core.enums import ApprovalStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall
from .model import LeaveRequest
from .repository import LeaveRepository

_COLUMNS = "request_id, user_id, start_date, end_date, reason, status, hr_comment"


def _to_leave(r: dict) -> LeaveRequest:
    return LeaveRequest(
        request_id=int(r["request_id"]),
        user_id=int(r["user_id"]),
        start_date=r["start_date"],
        end_date=r["end_date"],
        reason=r["reason"],
        status=ApprovalStatus(r["status"]),
        hr_comment=r.get("hr_comment"),
    )


class MySQLLeaveRepository(LeaveRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_approved_overlapping(
        self,
        *,
        start_date: date,
        end_date: date,
        user_id: Optional[int] = None,
    ) -> Sequence[LeaveRequest]:
        clauses = ["status=%s", "start_date <= %s", "end_date >= %s"]
        params: list[object] = [ApprovalStatus.APPROVED.value, end_date, start_date]
        if user_id is not None:
            clauses.append("user_id=%s")
            params.append(int(user_id))

        where = " AND ".join(clauses)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM leave_requests
                WHERE {where}
                """,
                tuple(params),
            )
            return [_to_leave(r) for r in fetchall(cur)]

    def list_approved_covering(self, day: date) -> Sequence[LeaveRequest]:
        return self.list_approved_overlapping(start_date=day, end_date=day)

    def create_leave(
        self,
        *,
        user_id: int,
        start_date: date,
        end_date: date,
        reason: str,
        status: ApprovalStatus,
        hr_comment: Optional[str] = None,
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO leave_requests(user_id, start_date, end_date, reason, status, hr_comment)
                VALUES(%s,%s,%s,%s,%s,%s)
                """,
                (int(user_id), start_date, end_date, reason, status.value, hr_comment),
            )
            return int(cur.lastrowid)

    def create_unexcused_absences(self, *, user_ids: Sequence[int], day: date, hr_comment: str) -> int:
        if not user_ids:
            return 0
        rows = [
            (int(uid), day, day, UNEXCUSED_ABSENCE_REASON, ApprovalStatus.APPROVED.value, hr_comment)
            for uid in user_ids
        ]
        with db_cursor(self._conn_factory) as (_, cur):
            cur.executemany(
                """
                INSERT INTO leave_requests(user_id, start_date, end_date, reason, status, hr_comment)
                VALUES(%s,%s,%s,%s,%s,%s)
                """,
                rows,
            )
            return len(rows)

    def reject_approved_covering(self, *, user_id: int, day: date, hr_comment: str) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE leave_requests
                SET status=%s, hr_comment=%s
                WHERE user_id=%s AND status=%s AND start_date <= %s AND end_date >= %s
                """,
                (
                    ApprovalStatus.REJECTED.value,
                    hr_comment,
                    int(user_id),
                    ApprovalStatus.APPROVED.value,
                    day,
                    day,
                ),
            )
            return int(cur.rowcount)

    def delete_unexcused_from(self, start_date: date) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                DELETE FROM leave_requests
                WHERE reason=%s AND start_date >= %s
                """,
                (UNEXCUSED_ABSENCE_REASON, start_date),
            )
            return int(cur.rowcount)
