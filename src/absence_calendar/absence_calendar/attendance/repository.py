from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Protocol, Sequence

from ..core.enums import ApprovalStatus, WorkMode
from .model import AttendanceLog


class AttendanceRepository(Protocol):
    def list_between(
        self,
        *,
        start_date: date,
        end_date: date,
        user_id: Optional[int] = None,
    ) -> Sequence[AttendanceLog]:
        """Logs with ``start_date <= work_date <= end_date``."""

        raise NotImplementedError

    def list_for_date(self, work_date: date) -> Sequence[AttendanceLog]:
        raise NotImplementedError

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
        raise NotImplementedError
