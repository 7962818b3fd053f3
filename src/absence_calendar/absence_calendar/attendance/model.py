from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..core.enums import ApprovalStatus, WorkMode


@dataclass(frozen=True)
class AttendanceLog:
    """Domain entity: one clock-in session of one user on one work day."""

    log_id: int
    user_id: int
    work_date: date
    clock_in: datetime
    clock_out: Optional[datetime]
    status: ApprovalStatus
    mode: WorkMode = WorkMode.ONSITE

    @property
    def is_approved(self) -> bool:
        return self.status == ApprovalStatus.APPROVED
