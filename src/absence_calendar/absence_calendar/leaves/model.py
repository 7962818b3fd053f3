from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional

from ..core.constants import UNEXCUSED_ABSENCE_REASON
from ..core.enums import ApprovalStatus


@dataclass(frozen=True)
class LeaveRequest:
    """Domain entity: a continuous leave interval, ``end_date`` inclusive.

    Administratively recorded absences are stored as leave rows too and are
    told apart only by their reason.
    """

    request_id: int
    user_id: int
    start_date: date
    end_date: date
    reason: str
    status: ApprovalStatus
    hr_comment: Optional[str] = None

    @property
    def is_unexcused(self) -> bool:
        return self.reason == UNEXCUSED_ABSENCE_REASON

    @property
    def is_approved(self) -> bool:
        return self.status == ApprovalStatus.APPROVED

    def covers(self, day: date) -> bool:
        return self.start_date <= day <= self.end_date
