from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from ..core.enums import ApprovalStatus
from .model import LeaveRequest


class LeaveRepository(Protocol):
    def list_approved_overlapping(
        self,
        *,
        start_date: date,
        end_date: date,
        user_id: Optional[int] = None,
    ) -> Sequence[LeaveRequest]:
        """Approved requests whose ``[start_date, end_date]`` overlaps the range."""

        raise NotImplementedError

    def list_approved_covering(self, day: date) -> Sequence[LeaveRequest]:
        raise NotImplementedError

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
        raise NotImplementedError

    def create_unexcused_absences(self, *, user_ids: Sequence[int], day: date, hr_comment: str) -> int:
        """Insert one approved unexcused-absence row per user in a single transaction."""

        raise NotImplementedError

    def reject_approved_covering(self, *, user_id: int, day: date, hr_comment: str) -> int:
        raise NotImplementedError

    def delete_unexcused_from(self, start_date: date) -> int:
        """Remove unexcused-absence rows starting on or after ``start_date``."""

        raise NotImplementedError
