from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Sequence

from ..core.enums import DailyStatusKind, DayKind


def merge(a: DayKind, b: DayKind) -> DayKind:
    """Combine two classifications of the same user and day.

    present > leave > unexcused absence > none, whatever the order they arrive in.
    """
    return a if a >= b else b


@dataclass
class DayStatus:
    """Reduced status of one calendar day.

    Aggregate mode fills the counters (across all users); single-user mode
    also sets ``kind``. Rebuilt on every fetch.
    """

    date: str
    present: int = 0
    leaves: int = 0
    absent_marked: int = 0
    kind: DayKind = DayKind.NONE

    @property
    def status(self) -> str:
        return self.kind.label

    def apply(self, kind: DayKind) -> None:
        self.kind = merge(self.kind, kind)

    def to_dict(self) -> dict:
        return {
            "date": self.date,
            "present": self.present,
            "leaves": self.leaves,
            "absent_marked": self.absent_marked,
            "status": self.status,
        }


@dataclass(frozen=True)
class DailyStatus:
    """One person's status in the single-day roster."""

    user_id: int
    full_name: str
    status: DailyStatusKind
    details: str
    avatar_url: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "user_id": self.user_id,
            "full_name": self.full_name,
            "avatar_url": self.avatar_url,
            "status": self.status.value,
            "details": self.details,
        }


@dataclass(frozen=True)
class DaySummary:
    present: int = 0
    leave: int = 0
    absent: int = 0
    holiday: int = 0
    unaccounted: int = 0

    @classmethod
    def of(cls, statuses: Sequence[DailyStatus]) -> "DaySummary":
        counts = {kind: 0 for kind in DailyStatusKind}
        for s in statuses:
            counts[s.status] += 1
        return cls(
            present=counts[DailyStatusKind.PRESENT],
            leave=counts[DailyStatusKind.LEAVE],
            absent=counts[DailyStatusKind.ABSENT_MARKED],
            holiday=counts[DailyStatusKind.HOLIDAY],
            unaccounted=counts[DailyStatusKind.ABSENT],
        )

    def to_dict(self) -> dict:
        return {
            "present": self.present,
            "leave": self.leave,
            "absent": self.absent,
            "holiday": self.holiday,
            "unaccounted": self.unaccounted,
        }


@dataclass(frozen=True)
class DailyRoster:
    date: str
    statuses: tuple[DailyStatus, ...] = field(default_factory=tuple)
    holiday_title: Optional[str] = None

    @property
    def summary(self) -> DaySummary:
        return DaySummary.of(self.statuses)

    def find(self, user_id: int) -> Optional[DailyStatus]:
        for s in self.statuses:
            if s.user_id == user_id:
                return s
        return None

    def to_dict(self) -> dict:
        return {
            "date": self.date,
            "holiday": self.holiday_title,
            "summary": self.summary.to_dict(),
            "employees": [s.to_dict() for s in self.statuses],
        }
