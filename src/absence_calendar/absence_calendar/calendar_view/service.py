from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from typing import Optional

from ..common.datetime_utils import require_month_index, require_year, today_local
from ..maintenance.model import MaintenanceResult
from ..maintenance.service import AbsenceAutoMarker
from .day_status import DayStatus
from .fetcher import RecordFetcher
from .reducer import reduce_month, sorted_days

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class MonthStats:
    year: int
    month_index: int
    user_id: Optional[int]
    days: list[DayStatus]
    maintenance: Optional[MaintenanceResult] = None

    @property
    def single_user(self) -> bool:
        return self.user_id is not None

    def to_dict(self) -> dict:
        return {
            "year": self.year,
            "month": self.month_index + 1,
            "user_id": self.user_id,
            "mode": "single_user" if self.single_user else "aggregate",
            "days": [d.to_dict() for d in self.days],
            "maintenance": self.maintenance.to_dict() if self.maintenance else None,
        }


class MonthStatsService:
    def __init__(self, fetcher: RecordFetcher, auto_marker: AbsenceAutoMarker):
        self._fetcher = fetcher
        self._auto_marker = auto_marker

    def fetch_month_stats(
        self,
        year: int,
        month_index: int,
        user_id: Optional[int] = None,
        *,
        today: Optional[date] = None,
    ) -> MonthStats:
        """Per-day statistics for a month, company-wide or for one user.

        Company-wide requests first run the absence auto-marker; its failure
        is already logged and only reported back in ``maintenance``.
        Fetch errors propagate.
        """
        year = require_year(year)
        month_index = require_month_index(month_index)
        today = today or today_local()

        maintenance = None
        if user_id is None:
            maintenance = self._auto_marker.run(year, month_index, today=today)

        records = self._fetcher.fetch_month(year, month_index, user_id)
        stats = reduce_month(
            year,
            month_index,
            records.logs,
            records.leaves,
            single_user=user_id is not None,
            today=today,
        )
        log.debug(
            "month stats %04d-%02d user=%s: %d logs, %d leaves",
            year,
            month_index + 1,
            user_id,
            len(records.logs),
            len(records.leaves),
        )
        return MonthStats(
            year=year,
            month_index=month_index,
            user_id=user_id,
            days=sorted_days(stats),
            maintenance=maintenance,
        )
