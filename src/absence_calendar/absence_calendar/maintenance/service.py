from __future__ import annotations

import logging
from datetime import date, timedelta
from typing import Optional

from ..common.datetime_utils import month_bounds, today_local
from ..core.exceptions import BackendError, MaintenanceError, ValidationError
from ..leaves.repository import LeaveRepository
from .model import AbsenceWindow, MaintenanceResult
from .repository import MaintenanceGateway, ProcedureUnavailable

log = logging.getLogger(__name__)


def absence_check_window(year: int, month_index: int, today: date) -> AbsenceWindow:
    """Days of the month that may be auto-marked absent.

    Starts on the first of the month and ends on the earlier of the month's
    last day and yesterday. Today is never included: the user may still clock in.
    """
    start, end = month_bounds(year, month_index)
    yesterday = today - timedelta(days=1)
    return AbsenceWindow(start=start, end=min(end, yesterday))


class AbsenceAutoMarker:
    """Best-effort self-heal run before company-wide month statistics.

    1. retract unexcused absences wrongly recorded for today or later;
    2. mark absent every active user with neither attendance nor approved
       leave on each past working day of the month.

    ``run`` never raises: failures come back inside ``MaintenanceResult``.
    """

    def __init__(self, gateway: MaintenanceGateway, leaves: LeaveRepository):
        self._gateway = gateway
        self._leaves = leaves

    def _cleanup_future(self, today: date) -> tuple[str, int]:
        try:
            return "cleanup_rpc", self._gateway.cleanup_future_absences()
        except ProcedureUnavailable:
            log.info("cleanup_future_absences unavailable, deleting directly")
            return "cleanup_direct", self._leaves.delete_unexcused_from(today)

    def run(self, year: int, month_index: int, *, today: Optional[date] = None) -> MaintenanceResult:
        today = today or today_local()
        steps: list[str] = []
        removed = 0
        marked = 0
        try:
            window = absence_check_window(year, month_index, today)
        except ValidationError as e:
            error = MaintenanceError("window", str(e))
            log.warning("absence auto-mark skipped for %s-%s: %s", year, month_index, error)
            return MaintenanceResult(steps=(), window=None, removed=0, marked=0, error=error)

        try:
            step, removed = self._cleanup_future(today)
            steps.append(step)

            if not window.is_empty:
                marked = self._gateway.mark_absent_for_missing_days(
                    check_from_date=window.start,
                    check_to_date=window.end,
                )
                steps.append("mark_absent")
        except (BackendError, ProcedureUnavailable) as e:
            step = "mark_absent" if steps else "cleanup"
            error = MaintenanceError(step, str(e))
            log.warning("absence auto-mark failed for %04d-%02d: %s", year, month_index + 1, error)
            return MaintenanceResult(steps=tuple(steps), window=window, removed=removed, marked=marked, error=error)

        log.debug(
            "absence auto-mark %04d-%02d: removed=%d marked=%d window=%s",
            year,
            month_index + 1,
            removed,
            marked,
            window,
        )
        return MaintenanceResult(steps=tuple(steps), window=window, removed=removed, marked=marked)
