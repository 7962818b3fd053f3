from __future__ import annotations

from datetime import date
from typing import Protocol


class ProcedureUnavailable(Exception):
    """The stored procedure does not exist (or cannot be called) on this database."""


class MaintenanceGateway(Protocol):
    """Backend maintenance procedures."""

    def cleanup_future_absences(self) -> int:
        """Delete unexcused-absence rows dated today or later.

        Raises ``ProcedureUnavailable`` if the procedure is not installed.
        """

        raise NotImplementedError

    def mark_absent_for_missing_days(self, *, check_from_date: date, check_to_date: date) -> int:
        raise NotImplementedError
