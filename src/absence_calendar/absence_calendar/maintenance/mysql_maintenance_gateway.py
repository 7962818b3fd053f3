from __future__ import annotations

from datetime import date

import mysql.connector
from mysql.connector import errorcode

from ..core.exceptions import BackendError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import raw_cursor, stored_results
from .repository import MaintenanceGateway, ProcedureUnavailable

# Errors meaning "the procedure is not there / not callable for us".
_UNAVAILABLE_ERRNOS = {
    errorcode.ER_SP_DOES_NOT_EXIST,
    errorcode.ER_PROCACCESS_DENIED_ERROR,
}


def _affected(rows: list[dict]) -> int:
    if not rows:
        return 0
    return int(rows[-1].get("affected_rows") or 0)


class MySQLMaintenanceGateway(MaintenanceGateway):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def _call(self, name: str, args: tuple = ()) -> int:
        try:
            with raw_cursor(self._conn_factory) as (_, cur):
                cur.callproc(name, args)
                return _affected(stored_results(cur))
        except mysql.connector.Error as e:
            if e.errno in _UNAVAILABLE_ERRNOS:
                raise ProcedureUnavailable(name) from e
            raise BackendError(f"{name} failed: {e}") from e

    def cleanup_future_absences(self) -> int:
        return self._call("cleanup_future_absences")

    def mark_absent_for_missing_days(self, *, check_from_date: date, check_to_date: date) -> int:
        return self._call("mark_absent_for_missing_days", (check_from_date, check_to_date))
