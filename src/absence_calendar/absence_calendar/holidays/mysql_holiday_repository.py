from __future__ import annotations

from datetime import date
from typing import Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall
from .model import HolidayEvent
from .repository import HolidayRepository


class MySQLHolidayRepository(HolidayRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_for_date(self, event_date: date) -> Sequence[HolidayEvent]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT event_id, event_date, title
                FROM leave_calendar_events
                WHERE event_date=%s
                ORDER BY event_id
                """,
                (event_date,),
            )
            return [
                HolidayEvent(event_id=int(r["event_id"]), event_date=r["event_date"], title=r["title"])
                for r in fetchall(cur)
            ]
