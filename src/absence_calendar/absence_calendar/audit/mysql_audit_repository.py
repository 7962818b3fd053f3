from __future__ import annotations

import json
from typing import Any, Mapping

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor
from .repository import AuditRepository


class MySQLAuditRepository(AuditRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def insert(self, *, actor_id: int, action: str, table_name: str, details: Mapping[str, Any]) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO audit_logs(actor_id, action, table_name, details)
                VALUES(%s,%s,%s,%s)
                """,
                (int(actor_id), action, table_name, json.dumps(dict(details), default=str)),
            )
            return int(cur.lastrowid)
