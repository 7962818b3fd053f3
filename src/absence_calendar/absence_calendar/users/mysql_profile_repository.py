from __future__ import annotations

from typing import Sequence

from ..core.enums import Role
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, placeholders
from .model import Profile
from .repository import ProfileRepository


def _to_profile(row: dict) -> Profile:
    return Profile(
        user_id=int(row["user_id"]),
        full_name=row["full_name"],
        role=Role(row["role"]),
        avatar_url=row.get("avatar_url"),
    )


class MySQLProfileRepository(ProfileRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_by_roles(self, roles: Sequence[Role]) -> Sequence[Profile]:
        values = [Role(r).value for r in roles]
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT user_id, full_name, role, avatar_url
                FROM profiles
                WHERE role IN ({placeholders(values)})
                ORDER BY full_name
                """,
                tuple(values),
            )
            return [_to_profile(r) for r in fetchall(cur)]
