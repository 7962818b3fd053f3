from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Dict, List, Sequence

import mysql.connector

from ..core.exceptions import BackendError
from .connection import DatabaseConnection


@contextmanager
def db_cursor(conn_factory: DatabaseConnection, *, dictionary: bool = True):
    """Yield ``(conn, cursor)``; commit on success, roll back and re-raise on error.

    Connector errors surface as ``BackendError`` so services do not depend on
    the driver.
    """
    try:
        conn = conn_factory.connect()
    except mysql.connector.Error as e:
        raise BackendError(f"Cannot connect to database: {e}") from e
    try:
        cur = conn.cursor(dictionary=dictionary)
        try:
            yield conn, cur
            conn.commit()
        finally:
            cur.close()
    except mysql.connector.Error as e:
        conn.rollback()
        raise BackendError(str(e)) from e
    except Exception:
        conn.rollback()
        raise
    finally:
        conn.close()


@contextmanager
def raw_cursor(conn_factory: DatabaseConnection, *, dictionary: bool = True):
    """Like ``db_cursor`` but lets ``mysql.connector.Error`` through untouched.

    Used where the caller branches on driver errors (e.g. a missing stored
    procedure).
    """
    conn = conn_factory.connect()
    try:
        cur = conn.cursor(dictionary=dictionary)
        try:
            yield conn, cur
            conn.commit()
        finally:
            cur.close()
    except Exception:
        conn.rollback()
        raise
    finally:
        conn.close()


def fetchall(cur) -> List[Dict[str, Any]]:
    rows = cur.fetchall()
    return list(rows or [])


def placeholders(values: Sequence[Any]) -> str:
    """``%s,%s,...`` for an ``IN (...)`` clause."""
    if not values:
        raise ValueError("IN clause needs at least one value")
    return ",".join(["%s"] * len(values))


def stored_results(cur) -> List[Dict[str, Any]]:
    """Collect result sets produced by ``callproc``."""
    out: List[Dict[str, Any]] = []
    for result in cur.stored_results():
        for row in result.fetchall() or []:
            if isinstance(row, dict):
                out.append(row)
            else:
                out.append(dict(zip(result.column_names, row)))
    return out
