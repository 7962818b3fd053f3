from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Iterable

import mysql.connector

from .connection import DBConfig

log = logging.getLogger(__name__)

_DELIMITER_RE = re.compile(r"^\s*DELIMITER\s+(\S+)\s*$", re.IGNORECASE)


def _strip_create_db_and_use(sql: str) -> str:
    # Keep schema files compatible regardless of DB name.
    sql = re.sub(r"(?im)^\s*CREATE\s+DATABASE\b.*?;\s*$", "", sql)
    sql = re.sub(r"(?im)^\s*USE\b.*?;\s*$", "", sql)
    return sql


def _iter_sql_statements(sql: str) -> Iterable[str]:
    """Split a SQL script into statements.

    Handles delimiters inside quotes and mysql-client style ``DELIMITER $$``
    lines, which stored procedure bodies need.
    """
    delimiter = ";"
    buf: list[str] = []
    in_single = False
    in_double = False

    for line in sql.splitlines(keepends=True):
        if not in_single and not in_double:
            m = _DELIMITER_RE.match(line)
            if m:
                delimiter = m.group(1)
                continue

        i = 0
        while i < len(line):
            ch = line[i]
            if ch == "\\" and (in_single or in_double):
                buf.append(line[i : i + 2])
                i += 2
                continue
            if ch == "'" and not in_double:
                in_single = not in_single
            elif ch == '"' and not in_single:
                in_double = not in_double
            elif not in_single and not in_double and line.startswith(delimiter, i):
                stmt = "".join(buf).strip()
                buf.clear()
                if stmt:
                    yield stmt
                i += len(delimiter)
                continue
            buf.append(ch)
            i += 1

    tail = "".join(buf).strip()
    if tail:
        yield tail


def _connect(target: DBConfig, *, with_database: bool = True):
    kwargs = dict(
        host=target.host,
        port=target.port,
        user=target.user,
        password=target.password,
        use_pure=True,
    )
    if with_database:
        kwargs["database"] = target.database
    return mysql.connector.connect(**kwargs)


def ensure_database_exists(db_config: dict) -> None:
    target = DBConfig.from_settings(db_config)
    conn = _connect(target, with_database=False)
    try:
        cur = conn.cursor()
        cur.execute(
            f"CREATE DATABASE IF NOT EXISTS `{target.database}` CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci;"
        )
        conn.commit()
    finally:
        conn.close()


def apply_sql_file(db_config: dict, *, path: str | Path) -> int:
    """Execute every statement of a SQL file; returns the statement count."""
    target = DBConfig.from_settings(db_config)
    sql = _strip_create_db_and_use(Path(path).read_text(encoding="utf-8"))

    conn = _connect(target)
    count = 0
    try:
        cur = conn.cursor()
        for stmt in _iter_sql_statements(sql):
            cur.execute(stmt)
            count += 1
        conn.commit()
    finally:
        conn.close()
    log.info("applied %s (%d statements)", Path(path).name, count)
    return count


def apply_schema(db_config: dict, *, schema_path: str | Path, procedures_path: str | Path | None = None) -> None:
    ensure_database_exists(db_config)
    apply_sql_file(db_config, path=schema_path)
    if procedures_path is not None:
        apply_sql_file(db_config, path=procedures_path)


def list_tables(db_config: dict) -> list[str]:
    conn = _connect(DBConfig.from_settings(db_config))
    try:
        cur = conn.cursor()
        cur.execute("SHOW TABLES")
        return [row[0] for row in cur.fetchall()]
    finally:
        conn.close()
