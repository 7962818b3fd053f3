from __future__ import annotations

from pathlib import Path

from src.absence_calendar.absence_calendar.database.bootstrap import _iter_sql_statements, _strip_create_db_and_use

DATABASE_DIR = Path(__file__).resolve().parents[2] / "database"


def test_splits_on_semicolons_outside_quotes():
    sql = "INSERT INTO t VALUES ('a;b');\nSELECT 1;\n"
    assert list(_iter_sql_statements(sql)) == ["INSERT INTO t VALUES ('a;b')", "SELECT 1"]


def test_delimiter_directive_keeps_procedure_bodies_whole():
    sql = (
        "DROP PROCEDURE IF EXISTS p;\n"
        "DELIMITER $$\n"
        "CREATE PROCEDURE p()\nBEGIN\n  SELECT 1;\n  SELECT 2;\nEND$$\n"
        "DELIMITER ;\n"
        "SELECT 3;\n"
    )
    stmts = list(_iter_sql_statements(sql))
    assert stmts[0] == "DROP PROCEDURE IF EXISTS p"
    assert stmts[1].startswith("CREATE PROCEDURE p()")
    assert stmts[1].endswith("END")
    assert "SELECT 2;" in stmts[1]
    assert stmts[2] == "SELECT 3"


def test_strip_create_db_and_use():
    sql = "CREATE DATABASE IF NOT EXISTS x;\nUSE x;\nCREATE TABLE t (id INT);\n"
    assert list(_iter_sql_statements(_strip_create_db_and_use(sql))) == ["CREATE TABLE t (id INT)"]


def test_shipped_procedures_split_into_expected_statements():
    sql = (DATABASE_DIR / "procedures.sql").read_text(encoding="utf-8")
    stmts = [s for s in _iter_sql_statements(sql) if not s.startswith("--")]
    creates = [s for s in stmts if s.upper().startswith("CREATE PROCEDURE")]
    assert [s.split()[2].split("(")[0] for s in creates] == ["cleanup_future_absences", "mark_absent_for_missing_days"]
