"""Run the absence auto-marker for one month outside the web app.

Usage: python scripts/mark_absences.py [YYYY-MM]   (default: current month)
"""

from __future__ import annotations

import importlib
import logging
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from config import get_settings_module

from src.absence_calendar.absence_calendar.common.datetime_utils import today_local
from src.absence_calendar.absence_calendar.container import build_container


def _parse_month(arg: str) -> tuple[int, int]:
    try:
        year, month = (int(p) for p in arg.split("-", 1))
    except ValueError:
        raise SystemExit(f"Invalid month {arg!r}, expected YYYY-MM")
    if not 1 <= month <= 12:
        raise SystemExit(f"Invalid month {arg!r}, expected YYYY-MM")
    return year, month - 1


def main(argv: list[str]) -> int:
    settings = importlib.import_module(get_settings_module())
    logging.basicConfig(level=getattr(settings, "LOG_LEVEL", "INFO"))

    today = today_local()
    year, month_index = _parse_month(argv[0]) if argv else (today.year, today.month - 1)

    container = build_container(db_config=settings.DB_CONFIG)
    result = container.absence_auto_marker.run(year, month_index, today=today)
    print(result.to_dict())
    return 0 if result.ok else 1


if __name__ == "__main__":
    raise SystemExit(main(sys.argv[1:]))
