from __future__ import annotations

from dataclasses import dataclass
from datetime import date


@dataclass(frozen=True)
class HolidayEvent:
    event_id: int
    event_date: date
    title: str
