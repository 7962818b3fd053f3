from __future__ import annotations

from datetime import date
from typing import Protocol, Sequence

from .model import HolidayEvent


class HolidayRepository(Protocol):
    def list_for_date(self, event_date: date) -> Sequence[HolidayEvent]:
        raise NotImplementedError
