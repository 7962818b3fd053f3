from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field, replace
from datetime import date
from typing import Callable, Optional

from ..common.datetime_utils import add_months, require_month_index, require_year, today_local
from ..core.exceptions import DomainError
from .service import MonthStats, MonthStatsService

log = logging.getLogger(__name__)


class RequestSequencer:
    """Monotonic request counter; only the latest issued token is current."""

    def __init__(self):
        self._lock = threading.Lock()
        self._latest = 0

    def next(self) -> int:
        with self._lock:
            self._latest += 1
            return self._latest

    def is_current(self, token: int) -> bool:
        with self._lock:
            return token == self._latest


@dataclass(frozen=True)
class CalendarState:
    year: int
    month_index: int
    user_id: Optional[int]
    stats: Optional[MonthStats] = None
    loading: bool = False
    error: Optional[str] = None


Listener = Callable[[CalendarState], None]


@dataclass
class Subscription:
    _session: "CalendarSession"
    _listener: Listener
    closed: bool = field(default=False)

    def close(self) -> None:
        if not self.closed:
            self._session._unsubscribe(self._listener)
            self.closed = True


class CalendarSession:
    """State of one calendar view: displayed month, scope and last result.

    Each view owns its session; nothing is shared through module globals.
    Every month or scope change recomputes the stats, and a computation that
    has been superseded by a newer one is discarded when it completes.
    """

    def __init__(
        self,
        service: MonthStatsService,
        *,
        year: int,
        month_index: int,
        user_id: Optional[int] = None,
        clock: Callable[[], date] = today_local,
    ):
        self._service = service
        self._clock = clock
        self._sequencer = RequestSequencer()
        self._lock = threading.Lock()
        self._listeners: list[Listener] = []
        self._state = CalendarState(year=require_year(year), month_index=require_month_index(month_index), user_id=user_id)

    @property
    def state(self) -> CalendarState:
        with self._lock:
            return self._state

    def subscribe(self, listener: Listener) -> Subscription:
        with self._lock:
            self._listeners.append(listener)
        return Subscription(self, listener)

    def _unsubscribe(self, listener: Listener) -> None:
        with self._lock:
            if listener in self._listeners:
                self._listeners.remove(listener)

    def _update(self, **changes) -> None:
        with self._lock:
            self._state = replace(self._state, **changes)
            state = self._state
            listeners = list(self._listeners)
        for listener in listeners:
            listener(state)

    def refresh(self) -> bool:
        """Recompute stats for the current month and scope.

        Returns False when the result was dropped because a newer refresh
        started meanwhile. Fetch errors are logged and kept in ``state.error``;
        the previous stats stay visible. Any other exception propagates, with
        ``loading`` cleared first.
        """
        token = self._sequencer.next()
        current = self.state
        self._update(loading=True, error=None)
        settled = False
        try:
            stats = self._service.fetch_month_stats(
                current.year,
                current.month_index,
                current.user_id,
                today=self._clock(),
            )
            settled = True
        except DomainError as e:
            settled = True
            log.error("error fetching stats for %04d-%02d: %s", current.year, current.month_index + 1, e)
            if self._sequencer.is_current(token):
                self._update(loading=False, error=str(e))
            return False
        finally:
            if not settled and self._sequencer.is_current(token):
                self._update(loading=False)

        if not self._sequencer.is_current(token):
            log.debug("dropping stale stats for %04d-%02d", current.year, current.month_index + 1)
            return False
        self._update(stats=stats, loading=False, error=None)
        return True

    def show_month(self, year: int, month_index: int) -> bool:
        self._update(year=require_year(year), month_index=require_month_index(month_index))
        return self.refresh()

    def next_month(self) -> bool:
        s = self.state
        return self.show_month(*add_months(s.year, s.month_index, 1))

    def prev_month(self) -> bool:
        s = self.state
        return self.show_month(*add_months(s.year, s.month_index, -1))

    def set_user(self, user_id: Optional[int]) -> bool:
        self._update(user_id=user_id)
        return self.refresh()
