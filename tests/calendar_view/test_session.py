from __future__ import annotations

from datetime import date

import pytest

from src.absence_calendar.absence_calendar.calendar_view.session import CalendarSession, RequestSequencer
from src.absence_calendar.absence_calendar.calendar_view.service import MonthStats
from src.absence_calendar.absence_calendar.core.exceptions import BackendError, ValidationError
from tests.fakes import InMemoryAttendance, build_fake_container, make_log

TODAY = date(2024, 3, 20)


def _session(container, **kwargs):
    return CalendarSession(container.month_stats_service, year=2024, month_index=2, clock=lambda: TODAY, **kwargs)


def test_sequencer_only_latest_token_is_current():
    seq = RequestSequencer()
    a = seq.next()
    b = seq.next()
    assert not seq.is_current(a)
    assert seq.is_current(b)


def test_refresh_publishes_stats_and_clears_loading():
    container = build_fake_container(attendance=InMemoryAttendance([make_log(1, date(2024, 3, 4))]))
    session = _session(container)
    seen = []
    session.subscribe(lambda state: seen.append(state.loading))

    assert session.refresh() is True
    assert session.state.loading is False
    assert session.state.stats.days[3].present == 1
    assert seen == [True, False]


def test_navigation_changes_month_and_refreshes():
    session = _session(build_fake_container())
    session.next_month()
    assert (session.state.year, session.state.month_index) == (2024, 3)
    assert session.state.stats.month_index == 3
    session.prev_month()
    session.prev_month()
    assert session.state.stats.month_index == 1


def test_set_user_switches_to_single_user_mode():
    session = _session(build_fake_container())
    session.set_user(7)
    assert session.state.stats.single_user
    assert session.state.stats.user_id == 7


class _ReentrantService:
    """Starts a newer refresh while the first one is still in flight."""

    def __init__(self, inner):
        self.inner = inner
        self.session = None
        self.calls = 0

    def fetch_month_stats(self, year, month_index, user_id=None, *, today=None):
        self.calls += 1
        if self.calls == 1:
            self.session.show_month(2024, 3)
        return self.inner.fetch_month_stats(year, month_index, user_id, today=today)


def test_stale_result_is_dropped():
    service = _ReentrantService(build_fake_container().month_stats_service)
    session = CalendarSession(service, year=2024, month_index=2, clock=lambda: TODAY)
    service.session = session

    assert session.refresh() is False
    assert session.state.stats.month_index == 3
    assert session.state.loading is False


class _FailingService:
    def __init__(self, stats: MonthStats):
        self.stats = stats
        self.fail = False

    def fetch_month_stats(self, year, month_index, user_id=None, *, today=None):
        if self.fail:
            raise BackendError("connection refused")
        return self.stats


def test_fetch_error_keeps_previous_stats_and_sets_error():
    stats = build_fake_container().month_stats_service.fetch_month_stats(2024, 2, today=TODAY)
    service = _FailingService(stats)
    session = CalendarSession(service, year=2024, month_index=2, clock=lambda: TODAY)
    session.refresh()

    service.fail = True
    assert session.refresh() is False
    assert session.state.stats is stats
    assert session.state.loading is False
    assert "connection refused" in session.state.error


def test_closed_subscription_stops_receiving_updates():
    session = _session(build_fake_container())
    seen = []
    sub = session.subscribe(seen.append)
    session.refresh()
    sub.close()
    sub.close()
    session.refresh()
    assert len(seen) == 2
    assert sub.closed


class _BrokenService:
    def fetch_month_stats(self, year, month_index, user_id=None, *, today=None):
        raise RuntimeError("unexpected row shape")


def test_unexpected_error_propagates_with_loading_cleared():
    session = CalendarSession(_BrokenService(), year=2024, month_index=2, clock=lambda: TODAY)
    seen = []
    session.subscribe(lambda state: seen.append(state.loading))

    with pytest.raises(RuntimeError):
        session.refresh()

    assert session.state.loading is False
    assert session.state.stats is None
    assert seen == [True, False]


def test_session_rejects_out_of_range_year():
    with pytest.raises(ValidationError):
        CalendarSession(_BrokenService(), year=0, month_index=2)
