"""Stats aggregation over a user's focus sessions."""

from __future__ import annotations

import time as clock
from datetime import datetime, time, timedelta, timezone

import pytest

from lifeos.crud.base import ensure_aware_utc
from lifeos.focus.stats import aggregate_stats, is_same_local_day, local_day_bounds
from lifeos.schemas.focus_session import FocusSessionRead

NOW = datetime.now(timezone.utc)


def _session(minutes: int, completed: bool, started_at: datetime, duration: int = 25):
    return FocusSessionRead(
        id=f"{minutes}-{started_at.isoformat()}",
        user_id="user-1",
        duration=duration,
        completed_duration=minutes,
        completed=completed,
        started_at=started_at,
    )


def test_two_full_runs_today():
    sessions = [_session(25, True, NOW), _session(25, True, NOW)]

    stats = aggregate_stats(sessions, NOW)

    assert stats.today_minutes == 50
    assert stats.total_focus_minutes == 50
    assert stats.completed_session_count == 2


def test_partial_and_older_sessions():
    sessions = [
        _session(2, False, NOW),
        _session(25, True, NOW - timedelta(days=1)),
        _session(10, False, NOW - timedelta(days=3)),
    ]

    stats = aggregate_stats(sessions, NOW)

    assert stats.today_minutes == 2
    assert stats.total_focus_minutes == 37
    assert stats.completed_session_count == 1
    assert stats.today_minutes <= stats.total_focus_minutes


def test_partial_then_full_run_are_counted_separately():
    sessions = [_session(25, True, NOW), _session(7, False, NOW)]

    stats = aggregate_stats(sessions, NOW)

    assert stats.today_minutes == 32
    assert stats.completed_session_count == 1


def test_empty_history():
    stats = aggregate_stats([], NOW)
    assert stats.model_dump(by_alias=True) == {
        "todayMinutes": 0,
        "totalFocusMinutes": 0,
        "completedSessionCount": 0,
    }


def test_naive_started_at_is_treated_as_utc():
    naive = NOW.replace(tzinfo=None)
    stats = aggregate_stats([_session(5, False, naive)], NOW)
    assert stats.today_minutes == 5


def test_local_day_bounds_contain_now():
    start, end = local_day_bounds(NOW)
    assert start <= NOW < end
    assert start.astimezone().time() == end.astimezone().time() == time.min
    assert is_same_local_day(NOW, NOW)
    assert not is_same_local_day(NOW - timedelta(days=1), NOW)


# ---------------------------------------------------------------------------
# server-local day under a fixed TZ
# ---------------------------------------------------------------------------


@pytest.fixture()
def local_tz(monkeypatch):
    if not hasattr(clock, "tzset"):
        pytest.skip("time.tzset is not available on this platform")

    def use(name: str):
        monkeypatch.setenv("TZ", name)
        clock.tzset()

    yield use
    monkeypatch.undo()
    clock.tzset()


def test_day_starts_at_local_midnight(local_tz):
    local_tz("Asia/Tokyo")
    now = datetime(2026, 6, 10, 1, 0, tzinfo=timezone.utc)  # 10:00 JST

    start, end = local_day_bounds(now)

    assert start == datetime(2026, 6, 9, 15, 0, tzinfo=timezone.utc)
    assert end == datetime(2026, 6, 10, 15, 0, tzinfo=timezone.utc)
    assert is_same_local_day(datetime(2026, 6, 9, 15, 0, tzinfo=timezone.utc), now)
    assert not is_same_local_day(datetime(2026, 6, 9, 14, 59, tzinfo=timezone.utc), now)


def test_day_with_clocks_going_back_is_25_hours(local_tz):
    local_tz("America/New_York")
    now = datetime(2026, 11, 1, 17, 0, tzinfo=timezone.utc)  # 12:00 EST
    just_after_midnight = datetime(2026, 11, 1, 4, 30, tzinfo=timezone.utc)  # 00:30 EDT

    start, end = local_day_bounds(now)
    stats = aggregate_stats([_session(25, True, just_after_midnight)], now)

    assert end - start == timedelta(hours=25)
    assert stats.today_minutes == 25


def test_day_with_clocks_going_forward_is_23_hours(local_tz):
    local_tz("America/New_York")
    now = datetime(2026, 3, 8, 16, 0, tzinfo=timezone.utc)  # 12:00 EDT
    late_previous_evening = datetime(2026, 3, 8, 4, 30, tzinfo=timezone.utc)  # 23:30 EST on 03-07

    start, end = local_day_bounds(now)
    stats = aggregate_stats([_session(25, True, late_previous_evening)], now)

    assert end - start == timedelta(hours=23)
    assert stats.today_minutes == 0


def test_ensure_aware_utc_tags_naive_and_converts_aware():
    naive = datetime(2026, 6, 10, 12, 0)
    tokyo = datetime(2026, 6, 10, 21, 0, tzinfo=timezone(timedelta(hours=9)))

    assert ensure_aware_utc(naive) == datetime(2026, 6, 10, 12, 0, tzinfo=timezone.utc)
    assert ensure_aware_utc(tokyo).tzinfo is timezone.utc
    assert ensure_aware_utc(tokyo).hour == 12
