# backend/lifeos/focus/stats.py
from datetime import datetime, time, timedelta, timezone
from typing import Iterable, Optional, Tuple

from lifeos.crud.base import ensure_aware_utc
from lifeos.schemas.focus_session import FocusSessionRead, FocusStats


def local_day_bounds(now: Optional[datetime] = None) -> Tuple[datetime, datetime]:
    """
    [start, end) of the server-local calendar day containing `now`.

    Both midnights are resolved against the local zone separately, so a day
    with a DST change is 23 or 25 hours long.
    """
    day = ensure_aware_utc(now or datetime.now(timezone.utc)).astimezone().date()
    start = datetime.combine(day, time.min).astimezone()
    end = datetime.combine(day + timedelta(days=1), time.min).astimezone()
    return start, end


def is_same_local_day(moment: datetime, now: Optional[datetime] = None) -> bool:
    start, end = local_day_bounds(now)
    return start <= ensure_aware_utc(moment) < end


def aggregate_stats(
    sessions: Iterable[FocusSessionRead],
    now: Optional[datetime] = None,
) -> FocusStats:
    """
    totalFocusMinutes: every record's completed_duration
    completedSessionCount: records with completed=True
    todayMinutes: completed_duration of records started today (server-local)

    Each record counts once; a partial run and a later full run are two records.
    """
    now = now or datetime.now(timezone.utc)
    total = today = completed = 0

    for s in sessions:
        minutes = s.completed_duration or 0
        total += minutes
        if s.completed:
            completed += 1
        if s.started_at is not None and is_same_local_day(s.started_at, now):
            today += minutes

    return FocusStats(
        today_minutes=today,
        total_focus_minutes=total,
        completed_session_count=completed,
    )
