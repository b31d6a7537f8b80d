# backend/lifeos/crud/stats.py
from datetime import datetime
from typing import Optional

from lifeos.crud import focus_sessions as focus_session_crud
from lifeos.crud import notes as note_crud
from lifeos.crud import tasks as task_crud
from lifeos.crud.base import utcnow
from lifeos.focus.stats import aggregate_stats, local_day_bounds
from lifeos.schemas.daily_summary import TodayStats
from lifeos.schemas.focus_session import FocusStats


async def get_focus_stats(user_id: str, now: Optional[datetime] = None) -> FocusStats:
    sessions = await focus_session_crud.get_focus_sessions(user_id)
    return aggregate_stats(sessions, now or utcnow())


async def get_today_stats(user_id: str, now: Optional[datetime] = None) -> TodayStats:
    """
    tasks_completed/total_tasks are all-time, notes and focus minutes are today's.
    """
    now = now or utcnow()
    start, end = local_day_bounds(now)

    today_sessions = await focus_session_crud.get_focus_sessions_between(user_id, start, end)
    focus = aggregate_stats(today_sessions, now)

    return TodayStats(
        tasks_completed=await task_crud.count_tasks(user_id, completed=True),
        total_tasks=await task_crud.count_tasks(user_id),
        focus_minutes=focus.today_minutes,
        notes_created=await note_crud.count_notes_created_between(user_id, start, end),
    )
