# backend/lifeos/schemas/daily_summary.py

from datetime import datetime

from lifeos.schemas.base import ApiModel


class TodayStats(ApiModel):
    """
    [Response] GET /api/stats/today
    Input of the daily-summary prompt.
    """
    tasks_completed: int = 0
    total_tasks: int = 0
    focus_minutes: int = 0
    notes_created: int = 0


class DailySummaryRead(ApiModel):
    id: str
    user_id: str
    date: datetime
    summary: str
    tasks_completed: int = 0
    focus_minutes: int = 0
    notes_created: int = 0
    created_at: datetime
