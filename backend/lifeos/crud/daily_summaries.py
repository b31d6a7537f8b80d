# backend/lifeos/crud/daily_summaries.py
from datetime import datetime
from typing import Optional

from lifeos.crud.base import utcnow
from lifeos.db.mongo import get_db
from lifeos.focus.stats import local_day_bounds
from lifeos.schemas.daily_summary import DailySummaryRead, TodayStats


def get_daily_summaries_collection():
    return get_db()["daily_summaries"]


def serialize_daily_summary(doc) -> DailySummaryRead:
    return DailySummaryRead(
        id=str(doc["_id"]),
        user_id=doc["user_id"],
        date=doc["date"],
        summary=doc["summary"],
        tasks_completed=doc.get("tasks_completed", 0),
        focus_minutes=doc.get("focus_minutes", 0),
        notes_created=doc.get("notes_created", 0),
        created_at=doc["created_at"],
    )


# READ (latest summary of the server-local day containing `day`)
async def get_daily_summary(user_id: str, day: Optional[datetime] = None) -> Optional[DailySummaryRead]:
    start, end = local_day_bounds(day)
    doc = await get_daily_summaries_collection().find_one(
        {"user_id": user_id, "date": {"$gte": start, "$lt": end}},
        sort=[("date", -1)],
    )
    return serialize_daily_summary(doc) if doc else None


# CREATE
async def create_daily_summary(user_id: str, stats: TodayStats, summary: str) -> DailySummaryRead:
    now = utcnow()
    doc = {
        "user_id": user_id,
        "date": now,
        "summary": summary,
        "tasks_completed": stats.tasks_completed,
        "focus_minutes": stats.focus_minutes,
        "notes_created": stats.notes_created,
        "created_at": now,
    }
    result = await get_daily_summaries_collection().insert_one(doc)
    doc["_id"] = result.inserted_id
    return serialize_daily_summary(doc)
