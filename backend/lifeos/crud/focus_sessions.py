# backend/lifeos/crud/focus_sessions.py
from datetime import datetime
from typing import List, Optional

from fastapi import HTTPException

from lifeos.crud.base import ensure_aware_utc, owned_filter, utcnow
from lifeos.db.mongo import get_db
from lifeos.schemas.focus_session import (
    FocusSessionCreate,
    FocusSessionRead,
    FocusSessionUpdate,
)


def get_focus_sessions_collection():
    return get_db()["focus_sessions"]


def serialize_focus_session(session) -> FocusSessionRead:
    """
    Mongo document(dict) -> FocusSessionRead
    """
    return FocusSessionRead(
        id=str(session["_id"]),
        user_id=session["user_id"],
        duration=session["duration"],
        completed_duration=session.get("completed_duration") or 0,
        completed=session.get("completed", False),
        started_at=session["started_at"],
        ended_at=session.get("ended_at"),
    )


# CREATE
async def create_focus_session(user_id: str, data: FocusSessionCreate) -> FocusSessionRead:
    """
    started_at is always server time; the client never supplies it.
    """
    col = get_focus_sessions_collection()
    doc = {
        "user_id": user_id,
        "duration": data.duration,
        "completed_duration": data.completed_duration,
        "completed": data.completed,
        "started_at": utcnow(),
        "ended_at": None,
    }
    result = await col.insert_one(doc)
    doc["_id"] = result.inserted_id
    return serialize_focus_session(doc)


# READ ALL (most recent first)
async def get_focus_sessions(user_id: str, limit: Optional[int] = None) -> List[FocusSessionRead]:
    col = get_focus_sessions_collection()
    cursor = col.find({"user_id": user_id}).sort("started_at", -1)
    if limit:
        cursor = cursor.limit(limit)
    sessions = await cursor.to_list(length=limit)
    return [serialize_focus_session(s) for s in sessions]


# READ BY DAY
async def get_focus_sessions_between(
    user_id: str,
    start: datetime,
    end: datetime,
) -> List[FocusSessionRead]:
    col = get_focus_sessions_collection()
    query = {
        "user_id": user_id,
        "started_at": {"$gte": ensure_aware_utc(start), "$lt": ensure_aware_utc(end)},
    }
    sessions = await col.find(query).sort("started_at", -1).to_list(length=None)
    return [serialize_focus_session(s) for s in sessions]


# UPDATE (ended_at backfill only)
async def update_focus_session(
    user_id: str,
    session_id: str,
    data: FocusSessionUpdate,
) -> Optional[FocusSessionRead]:
    query = owned_filter(user_id, session_id)
    if query is None:
        return None

    col = get_focus_sessions_collection()
    existing = await col.find_one(query)
    if not existing:
        return None
    if data.ended_at is None:
        return serialize_focus_session(existing)

    ended_at = ensure_aware_utc(data.ended_at)
    if ended_at < ensure_aware_utc(existing["started_at"]):
        raise HTTPException(status_code=400, detail="endedAt must be after startedAt")

    await col.update_one(query, {"$set": {"ended_at": ended_at}})
    existing["ended_at"] = ended_at
    return serialize_focus_session(existing)
