# backend/lifeos/api/endpoints/focus_sessions.py
from typing import List

from fastapi import APIRouter, Depends, HTTPException, status

from lifeos.api.deps import get_current_user_id
from lifeos.crud import focus_sessions as focus_session_crud
from lifeos.crud import stats as stats_crud
from lifeos.schemas.focus_session import (
    FocusSessionCreate,
    FocusSessionRead,
    FocusSessionUpdate,
    FocusStats,
)

router = APIRouter(prefix="/api/focus-sessions", tags=["Focus Sessions"])


# --------------------------------------------------------------------------
# GET /api/focus-sessions
# history, most recent first
# --------------------------------------------------------------------------
@router.get("", response_model=List[FocusSessionRead])
async def read_focus_sessions(user_id: str = Depends(get_current_user_id)):
    return await focus_session_crud.get_focus_sessions(user_id)


# --------------------------------------------------------------------------
# POST /api/focus-sessions
# written by the timer when a run completes or is reset with progress
# --------------------------------------------------------------------------
@router.post("", response_model=FocusSessionRead, status_code=status.HTTP_201_CREATED)
async def create_focus_session(
    session: FocusSessionCreate,
    user_id: str = Depends(get_current_user_id),
):
    return await focus_session_crud.create_focus_session(user_id, session)


# --------------------------------------------------------------------------
# GET /api/focus-sessions/stats
# todayMinutes / totalFocusMinutes / completedSessionCount
# --------------------------------------------------------------------------
@router.get("/stats", response_model=FocusStats)
async def read_focus_stats(user_id: str = Depends(get_current_user_id)):
    return await stats_crud.get_focus_stats(user_id)


# --------------------------------------------------------------------------
# PATCH /api/focus-sessions/{session_id}
# endedAt backfill; nothing else is mutable
# --------------------------------------------------------------------------
@router.patch("/{session_id}", response_model=FocusSessionRead)
async def update_focus_session(
    session_id: str,
    data: FocusSessionUpdate,
    user_id: str = Depends(get_current_user_id),
):
    updated = await focus_session_crud.update_focus_session(user_id, session_id, data)
    if not updated:
        raise HTTPException(status_code=404, detail="Focus session not found")
    return updated
