# backend/lifeos/schemas/focus_session.py

from datetime import datetime
from typing import Optional

from pydantic import Field, model_validator

from lifeos.schemas.base import ApiModel


# --- request schemas ---

class FocusSessionCreate(ApiModel):
    """
    [Request] POST /api/focus-sessions
    Outcome of one focus-phase run, as emitted by the timer.
    id and startedAt are assigned by the server.
    """
    duration: int = Field(ge=1, description="planned length of the run in minutes")
    completed_duration: int = Field(default=0, ge=0, description="minutes actually focused")
    completed: bool = False

    @model_validator(mode="after")
    def check_progress(self):
        if self.completed_duration > self.duration:
            raise ValueError("completedDuration must not exceed duration")
        if self.completed and self.completed_duration != self.duration:
            raise ValueError("a completed session must have completedDuration == duration")
        return self


class FocusSessionUpdate(ApiModel):
    """
    [Request] PATCH /api/focus-sessions/{session_id}
    Records are immutable apart from the endedAt backfill.
    """
    ended_at: Optional[datetime] = None


# --- response schemas ---

class FocusSessionRead(ApiModel):
    id: str
    user_id: str
    duration: int
    completed_duration: int = 0
    completed: bool = False
    started_at: datetime
    ended_at: Optional[datetime] = None


class FocusStats(ApiModel):
    """
    [Response] GET /api/focus-sessions/stats
    """
    today_minutes: int = 0
    total_focus_minutes: int = 0
    completed_session_count: int = 0
