# backend/lifeos/schemas/task.py

from datetime import datetime
from typing import Literal, Optional

from pydantic import field_validator

from lifeos.schemas.base import ApiModel, strip_and_reject_blank, strip_to_none

Priority = Literal["high", "medium", "low"]


# --- request schemas ---
class TaskCreate(ApiModel):
    """
    [Request] POST /api/tasks
    user_id comes from the access token, never from the body.
    """
    title: str
    description: Optional[str] = None
    priority: Priority = "medium"
    category: Optional[str] = None
    due_date: Optional[datetime] = None
    completed: bool = False

    @field_validator("title")
    @classmethod
    def validate_title(cls, v: str) -> str:
        return strip_and_reject_blank(v, "title")

    @field_validator("description", "category", mode="before")
    @classmethod
    def blank_to_none(cls, v):
        return strip_to_none(v)


class TaskUpdate(ApiModel):
    """
    [Request] PATCH /api/tasks/{task_id}
    Every field is optional; only the ones sent are changed.
    """
    title: Optional[str] = None
    description: Optional[str] = None
    priority: Optional[Priority] = None
    category: Optional[str] = None
    due_date: Optional[datetime] = None
    completed: Optional[bool] = None

    @field_validator("title")
    @classmethod
    def validate_title(cls, v):
        return strip_and_reject_blank(v, "title")


# --- response schemas ---
class TaskRead(ApiModel):
    id: str
    user_id: str
    title: str
    description: Optional[str] = None
    priority: Priority = "medium"
    category: Optional[str] = None
    due_date: Optional[datetime] = None
    completed: bool = False
    created_at: datetime
    updated_at: Optional[datetime] = None
