# backend/lifeos/schemas/note.py

from datetime import datetime
from typing import Optional

from pydantic import field_validator

from lifeos.schemas.base import ApiModel, strip_and_reject_blank


class NoteCreate(ApiModel):
    """
    [Request] POST /api/notes
    """
    title: str
    content: str

    @field_validator("title", "content")
    @classmethod
    def validate_not_blank(cls, v: str, info) -> str:
        return strip_and_reject_blank(v, info.field_name)


class NoteUpdate(ApiModel):
    """
    [Request] PATCH /api/notes/{note_id}
    """
    title: Optional[str] = None
    content: Optional[str] = None

    @field_validator("title", "content")
    @classmethod
    def validate_not_blank(cls, v, info):
        return strip_and_reject_blank(v, info.field_name)


class NoteRead(ApiModel):
    id: str
    user_id: str
    title: str
    content: str
    summary: Optional[str] = None
    created_at: datetime
    updated_at: Optional[datetime] = None
