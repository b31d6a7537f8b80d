# backend/lifeos/schemas/content_idea.py

from datetime import datetime
from typing import Literal, Optional

from lifeos.schemas.base import ApiModel

Platform = Literal["youtube", "shorts", "reels"]


class ContentIdeaUpdate(ApiModel):
    """
    [Request] PATCH /api/content-ideas/{idea_id}
    Ideas are only ever created by the AI endpoint; users may edit or bookmark them.
    """
    title: Optional[str] = None
    description: Optional[str] = None
    saved: Optional[bool] = None


class ContentIdeaRead(ApiModel):
    id: str
    user_id: str
    platform: Platform
    title: str
    description: Optional[str] = None
    niche: Optional[str] = None
    saved: bool = False
    created_at: datetime
