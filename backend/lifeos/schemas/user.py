# backend/lifeos/schemas/user.py

from datetime import datetime
from typing import Optional

from pydantic import EmailStr

from lifeos.schemas.base import ApiModel


class UserRead(ApiModel):
    """
    [Response] GET /api/auth/user
    """
    id: str
    email: Optional[EmailStr] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    profile_image_url: Optional[str] = None
    created_at: datetime
    last_login_at: Optional[datetime] = None


class TokenResponse(ApiModel):
    access_token: str
    refresh_token: str
    token_type: str = "bearer"


class RefreshRequest(ApiModel):
    """
    [Request] POST /api/auth/refresh
    """
    refresh_token: str
