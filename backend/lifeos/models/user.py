# backend/lifeos/models/user.py
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field


class UserInDB(BaseModel):
    """
    Complete shape of a document in the 'users' collection.
    """
    # Mongo '_id' exposed as 'id'
    id: str = Field(..., alias="_id")

    email: Optional[EmailStr] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    profile_image_url: Optional[str] = None

    created_at: datetime = Field(default_factory=datetime.now)
    updated_at: Optional[datetime] = None
    last_login_at: Optional[datetime] = None

    model_config = ConfigDict(
        populate_by_name=True,  # allow id=... as well as _id=...
        from_attributes=True,
    )
