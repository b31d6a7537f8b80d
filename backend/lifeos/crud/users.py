# backend/lifeos/crud/users.py
import uuid
from typing import Optional

from lifeos.crud.base import utcnow
from lifeos.db.mongo import get_db
from lifeos.models.user import UserInDB


def get_users_collection():
    """
    users collection from the Motor handle; connect_to_mongo() must have run.
    """
    return get_db()["users"]


def _strip_or_none(v):
    if v is None or not isinstance(v, str):
        return v
    s = v.strip()
    return s or None


# ---------- READ ----------

async def get_user_by_id(user_id: str) -> Optional[UserInDB]:
    user = await get_users_collection().find_one({"_id": user_id})
    return UserInDB(**user) if user else None


# ---------- UPSERT (login) ----------

async def upsert_user_by_email(
    *,
    email: str,
    first_name: Optional[str] = None,
    last_name: Optional[str] = None,
    profile_image_url: Optional[str] = None,
) -> UserInDB:
    """
    Existing user: refresh profile fields and last_login_at.
    New user: created with a uuid string _id.
    """
    col = get_users_collection()
    now = utcnow()
    email = _strip_or_none(email) or email

    profile = {
        "first_name": _strip_or_none(first_name),
        "last_name": _strip_or_none(last_name),
        "profile_image_url": _strip_or_none(profile_image_url),
        "updated_at": now,
        "last_login_at": now,
    }

    existing = await col.find_one({"email": email})
    if existing:
        await col.update_one({"_id": existing["_id"]}, {"$set": profile})
        existing.update(profile)
        return UserInDB(**existing)

    new_user = UserInDB(id=str(uuid.uuid4()), email=email, created_at=now, **profile)
    await col.insert_one(new_user.model_dump(by_alias=True))
    return new_user
