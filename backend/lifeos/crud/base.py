# backend/lifeos/crud/base.py
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from bson import ObjectId
from bson.errors import InvalidId


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def ensure_aware_utc(dt: datetime) -> datetime:
    """
    Naive values (as stored) are UTC; aware ones are converted to UTC.
    """
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def safe_object_id(value: Any) -> Optional[ObjectId]:
    """
    str/ObjectId -> ObjectId, None when the value is not a valid id.
    """
    if isinstance(value, ObjectId):
        return value
    if isinstance(value, str):
        value = value.strip()
    try:
        return ObjectId(value)
    except (InvalidId, TypeError):
        return None


def owned_filter(user_id: str, doc_id: str) -> Optional[Dict[str, Any]]:
    """
    Filter matching one document of one user.
    Every read/update/delete goes through this so nobody can touch another user's data.
    None means the id is malformed (treated as "not found" by callers).
    """
    oid = safe_object_id(doc_id)
    if oid is None:
        return None
    return {"_id": oid, "user_id": user_id}
