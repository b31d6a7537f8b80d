from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Union

from jose import jwt

from lifeos.core.config import settings


def _create_token(subject: Union[str, Any], token_type: str, expires_delta: timedelta, **claims) -> str:
    expire = datetime.now(timezone.utc) + expires_delta
    to_encode = {"exp": expire, "sub": str(subject), "type": token_type, **claims}
    return jwt.encode(to_encode, settings.JWT_SECRET_KEY, algorithm=settings.JWT_ALGORITHM)


def create_access_token(subject: Union[str, Any], **claims) -> str:
    """
    Access token (short lived)
    """
    return _create_token(
        subject,
        "access",
        timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES),
        **claims,
    )


def create_refresh_token(subject: Union[str, Any]) -> str:
    """
    Refresh token (long lived)
    """
    return _create_token(
        subject,
        "refresh",
        timedelta(days=settings.REFRESH_TOKEN_EXPIRE_DAYS),
    )


def decode_token(token: str) -> Dict[str, Any]:
    """
    Verify signature and expiry. Raises jose.JWTError on any failure.
    """
    return jwt.decode(token, settings.JWT_SECRET_KEY, algorithms=[settings.JWT_ALGORITHM])
