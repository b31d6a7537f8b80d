# backend/lifeos/api/deps.py
import logging

from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from jose import JWTError

from lifeos.core.security import decode_token

logger = logging.getLogger(__name__)

# shows the token box in the Swagger UI
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/auth/google/login")


async def get_current_user_id(token: str = Depends(oauth2_scheme)) -> str:
    """
    Validate the bearer JWT and return its user id (sub).
    Refresh tokens are not accepted here.
    """
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )

    try:
        payload = decode_token(token)
    except JWTError as e:
        logger.info("rejected access token: %s", e)
        raise credentials_exception

    user_id = payload.get("sub")
    if not user_id or payload.get("type") != "access":
        raise credentials_exception
    return user_id
