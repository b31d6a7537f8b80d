# backend/lifeos/api/endpoints/auth.py
import logging

from authlib.integrations.starlette_client import OAuth, OAuthError
from fastapi import APIRouter, Depends, HTTPException, Request, status
from jose import JWTError

from lifeos.api.deps import get_current_user_id
from lifeos.core.config import settings
from lifeos.core.security import create_access_token, create_refresh_token, decode_token
from lifeos.crud import users as users_crud
from lifeos.schemas.user import RefreshRequest, TokenResponse, UserRead

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/auth", tags=["Auth"])

# --- OAuth ---
oauth = OAuth()
oauth.register(
    name="google",
    client_id=settings.GOOGLE_CLIENT_ID,
    client_secret=settings.GOOGLE_CLIENT_SECRET,
    server_metadata_url="https://accounts.google.com/.well-known/openid-configuration",
    client_kwargs={"scope": "openid email profile"},
)


def _issue_tokens(user_id: str, email: str | None = None) -> TokenResponse:
    return TokenResponse(
        access_token=create_access_token(user_id, email=email),
        refresh_token=create_refresh_token(user_id),
    )


# --------------------------------------------------------------------------
# 1. start login
# --------------------------------------------------------------------------
@router.get("/google/login")
async def login_via_google(request: Request):
    redirect_uri = f"{settings.BACKEND_PUBLIC_URL}/api/auth/google/callback"
    return await oauth.google.authorize_redirect(request, redirect_uri)


# --------------------------------------------------------------------------
# 2. callback: upsert the user, hand out our own JWTs
# --------------------------------------------------------------------------
@router.get("/google/callback", response_model=TokenResponse)
async def auth_google_callback(request: Request):
    try:
        token = await oauth.google.authorize_access_token(request)
    except OAuthError as e:
        logger.warning("Google OAuth failed: %s", e)
        raise HTTPException(status_code=400, detail="Authentication failed")

    user_info = token.get("userinfo")
    if not user_info or not user_info.get("email"):
        raise HTTPException(status_code=400, detail="Failed to get user info")

    user = await users_crud.upsert_user_by_email(
        email=user_info["email"],
        first_name=user_info.get("given_name"),
        last_name=user_info.get("family_name"),
        profile_image_url=user_info.get("picture"),
    )
    logger.info("user %s logged in", user.id)
    return _issue_tokens(user.id, user.email)


# --------------------------------------------------------------------------
# 3. refresh
# --------------------------------------------------------------------------
@router.post("/refresh", response_model=TokenResponse)
async def refresh_tokens(body: RefreshRequest):
    try:
        payload = decode_token(body.refresh_token)
    except JWTError:
        payload = {}

    user_id = payload.get("sub")
    if not user_id or payload.get("type") != "refresh":
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid refresh token",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return _issue_tokens(user_id)


# --------------------------------------------------------------------------
# 4. current user
# --------------------------------------------------------------------------
@router.get("/user", response_model=UserRead)
async def read_current_user(user_id: str = Depends(get_current_user_id)):
    user = await users_crud.get_user_by_id(user_id)
    if user is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
    return UserRead(**user.model_dump(by_alias=False))
