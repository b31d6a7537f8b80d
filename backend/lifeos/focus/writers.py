# backend/lifeos/focus/writers.py
import logging
from typing import Optional

import httpx
from pydantic import ValidationError
from pymongo.errors import PyMongoError

from lifeos.crud import focus_sessions as focus_session_crud
from lifeos.focus.errors import (
    SessionAuthError,
    SessionPersistenceError,
    SessionValidationError,
)
from lifeos.schemas.focus_session import FocusSessionCreate, FocusSessionRead

logger = logging.getLogger(__name__)

FOCUS_SESSIONS_PATH = "/api/focus-sessions"


class ApiSessionWriter:
    """
    Sends records to POST /api/focus-sessions with the user's bearer token.
    No timeout: a slow store only delays the (unawaited) flush, never the timer.
    """

    def __init__(
        self,
        base_url: str,
        access_token: Optional[str],
        client: Optional[httpx.AsyncClient] = None,
    ):
        self.access_token = access_token
        self._client = client or httpx.AsyncClient(base_url=base_url, timeout=None)
        self._owns_client = client is None

    async def create(self, record: FocusSessionCreate) -> FocusSessionRead:
        if not self.access_token:
            raise SessionAuthError("no access token")

        try:
            response = await self._client.post(
                FOCUS_SESSIONS_PATH,
                json=record.model_dump(by_alias=True),
                headers={"Authorization": f"Bearer {self.access_token}"},
            )
        except httpx.HTTPError as e:
            raise SessionPersistenceError(f"request failed: {e}") from e

        if response.status_code in (401, 403):
            raise SessionAuthError(f"rejected with {response.status_code}")
        if response.status_code in (400, 422):
            raise SessionValidationError(response.text)
        if response.is_error:
            raise SessionPersistenceError(f"server answered {response.status_code}")

        return FocusSessionRead.model_validate(response.json())

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc):
        await self.aclose()


class CrudSessionWriter:
    """
    Writes straight into Mongo for an already-authenticated user
    (server-side timers, scripts).
    """

    def __init__(self, user_id: Optional[str]):
        self.user_id = user_id

    async def create(self, record: FocusSessionCreate) -> FocusSessionRead:
        if not self.user_id:
            raise SessionAuthError("no user id")
        try:
            # re-validate: records built by hand bypass the model validators
            record = FocusSessionCreate.model_validate(record.model_dump())
            return await focus_session_crud.create_focus_session(self.user_id, record)
        except ValidationError as e:
            raise SessionValidationError(str(e)) from e
        except (PyMongoError, RuntimeError) as e:
            raise SessionPersistenceError(str(e)) from e
