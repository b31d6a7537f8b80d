"""JWT dependency and auth routes."""

from __future__ import annotations

from datetime import datetime, timezone

import pytest
from fastapi import HTTPException

from lifeos.api.deps import get_current_user_id
from lifeos.core.security import create_access_token, create_refresh_token


@pytest.mark.asyncio
async def test_access_token_yields_user_id():
    assert await get_current_user_id(create_access_token("user-9")) == "user-9"


@pytest.mark.asyncio
@pytest.mark.parametrize("token", [create_refresh_token("user-9"), "garbage"])
async def test_refresh_or_garbage_token_is_rejected(token):
    with pytest.raises(HTTPException) as info:
        await get_current_user_id(token)
    assert info.value.status_code == 401
    assert info.value.headers == {"WWW-Authenticate": "Bearer"}


def test_refresh_endpoint_issues_new_pair(anon_client):
    resp = anon_client.post("/api/auth/refresh", json={"refreshToken": create_refresh_token("user-9")})

    assert resp.status_code == 200
    body = resp.json()
    assert body["tokenType"] == "bearer"
    assert body["accessToken"] and body["refreshToken"]


def test_refresh_endpoint_rejects_access_token(anon_client):
    resp = anon_client.post("/api/auth/refresh", json={"refreshToken": create_access_token("user-9")})
    assert resp.status_code == 401


def test_current_user(client, fake_db):
    fake_db["users"].find_one.return_value = {
        "_id": "user-1",
        "email": "me@example.com",
        "first_name": "Sam",
        "created_at": datetime.now(timezone.utc),
    }

    resp = client.get("/api/auth/user")

    assert resp.status_code == 200
    assert resp.json()["email"] == "me@example.com"
    assert resp.json()["id"] == "user-1"
    fake_db["users"].find_one.assert_awaited_once_with({"_id": "user-1"})


def test_current_user_missing_is_404(client, fake_db):
    assert client.get("/api/auth/user").status_code == 404
