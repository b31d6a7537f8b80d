"""Shared fixtures.

Mongo is replaced by MagicMock collections (AsyncMock for awaited calls),
the authenticated user by a dependency override.
"""

from __future__ import annotations

from collections import defaultdict
from unittest.mock import AsyncMock, MagicMock

import pytest
from bson import ObjectId
from fastapi.testclient import TestClient

from lifeos.api.deps import get_current_user_id
from lifeos.db import mongo
from lifeos.main import app

USER_ID = "user-1"


def make_collection(find_result=()):
    col = MagicMock()
    col.insert_one = AsyncMock(return_value=MagicMock(inserted_id=ObjectId()))
    col.insert_many = AsyncMock(return_value=MagicMock(inserted_ids=[]))
    col.find_one = AsyncMock(return_value=None)
    col.update_one = AsyncMock(return_value=MagicMock(matched_count=1))
    col.delete_one = AsyncMock(return_value=MagicMock(deleted_count=1))
    col.count_documents = AsyncMock(return_value=0)

    cursor = MagicMock()
    cursor.sort.return_value = cursor
    cursor.limit.return_value = cursor
    cursor.to_list = AsyncMock(return_value=list(find_result))
    col.find.return_value = cursor
    return col


@pytest.fixture()
def fake_db(monkeypatch):
    """Collections are created on first access: fake_db["tasks"]."""
    collections = defaultdict(make_collection)
    db = MagicMock()
    db.__getitem__.side_effect = lambda name: collections[name]
    db.command = AsyncMock(return_value={"ok": 1})
    monkeypatch.setattr(mongo, "db", db)
    return collections


@pytest.fixture()
def client(fake_db):
    app.dependency_overrides[get_current_user_id] = lambda: USER_ID
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture()
def anon_client(fake_db):
    app.dependency_overrides.clear()
    return TestClient(app)
