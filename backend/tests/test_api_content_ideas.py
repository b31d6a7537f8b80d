"""Content idea list / edit / delete endpoints."""

from __future__ import annotations

from datetime import datetime, timezone
from unittest.mock import MagicMock

import pytest
from bson import ObjectId


def _idea_doc(**overrides):
    doc = {
        "_id": ObjectId(),
        "user_id": "user-1",
        "platform": "shorts",
        "title": "3 knife tricks",
        "description": "quick wins in the kitchen",
        "niche": "cooking",
        "saved": False,
        "created_at": datetime.now(timezone.utc),
    }
    doc.update(overrides)
    return doc


def test_list_is_scoped_to_user_and_newest_first(client, fake_db):
    col = fake_db["content_ideas"]
    col.find.return_value.to_list.return_value = [_idea_doc(title="new"), _idea_doc(title="old")]

    resp = client.get("/api/content-ideas")

    assert resp.status_code == 200
    assert [i["title"] for i in resp.json()] == ["new", "old"]
    assert resp.json()[0]["userId"] == "user-1"
    col.find.assert_called_once_with({"user_id": "user-1"})
    col.find.return_value.sort.assert_called_once_with("created_at", -1)


def test_save_idea_sets_only_sent_fields(client, fake_db):
    doc = _idea_doc(saved=True)
    col = fake_db["content_ideas"]
    col.find_one.return_value = doc

    resp = client.patch(f"/api/content-ideas/{doc['_id']}", json={"saved": True})

    assert resp.status_code == 200
    assert resp.json()["saved"] is True
    query, update = col.update_one.await_args.args
    assert query == {"_id": doc["_id"], "user_id": "user-1"}
    assert update == {"$set": {"saved": True}}


def test_patch_unknown_or_foreign_idea_is_404(client, fake_db):
    fake_db["content_ideas"].update_one.return_value = MagicMock(matched_count=0)

    resp = client.patch(f"/api/content-ideas/{ObjectId()}", json={"saved": True})

    assert resp.status_code == 404
    fake_db["content_ideas"].find_one.assert_not_awaited()


def test_delete_idea_returns_204(client, fake_db):
    idea_id = ObjectId()

    resp = client.delete(f"/api/content-ideas/{idea_id}")

    assert resp.status_code == 204
    assert resp.content == b""
    fake_db["content_ideas"].delete_one.assert_awaited_once_with({"_id": idea_id, "user_id": "user-1"})


def test_delete_unknown_or_foreign_idea_is_404(client, fake_db):
    fake_db["content_ideas"].delete_one.return_value = MagicMock(deleted_count=0)
    assert client.delete(f"/api/content-ideas/{ObjectId()}").status_code == 404


@pytest.mark.parametrize("method", ["patch", "delete"])
def test_malformed_id_is_404_without_touching_mongo(client, fake_db, method):
    kwargs = {"json": {"saved": True}} if method == "patch" else {}

    resp = getattr(client, method)("/api/content-ideas/not-an-id", **kwargs)

    assert resp.status_code == 404
    col = fake_db["content_ideas"]
    col.update_one.assert_not_awaited()
    col.delete_one.assert_not_awaited()
