"""Task and note CRUD endpoints."""

from __future__ import annotations

from datetime import datetime, timezone
from unittest.mock import MagicMock

from bson import ObjectId


def _task_doc(**overrides):
    doc = {
        "_id": ObjectId(),
        "user_id": "user-1",
        "title": "Write report",
        "description": None,
        "priority": "medium",
        "category": None,
        "due_date": None,
        "completed": False,
        "created_at": datetime.now(timezone.utc),
        "updated_at": datetime.now(timezone.utc),
    }
    doc.update(overrides)
    return doc


# ---------------------------------------------------------------------------
# tasks
# ---------------------------------------------------------------------------


def test_create_task_defaults(client, fake_db):
    resp = client.post("/api/tasks", json={"title": "  Write report  "})

    assert resp.status_code == 201
    body = resp.json()
    assert body["title"] == "Write report"
    assert body["priority"] == "medium"
    assert body["completed"] is False
    assert fake_db["tasks"].insert_one.await_args.args[0]["user_id"] == "user-1"


def test_create_task_rejects_blank_title_and_bad_priority(client, fake_db):
    assert client.post("/api/tasks", json={"title": "   "}).status_code == 422
    assert client.post("/api/tasks", json={"title": "x", "priority": "urgent"}).status_code == 422


def test_list_tasks_newest_first(client, fake_db):
    col = fake_db["tasks"]
    col.find.return_value.to_list.return_value = [_task_doc(title="b"), _task_doc(title="a")]

    resp = client.get("/api/tasks")

    assert [t["title"] for t in resp.json()] == ["b", "a"]
    col.find.assert_called_once_with({"user_id": "user-1"})
    col.find.return_value.sort.assert_called_once_with("created_at", -1)


def test_update_task_sets_only_sent_fields(client, fake_db):
    col = fake_db["tasks"]
    doc = _task_doc(completed=True)
    col.find_one.return_value = doc

    resp = client.patch(f"/api/tasks/{doc['_id']}", json={"completed": True, "category": None})

    assert resp.status_code == 200
    assert resp.json()["completed"] is True
    query, update = col.update_one.await_args.args
    assert query == {"_id": doc["_id"], "user_id": "user-1"}
    assert update["$set"]["completed"] is True
    assert update["$set"]["category"] is None
    assert "title" not in update["$set"]
    assert "updated_at" in update["$set"]


def test_update_task_of_other_user_is_404(client, fake_db):
    fake_db["tasks"].update_one.return_value = MagicMock(matched_count=0)
    resp = client.patch(f"/api/tasks/{ObjectId()}", json={"completed": True})
    assert resp.status_code == 404


def test_delete_task(client, fake_db):
    task_id = ObjectId()
    assert client.delete(f"/api/tasks/{task_id}").status_code == 204
    fake_db["tasks"].delete_one.assert_awaited_once_with({"_id": task_id, "user_id": "user-1"})


def test_delete_missing_task_is_404(client, fake_db):
    fake_db["tasks"].delete_one.return_value = MagicMock(deleted_count=0)
    assert client.delete(f"/api/tasks/{ObjectId()}").status_code == 404
    assert client.delete("/api/tasks/garbage").status_code == 404


# ---------------------------------------------------------------------------
# notes
# ---------------------------------------------------------------------------


def test_create_and_list_notes(client, fake_db):
    resp = client.post("/api/notes", json={"title": "Ideas", "content": "some text"})
    assert resp.status_code == 201
    assert resp.json()["summary"] is None

    fake_db["notes"].find.return_value.to_list.return_value = [{
        "_id": ObjectId(),
        "user_id": "user-1",
        "title": "Ideas",
        "content": "some text",
        "created_at": datetime.now(timezone.utc),
    }]
    assert [n["title"] for n in client.get("/api/notes").json()] == ["Ideas"]


def test_note_requires_content(client, fake_db):
    assert client.post("/api/notes", json={"title": "Ideas", "content": " "}).status_code == 422


def test_update_missing_note_is_404(client, fake_db):
    fake_db["notes"].update_one.return_value = MagicMock(matched_count=0)
    assert client.patch(f"/api/notes/{ObjectId()}", json={"title": "x"}).status_code == 404


def test_delete_note(client, fake_db):
    assert client.delete(f"/api/notes/{ObjectId()}").status_code == 204
