# backend/lifeos/crud/notes.py
from datetime import datetime
from typing import List, Optional

from lifeos.crud.base import owned_filter, utcnow
from lifeos.db.mongo import get_db
from lifeos.schemas.note import NoteCreate, NoteRead, NoteUpdate


def get_notes_collection():
    return get_db()["notes"]


def serialize_note(note) -> NoteRead:
    return NoteRead(
        id=str(note["_id"]),
        user_id=note["user_id"],
        title=note["title"],
        content=note["content"],
        summary=note.get("summary"),
        created_at=note["created_at"],
        updated_at=note.get("updated_at"),
    )


# CREATE
async def create_note(user_id: str, note_data: NoteCreate) -> NoteRead:
    col = get_notes_collection()
    now = utcnow()
    new_note = {
        "user_id": user_id,
        "title": note_data.title,
        "content": note_data.content,
        "summary": None,
        "created_at": now,
        "updated_at": now,
    }
    result = await col.insert_one(new_note)
    new_note["_id"] = result.inserted_id
    return serialize_note(new_note)


# READ ALL (newest first)
async def get_notes(user_id: str) -> List[NoteRead]:
    col = get_notes_collection()
    docs = await col.find({"user_id": user_id}).sort("created_at", -1).to_list(length=None)
    return [serialize_note(doc) for doc in docs]


# READ ONE
async def get_note(user_id: str, note_id: str) -> Optional[NoteRead]:
    query = owned_filter(user_id, note_id)
    if query is None:
        return None
    doc = await get_notes_collection().find_one(query)
    return serialize_note(doc) if doc else None


async def _set_fields(user_id: str, note_id: str, fields: dict) -> Optional[NoteRead]:
    query = owned_filter(user_id, note_id)
    if query is None:
        return None
    col = get_notes_collection()
    fields["updated_at"] = utcnow()
    result = await col.update_one(query, {"$set": fields})
    if result.matched_count == 0:
        return None
    updated = await col.find_one(query)
    return serialize_note(updated) if updated else None


# UPDATE
async def update_note(user_id: str, note_id: str, note_data: NoteUpdate) -> Optional[NoteRead]:
    update_fields = {k: v for k, v in note_data.model_dump(exclude_unset=True).items() if v is not None}
    if not update_fields:
        return await get_note(user_id, note_id)
    return await _set_fields(user_id, note_id, update_fields)


# UPDATE (AI summary)
async def set_note_summary(user_id: str, note_id: str, summary: str) -> Optional[NoteRead]:
    return await _set_fields(user_id, note_id, {"summary": summary})


# DELETE
async def delete_note(user_id: str, note_id: str) -> bool:
    query = owned_filter(user_id, note_id)
    if query is None:
        return False
    result = await get_notes_collection().delete_one(query)
    return result.deleted_count == 1


async def count_notes_created_between(user_id: str, start: datetime, end: datetime) -> int:
    return await get_notes_collection().count_documents(
        {"user_id": user_id, "created_at": {"$gte": start, "$lt": end}}
    )
