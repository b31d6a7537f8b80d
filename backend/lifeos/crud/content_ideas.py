# backend/lifeos/crud/content_ideas.py
from typing import List, Optional

from lifeos.crud.base import owned_filter, utcnow
from lifeos.db.mongo import get_db
from lifeos.schemas.ai import GeneratedIdea
from lifeos.schemas.content_idea import ContentIdeaRead, ContentIdeaUpdate


def get_content_ideas_collection():
    return get_db()["content_ideas"]


def serialize_content_idea(idea) -> ContentIdeaRead:
    return ContentIdeaRead(
        id=str(idea["_id"]),
        user_id=idea["user_id"],
        platform=idea["platform"],
        title=idea["title"],
        description=idea.get("description"),
        niche=idea.get("niche"),
        saved=idea.get("saved", False),
        created_at=idea["created_at"],
    )


# CREATE (AI output only)
async def create_content_ideas(
    user_id: str,
    niche: str,
    platform: str,
    ideas: List[GeneratedIdea],
) -> List[ContentIdeaRead]:
    if not ideas:
        return []
    now = utcnow()
    docs = [
        {
            "user_id": user_id,
            "platform": platform,
            "title": idea.title,
            "description": idea.description,
            "niche": niche,
            "saved": False,
            "created_at": now,
        }
        for idea in ideas
    ]
    result = await get_content_ideas_collection().insert_many(docs)
    for doc, inserted_id in zip(docs, result.inserted_ids):
        doc["_id"] = inserted_id
    return [serialize_content_idea(doc) for doc in docs]


# READ ALL (newest first)
async def get_content_ideas(user_id: str) -> List[ContentIdeaRead]:
    col = get_content_ideas_collection()
    docs = await col.find({"user_id": user_id}).sort("created_at", -1).to_list(length=None)
    return [serialize_content_idea(doc) for doc in docs]


# UPDATE
async def update_content_idea(
    user_id: str,
    idea_id: str,
    idea_data: ContentIdeaUpdate,
) -> Optional[ContentIdeaRead]:
    query = owned_filter(user_id, idea_id)
    if query is None:
        return None

    col = get_content_ideas_collection()
    update_fields = {k: v for k, v in idea_data.model_dump(exclude_unset=True).items() if v is not None}
    if update_fields:
        result = await col.update_one(query, {"$set": update_fields})
        if result.matched_count == 0:
            return None
    doc = await col.find_one(query)
    return serialize_content_idea(doc) if doc else None


# DELETE
async def delete_content_idea(user_id: str, idea_id: str) -> bool:
    query = owned_filter(user_id, idea_id)
    if query is None:
        return False
    result = await get_content_ideas_collection().delete_one(query)
    return result.deleted_count == 1
