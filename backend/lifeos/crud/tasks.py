# backend/lifeos/crud/tasks.py
from typing import List, Optional

from lifeos.crud.base import owned_filter, utcnow
from lifeos.db.mongo import get_db
from lifeos.schemas.task import TaskCreate, TaskRead, TaskUpdate

# fields that may be explicitly cleared with null
NULLABLE_FIELDS = {"description", "category", "due_date"}


def get_tasks_collection():
    return get_db()["tasks"]


def serialize_task(task) -> TaskRead:
    return TaskRead(
        id=str(task["_id"]),
        user_id=task["user_id"],
        title=task["title"],
        description=task.get("description"),
        priority=task.get("priority") or "medium",
        category=task.get("category"),
        due_date=task.get("due_date"),
        completed=task.get("completed", False),
        created_at=task["created_at"],
        updated_at=task.get("updated_at"),
    )


# CREATE
async def create_task(user_id: str, task_data: TaskCreate) -> TaskRead:
    col = get_tasks_collection()
    now = utcnow()
    new_task = {
        **task_data.model_dump(),
        "user_id": user_id,
        "created_at": now,
        "updated_at": now,
    }
    result = await col.insert_one(new_task)
    new_task["_id"] = result.inserted_id
    return serialize_task(new_task)


# READ ALL (newest first)
async def get_tasks(user_id: str) -> List[TaskRead]:
    col = get_tasks_collection()
    docs = await col.find({"user_id": user_id}).sort("created_at", -1).to_list(length=None)
    return [serialize_task(doc) for doc in docs]


# READ ONE
async def get_task(user_id: str, task_id: str) -> Optional[TaskRead]:
    query = owned_filter(user_id, task_id)
    if query is None:
        return None
    doc = await get_tasks_collection().find_one(query)
    return serialize_task(doc) if doc else None


# UPDATE
async def update_task(user_id: str, task_id: str, task_data: TaskUpdate) -> Optional[TaskRead]:
    query = owned_filter(user_id, task_id)
    if query is None:
        return None

    col = get_tasks_collection()
    update_fields = {
        k: v
        for k, v in task_data.model_dump(exclude_unset=True).items()
        if v is not None or k in NULLABLE_FIELDS
    }
    if not update_fields:
        return await get_task(user_id, task_id)

    update_fields["updated_at"] = utcnow()
    result = await col.update_one(query, {"$set": update_fields})
    if result.matched_count == 0:
        return None
    updated = await col.find_one(query)
    return serialize_task(updated) if updated else None


# DELETE
async def delete_task(user_id: str, task_id: str) -> bool:
    query = owned_filter(user_id, task_id)
    if query is None:
        return False
    result = await get_tasks_collection().delete_one(query)
    return result.deleted_count == 1


# COUNTS (daily summary)
async def count_tasks(user_id: str, completed: Optional[bool] = None) -> int:
    query = {"user_id": user_id}
    if completed is not None:
        query["completed"] = completed
    return await get_tasks_collection().count_documents(query)
