# backend/lifeos/api/endpoints/tasks.py
from typing import List

from fastapi import APIRouter, Depends, HTTPException, status

from lifeos.api.deps import get_current_user_id
from lifeos.crud import tasks as task_crud
from lifeos.schemas.task import TaskCreate, TaskRead, TaskUpdate

router = APIRouter(prefix="/api/tasks", tags=["Tasks"])


# CREATE
@router.post("", response_model=TaskRead, status_code=status.HTTP_201_CREATED)
async def create_task(task: TaskCreate, user_id: str = Depends(get_current_user_id)):
    return await task_crud.create_task(user_id, task)


# READ ALL
@router.get("", response_model=List[TaskRead])
async def read_tasks(user_id: str = Depends(get_current_user_id)):
    return await task_crud.get_tasks(user_id)


# UPDATE
@router.patch("/{task_id}", response_model=TaskRead)
async def update_task(task_id: str, task: TaskUpdate, user_id: str = Depends(get_current_user_id)):
    updated = await task_crud.update_task(user_id, task_id, task)
    if not updated:
        raise HTTPException(status_code=404, detail="Task not found")
    return updated


# DELETE
@router.delete("/{task_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_task(task_id: str, user_id: str = Depends(get_current_user_id)):
    deleted = await task_crud.delete_task(user_id, task_id)
    if not deleted:
        raise HTTPException(status_code=404, detail="Task not found")
    return None
