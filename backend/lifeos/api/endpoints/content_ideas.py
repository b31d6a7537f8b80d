# backend/lifeos/api/endpoints/content_ideas.py
from typing import List

from fastapi import APIRouter, Depends, HTTPException, status

from lifeos.api.deps import get_current_user_id
from lifeos.crud import content_ideas as content_idea_crud
from lifeos.schemas.content_idea import ContentIdeaRead, ContentIdeaUpdate

router = APIRouter(prefix="/api/content-ideas", tags=["Content Ideas"])


@router.get("", response_model=List[ContentIdeaRead])
async def read_content_ideas(user_id: str = Depends(get_current_user_id)):
    return await content_idea_crud.get_content_ideas(user_id)


@router.patch("/{idea_id}", response_model=ContentIdeaRead)
async def update_content_idea(
    idea_id: str,
    idea: ContentIdeaUpdate,
    user_id: str = Depends(get_current_user_id),
):
    updated = await content_idea_crud.update_content_idea(user_id, idea_id, idea)
    if not updated:
        raise HTTPException(status_code=404, detail="Content idea not found")
    return updated


@router.delete("/{idea_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_content_idea(idea_id: str, user_id: str = Depends(get_current_user_id)):
    if not await content_idea_crud.delete_content_idea(user_id, idea_id):
        raise HTTPException(status_code=404, detail="Content idea not found")
    return None
