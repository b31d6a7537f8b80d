# backend/lifeos/api/endpoints/notes.py
from typing import List

from fastapi import APIRouter, Depends, HTTPException, status

from lifeos.api.deps import get_current_user_id
from lifeos.crud import notes as note_crud
from lifeos.schemas.note import NoteCreate, NoteRead, NoteUpdate

router = APIRouter(prefix="/api/notes", tags=["Notes"])


@router.post("", response_model=NoteRead, status_code=status.HTTP_201_CREATED)
async def create_note(note: NoteCreate, user_id: str = Depends(get_current_user_id)):
    return await note_crud.create_note(user_id, note)


@router.get("", response_model=List[NoteRead])
async def read_notes(user_id: str = Depends(get_current_user_id)):
    return await note_crud.get_notes(user_id)


@router.patch("/{note_id}", response_model=NoteRead)
async def update_note(note_id: str, note: NoteUpdate, user_id: str = Depends(get_current_user_id)):
    updated = await note_crud.update_note(user_id, note_id, note)
    if not updated:
        raise HTTPException(status_code=404, detail="Note not found")
    return updated


@router.delete("/{note_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_note(note_id: str, user_id: str = Depends(get_current_user_id)):
    if not await note_crud.delete_note(user_id, note_id):
        raise HTTPException(status_code=404, detail="Note not found")
    return None
