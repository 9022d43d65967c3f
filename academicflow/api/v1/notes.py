from __future__ import annotations

import uuid

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from academicflow.api.deps import get_current_user
from academicflow.core.config import get_settings
from academicflow.db.session import get_db
from academicflow.models.entities import Note, User
from academicflow.schemas.common import SuccessResponse
from academicflow.schemas.notes import NoteCreate, NoteResponse, NoteUpdate, ShareRequest, ShareResponse

router = APIRouter()


async def get_owned_note(note_id: str, user: User, db: AsyncSession) -> Note:
    note = await db.get(Note, note_id)
    if note is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Note not found")
    if note.user_id != user.id:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Forbidden")
    return note


@router.get("/notes", response_model=list[NoteResponse])
async def list_notes(user: User = Depends(get_current_user), db: AsyncSession = Depends(get_db)):
    rows = await db.scalars(
        select(Note).where(Note.user_id == user.id).order_by(Note.updated_at.desc(), Note.created_at.desc())
    )
    return rows.all()


@router.get("/notes/shared/{token}", response_model=NoteResponse)
async def shared_note(token: str, db: AsyncSession = Depends(get_db)):
    note = await db.scalar(select(Note).where(Note.share_token == token, Note.is_public.is_(True)))
    if note is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Note not found or not public")
    return note


@router.get("/notes/{note_id}", response_model=NoteResponse)
async def get_note(note_id: str, user: User = Depends(get_current_user), db: AsyncSession = Depends(get_db)):
    return await get_owned_note(note_id, user, db)


@router.post("/notes", response_model=NoteResponse)
async def create_note(body: NoteCreate, user: User = Depends(get_current_user), db: AsyncSession = Depends(get_db)):
    note = Note(user_id=user.id, **body.model_dump())
    db.add(note)
    await db.commit()
    await db.refresh(note)
    return note


@router.patch("/notes/{note_id}", response_model=NoteResponse)
async def update_note(
    note_id: str,
    body: NoteUpdate,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    note = await get_owned_note(note_id, user, db)
    for key, value in body.model_dump(exclude_unset=True).items():
        setattr(note, key, value)
    await db.commit()
    await db.refresh(note)
    return note


@router.delete("/notes/{note_id}", response_model=SuccessResponse)
async def delete_note(note_id: str, user: User = Depends(get_current_user), db: AsyncSession = Depends(get_db)):
    note = await get_owned_note(note_id, user, db)
    await db.delete(note)
    await db.commit()
    return SuccessResponse()


@router.post("/notes/{note_id}/share", response_model=ShareResponse)
async def share_note(
    note_id: str,
    body: ShareRequest,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    note = await get_owned_note(note_id, user, db)
    note.share_token = note.share_token or str(uuid.uuid4())
    note.is_public = body.is_public
    await db.commit()

    if not body.is_public:
        return ShareResponse(share_url=None)
    return ShareResponse(share_url=f"{get_settings().public_base_url}/shared/{note.share_token}")
