from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from academicflow.api.deps import get_citation_service, get_current_user
from academicflow.api.v1.notes import get_owned_note
from academicflow.core.logging import get_logger
from academicflow.db.session import get_db
from academicflow.models.entities import Citation, Note, User
from academicflow.schemas.citations import CitationGenerateRequest, CitationResponse
from academicflow.services.citations import CitationService

router = APIRouter()
logger = get_logger(__name__)


@router.get("/citations/{note_id}", response_model=list[CitationResponse])
async def list_citations(note_id: str, user: User = Depends(get_current_user), db: AsyncSession = Depends(get_db)):
    await get_owned_note(note_id, user, db)
    rows = await db.scalars(select(Citation).where(Citation.note_id == note_id).order_by(Citation.created_at.desc()))
    return rows.all()


@router.post("/citations/generate", response_model=CitationResponse)
async def generate_citation(
    body: CitationGenerateRequest,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
    service: CitationService = Depends(get_citation_service),
):
    note = await db.get(Note, body.note_id)
    if note is None or note.user_id != user.id:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Forbidden")

    formatted = await service.generate(body.input_text, body.citation_style)

    citation = Citation(
        note_id=note.id,
        input_text=body.input_text,
        formatted_citation=formatted,
        citation_style=body.citation_style,
    )
    db.add(citation)
    await db.commit()
    await db.refresh(citation)
    logger.info("citation_generated", note_id=note.id, style=body.citation_style)
    return citation
