from __future__ import annotations

from datetime import datetime, timezone

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from academicflow.api.deps import get_current_user
from academicflow.core.logging import get_logger
from academicflow.db.session import get_db
from academicflow.models.entities import Submission, User
from academicflow.schemas.submissions import SubmissionCreate, SubmissionResponse, SubmissionReview

router = APIRouter()
logger = get_logger(__name__)


@router.get("/submissions", response_model=list[SubmissionResponse])
async def list_submissions(user: User = Depends(get_current_user), db: AsyncSession = Depends(get_db)):
    if user.role == "faculty":
        query = select(Submission).where(Submission.faculty_id == user.id)
    else:
        query = select(Submission).where(Submission.student_id == user.id)
    rows = await db.scalars(query.order_by(Submission.submitted_at.desc()))
    return rows.all()


@router.get("/submissions/{submission_id}", response_model=SubmissionResponse)
async def get_submission(submission_id: str, user: User = Depends(get_current_user), db: AsyncSession = Depends(get_db)):
    submission = await db.get(Submission, submission_id)
    if submission is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Submission not found")
    if user.id not in (submission.student_id, submission.faculty_id):
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Forbidden")
    return submission


@router.post("/submissions", response_model=SubmissionResponse)
async def create_submission(
    body: SubmissionCreate,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    submission = Submission(student_id=user.id, **body.model_dump())
    db.add(submission)
    await db.commit()
    await db.refresh(submission)
    logger.info("submission_created", submission_id=submission.id, faculty_id=submission.faculty_id)
    return submission


@router.patch("/submissions/{submission_id}", response_model=SubmissionResponse)
async def review_submission(
    submission_id: str,
    body: SubmissionReview,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    submission = await db.get(Submission, submission_id)
    if submission is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Submission not found")
    if user.role != "faculty" or submission.faculty_id != user.id:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Forbidden")

    for key, value in body.model_dump(exclude_unset=True).items():
        setattr(submission, key, value)
    submission.reviewed_at = datetime.now(timezone.utc)
    await db.commit()
    await db.refresh(submission)
    return submission
