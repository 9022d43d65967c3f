from fastapi import APIRouter

from academicflow.api.v1 import assistant, auth, citations, faculty, notes, submissions

router = APIRouter()
router.include_router(auth.router, tags=["auth"])
router.include_router(notes.router, tags=["notes"])
router.include_router(citations.router, tags=["citations"])
router.include_router(assistant.router, tags=["assistant"])
router.include_router(faculty.router, tags=["faculty"])
router.include_router(submissions.router, tags=["submissions"])
