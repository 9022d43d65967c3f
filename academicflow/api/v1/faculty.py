from __future__ import annotations

import time
import uuid

from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from academicflow.api.deps import get_citation_service, get_detector, require_faculty
from academicflow.core.config import get_settings
from academicflow.core.logging import get_logger
from academicflow.db.session import get_db
from academicflow.models.entities import DetectionEvent, Submission, User
from academicflow.schemas.citations import VerifyCitationsRequest, VerifyCitationsResponse
from academicflow.schemas.detection import DetectionResponse
from academicflow.services.citations import CitationService
from academicflow.services.detector import DetectorService
from academicflow.utils.request_body import read_detection_request
from academicflow.utils.text import sha256_text, word_tokens

router = APIRouter()
logger = get_logger(__name__)


@router.post("/faculty/detect-ai", response_model=DetectionResponse, response_model_exclude_none=True)
async def detect_ai(
    request: Request,
    user: User = Depends(require_faculty),
    db: AsyncSession = Depends(get_db),
    detector: DetectorService = Depends(get_detector),
):
    settings = get_settings()
    content, submission_id = await read_detection_request(request, settings.detection_min_chars)

    start = time.perf_counter()
    result, mode = await detector.detect(content)
    latency_ms = round((time.perf_counter() - start) * 1000, 3)

    if submission_id is not None:
        submission = await db.get(Submission, submission_id)
        if submission is not None and submission.faculty_id == user.id:
            submission.ai_detection_score = result.ai_score
        else:
            submission_id = None

    db.add(
        DetectionEvent(
            detection_id=uuid.uuid4().hex,
            user_id=user.id,
            submission_id=submission_id,
            text_hash=sha256_text(content),
            mode=mode,
            ai_score=result.ai_score,
            likelihood=result.likelihood,
            confidence=result.confidence,
            word_count=len(word_tokens(content)),
            latency_ms=latency_ms,
        )
    )
    await db.commit()

    logger.info(
        "detection_complete",
        mode=mode,
        ai_score=result.ai_score,
        likelihood=result.likelihood,
        latency_ms=latency_ms,
    )
    return DetectionResponse.model_validate(result.as_dict())


@router.post("/faculty/verify-citations", response_model=VerifyCitationsResponse)
async def verify_citations(
    body: VerifyCitationsRequest,
    _faculty: User = Depends(require_faculty),
    service: CitationService = Depends(get_citation_service),
):
    results = await service.verify(body.content, body.style)
    return VerifyCitationsResponse(results=results)
