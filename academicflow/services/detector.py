from __future__ import annotations

from dataclasses import asdict
from typing import Literal

from pydantic import BaseModel, Field

from academicflow.core.logging import get_logger
from academicflow.services.llm import LLMClient, LLMError, parse_json_payload
from academicflow.services.pattern_detector import (
    DetectionDetails,
    DetectionResult,
    analyze_text_patterns,
    fallback_detection,
)
from academicflow.utils.text import clamp

logger = get_logger(__name__)

DETECTION_PROMPT = (
    "You are an AI content detector. Analyze the following text and estimate the likelihood (0-100) "
    "that it was AI-generated. Respond in JSON format: "
    '{"score": number, "confidence": "HIGH"|"MEDIUM"|"LOW", "indicators": string[], "reasoning": string}'
)


class RemoteDetectionPayload(BaseModel):
    score: float = Field(ge=0, allow_inf_nan=False)
    confidence: Literal["HIGH", "MEDIUM", "LOW"] = "MEDIUM"
    indicators: list[str] = Field(default_factory=list)
    reasoning: str = ""


def remote_likelihood(score: int) -> str:
    if score >= 70:
        return "HIGH"
    if score >= 40:
        return "MEDIUM"
    return "LOW"


class DetectorService:
    """Classify text with the remote model, degrading to the local heuristic."""

    def __init__(self, client: LLMClient) -> None:
        self.client = client

    async def _remote_detection(self, content: str) -> DetectionResult | None:
        raw = await self.client.complete(DETECTION_PROMPT, content, json_mode=True)
        payload = parse_json_payload(raw, RemoteDetectionPayload, default=None)
        if payload is None:
            return None

        ai_score = int(clamp(round(payload.score), 0, 100))
        report = analyze_text_patterns(content)
        return DetectionResult(
            ai_score=ai_score,
            likelihood=remote_likelihood(ai_score),
            confidence=payload.confidence,
            indicators=payload.indicators,
            details=DetectionDetails(
                **asdict(report),
                reasoning=payload.reasoning,
                human_likelihood=float(100 - ai_score),
            ),
        )

    async def detect(self, content: str) -> tuple[DetectionResult, str]:
        if not self.client.is_configured():
            logger.info("detection_fallback", reason="not_configured")
            return fallback_detection(content), "fallback"

        try:
            result = await self._remote_detection(content)
        except LLMError as exc:
            logger.warning("detection_fallback", reason="remote_failed", error=str(exc))
            return fallback_detection(content), "fallback"

        if result is None:
            logger.warning("detection_fallback", reason="unparseable_payload")
            return fallback_detection(content), "fallback"

        return result, "remote"
