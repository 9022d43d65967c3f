import json

import pytest

from academicflow.core.config import Settings
from academicflow.services.detector import DetectorService, remote_likelihood
from academicflow.services.llm import LLMClient
from academicflow.services.pattern_detector import FALLBACK_REASONING, fallback_detection
from helpers import RecordingHandler, make_llm_client

TEXT = (
    "The library extended its opening hours during the exam period. Students used the quiet rooms "
    "late into the night and staff reported fewer complaints than the previous year."
)


@pytest.mark.asyncio
async def test_unconfigured_client_uses_fallback():
    service = DetectorService(LLMClient(Settings(OPENAI_API_KEY="")))

    result, mode = await service.detect(TEXT)

    assert mode == "fallback"
    assert result.as_dict() == fallback_detection(TEXT).as_dict()


@pytest.mark.asyncio
async def test_remote_result_is_merged_with_pattern_report():
    reply = json.dumps(
        {"score": 72.4, "confidence": "HIGH", "indicators": ["Even tone"], "reasoning": "Reads templated."}
    )
    handler = RecordingHandler(reply)
    service = DetectorService(make_llm_client(handler))

    result, mode = await service.detect(TEXT)

    assert mode == "remote"
    assert result.ai_score == 72
    assert result.likelihood == "HIGH"
    assert result.confidence == "HIGH"
    assert result.indicators == ["Even tone"]
    assert result.details.reasoning == "Reads templated."
    assert result.details.human_likelihood == 28.0
    assert result.details.sentence_length_variation in {"LOW", "MEDIUM", "HIGH"}
    assert len(handler.requests) == 1


@pytest.mark.asyncio
async def test_remote_score_is_clamped():
    service = DetectorService(make_llm_client(RecordingHandler('{"score": 140}')))

    result, _ = await service.detect(TEXT)

    assert result.ai_score == 100
    assert result.confidence == "MEDIUM"


@pytest.mark.asyncio
async def test_remote_failure_falls_back_once():
    handler = RecordingHandler(status_code=503)
    service = DetectorService(make_llm_client(handler))

    result, mode = await service.detect(TEXT)

    assert mode == "fallback"
    assert result.confidence == "LOW"
    assert result.details.reasoning == FALLBACK_REASONING
    assert len(handler.requests) == 1


@pytest.mark.asyncio
async def test_unparseable_remote_payload_falls_back():
    service = DetectorService(make_llm_client(RecordingHandler("I think it is AI.")))

    result, mode = await service.detect(TEXT)

    assert mode == "fallback"
    assert result.details.human_likelihood is None


@pytest.mark.parametrize(
    ("score", "expected"),
    [(100, "HIGH"), (70, "HIGH"), (69, "MEDIUM"), (40, "MEDIUM"), (39, "LOW"), (0, "LOW")],
)
def test_remote_likelihood_uses_inclusive_thresholds(score, expected):
    assert remote_likelihood(score) == expected


@pytest.mark.parametrize("reply", ['{"score": 1e400}', '{"score": Infinity}', '{"score": NaN}'])
@pytest.mark.asyncio
async def test_non_finite_remote_score_falls_back(reply):
    handler = RecordingHandler(reply)
    service = DetectorService(make_llm_client(handler))

    result, mode = await service.detect(TEXT)

    assert mode == "fallback"
    assert result.as_dict() == fallback_detection(TEXT).as_dict()
    assert len(handler.requests) == 1
