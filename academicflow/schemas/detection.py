from typing import Literal

from academicflow.schemas.common import APIModel

Band = Literal["HIGH", "MEDIUM", "LOW"]


class DetectionDetailsResponse(APIModel):
    average_sentence_length: float
    sentence_length_variation: Band
    generic_phrase_count: int
    generic_phrases_found: list[str]
    personal_pronoun_usage: bool
    personal_voice_score: float
    reasoning: str
    human_likelihood: float | None = None


class DetectionResponse(APIModel):
    ai_score: int
    likelihood: Band
    confidence: Band
    indicators: list[str]
    details: DetectionDetailsResponse
