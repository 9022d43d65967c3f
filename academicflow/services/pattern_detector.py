from __future__ import annotations

import re
from dataclasses import asdict, dataclass, field

from academicflow.utils.text import word_tokens

FALLBACK_REASONING = "Using fallback pattern detection (OpenAI API unavailable)"

GENERIC_PHRASES: tuple[str, ...] = (
    "it is important to note",
    "furthermore",
    "in conclusion",
    "however, it is worth noting",
    "delve into",
    "robust",
    "comprehensive",
    "leverage",
    "paramount",
    "multifaceted",
)

_SENTENCE_SPLIT_RE = re.compile(r"[.!?]+")
_PRONOUN_RE = re.compile(r"\b(?:i|my|me|we|us|our)\b", flags=re.IGNORECASE)
_DOUBLE_SPACE_RE = re.compile(r" {2,}")

LOW_VARIANCE_THRESHOLD = 10.0
HIGH_VARIANCE_THRESHOLD = 30.0
PERSONAL_VOICE_THRESHOLD = 2.0
LONG_SENTENCE_THRESHOLD = 20.0
GENERIC_PHRASE_THRESHOLD = 3


@dataclass
class PatternReport:
    average_sentence_length: float
    sentence_length_variation: str
    generic_phrase_count: int
    generic_phrases_found: list[str]
    personal_pronoun_usage: bool
    personal_voice_score: float


@dataclass
class DetectionDetails(PatternReport):
    reasoning: str = ""
    human_likelihood: float | None = None


@dataclass
class DetectionResult:
    ai_score: int
    likelihood: str
    confidence: str
    indicators: list[str] = field(default_factory=list)
    details: DetectionDetails | None = None

    def as_dict(self) -> dict:
        return asdict(self)


def _sentence_lengths(text: str) -> list[int]:
    fragments = [chunk for chunk in _SENTENCE_SPLIT_RE.split(text) if chunk.strip()]
    return [len(word_tokens(chunk)) for chunk in fragments]


def _variation_band(variance: float) -> str:
    if variance < LOW_VARIANCE_THRESHOLD:
        return "LOW"
    if variance < HIGH_VARIANCE_THRESHOLD:
        return "MEDIUM"
    return "HIGH"


def analyze_text_patterns(text: str) -> PatternReport:
    """Compute the lexical statistics the fallback classifier scores on.

    Sentence variance is the population variance of per-sentence word counts.
    Inputs without sentences or words produce zeros rather than failing.
    """
    lengths = _sentence_lengths(text)
    if lengths:
        mean_len = sum(lengths) / len(lengths)
        variance = sum((x - mean_len) ** 2 for x in lengths) / len(lengths)
    else:
        mean_len = 0.0
        variance = 0.0

    lowered = text.lower()
    found = [phrase for phrase in GENERIC_PHRASES if phrase in lowered]

    total_words = len(word_tokens(text))
    pronoun_count = len(_PRONOUN_RE.findall(text))
    voice_score = round(pronoun_count / total_words * 100, 2) if total_words else 0.0

    return PatternReport(
        average_sentence_length=round(mean_len, 1),
        sentence_length_variation=_variation_band(variance),
        generic_phrase_count=len(found),
        generic_phrases_found=found,
        personal_pronoun_usage=voice_score > PERSONAL_VOICE_THRESHOLD,
        personal_voice_score=voice_score,
    )


def has_clean_formatting(text: str) -> bool:
    return _DOUBLE_SPACE_RE.search(text) is None and ".." not in text


def fallback_likelihood(score: int) -> str:
    if score > 70:
        return "HIGH"
    if score > 40:
        return "MEDIUM"
    return "LOW"


def fallback_detection(text: str) -> DetectionResult:
    report = analyze_text_patterns(text)
    score = 0
    indicators: list[str] = []

    if report.sentence_length_variation == "LOW":
        score += 30
        indicators.append("Highly uniform sentence lengths")

    if report.generic_phrase_count >= GENERIC_PHRASE_THRESHOLD:
        score += 25
        indicators.append(f"Found {report.generic_phrase_count} AI-common phrases")

    if not report.personal_pronoun_usage:
        score += 20
        indicators.append("Lacks personal voice and pronouns")

    if report.average_sentence_length > LONG_SENTENCE_THRESHOLD:
        score += 15
        indicators.append("Consistently long, complex sentences")

    if has_clean_formatting(text):
        score += 10
        indicators.append("Perfect formatting with no typos")

    ai_score = max(0, min(score, 100))

    return DetectionResult(
        ai_score=ai_score,
        likelihood=fallback_likelihood(ai_score),
        confidence="LOW",
        indicators=indicators,
        details=DetectionDetails(**asdict(report), reasoning=FALLBACK_REASONING),
    )
