import hashlib
import re

_WHITESPACE_RE = re.compile(r"\s+")


def normalize_text(text: str) -> str:
    return " ".join(text.strip().split())


def word_tokens(text: str) -> list[str]:
    return [token for token in _WHITESPACE_RE.split(text) if token]


def sha256_text(text: str) -> str:
    return hashlib.sha256(text.encode("utf-8")).hexdigest()


def clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))
