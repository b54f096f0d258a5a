import math
import re

_SENTENCE_SPLIT_RE = re.compile(r"[.!?]+")
_PARAGRAPH_SPLIT_RE = re.compile(r"\n\s*\n")
# C0 controls except tab, LF and CR; DEL; C1 controls.
_CONTROL_CHARS_RE = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f\x7f-\x9f]")


def sanitize_text(text: str) -> str:
    return _CONTROL_CHARS_RE.sub("", text).strip()


def words(text: str) -> list[str]:
    return text.split()


def sentences(text: str) -> list[str]:
    return [chunk for chunk in _SENTENCE_SPLIT_RE.split(text) if chunk.strip()]


def paragraphs(text: str) -> list[str]:
    return [chunk for chunk in _PARAGRAPH_SPLIT_RE.split(text) if chunk.strip()]


def clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


def round_half_up(value: float, digits: int = 0) -> float:
    factor = 10**digits
    return math.floor(value * factor + 0.5) / factor
