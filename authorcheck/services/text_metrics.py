from __future__ import annotations

import math
import re
import string
from dataclasses import dataclass, field

from authorcheck.utils.text import clamp, paragraphs, round_half_up, sentences, words

_SILENT_E_RE = re.compile(r"(?:[^laeiouy]es|ed|[^laeiouy]e)$")
_LEADING_Y_RE = re.compile(r"^y")
_VOWEL_GROUP_RE = re.compile(r"[aeiouy]{1,2}")
_NON_LETTER_RE = re.compile(r"[^a-z]")

WORDS_PER_MINUTE = 200
TOP_WORDS_LIMIT = 5

POSITIVE_WORDS = frozenset(
    {
        "good", "great", "excellent", "amazing", "wonderful", "fantastic", "love", "like",
        "happy", "joy", "beautiful", "perfect", "best", "awesome", "brilliant",
    }
)
NEGATIVE_WORDS = frozenset(
    {
        "bad", "terrible", "awful", "horrible", "hate", "dislike", "sad", "angry", "worst",
        "disgusting", "ugly", "disappointed", "frustrating", "annoying",
    }
)
STOP_WORDS = frozenset(
    {
        "the", "a", "an", "and", "or", "but", "in", "on", "at", "to", "for", "of", "with", "by",
        "is", "are", "was", "were", "be", "been", "have", "has", "had", "do", "does", "did",
        "will", "would", "could", "should", "may", "might", "must", "can", "this", "that",
        "these", "those", "i", "you", "he", "she", "it", "we", "they", "me", "him", "her", "us",
        "them",
    }
)


@dataclass
class TextStatistics:
    word_count: int = 0
    character_count: int = 0
    sentence_count: int = 0
    paragraph_count: int = 0
    readability_score: int = 0
    sentiment: dict = field(default_factory=lambda: {"score": 0.0, "label": "neutral"})
    authorship_features: dict[str, float] = field(
        default_factory=lambda: {
            "avg_words_per_sentence": 0.0,
            "avg_sentences_per_paragraph": 0.0,
            "complexity_score": 0.0,
            "vocabulary_richness": 0.0,
        }
    )
    top_words: list[dict] = field(default_factory=list)
    estimated_reading_time: int = 0


def count_syllables(word: str) -> int:
    w = word.lower()
    if len(w) <= 3:
        return 1
    w = _SILENT_E_RE.sub("", w)
    w = _LEADING_Y_RE.sub("", w)
    return len(_VOWEL_GROUP_RE.findall(w)) or 1


def readability_score(toks: list[str], sentence_count: int) -> int:
    """Simplified Flesch Reading Ease, clamped to 0-100."""
    if not toks:
        return 0
    asl = len(toks) / max(1, sentence_count)
    asw = sum(count_syllables(token) for token in toks) / len(toks)
    flesch = 206.835 - (1.015 * asl) - (84.6 * asw)
    return int(round_half_up(clamp(flesch, 0.0, 100.0)))


def sentiment(toks: list[str]) -> dict:
    if not toks:
        return {"score": 0.0, "label": "neutral"}

    raw = 0
    for token in toks:
        # Surrounding punctuation is dropped, so "great!" counts as "great".
        cleaned = token.lower().strip(string.punctuation)
        if cleaned in POSITIVE_WORDS:
            raw += 1
        elif cleaned in NEGATIVE_WORDS:
            raw -= 1

    normalized = clamp(raw / len(toks) * 10, -1.0, 1.0)
    if normalized > 0.1:
        label = "positive"
    elif normalized < -0.1:
        label = "negative"
    else:
        label = "neutral"
    return {"score": round_half_up(normalized, 2), "label": label}


def vocabulary_richness(toks: list[str]) -> float:
    if not toks:
        return 0.0
    return len({token.lower() for token in toks}) / len(toks) * 100


def complexity_score(toks: list[str], sentence_count: int) -> float:
    if not toks:
        return 0.0
    avg_word_length = sum(len(token) for token in toks) / len(toks)
    avg_sentence_length = len(toks) / max(1, sentence_count)
    return (avg_word_length + avg_sentence_length) / 2


def top_words(toks: list[str], limit: int = TOP_WORDS_LIMIT) -> list[dict]:
    counts: dict[str, int] = {}
    for token in toks:
        cleaned = _NON_LETTER_RE.sub("", token.lower())
        if len(cleaned) > 2 and cleaned not in STOP_WORDS:
            counts[cleaned] = counts.get(cleaned, 0) + 1

    # dicts keep first-seen order and sorted() is stable, so ties stay in that order.
    ranked = sorted(counts.items(), key=lambda item: -item[1])
    return [{"word": word, "count": count} for word, count in ranked[:limit]]


def compute_statistics(text: str) -> TextStatistics:
    if not text.strip():
        return TextStatistics()

    toks = words(text)
    sent = sentences(text)
    paras = paragraphs(text)

    wc = len(toks)
    sc = len(sent)
    pc = len(paras) or 1

    return TextStatistics(
        word_count=wc,
        character_count=len(text),
        sentence_count=sc,
        paragraph_count=pc,
        readability_score=readability_score(toks, sc),
        sentiment=sentiment(toks),
        authorship_features={
            "avg_words_per_sentence": round_half_up(wc / max(1, sc), 1),
            "avg_sentences_per_paragraph": round_half_up(sc / pc, 1),
            "complexity_score": round_half_up(complexity_score(toks, sc), 1),
            "vocabulary_richness": round_half_up(vocabulary_richness(toks), 1),
        },
        top_words=top_words(toks),
        estimated_reading_time=math.ceil(wc / WORDS_PER_MINUTE),
    )
