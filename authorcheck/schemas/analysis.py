from __future__ import annotations

import re
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from authorcheck.utils.text import clamp

NOT_AVAILABLE = "Analysis not available"

_NUMBER_RE = re.compile(r"-?\d+(?:\.\d+)?")


def _coerce_number(value: Any, low: float, high: float, default: float = 0.0) -> float:
    if isinstance(value, bool):
        return default
    if isinstance(value, (int, float)):
        numeric = float(value)
    elif isinstance(value, str):
        match = _NUMBER_RE.search(value)
        if not match:
            return default
        numeric = float(match.group(0))
    else:
        return default
    if numeric != numeric:  # NaN
        return default
    return clamp(numeric, low, high)


def _coerce_choice(value: Any, choices: set[str], default: str) -> str:
    if not isinstance(value, str):
        return default
    normalized = value.strip().lower()
    return normalized if normalized in choices else default


def _coerce_text(value: Any, default: str = "") -> str:
    if value is None:
        return default
    if isinstance(value, str):
        return value
    return str(value)


def _coerce_str_list(value: Any) -> list[str]:
    if not isinstance(value, list):
        return []
    return [str(item) for item in value if isinstance(item, (str, int, float)) and str(item).strip()]


def _dict_items(value: Any) -> list[Any]:
    if not isinstance(value, list):
        return []
    return [item for item in value if isinstance(item, (dict, BaseModel))]


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Emotion(CamelModel):
    emotion: str = ""
    score: float = 0.0
    intensity: Literal["low", "medium", "high"] = "low"

    @field_validator("emotion", mode="before")
    @classmethod
    def _emotion(cls, value: Any) -> str:
        return _coerce_text(value)

    @field_validator("score", mode="before")
    @classmethod
    def _score(cls, value: Any) -> float:
        return _coerce_number(value, 0.0, 1.0)

    @field_validator("intensity", mode="before")
    @classmethod
    def _intensity(cls, value: Any) -> str:
        return _coerce_choice(value, {"low", "medium", "high"}, "low")


class AdvancedSentiment(CamelModel):
    emotions: list[Emotion] = Field(default_factory=list)
    confidence: float = 0.0
    context: str = NOT_AVAILABLE

    @field_validator("emotions", mode="before")
    @classmethod
    def _emotions(cls, value: Any) -> list[Any]:
        return _dict_items(value)

    @field_validator("confidence", mode="before")
    @classmethod
    def _confidence(cls, value: Any) -> float:
        numeric = _coerce_number(value, 0.0, 100.0)
        # Models often answer with a 0-1 fraction here.
        if 0.0 < numeric <= 1.0:
            numeric *= 100.0
        return numeric

    @field_validator("context", mode="before")
    @classmethod
    def _context(cls, value: Any) -> str:
        return _coerce_text(value, NOT_AVAILABLE)


class Topic(CamelModel):
    topic: str = ""
    relevance: float = 0.0
    keywords: list[str] = Field(default_factory=list)

    @field_validator("topic", mode="before")
    @classmethod
    def _topic(cls, value: Any) -> str:
        return _coerce_text(value)

    @field_validator("relevance", mode="before")
    @classmethod
    def _relevance(cls, value: Any) -> float:
        return _coerce_number(value, 0.0, 1.0)

    @field_validator("keywords", mode="before")
    @classmethod
    def _keywords(cls, value: Any) -> list[str]:
        return _coerce_str_list(value)


class WritingStyle(CamelModel):
    tone: str = "Neutral"
    formality: Literal["formal", "neutral", "casual"] = "neutral"
    complexity: Literal["simple", "moderate", "complex"] = "moderate"
    style: list[str] = Field(default_factory=list)
    audience: str = "General"

    @field_validator("tone", mode="before")
    @classmethod
    def _tone(cls, value: Any) -> str:
        return _coerce_text(value, "Neutral") or "Neutral"

    @field_validator("formality", mode="before")
    @classmethod
    def _formality(cls, value: Any) -> str:
        return _coerce_choice(value, {"formal", "neutral", "casual"}, "neutral")

    @field_validator("complexity", mode="before")
    @classmethod
    def _complexity(cls, value: Any) -> str:
        return _coerce_choice(value, {"simple", "moderate", "complex"}, "moderate")

    @field_validator("style", mode="before")
    @classmethod
    def _style(cls, value: Any) -> list[str]:
        return _coerce_str_list(value)

    @field_validator("audience", mode="before")
    @classmethod
    def _audience(cls, value: Any) -> str:
        return _coerce_text(value, "General") or "General"


class Insight(CamelModel):
    type: Literal["strength", "improvement", "observation"] = "observation"
    title: str = ""
    description: str = ""
    suggestion: str | None = None

    @field_validator("type", mode="before")
    @classmethod
    def _type(cls, value: Any) -> str:
        return _coerce_choice(value, {"strength", "improvement", "observation"}, "observation")

    @field_validator("title", "description", mode="before")
    @classmethod
    def _text(cls, value: Any) -> str:
        return _coerce_text(value)

    @field_validator("suggestion", mode="before")
    @classmethod
    def _suggestion(cls, value: Any) -> str | None:
        if value is None or value == "":
            return None
        return _coerce_text(value)


class PlagiarismRisk(CamelModel):
    score: float = 0.0
    level: Literal["low", "medium", "high"] = "low"
    details: str = NOT_AVAILABLE

    @field_validator("score", mode="before")
    @classmethod
    def _score(cls, value: Any) -> float:
        return _coerce_number(value, 0.0, 100.0)

    @field_validator("level", mode="before")
    @classmethod
    def _level(cls, value: Any) -> str:
        return _coerce_choice(value, {"low", "medium", "high"}, "low")

    @field_validator("details", mode="before")
    @classmethod
    def _details(cls, value: Any) -> str:
        return _coerce_text(value, NOT_AVAILABLE)


class ContentQuality(CamelModel):
    overall: float = 0.0
    clarity: float = 0.0
    coherence: float = 0.0
    engagement: float = 0.0
    originality: float = 0.0

    @field_validator("overall", "clarity", "coherence", "engagement", "originality", mode="before")
    @classmethod
    def _percent(cls, value: Any) -> float:
        return _coerce_number(value, 0.0, 100.0)


class AiAnalysis(CamelModel):
    advanced_sentiment: AdvancedSentiment = Field(default_factory=AdvancedSentiment)
    topics: list[Topic] = Field(default_factory=list, max_length=3)
    writing_style: WritingStyle = Field(default_factory=WritingStyle)
    insights: list[Insight] = Field(default_factory=list)
    plagiarism_risk: PlagiarismRisk = Field(default_factory=PlagiarismRisk)
    content_quality: ContentQuality = Field(default_factory=ContentQuality)
    ai_or_human: Literal["ai", "human", "unknown"] = "unknown"
    ai_or_human_confidence: float = 0.0
    ai_or_human_explanation: str = NOT_AVAILABLE

    @field_validator("advanced_sentiment", "writing_style", "plagiarism_risk", "content_quality", mode="before")
    @classmethod
    def _section(cls, value: Any) -> Any:
        return value if isinstance(value, (dict, BaseModel)) else {}

    @field_validator("topics", mode="before")
    @classmethod
    def _topics(cls, value: Any) -> list[Any]:
        return _dict_items(value)[:3]

    @field_validator("insights", mode="before")
    @classmethod
    def _insights(cls, value: Any) -> list[Any]:
        return _dict_items(value)

    @field_validator("ai_or_human", mode="before")
    @classmethod
    def _ai_or_human(cls, value: Any) -> str:
        return _coerce_choice(value, {"ai", "human", "unknown"}, "unknown")

    @field_validator("ai_or_human_confidence", mode="before")
    @classmethod
    def _ai_or_human_confidence(cls, value: Any) -> float:
        return _coerce_number(value, 0.0, 100.0)

    @field_validator("ai_or_human_explanation", mode="before")
    @classmethod
    def _ai_or_human_explanation(cls, value: Any) -> str:
        return _coerce_text(value, NOT_AVAILABLE)


def default_ai_analysis() -> AiAnalysis:
    return AiAnalysis()


class Sentiment(CamelModel):
    score: float = 0.0
    label: Literal["positive", "negative", "neutral"] = "neutral"


class AuthorshipFeatures(CamelModel):
    avg_words_per_sentence: float = 0.0
    avg_sentences_per_paragraph: float = 0.0
    complexity_score: float = 0.0
    vocabulary_richness: float = 0.0


class TopWord(CamelModel):
    word: str
    count: int


class AnalysisResult(CamelModel):
    word_count: int = 0
    character_count: int = 0
    sentence_count: int = 0
    paragraph_count: int = 0
    readability_score: int = 0
    sentiment: Sentiment = Field(default_factory=Sentiment)
    authorship_features: AuthorshipFeatures = Field(default_factory=AuthorshipFeatures)
    top_words: list[TopWord] = Field(default_factory=list)
    estimated_reading_time: int = 0
    ai_analysis: AiAnalysis = Field(default_factory=AiAnalysis)
