import pytest

from authorcheck.schemas.analysis import (
    NOT_AVAILABLE,
    AdvancedSentiment,
    AiAnalysis,
    AnalysisResult,
    Emotion,
    Insight,
    PlagiarismRisk,
    WritingStyle,
)
from conftest import ANALYSIS_PAYLOAD


def test_default_analysis_shape():
    dumped = AiAnalysis().model_dump(by_alias=True)

    assert dumped == {
        "advancedSentiment": {"emotions": [], "confidence": 0.0, "context": NOT_AVAILABLE},
        "topics": [],
        "writingStyle": {
            "tone": "Neutral",
            "formality": "neutral",
            "complexity": "moderate",
            "style": [],
            "audience": "General",
        },
        "insights": [],
        "plagiarismRisk": {"score": 0.0, "level": "low", "details": NOT_AVAILABLE},
        "contentQuality": {"overall": 0.0, "clarity": 0.0, "coherence": 0.0, "engagement": 0.0, "originality": 0.0},
        "aiOrHuman": "unknown",
        "aiOrHumanConfidence": 0.0,
        "aiOrHumanExplanation": NOT_AVAILABLE,
    }


def test_well_formed_payload_round_trips():
    analysis = AiAnalysis.model_validate(ANALYSIS_PAYLOAD)

    dumped = analysis.model_dump(by_alias=True, exclude_none=True)
    assert dumped["writingStyle"] == ANALYSIS_PAYLOAD["writingStyle"]
    assert dumped["plagiarismRisk"] == ANALYSIS_PAYLOAD["plagiarismRisk"]
    assert dumped["aiOrHumanExplanation"] == ANALYSIS_PAYLOAD["aiOrHumanExplanation"]


def test_result_serializes_with_camel_case_keys():
    dumped = AnalysisResult().model_dump(by_alias=True)

    assert set(dumped) == {
        "wordCount",
        "characterCount",
        "sentenceCount",
        "paragraphCount",
        "readabilityScore",
        "sentiment",
        "authorshipFeatures",
        "topWords",
        "estimatedReadingTime",
        "aiAnalysis",
    }
    assert set(dumped["authorshipFeatures"]) == {
        "avgWordsPerSentence",
        "avgSentencesPerParagraph",
        "complexityScore",
        "vocabularyRichness",
    }


@pytest.mark.parametrize(
    ("value", "expected"),
    [(0.4, 0.4), (1.7, 1.0), (-2, 0.0), ("0.9", 0.9), (None, 0.0), (True, 0.0), ("high", 0.0)],
)
def test_emotion_score_is_coerced(value, expected):
    assert Emotion.model_validate({"emotion": "joy", "score": value}).score == expected


def test_unknown_enums_fall_back():
    assert Emotion.model_validate({"intensity": "EXTREME"}).intensity == "low"
    assert Emotion.model_validate({"intensity": " High "}).intensity == "high"
    assert PlagiarismRisk.model_validate({"level": "none"}).level == "low"
    assert Insight.model_validate({"type": "warning"}).type == "observation"
    assert AiAnalysis.model_validate({"aiOrHuman": "probably ai"}).ai_or_human == "unknown"


def test_writing_style_defaults_for_missing_fields():
    style = WritingStyle.model_validate({"tone": None, "style": "narrative", "audience": ""})

    assert style.tone == "Neutral"
    assert style.style == []
    assert style.audience == "General"


def test_confidence_fraction_is_scaled():
    assert AdvancedSentiment.model_validate({"confidence": 0.5}).confidence == 50
    assert AdvancedSentiment.model_validate({"confidence": 75}).confidence == 75
    assert AdvancedSentiment.model_validate({"confidence": 250}).confidence == 100


def test_non_object_list_items_are_dropped():
    analysis = AiAnalysis.model_validate(
        {
            "insights": ["Great job", {"type": "strength", "title": "Clear", "description": "Easy to follow."}],
            "advancedSentiment": {"emotions": [{"emotion": "joy", "score": 0.5}, 3, None]},
        }
    )

    assert len(analysis.insights) == 1
    assert analysis.insights[0].suggestion is None
    assert [emotion.emotion for emotion in analysis.advanced_sentiment.emotions] == ["joy"]


def test_topics_are_capped_at_three():
    topics = [{"topic": name, "relevance": 0.5, "keywords": ["x", 1, None]} for name in "ABCDE"]

    analysis = AiAnalysis.model_validate({"topics": topics})

    assert [topic.topic for topic in analysis.topics] == ["A", "B", "C"]
    assert analysis.topics[0].keywords == ["x", "1"]


def test_sections_of_wrong_type_use_defaults():
    analysis = AiAnalysis.model_validate({"contentQuality": [90, 80], "plagiarismRisk": "low"})

    assert analysis.content_quality.overall == 0
    assert analysis.plagiarism_risk.details == NOT_AVAILABLE
