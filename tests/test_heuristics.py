from authorcheck.schemas.analysis import AiAnalysis
from authorcheck.services.heuristics import (
    advanced_sentiment,
    content_quality,
    detect_topics,
    heuristic_analysis,
    insights,
    plagiarism_risk,
    writing_style,
)
from authorcheck.utils.text import sentences, words

ESSAY = (
    "Research on climate data shows a clear trend. Furthermore, the study used a new algorithm. "
    "Therefore the findings matter for policy.\n\n"
    "In conclusion, the evidence supports the theory."
)


def test_empty_text_gets_default_analysis():
    assert heuristic_analysis("   ") == AiAnalysis()


def test_heuristic_analysis_is_deterministic():
    assert heuristic_analysis(ESSAY) == heuristic_analysis(ESSAY)


def test_heuristic_analysis_does_not_classify_authorship():
    result = heuristic_analysis(ESSAY)

    assert result.ai_or_human == "unknown"
    assert result.ai_or_human_confidence == 0
    assert result.ai_or_human_explanation == "Keyword heuristics do not classify authorship."


def test_emotions_and_context():
    result = advanced_sentiment("i am happy and excited today")

    assert result["emotions"] == [{"emotion": "joy", "score": 0.33, "intensity": "medium"}]
    assert result["confidence"] == 75
    assert result["context"] == "The text primarily conveys joy with medium intensity."


def test_neutral_text_has_no_emotions():
    result = advanced_sentiment("the table is brown")

    assert result["emotions"] == []
    assert result["confidence"] == 60
    assert result["context"] == "The text appears to be emotionally neutral."


def test_topics_ranked_and_limited():
    lowered = (
        "software computer data algorithm digital business market research study experiment "
        "health doctor education"
    )

    topics = detect_topics(lowered)

    # Business and Health tie at 2/7; the earlier category wins.
    assert [topic["topic"] for topic in topics] == ["Technology", "Science", "Business"]
    assert topics[0]["relevance"] == 0.63
    assert topics[0]["keywords"] == ["software", "computer", "digital", "data", "algorithm"]


def test_text_without_topic_keywords():
    assert detect_topics("the weather is nice") == []


def test_writing_style_formality():
    formal = "therefore the results follow. furthermore they hold."
    casual = "hey that was awesome, gonna do it again."

    assert writing_style(formal, words(formal), 2)["formality"] == "formal"
    assert writing_style(casual, words(casual), 1)["formality"] == "casual"
    assert writing_style("the cat sat.", ["the", "cat", "sat."], 1)["formality"] == "neutral"


def test_simple_casual_text_targets_general_public():
    text = "hey this is so cool. we gonna go now."
    style = writing_style(text, words(text), 2)

    assert style["complexity"] == "simple"
    assert style["audience"] == "General Public"
    assert style["style"] == ["casual", "simple", style["tone"]]


def test_insights_flag_uniform_sentences():
    text = "The cat sat down. The dog sat down. The bird sat down."
    result = insights(text, words(text), sentences(text))

    titles = [item["title"] for item in result]
    assert "Sentence Variety" in titles
    assert result[0]["type"] == "improvement"
    assert result[0]["suggestion"]


def test_insights_praise_varied_sentences():
    text = "Stop. " + " ".join(["Everything kept moving along the quiet river bank all through"] * 2) + " the night."
    result = insights(text, words(text), sentences(text))

    assert result[0] == {
        "type": "strength",
        "title": "Good Sentence Variety",
        "description": "Your text has good sentence length variety, creating engaging rhythm.",
    }


def test_plagiarism_score_counts_stock_phrases():
    result = plagiarism_risk("in conclusion, furthermore and moreover, therefore")

    assert result["score"] == 40
    assert result["level"] == "medium"


def test_plagiarism_without_stock_phrases():
    result = plagiarism_risk("a plain sentence")

    assert result["score"] == 0
    assert result["level"] == "low"


def test_content_quality_uses_fixed_baselines():
    toks = ["word"] * 15

    result = content_quality(toks, 1)

    assert result == {"overall": 89, "clarity": 100, "coherence": 90, "engagement": 80, "originality": 85}


def test_content_quality_penalizes_long_sentences():
    result = content_quality(["word"] * 40, 1)

    assert result["clarity"] == 50
    assert 0 <= result["overall"] <= 100
