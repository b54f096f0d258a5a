"""Keyword heuristics that fill an AiAnalysis without calling the model.

Used as the fallback analysis when AI_FALLBACK_MODE=heuristic. Every score is a
pure function of the text.
"""

from __future__ import annotations

import math

from authorcheck.schemas.analysis import AiAnalysis
from authorcheck.utils.text import clamp, paragraphs, round_half_up, sentences, words

EMOTION_KEYWORDS = {
    "joy": ["happy", "excited", "wonderful", "amazing", "fantastic", "great"],
    "sadness": ["sad", "depressed", "unhappy", "miserable", "disappointed"],
    "anger": ["angry", "furious", "mad", "irritated", "frustrated"],
    "fear": ["scared", "afraid", "terrified", "worried", "anxious"],
    "surprise": ["surprised", "shocked", "amazed", "astonished", "incredible"],
    "trust": ["trust", "believe", "confident", "sure", "certain"],
}

TOPIC_KEYWORDS = {
    "Technology": ["technology", "software", "computer", "digital", "ai", "machine", "data", "algorithm"],
    "Business": ["business", "company", "market", "profit", "strategy", "management", "leadership"],
    "Science": ["science", "research", "study", "experiment", "theory", "discovery", "analysis"],
    "Health": ["health", "medical", "disease", "treatment", "patient", "doctor", "medicine"],
    "Education": ["education", "learning", "student", "teacher", "school", "university", "knowledge"],
    "Politics": ["politics", "government", "policy", "election", "democracy", "political"],
    "Environment": ["environment", "climate", "nature", "sustainability", "green", "pollution"],
}

TONE_KEYWORDS = {
    "Professional": ["analysis", "research", "study", "report", "findings"],
    "Conversational": ["you", "we", "let's", "think", "imagine"],
    "Academic": ["theory", "hypothesis", "methodology", "conclusion", "evidence"],
    "Creative": ["imagine", "dream", "vision", "inspire", "create"],
}

FORMAL_MARKERS = ["therefore", "furthermore", "moreover", "consequently", "subsequently"]
CASUAL_MARKERS = ["hey", "cool", "awesome", "gonna", "wanna", "gotta"]

STOCK_PHRASES = [
    "in conclusion",
    "it is important to note",
    "furthermore",
    "moreover",
    "as a result",
    "therefore",
    "in addition",
    "on the other hand",
]

# Fixed midpoints for the quality dimensions the keyword model cannot measure.
COHERENCE_BASELINE = 90
ENGAGEMENT_BASELINE = 80
ORIGINALITY_BASELINE = 85


def _matches(lowered: str, keywords: list[str]) -> list[str]:
    # Substring containment, so "ai" also matches inside "said".
    return [keyword for keyword in keywords if keyword in lowered]


def _intensity(score: float) -> str:
    if score > 0.7:
        return "high"
    if score > 0.3:
        return "medium"
    return "low"


def advanced_sentiment(lowered: str) -> dict:
    emotions = []
    for emotion, keywords in EMOTION_KEYWORDS.items():
        score = min(1.0, len(_matches(lowered, keywords)) / len(keywords))
        if score > 0:
            emotions.append({"emotion": emotion, "score": round_half_up(score, 2), "intensity": _intensity(score)})

    if emotions:
        primary = max(emotions, key=lambda item: item["score"])
        context = f"The text primarily conveys {primary['emotion']} with {primary['intensity']} intensity."
    else:
        context = "The text appears to be emotionally neutral."

    return {
        "emotions": emotions,
        "confidence": min(95, len(emotions) * 15 + 60),
        "context": context,
    }


def detect_topics(lowered: str, limit: int = 3) -> list[dict]:
    topics = []
    for topic, keywords in TOPIC_KEYWORDS.items():
        found = _matches(lowered, keywords)
        relevance = round_half_up(min(1.0, len(found) / len(keywords)), 2)
        if relevance > 0.1:
            topics.append({"topic": topic, "relevance": relevance, "keywords": found})
    topics.sort(key=lambda item: -item["relevance"])
    return topics[:limit]


def writing_style(lowered: str, toks: list[str], sentence_count: int) -> dict:
    avg_word_length = sum(len(token) for token in toks) / len(toks)
    avg_sentence_length = len(toks) / max(1, sentence_count)

    formal = len(_matches(lowered, FORMAL_MARKERS))
    casual = len(_matches(lowered, CASUAL_MARKERS))
    if formal > casual:
        formality = "formal"
    elif casual > formal:
        formality = "casual"
    else:
        formality = "neutral"

    if avg_word_length < 4.5 and avg_sentence_length < 15:
        complexity = "simple"
    elif avg_word_length > 6 or avg_sentence_length > 25:
        complexity = "complex"
    else:
        complexity = "moderate"

    tone_scores = [(tone, len(_matches(lowered, keywords))) for tone, keywords in TONE_KEYWORDS.items()]
    tone = max(tone_scores, key=lambda item: item[1])[0]

    if formality == "formal" and complexity == "complex":
        audience = "Academic/Professional"
    elif formality == "casual" and complexity == "simple":
        audience = "General Public"
    elif complexity == "complex":
        audience = "Specialized"
    else:
        audience = "General"

    return {
        "tone": tone,
        "formality": formality,
        "complexity": complexity,
        "style": [formality, complexity, tone],
        "audience": audience,
    }


def _std_dev(values: list[int]) -> float:
    if not values:
        return 0.0
    mean = sum(values) / len(values)
    return math.sqrt(sum((value - mean) ** 2 for value in values) / len(values))


def insights(text: str, toks: list[str], sent: list[str]) -> list[dict]:
    out = []

    if _std_dev([len(chunk.split()) for chunk in sent]) < 3:
        out.append(
            {
                "type": "improvement",
                "title": "Sentence Variety",
                "description": "Your sentences have similar lengths, which can make the text monotonous.",
                "suggestion": "Try varying sentence lengths to create more engaging rhythm.",
            }
        )
    else:
        out.append(
            {
                "type": "strength",
                "title": "Good Sentence Variety",
                "description": "Your text has good sentence length variety, creating engaging rhythm.",
            }
        )

    if len({token.lower() for token in toks}) / len(toks) < 0.4:
        out.append(
            {
                "type": "improvement",
                "title": "Vocabulary Diversity",
                "description": "Consider using more diverse vocabulary to make your writing more engaging.",
                "suggestion": "Try using synonyms and varied expressions.",
            }
        )
    else:
        out.append(
            {
                "type": "strength",
                "title": "Rich Vocabulary",
                "description": "Your text demonstrates good vocabulary diversity.",
            }
        )

    if len(toks) / max(1, len(sent)) > 25:
        out.append(
            {
                "type": "improvement",
                "title": "Sentence Length",
                "description": "Some sentences are quite long and may be difficult to read.",
                "suggestion": "Consider breaking long sentences into shorter, clearer ones.",
            }
        )

    if sent and len(sent) / max(1, len(paragraphs(text))) > 8:
        out.append(
            {
                "type": "improvement",
                "title": "Paragraph Structure",
                "description": "Consider breaking up long paragraphs for better readability.",
                "suggestion": "Aim for 3-5 sentences per paragraph for optimal reading flow.",
            }
        )

    return out


def plagiarism_risk(lowered: str) -> dict:
    score = min(100, len(_matches(lowered, STOCK_PHRASES)) * 10)
    if score < 30:
        level = "low"
    elif score < 70:
        level = "medium"
    else:
        level = "high"
    return {
        "score": score,
        "level": level,
        "details": f"Based on phrase analysis and text patterns, this content shows {level} similarity to common writing patterns.",
    }


def content_quality(toks: list[str], sentence_count: int) -> dict:
    clarity = clamp(100 - (len(toks) / max(1, sentence_count) - 15) * 2, 0, 100)
    overall = (clarity + COHERENCE_BASELINE + ENGAGEMENT_BASELINE + ORIGINALITY_BASELINE) / 4
    return {
        "overall": round_half_up(overall),
        "clarity": round_half_up(clarity),
        "coherence": COHERENCE_BASELINE,
        "engagement": ENGAGEMENT_BASELINE,
        "originality": ORIGINALITY_BASELINE,
    }


def heuristic_analysis(text: str) -> AiAnalysis:
    toks = words(text)
    if not toks:
        return AiAnalysis()

    lowered = text.lower()
    sent = sentences(text)
    return AiAnalysis.model_validate(
        {
            "advanced_sentiment": advanced_sentiment(lowered),
            "topics": detect_topics(lowered),
            "writing_style": writing_style(lowered, toks, len(sent)),
            "insights": insights(text, toks, sent),
            "plagiarism_risk": plagiarism_risk(lowered),
            "content_quality": content_quality(toks, len(sent)),
            "ai_or_human": "unknown",
            "ai_or_human_confidence": 0,
            "ai_or_human_explanation": "Keyword heuristics do not classify authorship.",
        }
    )
