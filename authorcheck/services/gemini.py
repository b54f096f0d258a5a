from __future__ import annotations

import asyncio
import json
import re
from typing import Any

import httpx

from authorcheck.core.config import Settings
from authorcheck.core.errors import AnalysisFailed, AnalysisParseError, GatewayTimeout, UpstreamError
from authorcheck.core.logging import get_logger

logger = get_logger(__name__)

# Greedy: first "{" to last "}" anywhere in the reply.
_JSON_OBJECT_RE = re.compile(r"\{.*\}", re.DOTALL)

_ANALYSIS_SCHEMA = """{
  "advancedSentiment": {
    "emotions": [
      {
        "emotion": "emotion_name",
        "score": 0.85,
        "intensity": "high|medium|low"
      }
    ],
    "confidence": 0.92,
    "context": "Brief description of the overall emotional context"
  },
  "topics": [
    {
      "topic": "topic_name",
      "relevance": 0.95,
      "keywords": ["keyword1", "keyword2"]
    }
  ],
  "writingStyle": {
    "tone": "Professional|Casual|Academic|Creative",
    "formality": "formal|neutral|casual",
    "complexity": "simple|moderate|complex",
    "style": ["style1", "style2"],
    "audience": "target audience description"
  },
  "insights": [
    {
      "type": "strength|improvement|observation",
      "title": "Insight title",
      "description": "Detailed description",
      "suggestion": "Optional suggestion"
    }
  ],
  "plagiarismRisk": {
    "score": 15,
    "level": "low|medium|high",
    "details": "Risk assessment details"
  },
  "contentQuality": {
    "overall": 85,
    "clarity": 90,
    "coherence": 88,
    "engagement": 82,
    "originality": 87
  },
  "aiOrHuman": "ai|human|unknown",
  "aiOrHumanConfidence": 92,
  "aiOrHumanExplanation": "This text is likely AI-generated because of its consistent tone, lack of personal anecdotes, and formal structure."
}"""


def build_analysis_prompt(text: str) -> str:
    return (
        "Analyze the following text and provide a comprehensive analysis in JSON format. \n\n"
        "Text to analyze:\n"
        f'"{text}"\n\n'
        "Please provide analysis in the following JSON format:\n"
        f"{_ANALYSIS_SCHEMA}\n\n"
        "Focus on providing accurate, detailed analysis. Ensure all scores are between 0-100 and "
        "relevance scores are between 0-1. For aiOrHuman, classify as 'ai' if the text is likely "
        "AI-generated, 'human' if likely human-written, or 'unknown' if unsure."
    )


def build_generation_request(prompt: str, settings: Settings) -> dict[str, Any]:
    return {
        "contents": [{"parts": [{"text": prompt}]}],
        "generationConfig": {
            "temperature": settings.gemini_temperature,
            "topK": settings.gemini_top_k,
            "topP": settings.gemini_top_p,
            "maxOutputTokens": settings.gemini_max_output_tokens,
        },
    }


def extract_reply_text(payload: Any) -> str:
    """Text of the first part of the first candidate, or "" when the reply has none."""
    if not isinstance(payload, dict):
        return ""
    candidates = payload.get("candidates")
    if not isinstance(candidates, list) or not candidates:
        return ""
    content = candidates[0].get("content") if isinstance(candidates[0], dict) else None
    parts = content.get("parts") if isinstance(content, dict) else None
    if not isinstance(parts, list) or not parts or not isinstance(parts[0], dict):
        return ""
    text = parts[0].get("text")
    return text if isinstance(text, str) else ""


def extract_json_object(reply: str) -> dict[str, Any]:
    match = _JSON_OBJECT_RE.search(reply)
    if not match:
        logger.warning("model_reply_without_json", reply_length=len(reply))
        raise AnalysisParseError()
    try:
        parsed = json.loads(match.group(0))
    except json.JSONDecodeError as exc:
        logger.warning("model_reply_unparseable", error=str(exc), reply_length=len(reply))
        raise AnalysisParseError() from exc
    if not isinstance(parsed, dict):
        raise AnalysisParseError()
    return parsed


class GeminiClient:
    def __init__(self, settings: Settings, *, transport: httpx.AsyncBaseTransport | None = None) -> None:
        self.settings = settings
        self.transport = transport

    def _headers(self) -> dict[str, str]:
        return {
            "Content-Type": "application/json",
            "x-goog-api-key": self.settings.api_key,
            "User-Agent": self.settings.user_agent,
        }

    async def _post(self, body: dict[str, Any], timeout_seconds: float) -> httpx.Response:
        async with httpx.AsyncClient(timeout=httpx.Timeout(timeout_seconds), transport=self.transport) as client:
            return await client.post(self.settings.endpoint, json=body, headers=self._headers())

    async def generate(self, prompt: str, *, timeout_seconds: float) -> str:
        body = build_generation_request(prompt, self.settings)
        try:
            response = await asyncio.wait_for(self._post(body, timeout_seconds), timeout=timeout_seconds)
        except (asyncio.TimeoutError, httpx.TimeoutException) as exc:
            logger.warning("model_request_timeout", timeout_seconds=timeout_seconds)
            raise GatewayTimeout() from exc
        except httpx.HTTPError as exc:
            logger.warning("model_request_failed", error=str(exc))
            raise UpstreamError() from exc

        if response.status_code >= 400:
            logger.error(
                "model_http_error",
                status_code=response.status_code,
                preview=response.text[:180],
            )
            raise UpstreamError()

        try:
            payload = response.json()
        except ValueError as exc:
            logger.error("model_unparseable_response", preview=response.text[:180])
            raise UpstreamError() from exc

        if isinstance(payload, dict) and payload.get("error"):
            logger.error("model_returned_error", preview=str(payload["error"])[:180])
            raise AnalysisFailed()

        reply = extract_reply_text(payload)
        if not reply:
            logger.error("model_empty_reply")
            raise AnalysisFailed("No analysis data received")
        return reply
