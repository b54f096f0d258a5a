import json

import httpx
import pytest
from fastapi.testclient import TestClient

from authorcheck.api import deps
from authorcheck.api.deps import get_analysis_gateway, get_rate_limiter
from authorcheck.core.config import Settings, get_settings
from authorcheck.core.rate_limit import InMemoryRateLimiter
from authorcheck.main import app
from authorcheck.services.gateway import AnalysisGateway
from authorcheck.services.gemini import GeminiClient

MODEL_ENDPOINT = "https://model.test/v1beta/models/gemini-2.0-flash:generateContent"

ANALYSIS_PAYLOAD = {
    "advancedSentiment": {
        "emotions": [{"emotion": "joy", "score": 0.8, "intensity": "high"}],
        "confidence": 91,
        "context": "Upbeat and warm.",
    },
    "topics": [{"topic": "Travel", "relevance": 0.9, "keywords": ["trip", "beach"]}],
    "writingStyle": {
        "tone": "Casual",
        "formality": "casual",
        "complexity": "simple",
        "style": ["narrative"],
        "audience": "Friends and family",
    },
    "insights": [{"type": "strength", "title": "Vivid", "description": "Clear imagery."}],
    "plagiarismRisk": {"score": 5, "level": "low", "details": "Personal voice."},
    "contentQuality": {"overall": 80, "clarity": 85, "coherence": 82, "engagement": 78, "originality": 75},
    "aiOrHuman": "human",
    "aiOrHumanConfidence": 70,
    "aiOrHumanExplanation": "Personal anecdotes and informal phrasing.",
}


def gemini_reply(text: str) -> dict:
    return {"candidates": [{"content": {"parts": [{"text": text}]}}]}


def wrapped_analysis(payload: dict = ANALYSIS_PAYLOAD) -> str:
    return f"Here is the analysis you asked for:\n```json\n{json.dumps(payload)}\n```\nLet me know if you need more."


def make_settings(**overrides) -> Settings:
    values = {
        "API_KEY": "test-key",
        "ENDPOINT": MODEL_ENDPOINT,
        "ENVIRONMENT": "test",
        "REDIS_URL": "",
        "SENTRY_DSN": "",
    }
    values.update(overrides)
    return Settings(**values)


@pytest.fixture(autouse=True)
def _isolate_state():
    get_settings.cache_clear()
    deps._rate_limiter = None
    yield
    app.dependency_overrides.clear()
    deps._rate_limiter = None
    get_settings.cache_clear()


@pytest.fixture
def settings() -> Settings:
    return make_settings()


@pytest.fixture
def make_client(settings):
    def _make(handler=None, *, limiter=None, app_settings: Settings | None = None) -> TestClient:
        active = app_settings or settings
        active_limiter = limiter or InMemoryRateLimiter(
            limit=active.rate_limit_per_minute,
            window_seconds=active.rate_limit_window_seconds,
        )
        model_handler = handler or (lambda request: httpx.Response(200, json=gemini_reply(wrapped_analysis())))
        transport = httpx.MockTransport(model_handler)

        app.dependency_overrides[get_settings] = lambda: active
        app.dependency_overrides[get_rate_limiter] = lambda: active_limiter
        app.dependency_overrides[get_analysis_gateway] = lambda: AnalysisGateway(
            active, GeminiClient(active, transport=transport)
        )
        return TestClient(app)

    return _make
