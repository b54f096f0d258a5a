from __future__ import annotations

from typing import Any

from authorcheck.core.config import Settings
from authorcheck.core.errors import InvalidInput, ServiceUnavailable
from authorcheck.core.logging import get_logger
from authorcheck.services.gemini import GeminiClient, build_analysis_prompt, extract_json_object
from authorcheck.utils.text import clamp, sanitize_text

logger = get_logger(__name__)

MIN_TIMEOUT_MS = 5_000
MAX_TIMEOUT_MS = 60_000


def validate_text(text: Any, max_length: int) -> str:
    if not text or not isinstance(text, str):
        raise InvalidInput("Invalid text input")
    if len(text) > max_length:
        raise InvalidInput(f"Text too long. Maximum {max_length} characters allowed")

    sanitized = sanitize_text(text)
    if not sanitized:
        raise InvalidInput("Text cannot be empty after sanitization")
    return sanitized


def clamp_timeout(timeout: Any, default_ms: int) -> int:
    if isinstance(timeout, bool) or not isinstance(timeout, (int, float)) or timeout != timeout:
        timeout = default_ms
    return int(clamp(timeout, MIN_TIMEOUT_MS, MAX_TIMEOUT_MS))


class AnalysisGateway:
    """Validates one analysis request and runs it against the generative model."""

    def __init__(self, settings: Settings, client: GeminiClient | None = None) -> None:
        self.settings = settings
        self.client = client or GeminiClient(settings)

    @property
    def model(self) -> str:
        return self.settings.model

    async def analyze(self, text: Any, timeout: Any = None) -> dict[str, Any]:
        sanitized = validate_text(text, self.settings.max_text_length)
        timeout_ms = clamp_timeout(timeout, self.settings.ai_timeout_ms)

        if not self.settings.api_key:
            logger.error("api_key_not_configured")
            raise ServiceUnavailable()

        prompt = build_analysis_prompt(sanitized)
        reply = await self.client.generate(prompt, timeout_seconds=timeout_ms / 1000)
        data = extract_json_object(reply)
        logger.info("analysis_completed", text_length=len(sanitized), timeout_ms=timeout_ms)
        return data
