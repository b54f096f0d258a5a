from __future__ import annotations

import asyncio
from dataclasses import asdict
from typing import Any, Protocol

import httpx
from pydantic import ValidationError

from authorcheck.core.config import Settings
from authorcheck.core.errors import GatewayError
from authorcheck.core.logging import get_logger
from authorcheck.schemas.analysis import AiAnalysis, AnalysisResult, default_ai_analysis
from authorcheck.services.gateway import AnalysisGateway
from authorcheck.services.heuristics import heuristic_analysis
from authorcheck.services.text_metrics import compute_statistics

logger = get_logger(__name__)


class GatewayClient(Protocol):
    async def request_analysis(self, text: str, timeout_ms: int) -> dict[str, Any]:
        """Return the gateway envelope: {"success": True, "data": ...} or {"success": False, "error": ...}."""
        ...


class HttpGatewayClient:
    def __init__(
        self,
        url: str,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
        headers: dict[str, str] | None = None,
    ) -> None:
        self.url = url
        self.transport = transport
        self.headers = headers or {}

    async def request_analysis(self, text: str, timeout_ms: int) -> dict[str, Any]:
        # Leave room for the gateway to report its own 408 before we give up.
        timeout = httpx.Timeout(timeout_ms / 1000 + 5.0)
        try:
            async with httpx.AsyncClient(timeout=timeout, transport=self.transport) as client:
                response = await client.post(
                    self.url,
                    json={"text": text, "timeout": timeout_ms},
                    headers={"Content-Type": "application/json", **self.headers},
                )
        except httpx.HTTPError as exc:
            logger.warning("gateway_request_failed", url=self.url, error=str(exc))
            return {"success": False, "error": str(exc) or exc.__class__.__name__}

        try:
            payload = response.json()
        except ValueError:
            payload = None

        if response.status_code >= 400 or not isinstance(payload, dict):
            error = payload.get("error") if isinstance(payload, dict) else None
            return {"success": False, "error": error or "External API request failed"}
        if not payload.get("success"):
            return {"success": False, "error": payload.get("error") or "AI analysis failed"}
        return {"success": True, "data": payload.get("data")}


class LocalGatewayClient:
    """Runs the gateway in-process, for callers that already sit behind its guards."""

    def __init__(self, gateway: AnalysisGateway) -> None:
        self.gateway = gateway

    async def request_analysis(self, text: str, timeout_ms: int) -> dict[str, Any]:
        try:
            data = await self.gateway.analyze(text, timeout_ms)
        except GatewayError as exc:
            return {"success": False, "error": exc.error}
        return {"success": True, "data": data}


class AnalysisOrchestrator:
    def __init__(
        self,
        client: GatewayClient | None,
        *,
        enabled: bool = True,
        enable_fallback: bool = True,
        fallback_mode: str = "default",
        timeout_ms: int = 30_000,
    ) -> None:
        self.client = client
        self.enabled = enabled and client is not None
        self.enable_fallback = enable_fallback
        self.fallback_mode = fallback_mode
        self.timeout_ms = timeout_ms

    @classmethod
    def from_settings(cls, settings: Settings, client: GatewayClient | None) -> AnalysisOrchestrator:
        return cls(
            client,
            enabled=settings.ai_enabled,
            enable_fallback=settings.ai_fallback_enabled,
            fallback_mode=settings.ai_fallback_mode,
            timeout_ms=settings.ai_timeout_ms,
        )

    def _fallback(self, text: str) -> AiAnalysis:
        if self.enable_fallback and self.fallback_mode == "heuristic":
            return heuristic_analysis(text)
        return default_ai_analysis()

    async def _remote_analysis(self, text: str) -> tuple[AiAnalysis, str]:
        try:
            envelope = await self.client.request_analysis(text, self.timeout_ms)
        except Exception:
            logger.exception("gateway_client_crashed")
            return self._fallback(text), "fallback"

        if not envelope.get("success") or not isinstance(envelope.get("data"), dict):
            logger.warning("ai_analysis_unavailable", error=envelope.get("error"), fallback_mode=self.fallback_mode)
            return self._fallback(text), "fallback"

        try:
            return AiAnalysis.model_validate(envelope["data"]), "success"
        except ValidationError as exc:
            logger.warning("ai_analysis_invalid", error_count=exc.error_count())
            return self._fallback(text), "fallback"

    async def analyze(self, text: str) -> AnalysisResult:
        if not text.strip():
            logger.info("analysis_resolved", outcome="empty")
            return AnalysisResult()

        remote = asyncio.create_task(self._remote_analysis(text)) if self.enabled else None
        stats = compute_statistics(text)

        if remote is None:
            ai_analysis, outcome = default_ai_analysis(), "disabled"
        else:
            ai_analysis, outcome = await remote

        logger.info("analysis_resolved", outcome=outcome, word_count=stats.word_count)
        return AnalysisResult.model_validate({**asdict(stats), "ai_analysis": ai_analysis})
