from __future__ import annotations

from fastapi import Depends, Request

from authorcheck.core.config import Settings, get_settings
from authorcheck.core.errors import OriginRejected, RateLimited
from authorcheck.core.logging import get_logger
from authorcheck.core.rate_limit import InMemoryRateLimiter, RateLimiter, RedisRateLimiter
from authorcheck.core.redis import get_redis
from authorcheck.core.security import MalformedReferer, is_origin_allowed, resolve_request_origin
from authorcheck.services.gateway import AnalysisGateway
from authorcheck.utils.http import client_identifier

logger = get_logger(__name__)

_rate_limiter: RateLimiter | None = None


def get_rate_limiter() -> RateLimiter:
    global _rate_limiter
    if _rate_limiter is None:
        settings = get_settings()
        redis = get_redis()
        if redis is not None:
            _rate_limiter = RedisRateLimiter(
                redis,
                limit=settings.rate_limit_per_minute,
                window_seconds=settings.rate_limit_window_seconds,
            )
        else:
            _rate_limiter = InMemoryRateLimiter(
                limit=settings.rate_limit_per_minute,
                window_seconds=settings.rate_limit_window_seconds,
            )
    return _rate_limiter


def get_analysis_gateway(settings: Settings = Depends(get_settings)) -> AnalysisGateway:
    return AnalysisGateway(settings)


def require_allowed_origin(request: Request, settings: Settings = Depends(get_settings)) -> None:
    origin_header = request.headers.get("origin")
    referer_header = request.headers.get("referer")
    try:
        origin = resolve_request_origin(origin_header, referer_header)
    except MalformedReferer:
        logger.warning("origin_rejected", referer=referer_header)
        raise OriginRejected()

    if origin is None:
        if settings.require_origin:
            logger.warning("origin_missing_rejected", client=client_identifier(request))
            raise OriginRejected()
        logger.warning("origin_missing", client=client_identifier(request))
        return

    if not is_origin_allowed(origin, settings.origins):
        logger.warning("origin_rejected", origin=origin)
        raise OriginRejected()


async def enforce_rate_limit(
    request: Request,
    _origin: None = Depends(require_allowed_origin),
    settings: Settings = Depends(get_settings),
    limiter: RateLimiter = Depends(get_rate_limiter),
) -> str:
    identifier = client_identifier(request)
    result = await limiter.hit(identifier)
    if not result.allowed:
        logger.warning("rate_limit_exceeded", client=identifier, method=request.method)
        raise RateLimited(
            f"Maximum {settings.rate_limit_per_minute} requests per minute allowed",
            headers={"Retry-After": str(max(1, result.reset_seconds))},
        )
    return identifier
