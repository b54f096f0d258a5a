from __future__ import annotations

import asyncio
import math
import time
from dataclasses import dataclass
from typing import Callable, Protocol

from redis.asyncio import Redis


@dataclass
class RateLimitResult:
    allowed: bool
    remaining: int
    reset_seconds: int


class RateLimiter(Protocol):
    limit: int

    async def hit(self, identifier: str) -> RateLimitResult: ...


@dataclass
class _Window:
    count: int
    reset_at: float


class InMemoryRateLimiter:
    """Fixed-window counter per identifier, local to this process."""

    def __init__(
        self,
        *,
        limit: int,
        window_seconds: int,
        clock: Callable[[], float] = time.monotonic,
        prune_every: int = 1024,
    ) -> None:
        self.limit = limit
        self.window_seconds = window_seconds
        self._clock = clock
        self._prune_every = prune_every
        self._windows: dict[str, _Window] = {}
        self._hits = 0
        self._lock = asyncio.Lock()

    def _prune(self, now: float) -> None:
        expired = [key for key, window in self._windows.items() if now > window.reset_at]
        for key in expired:
            del self._windows[key]

    async def hit(self, identifier: str) -> RateLimitResult:
        async with self._lock:
            now = self._clock()
            self._hits += 1
            if self._hits % self._prune_every == 0:
                self._prune(now)

            window = self._windows.get(identifier)
            if window is None or now > window.reset_at:
                window = _Window(count=1, reset_at=now + self.window_seconds)
                self._windows[identifier] = window
                return RateLimitResult(
                    allowed=True,
                    remaining=max(0, self.limit - 1),
                    reset_seconds=self.window_seconds,
                )

            reset_seconds = max(0, math.ceil(window.reset_at - now))
            if window.count >= self.limit:
                return RateLimitResult(allowed=False, remaining=0, reset_seconds=reset_seconds)

            window.count += 1
            return RateLimitResult(
                allowed=True,
                remaining=max(0, self.limit - window.count),
                reset_seconds=reset_seconds,
            )


class RedisRateLimiter:
    """Fixed-window counter shared through Redis; keys expire with their window."""

    def __init__(self, redis: Redis, *, limit: int, window_seconds: int, prefix: str = "rl:external") -> None:
        self.redis = redis
        self.limit = limit
        self.window_seconds = window_seconds
        self.prefix = prefix

    async def hit(self, identifier: str) -> RateLimitResult:
        key = f"{self.prefix}:{identifier}"
        window_ms = self.window_seconds * 1000

        pipe = self.redis.pipeline()
        pipe.set(key, 0, nx=True, px=window_ms)
        pipe.incr(key)
        pipe.pttl(key)
        _, count, ttl_ms = await pipe.execute()

        used = int(count)
        reset_seconds = math.ceil(int(ttl_ms) / 1000) if int(ttl_ms) > 0 else self.window_seconds
        return RateLimitResult(
            allowed=used <= self.limit,
            remaining=max(0, self.limit - used),
            reset_seconds=reset_seconds,
        )
