"""Per-caller request budget.

Fixed-window counting: each caller may make ``max_requests`` requests per
``window_seconds``. Enforced by the transports before a request reaches
the comment service.
"""

import time
from abc import ABC, abstractmethod

import redis.asyncio as redis

from remark.config import RateLimitSettings
from remark.domain.error import RateLimitedError


class RateLimiter(ABC):
    """Rate limiter interface."""

    def __init__(self, settings: RateLimitSettings) -> None:
        self.enabled = settings.enabled
        self.max_requests = settings.max_requests
        self.window_seconds = settings.window_seconds

    async def check(self, key: str) -> None:
        """Count one request for ``key``.

        Raises:
            RateLimitedError: If the caller exceeded its budget in this window
        """
        if not self.enabled:
            return
        count, retry_after = await self._hit(key)
        if count > self.max_requests:
            raise RateLimitedError(retry_after=retry_after)

    @abstractmethod
    async def _hit(self, key: str) -> tuple[int, int]:
        """Record a request.

        Returns:
            Requests in the current window, seconds until the window resets
        """
        pass


class RedisRateLimiter(RateLimiter):
    """Rate limiter backed by Redis INCR + EXPIRE, shared by all workers."""

    def __init__(self, client: redis.Redis, settings: RateLimitSettings) -> None:
        super().__init__(settings)
        self.client = client

    async def _hit(self, key: str) -> tuple[int, int]:
        window = int(time.time()) // self.window_seconds
        redis_key = f"ratelimit:{key}:{window}"

        pipe = self.client.pipeline()
        pipe.incr(redis_key)
        pipe.expire(redis_key, self.window_seconds)
        count, _ = await pipe.execute()

        retry_after = self.window_seconds - int(time.time()) % self.window_seconds
        return int(count), retry_after


class InMemoryRateLimiter(RateLimiter):
    """Process-local rate limiter for testing."""

    def __init__(self, settings: RateLimitSettings) -> None:
        super().__init__(settings)
        self._counts: dict[tuple[str, int], int] = {}

    async def _hit(self, key: str) -> tuple[int, int]:
        now = int(time.time())
        window = now // self.window_seconds
        bucket = (key, window)
        self._counts[bucket] = self._counts.get(bucket, 0) + 1
        return self._counts[bucket], self.window_seconds - now % self.window_seconds
