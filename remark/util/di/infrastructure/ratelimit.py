"""Rate limiter providers."""

from dishka import Scope, provide
import redis.asyncio as redis

from remark.adapter.redis.ratelimit import RateLimiter, RedisRateLimiter
from remark.config import RateLimitSettings
from remark.util.di.base import ProviderBase


class RateLimitProvider(ProviderBase):
    """Rate limit component base."""

    __mock_component__ = "ratelimit"


class ProdRateLimitProvider(RateLimitProvider):
    """Production rate limiter shared through Redis."""

    __is_mock__ = False
    __depends_on__ = {"redis"}

    @provide(scope=Scope.APP)
    def get_rate_limiter(
        self, client: redis.Redis, settings: RateLimitSettings
    ) -> RateLimiter:
        """Provide Redis-backed rate limiter."""
        return RedisRateLimiter(client, settings)
