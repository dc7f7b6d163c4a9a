"""Redis infrastructure providers."""

from collections.abc import AsyncIterator
from functools import partial

from dishka import Scope, provide
import redis.asyncio as redis
from sqlalchemy.ext.asyncio import AsyncEngine

from remark.adapter.health import ReadinessChecker
from remark.adapter.redis.client import create_redis, ping
from remark.config import Settings
from remark.persistence.database import ping_database
from remark.util.di.base import ProviderBase


class RedisProvider(ProviderBase):
    """Redis component base."""

    __mock_component__ = "redis"


class ProdRedisProvider(RedisProvider):
    """Production Redis client and readiness probes."""

    __is_mock__ = False
    __depends_on__ = {"persistence"}

    @provide(scope=Scope.APP)
    async def get_redis(self, settings: Settings) -> AsyncIterator[redis.Redis]:
        """Provide the shared Redis client, closed when the app shuts down."""
        client = create_redis(settings)
        yield client
        await client.aclose()

    @provide(scope=Scope.APP)
    def get_readiness_checker(
        self, client: redis.Redis, engine: AsyncEngine
    ) -> ReadinessChecker:
        """Provide readiness probes for the database and Redis."""
        return ReadinessChecker(
            {
                "database": partial(ping_database, engine),
                "redis": partial(ping, client),
            }
        )
