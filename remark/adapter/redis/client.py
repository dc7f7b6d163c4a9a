"""Redis connection management.

One async client per process, shared by the event channel, the RPC server
and the rate limiter.
"""

import logfire
import redis.asyncio as redis

from remark.config import Settings


def create_redis(settings: Settings) -> redis.Redis:
    """Create the async Redis client.

    The connection pool connects lazily, so this never blocks.
    """
    return redis.from_url(
        settings.redis.url,
        max_connections=settings.redis.max_connections,
        socket_timeout=settings.redis.socket_timeout,
        socket_connect_timeout=settings.redis.socket_connect_timeout,
        decode_responses=True,
    )


async def ping(client: redis.Redis) -> bool:
    """Check that Redis answers."""
    try:
        return bool(await client.ping())
    except redis.RedisError as e:
        logfire.warn("Redis ping failed", error=str(e))
        return False
