"""Mock Redis providers for testing."""

from dishka import Scope, provide

from remark.adapter.health import ReadinessChecker
from remark.util.di.infrastructure.redis_client import RedisProvider


async def _always_ready() -> bool:
    return True


class MockRedisProvider(RedisProvider):
    """No Redis; readiness always reports ready."""

    __is_mock__ = True

    @provide(scope=Scope.APP)
    def get_readiness_checker(self) -> ReadinessChecker:
        """Provide readiness checker with an always-ready probe."""
        return ReadinessChecker({"memory": _always_ready})
