"""Mock providers for testing."""

from .events import MockEventsProvider
from .persistence import MockPersistenceProvider
from .ratelimit import MockRateLimitProvider
from .redis_client import MockRedisProvider
from .container import build_test_container

__all__ = [
    "MockEventsProvider",
    "MockPersistenceProvider",
    "MockRateLimitProvider",
    "MockRedisProvider",
    "build_test_container",
]
