"""Infrastructure providers."""

# Import bases
from .events import EventsProvider
from .persistence import PersistenceProvider
from .ratelimit import RateLimitProvider
from .redis_client import RedisProvider

# Import implementations (needed for __subclasses__())
from .events import ProdEventsProvider  # noqa: F401
from .persistence import ProdPersistenceProvider  # noqa: F401
from .ratelimit import ProdRateLimitProvider  # noqa: F401
from .redis_client import ProdRedisProvider  # noqa: F401

__all__ = [
    "EventsProvider",
    "PersistenceProvider",
    "ProdEventsProvider",
    "ProdPersistenceProvider",
    "ProdRateLimitProvider",
    "ProdRedisProvider",
    "RateLimitProvider",
    "RedisProvider",
]
