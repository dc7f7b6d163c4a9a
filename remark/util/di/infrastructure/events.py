"""Outbound event channel providers."""

from collections.abc import AsyncIterator

from dishka import Scope, provide
import redis.asyncio as redis

from remark.adapter.redis.events import RedisEventChannel
from remark.config import EventSettings
from remark.domain.service import EventChannel
from remark.util.di.base import ProviderBase


class EventsProvider(ProviderBase):
    """Events component base."""

    __mock_component__ = "events"


class ProdEventsProvider(EventsProvider):
    """Production event channel publishing to Redis."""

    __is_mock__ = False
    __depends_on__ = {"redis"}

    @provide(scope=Scope.APP)
    async def get_event_channel(
        self, client: redis.Redis, settings: EventSettings
    ) -> AsyncIterator[EventChannel]:
        """Provide the running event channel; pending events drain on shutdown."""
        channel = RedisEventChannel(client, settings)
        channel.start()
        yield channel
        await channel.stop()
