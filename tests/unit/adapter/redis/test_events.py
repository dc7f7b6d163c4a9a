"""Unit tests for RedisEventChannel."""

import asyncio
import json
from uuid import uuid4

import pytest
import redis.asyncio as redis

from remark.adapter.error import ChannelClosedError, ChannelFullError
from remark.adapter.redis.events import RedisEventChannel
from remark.config import EventSettings
from remark.domain.model import CommentEvent
from remark.domain.value import CommentId, EventType, PostId, UserId


class FakeRedis:
    """Captures PUBLISH calls; fails the first ``failures`` of them."""

    def __init__(self, failures: int = 0) -> None:
        self.failures = failures
        self.published: list[tuple[str, dict]] = []

    async def publish(self, channel: str, message: str) -> int:
        if self.failures > 0:
            self.failures -= 1
            raise redis.ConnectionError("connection reset")
        self.published.append((channel, json.loads(message)))
        return 1


def _event(event_type: EventType = EventType.CREATED) -> CommentEvent:
    return CommentEvent(
        event_type=event_type,
        comment_id=CommentId(uuid4()),
        post_id=PostId(uuid4()),
        author_id=UserId(uuid4()),
        request_id="req-1",
        payload={"content": "hi"},
    )


def _settings(**overrides) -> EventSettings:
    return EventSettings(retry_backoff=0.001, **overrides)


class TestRedisEventChannel:
    """Tests for RedisEventChannel."""

    @pytest.mark.asyncio
    async def test_publishes_to_topic_channel(self):
        client = FakeRedis()
        channel = RedisEventChannel(client, _settings())
        channel.start()
        event = _event(EventType.LIKED)

        channel.send(event)
        await channel.stop()

        [(topic, message)] = client.published
        assert topic == "events:comment.liked"
        assert message["eventType"] == "comment.liked"
        assert message["commentId"] == str(event.comment_id)
        assert message["requestId"] == "req-1"
        assert channel.events_published == 1

    @pytest.mark.asyncio
    async def test_retries_transient_failures(self):
        client = FakeRedis(failures=2)
        channel = RedisEventChannel(client, _settings(max_retries=3))
        channel.start()

        channel.send(_event())
        await channel.stop()

        assert len(client.published) == 1
        assert channel.events_dropped == 0

    @pytest.mark.asyncio
    async def test_drops_after_exhausting_retries(self):
        client = FakeRedis(failures=10)
        channel = RedisEventChannel(client, _settings(max_retries=2))
        channel.start()

        channel.send(_event())
        await channel.stop()

        assert client.published == []
        assert channel.events_dropped == 1

    @pytest.mark.asyncio
    async def test_send_before_start_raises(self):
        channel = RedisEventChannel(FakeRedis(), _settings())

        with pytest.raises(ChannelClosedError):
            channel.send(_event())

    @pytest.mark.asyncio
    async def test_full_queue_raises_and_counts_drop(self):
        channel = RedisEventChannel(FakeRedis(), _settings(queue_size=1))
        channel.start()

        # The worker has not run yet, so the first event still occupies the queue
        channel.send(_event())
        with pytest.raises(ChannelFullError):
            channel.send(_event())

        assert channel.events_dropped == 1
        await channel.stop()

    @pytest.mark.asyncio
    async def test_send_does_not_block_on_slow_redis(self):
        class SlowRedis(FakeRedis):
            async def publish(self, channel: str, message: str) -> int:
                await asyncio.sleep(0.05)
                return await super().publish(channel, message)

        client = SlowRedis()
        channel = RedisEventChannel(client, _settings())
        channel.start()

        for _ in range(5):
            channel.send(_event())
        assert client.published == []

        await channel.stop()
        assert len(client.published) == 5

    @pytest.mark.asyncio
    async def test_worker_survives_unexpected_publish_error(self):
        class BrokenOnceRedis(FakeRedis):
            broken = True

            async def publish(self, channel: str, message: str) -> int:
                if self.broken:
                    self.broken = False
                    raise ValueError("unexpected reply")
                return await super().publish(channel, message)

        client = BrokenOnceRedis()
        channel = RedisEventChannel(client, _settings())
        channel.start()

        channel.send(_event())
        await asyncio.sleep(0.01)
        assert channel.running
        channel.send(_event(EventType.UPDATED))
        await channel.stop()

        [(topic, _)] = client.published
        assert topic == "events:comment.updated"
        assert channel.events_dropped == 1
