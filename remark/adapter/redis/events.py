"""Outbound event channels.

Key features of the Redis channel:
- Non-blocking hand-off (``asyncio.Queue.put_nowait``)
- Graceful degradation (drop + log on full queue or exhausted retries)
- Bounded retry with exponential backoff per event
- One Redis pub/sub channel per event type
"""

import asyncio
import json

import logfire
import redis.asyncio as redis

from remark.adapter.error import ChannelClosedError, ChannelFullError
from remark.config import EventSettings
from remark.domain.model import CommentEvent
from remark.domain.service.notifier import EventChannel


class RedisEventChannel(EventChannel):
    """Publishes comment events to Redis pub/sub from a background worker.

    Events are delivered at most once: an event that still fails after
    ``max_retries`` retries is dropped.
    """

    def __init__(self, client: redis.Redis, settings: EventSettings) -> None:
        """Initialize channel.

        Args:
            client: Redis client
            settings: Queue size, retry and channel naming settings
        """
        self.client = client
        self.channel_prefix = settings.channel_prefix
        self.max_retries = settings.max_retries
        self.retry_backoff = settings.retry_backoff

        self._queue: asyncio.Queue[CommentEvent] = asyncio.Queue(
            maxsize=settings.queue_size
        )
        self._worker_task: asyncio.Task | None = None

        # Counters for monitoring
        self.events_published = 0
        self.events_dropped = 0

    @property
    def running(self) -> bool:
        return self._worker_task is not None and not self._worker_task.done()

    def start(self) -> None:
        """Start the background publisher."""
        if self.running:
            return
        self._worker_task = asyncio.create_task(self._run())
        logfire.info("Event channel started", channel_prefix=self.channel_prefix)

    async def stop(self, drain_timeout: float = 5.0) -> None:
        """Publish what is queued, then stop the background publisher."""
        if not self.running:
            return
        try:
            await asyncio.wait_for(self._queue.join(), timeout=drain_timeout)
        except asyncio.TimeoutError:
            logfire.warn(
                "Event channel stopped with pending events",
                pending=self._queue.qsize(),
            )
        self._worker_task.cancel()
        try:
            await self._worker_task
        except asyncio.CancelledError:
            pass
        self._worker_task = None
        logfire.info(
            "Event channel stopped",
            published=self.events_published,
            dropped=self.events_dropped,
        )

    def send(self, event: CommentEvent) -> None:
        """Queue an event for publication without waiting.

        Raises:
            ChannelClosedError: If the channel has not been started
            ChannelFullError: If the queue is full
        """
        if not self.running:
            raise ChannelClosedError("Event channel is not running")
        try:
            self._queue.put_nowait(event)
        except asyncio.QueueFull as e:
            self.events_dropped += 1
            raise ChannelFullError(
                f"Event queue full ({self._queue.maxsize}), dropped {event.event_type.value}"
            ) from e

    def topic(self, event: CommentEvent) -> str:
        return f"{self.channel_prefix}{event.event_type.value}"

    async def _run(self) -> None:
        while True:
            event = await self._queue.get()
            try:
                await self._publish(event)
            except Exception as e:
                self.events_dropped += 1
                logfire.error(
                    "Dropping comment event after unexpected error",
                    topic=self.topic(event),
                    request_id=event.request_id,
                    error=str(e),
                    error_type=type(e).__name__,
                )
            finally:
                self._queue.task_done()

    async def _publish(self, event: CommentEvent) -> None:
        topic = self.topic(event)
        message = json.dumps(event.to_message())

        for attempt in range(self.max_retries + 1):
            try:
                await self.client.publish(topic, message)
                self.events_published += 1
                return
            except redis.RedisError as e:
                if attempt == self.max_retries:
                    self.events_dropped += 1
                    logfire.error(
                        "Dropping comment event after retries",
                        topic=topic,
                        comment_id=str(event.comment_id) if event.comment_id else None,
                        request_id=event.request_id,
                        attempts=attempt + 1,
                        error=str(e),
                    )
                    return
                delay = self.retry_backoff * (2**attempt)
                logfire.warn(
                    "Comment event publish failed, retrying",
                    topic=topic,
                    attempt=attempt + 1,
                    delay=delay,
                    error=str(e),
                )
                await asyncio.sleep(delay)


class InMemoryEventChannel(EventChannel):
    """Event channel that records events in a list, for testing.

    Set ``fail_with`` to make ``send`` raise.
    """

    def __init__(self) -> None:
        self.events: list[CommentEvent] = []
        self.fail_with: Exception | None = None

    def send(self, event: CommentEvent) -> None:
        if self.fail_with is not None:
            raise self.fail_with
        self.events.append(event)

    def of_type(self, event_type: str) -> list[CommentEvent]:
        return [e for e in self.events if e.event_type.value == event_type]
