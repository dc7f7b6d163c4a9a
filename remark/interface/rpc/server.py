"""Broker RPC server over Redis lists.

Requests are JSON objects pushed (LPUSH) onto ``<queue_prefix><routing key>``.
A request carrying ``replyTo`` gets its reply pushed onto that list, which
expires after ``reply_ttl`` seconds. Each request is consumed by exactly one
worker.

The server also listens on the upstream post deletion channel and
soft-deletes the comments of every announced post.
"""

import asyncio
import json
from typing import Any

import logfire
import redis.asyncio as redis
from dishka import AsyncContainer

from remark.application.usecase.comment import (
    DeletePostCommentsRequest,
    DeletePostCommentsUseCase,
    parse_request,
)
from remark.config import RpcSettings
from remark.interface.error import to_domain_error

from .handler import ROUTING_KEYS, CommentRpcHandler, RpcResponse, request_id_of

# Pause after a Redis failure before polling again
_RECONNECT_DELAY = 1.0


class RpcServer:
    """Consumes RPC requests and post deletion announcements."""

    def __init__(
        self, container: AsyncContainer, client: redis.Redis, settings: RpcSettings
    ) -> None:
        """Initialize server.

        Args:
            container: Application container; one request scope per message
            client: Redis client
            settings: Queue naming, polling and reply settings
        """
        self.container = container
        self.client = client
        self.queue_prefix = settings.queue_prefix
        self.reply_ttl = settings.reply_ttl
        self.poll_timeout = settings.poll_timeout
        self.concurrency = settings.concurrency
        self.post_deleted_channel = settings.post_deleted_channel

        self._stopping = asyncio.Event()

    def queue_name(self, routing_key: str) -> str:
        return f"{self.queue_prefix}{routing_key}"

    def routing_key(self, queue_name: str) -> str:
        return queue_name.removeprefix(self.queue_prefix)

    async def run(self) -> None:
        """Serve until ``stop`` is called."""
        self._stopping.clear()
        logfire.info(
            "RPC server started",
            queues=[self.queue_name(k) for k in ROUTING_KEYS],
            concurrency=self.concurrency,
            post_deleted_channel=self.post_deleted_channel,
        )
        await asyncio.gather(
            *(self._consume(worker) for worker in range(self.concurrency)),
            self._watch_post_deletions(),
        )
        logfire.info("RPC server stopped")

    def stop(self) -> None:
        """Ask the consumers to finish their current message and exit."""
        self._stopping.set()

    async def _consume(self, worker: int) -> None:
        queues = [self.queue_name(k) for k in ROUTING_KEYS]
        while not self._stopping.is_set():
            try:
                item = await self.client.brpop(queues, timeout=self.poll_timeout)
            except redis.RedisError as e:
                logfire.error("RPC poll failed", worker=worker, error=str(e))
                await asyncio.sleep(_RECONNECT_DELAY)
                continue
            if item is None:
                continue
            queue, raw = item
            await self.process(self.routing_key(queue), raw)

    async def process(self, routing_key: str, raw: str) -> RpcResponse | None:
        """Handle one raw request and send the reply.

        Returns:
            The reply, or None if the message was not a JSON object
        """
        message = _decode(raw)
        if message is None:
            logfire.error(
                "Discarding malformed RPC message",
                routing_key=routing_key,
                raw=raw[:200],
            )
            return None

        try:
            async with self.container() as request_container:
                handler = await request_container.get(CommentRpcHandler)
                response = await handler.handle(routing_key, message)
        except Exception as e:
            # Raised while closing the request scope, e.g. on commit
            logfire.error(
                "RPC request scope failed",
                routing_key=routing_key,
                error=str(e),
                error_type=type(e).__name__,
            )
            response = RpcResponse.failure(
                to_domain_error(e), request_id_of(message)
            )

        reply_to = message.get("replyTo")
        if reply_to:
            await self._reply(str(reply_to), response)
        return response

    async def _reply(self, reply_to: str, response: RpcResponse) -> None:
        try:
            pipe = self.client.pipeline()
            pipe.lpush(reply_to, json.dumps(response.to_message()))
            pipe.expire(reply_to, self.reply_ttl)
            await pipe.execute()
        except redis.RedisError as e:
            logfire.error(
                "Failed to send RPC reply",
                reply_to=reply_to,
                request_id=response.request_id,
                error=str(e),
            )

    async def _watch_post_deletions(self) -> None:
        pubsub = self.client.pubsub()
        await pubsub.subscribe(self.post_deleted_channel)
        try:
            while not self._stopping.is_set():
                try:
                    item = await pubsub.get_message(
                        ignore_subscribe_messages=True, timeout=self.poll_timeout
                    )
                except redis.RedisError as e:
                    logfire.error("Post deletion listener failed", error=str(e))
                    await asyncio.sleep(_RECONNECT_DELAY)
                    continue
                if item is not None:
                    await self.delete_post_comments(item["data"])
        finally:
            await pubsub.unsubscribe(self.post_deleted_channel)
            await pubsub.aclose()

    async def delete_post_comments(self, raw: str) -> int | None:
        """Run the cascade for one ``{"postId": ...}`` announcement.

        Returns:
            Number of comments deleted, or None if the announcement was
            unusable or the cascade failed
        """
        message = _decode(raw)
        if message is None:
            logfire.error("Discarding malformed post deletion message", raw=raw[:200])
            return None

        try:
            request = parse_request(DeletePostCommentsRequest, message)
            async with self.container() as request_container:
                use_case = await request_container.get(DeletePostCommentsUseCase)
                result = await use_case.execute(request)
        except Exception as e:
            logfire.error(
                "Post comments cascade failed",
                post_id=message.get("postId"),
                code=to_domain_error(e).code,
                error=str(e),
            )
            return None

        logfire.info(
            "Post comments cascade completed",
            post_id=result.post_id,
            count=result.count,
        )
        return result.count


def _decode(raw: str) -> dict[str, Any] | None:
    try:
        message = json.loads(raw)
    except (TypeError, json.JSONDecodeError):
        return None
    return message if isinstance(message, dict) else None
