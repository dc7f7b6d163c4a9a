"""Broker RPC handler.

Each routing key maps to one use case. Handlers never raise: every outcome,
including unexpected failures, becomes an ``RpcResponse`` so the caller on
the other side of the broker always gets a reply.
"""

import time
from collections.abc import Awaitable, Callable
from typing import Any

import logfire
from pydantic import BaseModel

from remark.adapter.redis.ratelimit import RateLimiter
from remark.application.usecase.comment import (
    CreateCommentRequest,
    CreateCommentUseCase,
    DeleteCommentRequest,
    DeleteCommentUseCase,
    GetCommentRequest,
    GetCommentsRequest,
    GetCommentsUseCase,
    GetCommentUseCase,
    LikeCommentRequest,
    LikeCommentUseCase,
    RestoreCommentRequest,
    RestoreCommentUseCase,
    UnlikeCommentUseCase,
    UpdateCommentRequest,
    UpdateCommentUseCase,
    parse_request,
)
from remark.domain.error import DomainError, InvalidArgumentError
from remark.interface.error import RETRYABLE_CODES, to_domain_error

# Routing key -> operation label used in logs and metrics
ROUTING_KEYS: dict[str, str] = {
    "comment.create": "create",
    "comment.getAll": "getAll",
    "comment.get": "get",
    "comment.update": "update",
    "comment.delete": "delete",
    "comment.like": "like",
    "comment.unlike": "unlike",
    "comment.restore": "restore",
}

_rpc_duration = logfire.metric_histogram(
    "comment_rpc_duration_seconds",
    unit="s",
    description="Duration of comment RPC operations",
)


class RpcError(BaseModel):
    """Error part of an RPC reply."""

    code: str
    message: str


class RpcResponse(BaseModel):
    """Reply to one RPC request."""

    success: bool
    data: Any = None
    error: RpcError | None = None
    request_id: str | None = None

    @classmethod
    def ok(cls, data: Any, request_id: str | None) -> "RpcResponse":
        if isinstance(data, BaseModel):
            data = data.model_dump(mode="json", by_alias=True)
        elif isinstance(data, list):
            data = [item.model_dump(mode="json", by_alias=True) for item in data]
        return cls(success=True, data=data, request_id=request_id)

    @classmethod
    def failure(cls, error: DomainError, request_id: str | None) -> "RpcResponse":
        return cls(
            success=False,
            error=RpcError(code=error.code, message=error.message),
            request_id=request_id,
        )

    def to_message(self) -> dict[str, Any]:
        """Wire form; absent parts are omitted."""
        message: dict[str, Any] = {"success": self.success}
        if self.data is not None:
            message["data"] = self.data
        if self.error is not None:
            message["error"] = self.error.model_dump()
        if self.request_id is not None:
            message["requestId"] = self.request_id
        return message


class CommentRpcHandler:
    """Dispatches RPC messages to the comment use cases."""

    def __init__(
        self,
        create_comment_use_case: CreateCommentUseCase,
        get_comments_use_case: GetCommentsUseCase,
        get_comment_use_case: GetCommentUseCase,
        update_comment_use_case: UpdateCommentUseCase,
        delete_comment_use_case: DeleteCommentUseCase,
        like_comment_use_case: LikeCommentUseCase,
        unlike_comment_use_case: UnlikeCommentUseCase,
        restore_comment_use_case: RestoreCommentUseCase,
        rate_limiter: RateLimiter,
    ) -> None:
        self.create_comment_use_case = create_comment_use_case
        self.get_comments_use_case = get_comments_use_case
        self.get_comment_use_case = get_comment_use_case
        self.update_comment_use_case = update_comment_use_case
        self.delete_comment_use_case = delete_comment_use_case
        self.like_comment_use_case = like_comment_use_case
        self.unlike_comment_use_case = unlike_comment_use_case
        self.restore_comment_use_case = restore_comment_use_case
        self.rate_limiter = rate_limiter

        self._operations: dict[str, Callable[[dict[str, Any]], Awaitable[RpcResponse]]] = {
            "comment.create": self.create_comment,
            "comment.getAll": self.get_comments,
            "comment.get": self.get_comment,
            "comment.update": self.update_comment,
            "comment.delete": self.delete_comment,
            "comment.like": self.like_comment,
            "comment.unlike": self.unlike_comment,
            "comment.restore": self.restore_comment,
        }

    async def handle(self, routing_key: str, message: dict[str, Any]) -> RpcResponse:
        """Handle one broker message.

        Mutations are charged against the caller's rate limit budget first.
        """
        start = time.perf_counter()
        operation = self._operations.get(routing_key)
        if operation is None:
            _record("unknown", start, success=False)
            return RpcResponse.failure(
                InvalidArgumentError(f"Unknown routing key: {routing_key}"),
                request_id_of(message),
            )

        caller = message.get("userId") or message.get("authorId")
        if caller and routing_key not in ("comment.get", "comment.getAll"):
            try:
                await self.rate_limiter.check(f"user:{caller}")
            except DomainError as e:
                _record(ROUTING_KEYS[routing_key], start, success=False)
                return RpcResponse.failure(e, request_id_of(message))

        return await operation(message)

    async def create_comment(self, message: dict[str, Any]) -> RpcResponse:
        return await self._call(
            "create", message, CreateCommentRequest, self.create_comment_use_case.execute
        )

    async def get_comments(self, message: dict[str, Any]) -> RpcResponse:
        return await self._call(
            "getAll", message, GetCommentsRequest, self.get_comments_use_case.execute
        )

    async def get_comment(self, message: dict[str, Any]) -> RpcResponse:
        return await self._call(
            "get", message, GetCommentRequest, self.get_comment_use_case.execute
        )

    async def update_comment(self, message: dict[str, Any]) -> RpcResponse:
        return await self._call(
            "update", message, UpdateCommentRequest, self.update_comment_use_case.execute
        )

    async def delete_comment(self, message: dict[str, Any]) -> RpcResponse:
        return await self._call(
            "delete", message, DeleteCommentRequest, self.delete_comment_use_case.execute
        )

    async def like_comment(self, message: dict[str, Any]) -> RpcResponse:
        return await self._call(
            "like", message, LikeCommentRequest, self.like_comment_use_case.execute
        )

    async def unlike_comment(self, message: dict[str, Any]) -> RpcResponse:
        return await self._call(
            "unlike", message, LikeCommentRequest, self.unlike_comment_use_case.execute
        )

    async def restore_comment(self, message: dict[str, Any]) -> RpcResponse:
        return await self._call(
            "restore",
            message,
            RestoreCommentRequest,
            self.restore_comment_use_case.execute,
        )

    async def _call(
        self,
        operation: str,
        message: dict[str, Any],
        request_model: type[BaseModel],
        execute: Callable[[Any], Awaitable[Any]],
    ) -> RpcResponse:
        request_id = request_id_of(message)

        success = False
        start = time.perf_counter()
        try:
            with logfire.span(
                "rpc.{operation}", operation=operation, request_id=request_id
            ):
                request = parse_request(
                    request_model, {**message, "requestId": request_id}
                )
                data = await execute(request)
            success = True
            return RpcResponse.ok(data, request_id)
        except Exception as e:
            error = to_domain_error(e)
            if error.code in RETRYABLE_CODES:
                logfire.error(
                    "RPC {operation} failed",
                    operation=operation,
                    request_id=request_id,
                    code=error.code,
                    error=str(e),
                    error_type=type(e).__name__,
                )
            else:
                logfire.warn(
                    "RPC {operation} rejected",
                    operation=operation,
                    request_id=request_id,
                    code=error.code,
                    error=error.message,
                )
            return RpcResponse.failure(error, request_id)
        finally:
            _record(operation, start, success)


def request_id_of(message: dict[str, Any]) -> str | None:
    """Correlation ID of a request, as a string."""
    request_id = message.get("requestId")
    return str(request_id) if request_id is not None else None


def _record(operation: str, start: float, success: bool) -> None:
    _rpc_duration.record(
        time.perf_counter() - start,
        attributes={"operation": operation, "success": success},
    )
