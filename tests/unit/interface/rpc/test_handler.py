"""Unit tests for CommentRpcHandler."""

from uuid import uuid4

import pytest

from remark.adapter.redis.events import InMemoryEventChannel
from remark.domain.repository import CommentRepository
from remark.interface.rpc import CommentRpcHandler
from tests.factories import make_comment
from tests.harness import create_env_fixture

unit_env = create_env_fixture()


class TestCommentRpcHandler:
    """Every outcome becomes a reply; nothing raises."""

    @pytest.mark.asyncio
    async def test_create_then_get_all(self, unit_env):
        handler = await unit_env.get(CommentRpcHandler)
        post_id = str(uuid4())

        created = await handler.handle(
            "comment.create",
            {
                "postId": post_id,
                "content": "over the broker",
                "authorId": str(uuid4()),
                "requestId": "req-1",
                "timestamp": "2026-01-01T00:00:00Z",
            },
        )
        listed = await handler.handle(
            "comment.getAll", {"postId": post_id, "limit": 10, "sort": "asc"}
        )

        assert created.success is True
        assert created.request_id == "req-1"
        assert created.data["content"] == "over the broker"
        assert listed.success is True
        assert listed.data["totalCount"] == 1
        assert listed.data["items"][0]["commentId"] == created.data["commentId"]

    @pytest.mark.asyncio
    async def test_request_id_reaches_the_event(self, unit_env):
        handler = await unit_env.get(CommentRpcHandler)
        channel = await unit_env.get(InMemoryEventChannel)

        await handler.handle(
            "comment.create",
            {
                "postId": str(uuid4()),
                "content": "hi",
                "authorId": str(uuid4()),
                "requestId": "req-7",
            },
        )

        [event] = channel.of_type("comment.created")
        assert event.request_id == "req-7"

    @pytest.mark.asyncio
    async def test_not_found_is_reported(self, unit_env):
        handler = await unit_env.get(CommentRpcHandler)

        response = await handler.handle(
            "comment.get", {"commentId": str(uuid4()), "requestId": "req-2"}
        )

        assert response.success is False
        assert response.error.code == "NotFound"
        assert response.to_message() == {
            "success": False,
            "error": {"code": "NotFound", "message": response.error.message},
            "requestId": "req-2",
        }

    @pytest.mark.asyncio
    async def test_forbidden_delete_is_reported(self, unit_env, author_id, other_user_id):
        handler = await unit_env.get(CommentRpcHandler)
        comment_repo = await unit_env.get(CommentRepository)
        comment = await comment_repo.save(make_comment(author_id=author_id))

        response = await handler.handle(
            "comment.delete",
            {"commentId": str(comment.id), "userId": str(other_user_id)},
        )

        assert response.success is False
        assert response.error.code == "Forbidden"

    @pytest.mark.asyncio
    async def test_moderator_delete_succeeds_without_data(
        self, unit_env, author_id, other_user_id
    ):
        handler = await unit_env.get(CommentRpcHandler)
        comment_repo = await unit_env.get(CommentRepository)
        comment = await comment_repo.save(make_comment(author_id=author_id))

        response = await handler.handle(
            "comment.delete",
            {
                "commentId": str(comment.id),
                "userId": str(other_user_id),
                "isModerator": True,
            },
        )

        assert response.success is True
        assert response.to_message() == {"success": True}

    @pytest.mark.asyncio
    async def test_validation_failure_is_invalid_argument(self, unit_env):
        handler = await unit_env.get(CommentRpcHandler)

        response = await handler.handle(
            "comment.like", {"commentId": "nope", "userId": str(uuid4())}
        )

        assert response.success is False
        assert response.error.code == "InvalidArgument"

    @pytest.mark.asyncio
    async def test_unknown_routing_key_is_invalid_argument(self, unit_env):
        handler = await unit_env.get(CommentRpcHandler)

        response = await handler.handle("comment.explode", {"requestId": "r"})

        assert response.success is False
        assert response.error.code == "InvalidArgument"
        assert response.request_id == "r"

    @pytest.mark.asyncio
    async def test_escaped_content_over_limit_is_invalid_argument(self, unit_env):
        handler = await unit_env.get(CommentRpcHandler)

        response = await handler.handle(
            "comment.create",
            {
                "postId": str(uuid4()),
                "content": "R&D " * 1000,
                "authorId": str(uuid4()),
            },
        )

        assert response.success is False
        assert response.error.code == "InvalidArgument"

    @pytest.mark.asyncio
    async def test_numeric_request_id_is_echoed_as_string(self, unit_env):
        handler = await unit_env.get(CommentRpcHandler)
        post_id = str(uuid4())

        unknown = await handler.handle("comment.explode", {"requestId": 42})
        listed = await handler.handle(
            "comment.getAll", {"postId": post_id, "requestId": 43}
        )

        assert unknown.error.code == "InvalidArgument"
        assert unknown.request_id == "42"
        assert listed.success is True
        assert listed.request_id == "43"

    @pytest.mark.asyncio
    async def test_rate_limited_reply_keeps_numeric_request_id(self, unit_env):
        handler = await unit_env.get(CommentRpcHandler)
        handler.rate_limiter.max_requests = 0
        message = {"commentId": str(uuid4()), "userId": str(uuid4()), "requestId": 7}

        response = await handler.handle("comment.like", message)

        assert response.success is False
        assert response.error.code == "RateLimited"
        assert response.request_id == "7"

    @pytest.mark.asyncio
    async def test_unexpected_error_is_internal(self, unit_env, monkeypatch):
        handler = await unit_env.get(CommentRpcHandler)

        async def explode(request):
            raise RuntimeError("database on fire")

        monkeypatch.setattr(handler.get_comment_use_case, "execute", explode)

        response = await handler.handle("comment.get", {"commentId": str(uuid4())})

        assert response.success is False
        assert response.error.code == "Internal"
        assert "fire" not in response.error.message

    @pytest.mark.asyncio
    async def test_like_unlike_restore_round_trip(self, unit_env, author_id):
        handler = await unit_env.get(CommentRpcHandler)
        comment_repo = await unit_env.get(CommentRepository)
        comment = await comment_repo.save(
            make_comment(author_id=author_id, is_deleted=True)
        )
        message = {"commentId": str(comment.id), "userId": str(author_id)}

        restored = await handler.handle("comment.restore", message)
        liked = await handler.handle("comment.like", message)
        unliked = await handler.handle("comment.unlike", message)
        updated = await handler.handle(
            "comment.update", {**message, "content": "<b>new</b>"}
        )

        assert restored.data["isDeleted"] is False
        assert liked.data["likesCount"] == 1
        assert unliked.data["likesCount"] == 0
        assert updated.data["content"] == "<b>new</b>"
