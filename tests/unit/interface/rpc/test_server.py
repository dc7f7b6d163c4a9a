"""Unit tests for RpcServer message processing."""

import json
from uuid import uuid4

import pytest
import pytest_asyncio

from remark.adapter.redis.events import InMemoryEventChannel
from remark.config import RpcSettings
from remark.domain.repository import CommentRepository
from remark.interface.rpc import RpcServer
from tests.di import build_test_container
from tests.factories import make_comment


class FakePipeline:
    def __init__(self, client: "FakeRedis") -> None:
        self.client = client
        self.commands: list[tuple] = []

    def lpush(self, key: str, value: str) -> None:
        self.commands.append(("lpush", key, value))

    def expire(self, key: str, seconds: int) -> None:
        self.commands.append(("expire", key, seconds))

    async def execute(self) -> list:
        for command, key, arg in self.commands:
            if command == "lpush":
                self.client.lists.setdefault(key, []).insert(0, arg)
            else:
                self.client.expiries[key] = arg
        return [True] * len(self.commands)


class FakeRedis:
    def __init__(self) -> None:
        self.lists: dict[str, list[str]] = {}
        self.expiries: dict[str, int] = {}

    def pipeline(self) -> FakePipeline:
        return FakePipeline(self)


@pytest_asyncio.fixture
async def container():
    container = build_test_container()
    yield container
    await container.close()


@pytest.fixture
def client() -> FakeRedis:
    return FakeRedis()


@pytest.fixture
def server(container, client) -> RpcServer:
    return RpcServer(container, client, RpcSettings(reply_ttl=30))


class TestProcess:
    """Tests for RpcServer.process."""

    def test_queue_names_use_prefix(self, server):
        assert server.queue_name("comment.create") == "rpc:comment.create"
        assert server.routing_key("rpc:comment.getAll") == "comment.getAll"

    @pytest.mark.asyncio
    async def test_reply_is_pushed_with_ttl(self, server, client):
        raw = json.dumps(
            {
                "postId": str(uuid4()),
                "content": "hello",
                "authorId": str(uuid4()),
                "requestId": "req-1",
                "replyTo": "reply:abc",
            }
        )

        response = await server.process("comment.create", raw)

        assert response.success is True
        [reply] = client.lists["reply:abc"]
        assert json.loads(reply)["requestId"] == "req-1"
        assert json.loads(reply)["data"]["content"] == "hello"
        assert client.expiries["reply:abc"] == 30

    @pytest.mark.asyncio
    async def test_state_persists_across_messages(self, server):
        post_id = str(uuid4())
        await server.process(
            "comment.create",
            json.dumps(
                {"postId": post_id, "content": "one", "authorId": str(uuid4())}
            ),
        )

        response = await server.process(
            "comment.getAll", json.dumps({"postId": post_id})
        )

        assert response.data["totalCount"] == 1

    @pytest.mark.asyncio
    async def test_no_reply_without_reply_to(self, server, client):
        response = await server.process(
            "comment.get", json.dumps({"commentId": str(uuid4())})
        )

        assert response.success is False
        assert client.lists == {}

    @pytest.mark.asyncio
    @pytest.mark.parametrize("raw", ["{not json", "[1, 2]", '"text"'])
    async def test_malformed_message_is_discarded(self, server, client, raw):
        assert await server.process("comment.get", raw) is None
        assert client.lists == {}


class TestPostDeletedCascade:
    """Tests for RpcServer.delete_post_comments."""

    @pytest.mark.asyncio
    async def test_cascade_soft_deletes_post_comments(self, server, container):
        post_id = uuid4()
        async with container() as request_container:
            comment_repo = await request_container.get(CommentRepository)
            for _ in range(2):
                await comment_repo.save(make_comment(post_id=post_id))

        count = await server.delete_post_comments(json.dumps({"postId": str(post_id)}))

        assert count == 2
        channel = await container.get(InMemoryEventChannel)
        [event] = channel.of_type("comments.bulk_deleted")
        assert event.payload == {"count": 2}

    @pytest.mark.asyncio
    async def test_unusable_announcement_is_ignored(self, server):
        assert await server.delete_post_comments("garbage") is None
        assert await server.delete_post_comments(json.dumps({"postId": "x"})) is None
