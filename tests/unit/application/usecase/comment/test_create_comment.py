"""Unit tests for CreateCommentUseCase."""

from uuid import uuid4

import pytest

from remark.application.usecase.comment import (
    CreateCommentRequest,
    CreateCommentUseCase,
    parse_request,
)
from remark.domain.error import InvalidArgumentError
from remark.domain.model import MAX_CONTENT_LENGTH
from tests.harness import create_env_fixture

unit_env = create_env_fixture()


class TestCreateCommentRequest:
    """Validation of raw create requests."""

    def test_camel_case_payload_is_accepted(self):
        post_id = uuid4()
        author_id = uuid4()

        request = parse_request(
            CreateCommentRequest,
            {
                "postId": str(post_id),
                "content": "hi",
                "authorId": str(author_id),
                "requestId": "req-1",
                "timestamp": "2026-01-01T00:00:00Z",
            },
        )

        assert request.post_id == post_id
        assert request.author_id == author_id
        assert request.parent_comment_id is None
        assert request.request_id == "req-1"

    @pytest.mark.parametrize(
        "content", ["", "x" * (MAX_CONTENT_LENGTH + 1)]
    )
    def test_content_length_is_enforced(self, content):
        with pytest.raises(InvalidArgumentError, match="content"):
            parse_request(
                CreateCommentRequest,
                {"postId": str(uuid4()), "content": content, "authorId": str(uuid4())},
            )

    def test_malformed_ids_are_invalid(self):
        with pytest.raises(InvalidArgumentError, match="postId"):
            parse_request(
                CreateCommentRequest,
                {"postId": "not-a-uuid", "content": "hi", "authorId": str(uuid4())},
            )


class TestCreateCommentUseCase:
    """Tests for CreateCommentUseCase."""

    @pytest.mark.asyncio
    async def test_returns_client_view(self, unit_env):
        use_case = await unit_env.get(CreateCommentUseCase)
        post_id = uuid4()
        parent_id = uuid4()

        result = await use_case.execute(
            CreateCommentRequest(
                post_id=post_id,
                parent_comment_id=parent_id,
                content="<em>hi</em>",
                author_id=uuid4(),
            )
        )

        assert result.post_id == str(post_id)
        assert result.parent_comment_id == str(parent_id)
        assert result.content == "<em>hi</em>"
        assert result.likes_count == 0
        assert result.is_deleted is False

        wire = result.model_dump(mode="json", by_alias=True)
        assert set(wire) == {
            "commentId",
            "postId",
            "parentCommentId",
            "authorId",
            "content",
            "likesCount",
            "isDeleted",
            "createdAt",
            "updatedAt",
        }
