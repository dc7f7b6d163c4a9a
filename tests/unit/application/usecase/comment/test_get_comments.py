"""Unit tests for the comment read use cases."""

from uuid import uuid4

import pytest

from remark.application.usecase.comment import (
    GetCommentRequest,
    GetCommentsRequest,
    GetCommentsUseCase,
    GetCommentUseCase,
)
from remark.application.usecase.comment.common import DELETED_PLACEHOLDER
from remark.domain.error import InvalidArgumentError, NotFoundError
from remark.domain.repository import CommentRepository
from tests.factories import make_comment, minutes
from tests.harness import create_env_fixture

unit_env = create_env_fixture()


class TestGetCommentsUseCase:
    """Tests for GetCommentsUseCase."""

    @pytest.mark.asyncio
    async def test_default_limit_applies(self, unit_env, post_id):
        use_case = await unit_env.get(GetCommentsUseCase)
        comment_repo = await unit_env.get(CommentRepository)
        for i in range(25):
            await comment_repo.save(make_comment(post_id=post_id, created_at=minutes(i)))

        result = await use_case.execute(GetCommentsRequest(post_id=post_id))

        assert len(result.items) == 20
        assert result.next_cursor is not None
        assert result.total_count == 25

    @pytest.mark.asyncio
    async def test_limit_above_maximum_is_invalid(self, unit_env, post_id):
        use_case = await unit_env.get(GetCommentsUseCase)

        with pytest.raises(InvalidArgumentError, match="limit"):
            await use_case.execute(GetCommentsRequest(post_id=post_id, limit=101))

    @pytest.mark.asyncio
    async def test_missing_post_is_invalid(self, unit_env):
        use_case = await unit_env.get(GetCommentsUseCase)

        with pytest.raises(InvalidArgumentError, match="postId"):
            await use_case.execute(GetCommentsRequest())

    @pytest.mark.asyncio
    async def test_page_serializes_camel_case(self, unit_env, post_id):
        use_case = await unit_env.get(GetCommentsUseCase)

        result = await use_case.execute(GetCommentsRequest(post_id=post_id))

        assert result.model_dump(mode="json", by_alias=True) == {
            "items": [],
            "nextCursor": None,
            "totalCount": 0,
        }


class TestGetCommentUseCase:
    """Tests for GetCommentUseCase."""

    @pytest.mark.asyncio
    async def test_deleted_content_is_masked(self, unit_env):
        use_case = await unit_env.get(GetCommentUseCase)
        comment_repo = await unit_env.get(CommentRepository)
        comment = await comment_repo.save(
            make_comment(content="secret", is_deleted=True)
        )

        result = await use_case.execute(GetCommentRequest(comment_id=comment.id))

        assert result.is_deleted is True
        assert result.content == DELETED_PLACEHOLDER

    @pytest.mark.asyncio
    async def test_missing_comment_raises_not_found(self, unit_env):
        use_case = await unit_env.get(GetCommentUseCase)

        with pytest.raises(NotFoundError):
            await use_case.execute(GetCommentRequest(comment_id=uuid4()))
