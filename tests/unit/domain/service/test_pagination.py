"""Unit tests for CursorPaginator."""

import pytest

from remark.domain.error import InvalidArgumentError
from remark.domain.repository import CommentRepository
from remark.domain.service import CursorPaginator
from remark.domain.value import SortDirection
from remark.domain.value.cursor import Cursor
from tests.factories import make_comment, minutes
from tests.harness import create_env_fixture

unit_env = create_env_fixture()


async def _seed(repo: CommentRepository, post_id, count: int, same_time: bool = False):
    comments = [
        make_comment(post_id=post_id, created_at=minutes(0 if same_time else i))
        for i in range(count)
    ]
    for comment in comments:
        await repo.save(comment)
    return comments


async def _walk(paginator: CursorPaginator, post_id, limit: int, direction):
    seen = []
    cursor = None
    while True:
        page = await paginator.paginate(
            post_id=post_id, cursor=cursor, limit=limit, direction=direction
        )
        seen.extend(page.items)
        if page.next_cursor is None:
            return seen
        cursor = page.next_cursor


class TestPaginate:
    """Tests for paginate."""

    @pytest.mark.asyncio
    async def test_first_page_desc_with_next_cursor(self, unit_env, post_id):
        repo = await unit_env.get(CommentRepository)
        paginator = await unit_env.get(CursorPaginator)
        comments = await _seed(repo, post_id, 3)

        page = await paginator.paginate(post_id=post_id, limit=2)

        assert [c.id for c in page.items] == [comments[2].id, comments[1].id]
        assert page.next_cursor is not None
        assert page.total_count == 3

    @pytest.mark.asyncio
    async def test_last_page_has_no_next_cursor(self, unit_env, post_id):
        repo = await unit_env.get(CommentRepository)
        paginator = await unit_env.get(CursorPaginator)
        await _seed(repo, post_id, 2)

        page = await paginator.paginate(post_id=post_id, limit=2)

        assert len(page.items) == 2
        assert page.next_cursor is None

    @pytest.mark.asyncio
    async def test_empty_post(self, unit_env, post_id):
        paginator = await unit_env.get(CursorPaginator)

        page = await paginator.paginate(post_id=post_id, limit=10)

        assert page.items == []
        assert page.next_cursor is None
        assert page.total_count == 0

    @pytest.mark.asyncio
    @pytest.mark.parametrize("direction", [SortDirection.DESC, SortDirection.ASC])
    async def test_walk_visits_every_comment_once_in_order(
        self, unit_env, post_id, direction
    ):
        repo = await unit_env.get(CommentRepository)
        paginator = await unit_env.get(CursorPaginator)
        comments = await _seed(repo, post_id, 7)

        seen = await _walk(paginator, post_id, 3, direction)

        expected = sorted(
            comments,
            key=lambda c: c.created_at,
            reverse=direction == SortDirection.DESC,
        )
        assert [c.id for c in seen] == [c.id for c in expected]

    @pytest.mark.asyncio
    async def test_walk_with_identical_timestamps_neither_skips_nor_repeats(
        self, unit_env, post_id
    ):
        repo = await unit_env.get(CommentRepository)
        paginator = await unit_env.get(CursorPaginator)
        comments = await _seed(repo, post_id, 5, same_time=True)

        seen = await _walk(paginator, post_id, 2, SortDirection.DESC)

        assert len(seen) == 5
        assert {c.id for c in seen} == {c.id for c in comments}

    @pytest.mark.asyncio
    async def test_deleted_comments_are_hidden_and_not_counted(
        self, unit_env, post_id
    ):
        repo = await unit_env.get(CommentRepository)
        paginator = await unit_env.get(CursorPaginator)
        await _seed(repo, post_id, 2)
        await repo.save(make_comment(post_id=post_id, is_deleted=True))

        page = await paginator.paginate(post_id=post_id, limit=10)

        assert len(page.items) == 2
        assert page.total_count == 2

    @pytest.mark.asyncio
    async def test_other_posts_are_not_listed(self, unit_env, post_id):
        repo = await unit_env.get(CommentRepository)
        paginator = await unit_env.get(CursorPaginator)
        await _seed(repo, post_id, 1)
        await repo.save(make_comment())

        page = await paginator.paginate(post_id=post_id, limit=10)

        assert len(page.items) == 1
        assert page.total_count == 1

    @pytest.mark.asyncio
    async def test_malformed_cursor_raises_invalid_argument(self, unit_env, post_id):
        paginator = await unit_env.get(CursorPaginator)

        with pytest.raises(InvalidArgumentError):
            await paginator.paginate(post_id=post_id, cursor="%%%", limit=10)

    @pytest.mark.asyncio
    async def test_cursor_past_the_end_returns_empty_page(self, unit_env, post_id):
        repo = await unit_env.get(CommentRepository)
        paginator = await unit_env.get(CursorPaginator)
        await _seed(repo, post_id, 2)

        first = await paginator.paginate(post_id=post_id, limit=1)
        second = await paginator.paginate(
            post_id=post_id, cursor=first.next_cursor, limit=1
        )
        third = await paginator.paginate(
            post_id=post_id,
            cursor=Cursor(
                created_at=second.items[-1].created_at,
                comment_id=second.items[-1].id,
            ).encode(),
            limit=1,
        )

        assert third.items == []
        assert third.next_cursor is None

