"""Cursor pagination over a post's comments."""

import logfire

from remark.domain.model import CommentPage
from remark.domain.repository import CommentRepository
from remark.domain.value import PostId, SortDirection
from remark.domain.value.cursor import Cursor

from .base import Service


class CursorPaginator(Service):
    """Computes page windows over non-deleted comments of a post.

    Fetches one row more than requested to learn whether another page
    exists, so no extra round trip is needed to decide on ``next_cursor``.
    ``limit`` is trusted here; range checks belong to the request layer.
    """

    def __init__(self, comment_repository: CommentRepository) -> None:
        self.comment_repository = comment_repository

    async def paginate(
        self,
        post_id: PostId,
        cursor: str | None = None,
        limit: int = 20,
        direction: SortDirection = SortDirection.DESC,
    ) -> CommentPage:
        """Return the page of comments following ``cursor``.

        Args:
            post_id: Post whose comments are listed
            cursor: Opaque token from a previous page, None for the first page
            limit: Page size
            direction: Creation-time ordering

        Returns:
            Page with items, next cursor (None on the last page) and total count

        Raises:
            InvalidArgumentError: If the cursor is malformed
        """
        after = Cursor.decode(cursor) if cursor else None

        rows = await self.comment_repository.find_page(
            post_id=post_id,
            after=after,
            limit=limit + 1,
            direction=direction,
        )

        has_more = len(rows) > limit
        items = rows[:limit]

        next_cursor = None
        if has_more and items:
            last = items[-1]
            next_cursor = Cursor(
                created_at=last.created_at, comment_id=last.id
            ).encode()

        total_count = await self.comment_repository.count_by_post(post_id)

        logfire.debug(
            "Comment page computed",
            post_id=str(post_id),
            returned=len(items),
            has_more=has_more,
            total_count=total_count,
        )
        return CommentPage(
            items=items, next_cursor=next_cursor, total_count=total_count
        )
