"""In-memory comment repository for testing."""

import asyncio
from typing import Optional

from remark.domain.model import Comment
from remark.domain.model.common import utcnow
from remark.domain.repository.comment import CommentRepository
from remark.domain.value import CommentId, PostId, SortDirection, UserId
from remark.domain.value.cursor import Cursor


class InMemoryCommentRepository(CommentRepository):
    """In-memory implementation of CommentRepository for testing.

    Read-modify-write sequences run under a lock so that counter updates are
    atomic across concurrent tasks, matching the single-statement updates of
    the PostgreSQL implementation.

    Set ``commit_error`` to make ``commit`` fail.
    """

    def __init__(self) -> None:
        self._comments: dict[CommentId, Comment] = {}
        self._lock = asyncio.Lock()
        self.commit_error: Exception | None = None

    async def find_by_id(self, comment_id: CommentId) -> Optional[Comment]:
        """Find a comment by ID."""
        return self._comments.get(comment_id)

    async def save(self, comment: Comment) -> Comment:
        """Insert a comment."""
        self._comments[comment.id] = comment
        return comment

    async def commit(self) -> None:
        """Writes are applied immediately; raises ``commit_error`` if set."""
        if self.commit_error is not None:
            raise self.commit_error

    async def update_content(
        self, comment_id: CommentId, content: str
    ) -> Optional[Comment]:
        """Replace content and bump updated_at."""
        return await self._modify(comment_id, content=content, updated_at=utcnow())

    async def soft_delete(
        self, comment_id: CommentId, deleted_by: UserId
    ) -> Optional[Comment]:
        """Mark a comment deleted."""
        now = utcnow()
        return await self._modify(
            comment_id,
            is_deleted=True,
            deleted_at=now,
            deleted_by=deleted_by,
            updated_at=now,
        )

    async def restore(self, comment_id: CommentId) -> Optional[Comment]:
        """Clear the deletion marker."""
        return await self._modify(
            comment_id,
            is_deleted=False,
            deleted_at=None,
            deleted_by=None,
            updated_at=utcnow(),
        )

    async def increment_likes(self, comment_id: CommentId) -> Optional[Comment]:
        """Atomically increment likes by 1."""
        async with self._lock:
            comment = self._comments.get(comment_id)
            if comment is None:
                return None
            updated = comment.model_copy(
                update={"likes_count": comment.likes_count + 1}
            )
            self._comments[comment_id] = updated
            return updated

    async def decrement_likes(self, comment_id: CommentId) -> Optional[Comment]:
        """Atomically decrement likes by 1 (minimum 0)."""
        async with self._lock:
            comment = self._comments.get(comment_id)
            if comment is None or comment.likes_count <= 0:
                return comment
            updated = comment.model_copy(
                update={"likes_count": comment.likes_count - 1}
            )
            self._comments[comment_id] = updated
            return updated

    async def find_page(
        self,
        post_id: PostId,
        after: Optional[Cursor],
        limit: int,
        direction: SortDirection = SortDirection.DESC,
    ) -> list[Comment]:
        """Find a window of non-deleted comments ordered by (created_at, id)."""
        descending = direction == SortDirection.DESC
        comments = [
            c
            for c in self._comments.values()
            if c.post_id == post_id and not c.is_deleted
        ]
        comments.sort(key=lambda c: (c.created_at, c.id), reverse=descending)

        if after is not None:
            if after.comment_id is not None:
                bound = (after.created_at, after.comment_id)
                key = lambda c: (c.created_at, c.id)  # noqa: E731
            else:
                bound = after.created_at
                key = lambda c: c.created_at  # noqa: E731
            if descending:
                comments = [c for c in comments if key(c) < bound]
            else:
                comments = [c for c in comments if key(c) > bound]

        return comments[:limit]

    async def count_by_post(self, post_id: PostId) -> int:
        """Count comments for a post (excluding deleted)."""
        return sum(
            1
            for c in self._comments.values()
            if c.post_id == post_id and not c.is_deleted
        )

    async def find_replies(self, parent_id: CommentId) -> list[Comment]:
        """Find direct replies of a comment, newest first."""
        replies = [
            c
            for c in self._comments.values()
            if c.parent_id == parent_id and not c.is_deleted
        ]
        replies.sort(key=lambda c: c.created_at, reverse=True)
        return replies

    async def soft_delete_by_post(self, post_id: PostId) -> int:
        """Soft-delete all live comments of a post."""
        async with self._lock:
            now = utcnow()
            targets = [
                c
                for c in self._comments.values()
                if c.post_id == post_id and not c.is_deleted
            ]
            for comment in targets:
                self._comments[comment.id] = comment.model_copy(
                    update={"is_deleted": True, "deleted_at": now, "updated_at": now}
                )
            return len(targets)

    async def _modify(self, comment_id: CommentId, **changes) -> Optional[Comment]:
        async with self._lock:
            comment = self._comments.get(comment_id)
            if comment is None:
                return None
            updated = comment.model_copy(update=changes)
            self._comments[comment_id] = updated
            return updated
