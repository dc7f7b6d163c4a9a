"""Comment repository interface."""

from abc import ABC, abstractmethod
from typing import List, Optional

from remark.domain.model.comment import Comment
from remark.domain.value import CommentId, PostId, SortDirection, UserId
from remark.domain.value.cursor import Cursor


class CommentRepository(ABC):
    """Repository for Comment entity.

    Defines the contract for comment persistence operations.
    Implementations live in the infrastructure layer.

    Every single-comment write returns the comment as stored after the
    write, or None when no comment has the given ID.
    """

    @abstractmethod
    async def find_by_id(self, comment_id: CommentId) -> Optional[Comment]:
        """Find a comment by ID.

        Args:
            comment_id: The comment's unique identifier

        Returns:
            The comment if found (deleted or not), None otherwise
        """
        pass

    @abstractmethod
    async def save(self, comment: Comment) -> Comment:
        """Insert a new comment.

        Args:
            comment: The comment to insert

        Returns:
            The stored comment
        """
        pass

    @abstractmethod
    async def commit(self) -> None:
        """Make the writes made so far durable.

        Mutations are announced only after this returns.
        """
        pass

    @abstractmethod
    async def update_content(
        self, comment_id: CommentId, content: str
    ) -> Optional[Comment]:
        """Replace a comment's content and bump ``updated_at``."""
        pass

    @abstractmethod
    async def soft_delete(
        self, comment_id: CommentId, deleted_by: UserId
    ) -> Optional[Comment]:
        """Mark a comment deleted, recording when and by whom."""
        pass

    @abstractmethod
    async def restore(self, comment_id: CommentId) -> Optional[Comment]:
        """Clear a comment's deletion marker and deletion fields."""
        pass

    @abstractmethod
    async def increment_likes(self, comment_id: CommentId) -> Optional[Comment]:
        """Atomically add one like.

        Must be a single conditional write at the store so that concurrent
        likes never lose an update. Does not touch ``updated_at``.
        """
        pass

    @abstractmethod
    async def decrement_likes(self, comment_id: CommentId) -> Optional[Comment]:
        """Atomically remove one like, guarded by ``likes_count > 0``.

        When the counter is already zero nothing is written and the
        unchanged comment is returned.
        """
        pass

    @abstractmethod
    async def find_page(
        self,
        post_id: PostId,
        after: Optional[Cursor],
        limit: int,
        direction: SortDirection = SortDirection.DESC,
    ) -> List[Comment]:
        """Find non-deleted comments of a post in creation order.

        Rows are ordered by ``(created_at, id)`` in ``direction``. When
        ``after`` is given, only rows strictly beyond it are returned
        (``<`` for desc, ``>`` for asc). A cursor without a comment ID
        compares on ``created_at`` alone.

        Args:
            post_id: The post ID
            after: Position of the last row already seen
            limit: Maximum number of rows to return
            direction: Sort direction

        Returns:
            Up to ``limit`` comments
        """
        pass

    @abstractmethod
    async def count_by_post(self, post_id: PostId) -> int:
        """Count non-deleted comments for a post."""
        pass

    @abstractmethod
    async def find_replies(self, parent_id: CommentId) -> List[Comment]:
        """Find direct non-deleted replies of a comment, newest first."""
        pass

    @abstractmethod
    async def soft_delete_by_post(self, post_id: PostId) -> int:
        """Soft-delete every non-deleted comment of a post in one write.

        Returns:
            Number of comments deleted
        """
        pass
