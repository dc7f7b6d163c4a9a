"""PostgreSQL implementation of Comment repository."""

from typing import List, Optional

from sqlalchemy import asc, desc, func, select, tuple_, update
from sqlalchemy.ext.asyncio import AsyncSession

from remark.domain.model import Comment
from remark.domain.model.common import utcnow
from remark.domain.repository import CommentRepository
from remark.domain.value import CommentId, PostId, SortDirection, UserId
from remark.domain.value.cursor import Cursor
from remark.persistence.mappers import comment_to_dict, row_to_comment
from remark.persistence.tables import comments_table


class PostgresCommentRepository(CommentRepository):
    """PostgreSQL implementation of CommentRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_id(self, comment_id: CommentId) -> Optional[Comment]:
        """Find a comment by ID."""
        stmt = select(comments_table).where(comments_table.c.id == comment_id)
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_comment(row._asdict()) if row else None

    async def save(self, comment: Comment) -> Comment:
        """Insert a new comment."""
        stmt = (
            comments_table.insert()
            .values(**comment_to_dict(comment))
            .returning(comments_table)
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return row_to_comment(result.fetchone()._asdict())

    async def commit(self) -> None:
        """Commit the request transaction."""
        await self.session.commit()

    async def update_content(
        self, comment_id: CommentId, content: str
    ) -> Optional[Comment]:
        """Replace content and bump updated_at."""
        return await self._update_returning(
            comment_id, content=content, updated_at=utcnow()
        )

    async def soft_delete(
        self, comment_id: CommentId, deleted_by: UserId
    ) -> Optional[Comment]:
        """Mark a comment deleted."""
        now = utcnow()
        return await self._update_returning(
            comment_id,
            is_deleted=True,
            deleted_at=now,
            deleted_by=deleted_by,
            updated_at=now,
        )

    async def restore(self, comment_id: CommentId) -> Optional[Comment]:
        """Clear the deletion marker."""
        return await self._update_returning(
            comment_id,
            is_deleted=False,
            deleted_at=None,
            deleted_by=None,
            updated_at=utcnow(),
        )

    async def increment_likes(self, comment_id: CommentId) -> Optional[Comment]:
        """Atomically increment likes by 1."""
        return await self._update_returning(
            comment_id, likes_count=comments_table.c.likes_count + 1
        )

    async def decrement_likes(self, comment_id: CommentId) -> Optional[Comment]:
        """Atomically decrement likes by 1 (minimum 0)."""
        stmt = (
            update(comments_table)
            .where(comments_table.c.id == comment_id)
            .where(comments_table.c.likes_count > 0)  # Don't go below 0
            .values(likes_count=comments_table.c.likes_count - 1)
            .returning(comments_table)
        )
        result = await self.session.execute(stmt)
        row = result.fetchone()
        await self.session.flush()

        if row is None:
            # Either absent or already at zero
            return await self.find_by_id(comment_id)
        return row_to_comment(row._asdict())

    async def find_page(
        self,
        post_id: PostId,
        after: Optional[Cursor],
        limit: int,
        direction: SortDirection = SortDirection.DESC,
    ) -> List[Comment]:
        """Find a window of non-deleted comments ordered by (created_at, id)."""
        c = comments_table.c
        descending = direction == SortDirection.DESC

        stmt = select(comments_table).where(c.post_id == post_id).where(
            c.is_deleted.is_(False)
        )

        if after is not None:
            if after.comment_id is not None:
                key = tuple_(c.created_at, c.id)
                bound = tuple_(after.created_at, after.comment_id)
            else:
                key, bound = c.created_at, after.created_at
            stmt = stmt.where(key < bound if descending else key > bound)

        order = desc if descending else asc
        stmt = stmt.order_by(order(c.created_at), order(c.id)).limit(limit)

        result = await self.session.execute(stmt)
        return [row_to_comment(row._asdict()) for row in result.fetchall()]

    async def count_by_post(self, post_id: PostId) -> int:
        """Count comments for a post (excluding deleted)."""
        stmt = (
            select(func.count())
            .select_from(comments_table)
            .where(comments_table.c.post_id == post_id)
            .where(comments_table.c.is_deleted.is_(False))
        )
        result = await self.session.execute(stmt)
        return result.scalar() or 0

    async def find_replies(self, parent_id: CommentId) -> List[Comment]:
        """Find direct replies of a comment."""
        stmt = (
            select(comments_table)
            .where(comments_table.c.parent_id == parent_id)
            .where(comments_table.c.is_deleted.is_(False))
            .order_by(desc(comments_table.c.created_at))
        )
        result = await self.session.execute(stmt)
        return [row_to_comment(row._asdict()) for row in result.fetchall()]

    async def soft_delete_by_post(self, post_id: PostId) -> int:
        """Soft-delete all live comments of a post."""
        now = utcnow()
        stmt = (
            update(comments_table)
            .where(comments_table.c.post_id == post_id)
            .where(comments_table.c.is_deleted.is_(False))
            .values(is_deleted=True, deleted_at=now, updated_at=now)
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount or 0

    async def _update_returning(
        self, comment_id: CommentId, **values
    ) -> Optional[Comment]:
        stmt = (
            update(comments_table)
            .where(comments_table.c.id == comment_id)
            .values(**values)
            .returning(comments_table)
        )
        result = await self.session.execute(stmt)
        row = result.fetchone()

        if row is None:
            return None

        await self.session.flush()
        return row_to_comment(row._asdict())
