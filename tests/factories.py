"""Builders for test data."""

from datetime import datetime, timedelta, timezone
from uuid import uuid4

from remark.domain.model import Comment
from remark.domain.value import CommentId, PostId, UserId

BASE_TIME = datetime(2026, 1, 1, 12, 0, tzinfo=timezone.utc)


def make_comment(
    post_id: PostId | None = None,
    author_id: UserId | None = None,
    parent_id: CommentId | None = None,
    content: str = "A comment",
    created_at: datetime | None = None,
    likes_count: int = 0,
    is_deleted: bool = False,
) -> Comment:
    """Build a comment for seeding repositories directly."""
    created = created_at or BASE_TIME
    author = author_id or UserId(uuid4())
    return Comment(
        id=CommentId(uuid4()),
        post_id=post_id or PostId(uuid4()),
        parent_id=parent_id,
        author_id=author,
        content=content,
        likes_count=likes_count,
        is_deleted=is_deleted,
        deleted_at=created if is_deleted else None,
        deleted_by=author if is_deleted else None,
        created_at=created,
        updated_at=created,
    )


def minutes(n: int) -> datetime:
    """``BASE_TIME`` shifted by ``n`` minutes."""
    return BASE_TIME + timedelta(minutes=n)
