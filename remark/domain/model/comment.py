"""Comment entity.

Comments belong to a post owned by another service and may reply to another
comment through ``parent_id``. Deletion is soft: the stored content survives
so that a deleted comment can be restored.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from remark.domain.model.common import DomainModel, utcnow
from remark.domain.value import CommentId, PostId, UserId

MAX_CONTENT_LENGTH = 4000


class Comment(DomainModel):
    """Comment entity.

    Soft deletion is tracked by:
    - is_deleted: Whether the comment is hidden
    - deleted_at: When it was hidden (None while active)
    - deleted_by: Who hid it (None while active, and for post cascades)
    """

    id: CommentId
    post_id: PostId
    author_id: UserId
    content: str = Field(max_length=MAX_CONTENT_LENGTH)
    parent_id: Optional[CommentId] = None
    likes_count: int = Field(default=0, ge=0)
    is_deleted: bool = False
    deleted_at: Optional[datetime] = None
    deleted_by: Optional[UserId] = None
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)
