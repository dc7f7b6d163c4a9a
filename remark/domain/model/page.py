"""Cursor-paginated slice of comments."""

from typing import Optional

from remark.domain.model.comment import Comment
from remark.domain.model.common import DomainModel


class CommentPage(DomainModel):
    """One page of a comment listing.

    ``total_count`` is counted separately from the page window and may not
    match it exactly when writes race with the read.
    """

    items: list[Comment]
    next_cursor: Optional[str] = None
    total_count: int
