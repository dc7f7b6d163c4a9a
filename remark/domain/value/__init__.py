"""Domain value objects for comments."""

from remark.domain.value.identifiers import CommentId, PostId, UserId
from remark.domain.value.types import CallerContext, EventType, SortDirection

__all__ = [
    # Identifiers
    "CommentId",
    "PostId",
    "UserId",
    # Types
    "CallerContext",
    "EventType",
    "SortDirection",
]
