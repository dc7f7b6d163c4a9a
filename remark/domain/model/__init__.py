"""Domain models."""

from remark.domain.model.comment import MAX_CONTENT_LENGTH, Comment
from remark.domain.model.event import CommentEvent
from remark.domain.model.page import CommentPage

__all__ = [
    "Comment",
    "CommentEvent",
    "CommentPage",
    "MAX_CONTENT_LENGTH",
]
