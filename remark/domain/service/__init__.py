"""Domain services."""

from .comment_service import CommentService
from .notifier import CommentEventNotifier, EventChannel
from .pagination import CursorPaginator
from .sanitizer import sanitize

__all__ = [
    "CommentEventNotifier",
    "CommentService",
    "CursorPaginator",
    "EventChannel",
    "sanitize",
]
