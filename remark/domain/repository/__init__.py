"""Repository interfaces."""

from .comment import CommentRepository

__all__ = ["CommentRepository"]
