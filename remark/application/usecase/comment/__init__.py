"""Comment use cases."""

from .common import (
    CommentPageResponse,
    CommentResponse,
    parse_request,
)
from .create_comment import CreateCommentRequest, CreateCommentUseCase
from .delete_comment import (
    DeleteCommentRequest,
    DeleteCommentUseCase,
    DeletePostCommentsRequest,
    DeletePostCommentsResponse,
    DeletePostCommentsUseCase,
    RestoreCommentRequest,
    RestoreCommentUseCase,
)
from .get_comments import (
    GetCommentRequest,
    GetCommentsRequest,
    GetCommentsUseCase,
    GetCommentUseCase,
    GetRepliesUseCase,
)
from .like_comment import LikeCommentRequest, LikeCommentUseCase, UnlikeCommentUseCase
from .update_comment import UpdateCommentRequest, UpdateCommentUseCase

__all__ = [
    "CommentPageResponse",
    "CommentResponse",
    "CreateCommentRequest",
    "CreateCommentUseCase",
    "DeleteCommentRequest",
    "DeleteCommentUseCase",
    "DeletePostCommentsRequest",
    "DeletePostCommentsResponse",
    "DeletePostCommentsUseCase",
    "GetCommentRequest",
    "GetCommentsRequest",
    "GetCommentsUseCase",
    "GetCommentUseCase",
    "GetRepliesUseCase",
    "LikeCommentRequest",
    "LikeCommentUseCase",
    "RestoreCommentRequest",
    "RestoreCommentUseCase",
    "UnlikeCommentUseCase",
    "UpdateCommentRequest",
    "UpdateCommentUseCase",
    "parse_request",
]
