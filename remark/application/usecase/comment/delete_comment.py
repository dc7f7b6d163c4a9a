"""Soft-delete and restore use cases."""

from uuid import UUID

from remark.domain.service import CommentService
from remark.domain.value import CallerContext, CommentId, PostId, UserId

from .common import CamelModel, CommentActionRequest, CommentResponse


class DeleteCommentRequest(CommentActionRequest):
    """Delete comment request."""

    is_moderator: bool = False


class DeleteCommentUseCase:
    """Use case for soft-deleting a comment (author or moderator)."""

    def __init__(self, comment_service: CommentService) -> None:
        self.comment_service = comment_service

    async def execute(self, request: DeleteCommentRequest) -> None:
        await self.comment_service.delete_comment(
            comment_id=CommentId(request.comment_id),
            caller=CallerContext(
                user_id=UserId(request.user_id),
                is_moderator=request.is_moderator,
                request_id=request.request_id,
            ),
        )


class RestoreCommentRequest(CommentActionRequest):
    """Restore comment request."""


class RestoreCommentUseCase:
    """Use case for restoring a soft-deleted comment (author only)."""

    def __init__(self, comment_service: CommentService) -> None:
        self.comment_service = comment_service

    async def execute(self, request: RestoreCommentRequest) -> CommentResponse:
        restored = await self.comment_service.restore_comment(
            comment_id=CommentId(request.comment_id),
            caller=CallerContext(
                user_id=UserId(request.user_id), request_id=request.request_id
            ),
        )
        return CommentResponse.from_comment(restored)


class DeletePostCommentsRequest(CamelModel):
    """Cascade request for a post that was deleted upstream."""

    post_id: UUID
    request_id: str | None = None


class DeletePostCommentsResponse(CamelModel):
    """Cascade result."""

    post_id: str
    count: int


class DeletePostCommentsUseCase:
    """Use case for soft-deleting all comments of a deleted post."""

    def __init__(self, comment_service: CommentService) -> None:
        self.comment_service = comment_service

    async def execute(
        self, request: DeletePostCommentsRequest
    ) -> DeletePostCommentsResponse:
        count = await self.comment_service.delete_post_comments(
            post_id=PostId(request.post_id), request_id=request.request_id
        )
        return DeletePostCommentsResponse(post_id=str(request.post_id), count=count)
