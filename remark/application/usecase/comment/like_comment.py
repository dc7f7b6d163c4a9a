"""Like and unlike use cases."""

from remark.domain.service import CommentService
from remark.domain.value import CallerContext, CommentId, UserId

from .common import CommentActionRequest, CommentResponse


class LikeCommentRequest(CommentActionRequest):
    """Like or unlike request."""


class LikeCommentUseCase:
    """Use case for liking a comment."""

    def __init__(self, comment_service: CommentService) -> None:
        self.comment_service = comment_service

    async def execute(self, request: LikeCommentRequest) -> CommentResponse:
        liked = await self.comment_service.like_comment(
            comment_id=CommentId(request.comment_id),
            caller=CallerContext(
                user_id=UserId(request.user_id), request_id=request.request_id
            ),
        )
        return CommentResponse.from_comment(liked)


class UnlikeCommentUseCase:
    """Use case for unliking a comment; unliking at zero likes is a no-op."""

    def __init__(self, comment_service: CommentService) -> None:
        self.comment_service = comment_service

    async def execute(self, request: LikeCommentRequest) -> CommentResponse:
        unliked = await self.comment_service.unlike_comment(
            comment_id=CommentId(request.comment_id),
            caller=CallerContext(
                user_id=UserId(request.user_id), request_id=request.request_id
            ),
        )
        return CommentResponse.from_comment(unliked)
