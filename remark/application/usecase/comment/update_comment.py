"""Update comment use case."""

from uuid import UUID

from pydantic import Field

from remark.domain.model import MAX_CONTENT_LENGTH
from remark.domain.service import CommentService
from remark.domain.value import CallerContext, CommentId, UserId

from .common import CamelModel, CommentResponse


class UpdateCommentRequest(CamelModel):
    """Update comment request."""

    comment_id: UUID
    content: str | None = Field(default=None, max_length=MAX_CONTENT_LENGTH)
    user_id: UUID  # Current user ID (must be author)
    request_id: str | None = None


class UpdateCommentUseCase:
    """Use case for updating a comment's content."""

    def __init__(self, comment_service: CommentService) -> None:
        """Initialize update comment use case.

        Args:
            comment_service: Comment service
        """
        self.comment_service = comment_service

    async def execute(self, request: UpdateCommentRequest) -> CommentResponse:
        """Execute update comment flow.

        Raises:
            NotFoundError: If the comment does not exist
            ForbiddenError: If the user is not the author or the comment is deleted
        """
        updated = await self.comment_service.update_comment(
            comment_id=CommentId(request.comment_id),
            content=request.content,
            caller=CallerContext(
                user_id=UserId(request.user_id), request_id=request.request_id
            ),
        )
        return CommentResponse.from_comment(updated)
