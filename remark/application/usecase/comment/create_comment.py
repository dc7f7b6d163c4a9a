"""Create comment use case."""

from uuid import UUID

from pydantic import Field

from remark.domain.model import MAX_CONTENT_LENGTH
from remark.domain.service import CommentService
from remark.domain.value import CommentId, PostId, UserId

from .common import CamelModel, CommentResponse


class CreateCommentRequest(CamelModel):
    """Create comment request."""

    post_id: UUID
    parent_comment_id: UUID | None = None  # Parent comment ID for replies
    content: str = Field(min_length=1, max_length=MAX_CONTENT_LENGTH)
    author_id: UUID  # Trusted as given; see CallerContext
    request_id: str | None = None


class CreateCommentUseCase:
    """Use case for creating a comment on a post or replying to another comment."""

    def __init__(self, comment_service: CommentService) -> None:
        """Initialize create comment use case.

        Args:
            comment_service: Comment domain service
        """
        self.comment_service = comment_service

    async def execute(self, request: CreateCommentRequest) -> CommentResponse:
        """Execute create comment flow.

        Args:
            request: Create comment request

        Returns:
            Created comment
        """
        comment = await self.comment_service.create_comment(
            post_id=PostId(request.post_id),
            author_id=UserId(request.author_id),
            content=request.content,
            parent_id=(
                CommentId(request.parent_comment_id)
                if request.parent_comment_id
                else None
            ),
            request_id=request.request_id,
        )
        return CommentResponse.from_comment(comment)
