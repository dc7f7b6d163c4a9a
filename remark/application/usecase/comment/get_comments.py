"""Comment read use cases."""

from uuid import UUID

from pydantic import Field

from remark.config import PaginationSettings
from remark.domain.error import InvalidArgumentError
from remark.domain.service import CommentService
from remark.domain.value import CommentId, PostId, SortDirection

from .common import CamelModel, CommentPageResponse, CommentResponse


class GetCommentsRequest(CamelModel):
    """List comments request.

    ``post_id`` is optional here so that a missing post is reported by the
    service as an invalid argument, like every other failure.
    """

    post_id: UUID | None = None
    cursor: str | None = None
    limit: int | None = Field(default=None, ge=1)
    sort: SortDirection = SortDirection.DESC
    request_id: str | None = None


class GetCommentsUseCase:
    """Use case for listing a post's comments with cursor pagination."""

    def __init__(
        self, comment_service: CommentService, pagination: PaginationSettings
    ) -> None:
        self.comment_service = comment_service
        self.pagination = pagination

    async def execute(self, request: GetCommentsRequest) -> CommentPageResponse:
        """Execute list comments flow.

        Raises:
            InvalidArgumentError: If post ID is missing, the limit is too
                large or the cursor is malformed
        """
        limit = request.limit or self.pagination.default_limit
        if limit > self.pagination.max_limit:
            raise InvalidArgumentError(
                f"limit must be between 1 and {self.pagination.max_limit}"
            )

        page = await self.comment_service.list_comments(
            post_id=PostId(request.post_id) if request.post_id else None,
            cursor=request.cursor,
            limit=limit,
            sort=request.sort,
        )
        return CommentPageResponse.from_page(page)


class GetCommentRequest(CamelModel):
    """Get single comment request."""

    comment_id: UUID
    request_id: str | None = None


class GetCommentUseCase:
    """Use case for fetching one comment."""

    def __init__(self, comment_service: CommentService) -> None:
        self.comment_service = comment_service

    async def execute(self, request: GetCommentRequest) -> CommentResponse:
        comment = await self.comment_service.get_comment(
            CommentId(request.comment_id)
        )
        return CommentResponse.from_comment(comment)


class GetRepliesUseCase:
    """Use case for listing direct replies of a comment."""

    def __init__(self, comment_service: CommentService) -> None:
        self.comment_service = comment_service

    async def execute(self, request: GetCommentRequest) -> list[CommentResponse]:
        replies = await self.comment_service.list_replies(
            CommentId(request.comment_id)
        )
        return [CommentResponse.from_comment(c) for c in replies]
