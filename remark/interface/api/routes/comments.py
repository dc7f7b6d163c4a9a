"""Comment routes."""

from uuid import UUID

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Header, Query, Request, status
from fastapi.responses import JSONResponse
from pydantic import Field

from remark.adapter.redis.ratelimit import RateLimiter
from remark.application.usecase.comment import (
    CreateCommentRequest,
    CreateCommentUseCase,
    DeleteCommentRequest,
    DeleteCommentUseCase,
    DeletePostCommentsRequest,
    DeletePostCommentsUseCase,
    GetCommentRequest,
    GetCommentsRequest,
    GetCommentsUseCase,
    GetCommentUseCase,
    GetRepliesUseCase,
    LikeCommentRequest,
    LikeCommentUseCase,
    RestoreCommentRequest,
    RestoreCommentUseCase,
    UnlikeCommentUseCase,
    UpdateCommentRequest,
    UpdateCommentUseCase,
    parse_request,
)
from remark.application.usecase.comment.common import CamelModel
from remark.domain.error import ForbiddenError
from remark.domain.model import MAX_CONTENT_LENGTH
from remark.domain.value import SortDirection
from remark.interface.api.envelope import envelope
from remark.interface.api.identity import (
    is_moderator,
    rate_limit_key,
    request_id,
    require_user_id,
)

router = APIRouter(prefix="/comments", tags=["comments"], route_class=DishkaRoute)
posts_router = APIRouter(prefix="/posts", tags=["comments"], route_class=DishkaRoute)


class CreateCommentAPIRequest(CamelModel):
    """API request for creating a comment."""

    post_id: UUID
    parent_comment_id: UUID | None = None
    content: str = Field(min_length=1, max_length=MAX_CONTENT_LENGTH)
    author_id: UUID


class UpdateCommentAPIRequest(CamelModel):
    """API request for updating a comment."""

    content: str | None = Field(default=None, max_length=MAX_CONTENT_LENGTH)


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_comment(
    request: Request,
    body: CreateCommentAPIRequest,
    create_comment_use_case: FromDishka[CreateCommentUseCase],
    rate_limiter: FromDishka[RateLimiter],
    x_user_id: str | None = Header(default=None),
) -> JSONResponse:
    """Create a comment on a post or reply to another comment.

    The author is taken from the body; any caller may post on its behalf.
    """
    await rate_limiter.check(rate_limit_key(request, x_user_id or str(body.author_id)))

    result = await create_comment_use_case.execute(
        CreateCommentRequest(
            post_id=body.post_id,
            parent_comment_id=body.parent_comment_id,
            content=body.content,
            author_id=body.author_id,
            request_id=request_id(request),
        )
    )
    return envelope(result, status_code=status.HTTP_201_CREATED)


@router.get("")
async def get_comments(
    request: Request,
    get_comments_use_case: FromDishka[GetCommentsUseCase],
    post_id: UUID | None = Query(default=None, alias="postId"),
    cursor: str | None = Query(default=None),
    limit: int | None = Query(default=None, ge=1),
    sort: SortDirection = Query(default=SortDirection.DESC),
) -> JSONResponse:
    """Get a post's comments with cursor-based pagination."""
    result = await get_comments_use_case.execute(
        GetCommentsRequest(
            post_id=post_id,
            cursor=cursor,
            limit=limit,
            sort=sort,
            request_id=request_id(request),
        )
    )
    return envelope(result)


@router.get("/{comment_id}")
async def get_comment(
    comment_id: UUID,
    get_comment_use_case: FromDishka[GetCommentUseCase],
) -> JSONResponse:
    """Get a single comment by ID."""
    result = await get_comment_use_case.execute(
        GetCommentRequest(comment_id=comment_id)
    )
    return envelope(result)


@router.get("/{comment_id}/replies")
async def get_replies(
    comment_id: UUID,
    get_replies_use_case: FromDishka[GetRepliesUseCase],
) -> JSONResponse:
    """Get direct replies of a comment, newest first."""
    result = await get_replies_use_case.execute(
        GetCommentRequest(comment_id=comment_id)
    )
    return envelope(result)


@router.patch("/{comment_id}")
async def update_comment(
    request: Request,
    comment_id: UUID,
    body: UpdateCommentAPIRequest,
    update_comment_use_case: FromDishka[UpdateCommentUseCase],
    rate_limiter: FromDishka[RateLimiter],
    x_user_id: str | None = Header(default=None),
) -> JSONResponse:
    """Update a comment's content. Only the author can edit."""
    user_id = require_user_id(x_user_id)
    await rate_limiter.check(rate_limit_key(request, user_id))

    use_case_request = parse_request(
        UpdateCommentRequest,
        {
            "comment_id": comment_id,
            "content": body.content,
            "user_id": user_id,
            "request_id": request_id(request),
        },
    )
    result = await update_comment_use_case.execute(use_case_request)
    return envelope(result)


@router.delete("/{comment_id}")
async def delete_comment(
    request: Request,
    comment_id: UUID,
    delete_comment_use_case: FromDishka[DeleteCommentUseCase],
    rate_limiter: FromDishka[RateLimiter],
    x_user_id: str | None = Header(default=None),
    x_is_moderator: str | None = Header(default=None),
) -> JSONResponse:
    """Soft-delete a comment. Author or moderator only."""
    user_id = require_user_id(x_user_id)
    await rate_limiter.check(rate_limit_key(request, user_id))

    use_case_request = parse_request(
        DeleteCommentRequest,
        {
            "comment_id": comment_id,
            "user_id": user_id,
            "is_moderator": is_moderator(x_is_moderator),
            "request_id": request_id(request),
        },
    )
    await delete_comment_use_case.execute(use_case_request)
    return envelope(None)


@router.post("/{comment_id}/like")
async def like_comment(
    request: Request,
    comment_id: UUID,
    like_comment_use_case: FromDishka[LikeCommentUseCase],
    rate_limiter: FromDishka[RateLimiter],
    x_user_id: str | None = Header(default=None),
) -> JSONResponse:
    """Like a comment."""
    user_id = require_user_id(x_user_id)
    await rate_limiter.check(rate_limit_key(request, user_id))

    result = await like_comment_use_case.execute(
        _like_request(request, comment_id, user_id)
    )
    return envelope(result)


@router.delete("/{comment_id}/like")
async def unlike_comment(
    request: Request,
    comment_id: UUID,
    unlike_comment_use_case: FromDishka[UnlikeCommentUseCase],
    rate_limiter: FromDishka[RateLimiter],
    x_user_id: str | None = Header(default=None),
) -> JSONResponse:
    """Unlike a comment."""
    user_id = require_user_id(x_user_id)
    await rate_limiter.check(rate_limit_key(request, user_id))

    result = await unlike_comment_use_case.execute(
        _like_request(request, comment_id, user_id)
    )
    return envelope(result)


@router.post("/{comment_id}/restore")
async def restore_comment(
    request: Request,
    comment_id: UUID,
    restore_comment_use_case: FromDishka[RestoreCommentUseCase],
    rate_limiter: FromDishka[RateLimiter],
    x_user_id: str | None = Header(default=None),
) -> JSONResponse:
    """Restore a soft-deleted comment. Only the author can restore."""
    user_id = require_user_id(x_user_id)
    await rate_limiter.check(rate_limit_key(request, user_id))

    use_case_request = parse_request(
        RestoreCommentRequest,
        {
            "comment_id": comment_id,
            "user_id": user_id,
            "request_id": request_id(request),
        },
    )
    result = await restore_comment_use_case.execute(use_case_request)
    return envelope(result)


@posts_router.post("/{post_id}/comments/delete")
async def delete_post_comments(
    request: Request,
    post_id: UUID,
    delete_post_comments_use_case: FromDishka[DeletePostCommentsUseCase],
    x_user_id: str | None = Header(default=None),
    x_is_moderator: str | None = Header(default=None),
) -> JSONResponse:
    """Soft-delete all comments of a deleted post. Moderators only."""
    require_user_id(x_user_id)
    if not is_moderator(x_is_moderator):
        raise ForbiddenError("Only moderators can delete all comments of a post")

    result = await delete_post_comments_use_case.execute(
        DeletePostCommentsRequest(post_id=post_id, request_id=request_id(request))
    )
    return envelope(result)


def _like_request(
    request: Request, comment_id: UUID, user_id: str
) -> LikeCommentRequest:
    return parse_request(
        LikeCommentRequest,
        {
            "comment_id": comment_id,
            "user_id": user_id,
            "request_id": request_id(request),
        },
    )
