"""Shared comment request/response models.

Wire models use camelCase field names on both transports; Python code uses
the snake_case attribute names.
"""

from datetime import datetime
from typing import Any, TypeVar
from uuid import UUID

from pydantic import BaseModel, ConfigDict, ValidationError
from pydantic.alias_generators import to_camel

from remark.domain.error import InvalidArgumentError
from remark.domain.model import Comment, CommentPage

DELETED_PLACEHOLDER = "[deleted]"

RequestT = TypeVar("RequestT", bound=BaseModel)


class CamelModel(BaseModel):
    """Model exchanged with clients, camelCase on the wire."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class CommentResponse(CamelModel):
    """Comment as shown to clients."""

    comment_id: str
    post_id: str
    parent_comment_id: str | None
    author_id: str
    content: str
    likes_count: int
    is_deleted: bool
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_comment(cls, comment: Comment) -> "CommentResponse":
        """Render a comment; deleted content is replaced by a placeholder."""
        return cls(
            comment_id=str(comment.id),
            post_id=str(comment.post_id),
            parent_comment_id=str(comment.parent_id) if comment.parent_id else None,
            author_id=str(comment.author_id),
            content=DELETED_PLACEHOLDER if comment.is_deleted else comment.content,
            likes_count=comment.likes_count,
            is_deleted=comment.is_deleted,
            created_at=comment.created_at,
            updated_at=comment.updated_at,
        )


class CommentPageResponse(CamelModel):
    """One page of comments."""

    items: list[CommentResponse]
    next_cursor: str | None = None
    total_count: int

    @classmethod
    def from_page(cls, page: CommentPage) -> "CommentPageResponse":
        return cls(
            items=[CommentResponse.from_comment(c) for c in page.items],
            next_cursor=page.next_cursor,
            total_count=page.total_count,
        )


class CommentActionRequest(CamelModel):
    """Request identifying a comment and the acting user."""

    comment_id: UUID
    user_id: UUID
    request_id: str | None = None


def parse_request(model: type[RequestT], data: dict[str, Any]) -> RequestT:
    """Validate raw request data into a request model.

    Raises:
        InvalidArgumentError: If the data does not validate
    """
    try:
        return model.model_validate(data)
    except ValidationError as e:
        raise InvalidArgumentError(_describe(e)) from e


def _describe(error: ValidationError) -> str:
    parts = []
    for item in error.errors():
        location = ".".join(str(p) for p in item["loc"]) or "request"
        parts.append(f"{location}: {item['msg']}")
    return "; ".join(parts)
