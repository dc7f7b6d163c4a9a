"""Outbound domain event record."""

from datetime import datetime
from typing import Any, Optional

from pydantic import Field
from pydantic.alias_generators import to_camel

from remark.domain.model.common import DomainModel, utcnow
from remark.domain.value import CommentId, EventType, PostId, UserId


class CommentEvent(DomainModel):
    """Immutable fact published after a successful mutation.

    Bulk events describe a whole post, so ``comment_id`` and ``author_id``
    are None for ``comments.bulk_deleted``.
    """

    event_type: EventType
    comment_id: Optional[CommentId] = None
    post_id: PostId
    author_id: Optional[UserId] = None
    timestamp: datetime = Field(default_factory=utcnow)
    request_id: Optional[str] = None
    payload: dict[str, Any] = Field(default_factory=dict)

    def to_message(self) -> dict[str, Any]:
        """Wire representation with camelCase keys, payload included."""
        return {
            "eventType": self.event_type.value,
            "commentId": str(self.comment_id) if self.comment_id else None,
            "postId": str(self.post_id),
            "authorId": str(self.author_id) if self.author_id else None,
            "timestamp": self.timestamp.isoformat(),
            "requestId": self.request_id,
            "payload": {to_camel(k): v for k, v in self.payload.items()},
        }
