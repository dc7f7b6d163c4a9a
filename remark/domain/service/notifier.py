"""Comment domain event notifier.

Every successful mutation is announced on an outbound channel. Delivery is
at-most-effort: the service commits a mutation before announcing it, so a
failed hand-off is logged and counted but never reaches the caller.
"""

from abc import ABC, abstractmethod
from typing import Any

import logfire

from remark.domain.model import Comment, CommentEvent
from remark.domain.value import EventType, PostId, UserId

from .base import Service


class EventChannel(ABC):
    """Outbound sink for domain events.

    Implementations must not block: ``send`` hands the event over and
    returns, leaving delivery (and any retrying) to the channel.
    """

    @abstractmethod
    def send(self, event: CommentEvent) -> None:
        """Hand an event to the channel.

        Raises:
            Exception: Any failure to accept the event
        """
        pass


class CommentEventNotifier(Service):
    """Builds one event per mutation and hands it to the channel."""

    def __init__(self, channel: EventChannel) -> None:
        self.channel = channel
        self._events_counter = logfire.metric_counter(
            "comments_events_total",
            unit="1",
            description="Comment events handed to the outbound channel",
        )
        self._failures_counter = logfire.metric_counter(
            "comments_events_failed_total",
            unit="1",
            description="Comment events the outbound channel refused",
        )

    def comment_created(self, comment: Comment, request_id: str | None) -> None:
        self._notify(
            EventType.CREATED,
            comment,
            request_id,
            parent_comment_id=str(comment.parent_id) if comment.parent_id else None,
            content=comment.content,
        )

    def comment_updated(self, comment: Comment, request_id: str | None) -> None:
        self._notify(EventType.UPDATED, comment, request_id, content=comment.content)

    def comment_deleted(self, comment: Comment, request_id: str | None) -> None:
        self._notify(
            EventType.DELETED,
            comment,
            request_id,
            deleted_by=str(comment.deleted_by) if comment.deleted_by else None,
        )

    def comment_restored(self, comment: Comment, request_id: str | None) -> None:
        self._notify(EventType.RESTORED, comment, request_id)

    def comment_liked(
        self, comment: Comment, user_id: UserId, request_id: str | None
    ) -> None:
        self._notify(
            EventType.LIKED,
            comment,
            request_id,
            liked_by=str(user_id),
            likes_count=comment.likes_count,
        )

    def comment_unliked(
        self, comment: Comment, user_id: UserId, request_id: str | None
    ) -> None:
        self._notify(
            EventType.UNLIKED,
            comment,
            request_id,
            unliked_by=str(user_id),
            likes_count=comment.likes_count,
        )

    def comments_bulk_deleted(
        self, post_id: PostId, count: int, request_id: str | None
    ) -> None:
        self._publish(
            CommentEvent(
                event_type=EventType.BULK_DELETED,
                post_id=post_id,
                request_id=request_id,
                payload={"count": count},
            )
        )

    def _notify(
        self,
        event_type: EventType,
        comment: Comment,
        request_id: str | None,
        **payload: Any,
    ) -> None:
        self._publish(
            CommentEvent(
                event_type=event_type,
                comment_id=comment.id,
                post_id=comment.post_id,
                author_id=comment.author_id,
                request_id=request_id,
                payload=payload,
            )
        )

    def _publish(self, event: CommentEvent) -> None:
        attributes = {"event_type": event.event_type.value}
        # Counted on attempt, not on confirmed delivery
        self._events_counter.add(1, attributes)
        try:
            self.channel.send(event)
        except Exception as e:
            self._failures_counter.add(1, attributes)
            logfire.error(
                "Failed to publish comment event",
                event_type=event.event_type.value,
                comment_id=str(event.comment_id) if event.comment_id else None,
                post_id=str(event.post_id),
                request_id=event.request_id,
                error=str(e),
            )
