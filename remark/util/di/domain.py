"""Domain layer DI providers."""

from dishka import Scope, provide

from remark.domain.repository import CommentRepository
from remark.domain.service import (
    CommentEventNotifier,
    CommentService,
    CursorPaginator,
    EventChannel,
)
from remark.util.di.base import ProviderBase


class ProdDomainProvider(ProviderBase):
    """Production domain services provider - concrete, no mocks needed.

    Services are REQUEST-scoped to align with the repository/session
    lifecycle. The notifier only wraps the process-wide event channel, so
    it lives as long as the app.
    """

    scope = Scope.REQUEST

    @provide(scope=Scope.APP)
    def get_notifier(self, channel: EventChannel) -> CommentEventNotifier:
        """Provide comment event notifier."""
        return CommentEventNotifier(channel=channel)

    @provide
    def get_paginator(self, comment_repository: CommentRepository) -> CursorPaginator:
        """Provide cursor paginator."""
        return CursorPaginator(comment_repository=comment_repository)

    @provide
    def get_comment_service(
        self,
        comment_repository: CommentRepository,
        paginator: CursorPaginator,
        notifier: CommentEventNotifier,
    ) -> CommentService:
        """Provide comment domain service."""
        return CommentService(
            comment_repository=comment_repository,
            paginator=paginator,
            notifier=notifier,
        )
