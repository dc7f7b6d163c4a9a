"""Application layer DI providers."""

from dishka import Scope, provide

from remark.adapter.redis.ratelimit import RateLimiter
from remark.application.usecase.comment import (
    CreateCommentUseCase,
    DeleteCommentUseCase,
    DeletePostCommentsUseCase,
    GetCommentsUseCase,
    GetCommentUseCase,
    GetRepliesUseCase,
    LikeCommentUseCase,
    RestoreCommentUseCase,
    UnlikeCommentUseCase,
    UpdateCommentUseCase,
)
from remark.config import PaginationSettings
from remark.domain.service import CommentService
from remark.interface.rpc.handler import CommentRpcHandler
from remark.util.di.base import ProviderBase


class ProdApplicationProvider(ProviderBase):
    """Production application use cases provider - concrete, no mocks needed."""

    scope = Scope.REQUEST

    @provide
    def get_create_comment_use_case(
        self, comment_service: CommentService
    ) -> CreateCommentUseCase:
        """Provide create comment use case."""
        return CreateCommentUseCase(comment_service=comment_service)

    @provide
    def get_comments_use_case(
        self, comment_service: CommentService, pagination: PaginationSettings
    ) -> GetCommentsUseCase:
        """Provide list comments use case."""
        return GetCommentsUseCase(
            comment_service=comment_service, pagination=pagination
        )

    @provide
    def get_comment_use_case(self, comment_service: CommentService) -> GetCommentUseCase:
        """Provide get comment use case."""
        return GetCommentUseCase(comment_service=comment_service)

    @provide
    def get_replies_use_case(self, comment_service: CommentService) -> GetRepliesUseCase:
        """Provide list replies use case."""
        return GetRepliesUseCase(comment_service=comment_service)

    @provide
    def get_update_comment_use_case(
        self, comment_service: CommentService
    ) -> UpdateCommentUseCase:
        """Provide update comment use case."""
        return UpdateCommentUseCase(comment_service=comment_service)

    @provide
    def get_delete_comment_use_case(
        self, comment_service: CommentService
    ) -> DeleteCommentUseCase:
        """Provide delete comment use case."""
        return DeleteCommentUseCase(comment_service=comment_service)

    @provide
    def get_restore_comment_use_case(
        self, comment_service: CommentService
    ) -> RestoreCommentUseCase:
        """Provide restore comment use case."""
        return RestoreCommentUseCase(comment_service=comment_service)

    @provide
    def get_delete_post_comments_use_case(
        self, comment_service: CommentService
    ) -> DeletePostCommentsUseCase:
        """Provide post comments cascade use case."""
        return DeletePostCommentsUseCase(comment_service=comment_service)

    @provide
    def get_like_comment_use_case(
        self, comment_service: CommentService
    ) -> LikeCommentUseCase:
        """Provide like comment use case."""
        return LikeCommentUseCase(comment_service=comment_service)

    @provide
    def get_unlike_comment_use_case(
        self, comment_service: CommentService
    ) -> UnlikeCommentUseCase:
        """Provide unlike comment use case."""
        return UnlikeCommentUseCase(comment_service=comment_service)

    @provide
    def get_rpc_handler(
        self,
        create_comment_use_case: CreateCommentUseCase,
        get_comments_use_case: GetCommentsUseCase,
        get_comment_use_case: GetCommentUseCase,
        update_comment_use_case: UpdateCommentUseCase,
        delete_comment_use_case: DeleteCommentUseCase,
        like_comment_use_case: LikeCommentUseCase,
        unlike_comment_use_case: UnlikeCommentUseCase,
        restore_comment_use_case: RestoreCommentUseCase,
        rate_limiter: RateLimiter,
    ) -> CommentRpcHandler:
        """Provide broker RPC handler."""
        return CommentRpcHandler(
            create_comment_use_case=create_comment_use_case,
            get_comments_use_case=get_comments_use_case,
            get_comment_use_case=get_comment_use_case,
            update_comment_use_case=update_comment_use_case,
            delete_comment_use_case=delete_comment_use_case,
            like_comment_use_case=like_comment_use_case,
            unlike_comment_use_case=unlike_comment_use_case,
            restore_comment_use_case=restore_comment_use_case,
            rate_limiter=rate_limiter,
        )
