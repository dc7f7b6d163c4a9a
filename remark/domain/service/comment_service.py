"""Comment domain service.

Owns every comment state transition and the rules deciding who may make
it. Callers identify themselves through an explicit ``CallerContext``;
nothing here knows which transport a request arrived on.

Authorization reads the comment and then writes it without a version check,
so two concurrent authorized mutations of the same comment are
last-write-wins. Like counters do not have this problem: they are adjusted
atomically by the repository.

Each mutation commits before its event is handed to the notifier.
"""

from uuid import uuid4

import logfire

from remark.domain.error import (
    ConflictError,
    ForbiddenError,
    InvalidArgumentError,
    NotFoundError,
)
from remark.domain.model import MAX_CONTENT_LENGTH, Comment, CommentPage
from remark.domain.model.common import utcnow
from remark.domain.repository import CommentRepository
from remark.domain.value import (
    CallerContext,
    CommentId,
    PostId,
    SortDirection,
    UserId,
)

from .base import Service
from .notifier import CommentEventNotifier
from .pagination import CursorPaginator
from .sanitizer import sanitize


class CommentService(Service):
    """Domain service for the comment lifecycle."""

    def __init__(
        self,
        comment_repository: CommentRepository,
        paginator: CursorPaginator,
        notifier: CommentEventNotifier,
    ) -> None:
        """Initialize comment service.

        Args:
            comment_repository: Comment repository
            paginator: Cursor paginator over the same repository
            notifier: Outbound domain event notifier
        """
        self.comment_repository = comment_repository
        self.paginator = paginator
        self.notifier = notifier

    async def create_comment(
        self,
        post_id: PostId,
        author_id: UserId,
        content: str,
        parent_id: CommentId | None = None,
        request_id: str | None = None,
    ) -> Comment:
        """Create a comment on a post or a reply to another comment.

        Anyone may create a comment on behalf of ``author_id``.

        Args:
            post_id: Post ID
            author_id: Author user ID
            content: Raw comment content, sanitized before storage
            parent_id: Parent comment ID for replies (None for top-level)
            request_id: Correlation ID propagated into the event

        Returns:
            Created comment

        Raises:
            InvalidArgumentError: If the sanitized content is too long
        """
        with logfire.span(
            "comment_service.create_comment",
            post_id=str(post_id),
            author_id=str(author_id),
            parent_id=str(parent_id) if parent_id else None,
            request_id=request_id,
        ):
            now = utcnow()
            comment = Comment(
                id=CommentId(uuid4()),
                post_id=post_id,
                author_id=author_id,
                content=_clean(content),
                parent_id=parent_id,
                likes_count=0,
                is_deleted=False,
                created_at=now,
                updated_at=now,
            )

            saved = await self.comment_repository.save(comment)
            await self.comment_repository.commit()
            logfire.info(
                "Comment created",
                comment_id=str(saved.id),
                post_id=str(post_id),
                author_id=str(author_id),
            )

            self.notifier.comment_created(saved, request_id)
            return saved

    async def get_comment(self, comment_id: CommentId) -> Comment:
        """Get a comment by ID, deleted or not.

        Raises:
            NotFoundError: If the comment does not exist
        """
        with logfire.span(
            "comment_service.get_comment", comment_id=str(comment_id)
        ):
            return await self._require(comment_id)

    async def list_comments(
        self,
        post_id: PostId | None,
        cursor: str | None = None,
        limit: int = 20,
        sort: SortDirection = SortDirection.DESC,
    ) -> CommentPage:
        """List the non-deleted comments of a post, one page at a time.

        Args:
            post_id: Post ID (required)
            cursor: Token from the previous page
            limit: Page size, already range-checked by the caller
            sort: Creation-time ordering

        Raises:
            InvalidArgumentError: If post ID is missing or the cursor is malformed
        """
        if post_id is None:
            raise InvalidArgumentError("postId is required")

        with logfire.span(
            "comment_service.list_comments",
            post_id=str(post_id),
            has_cursor=cursor is not None,
            limit=limit,
            sort=sort.value,
        ):
            page = await self.paginator.paginate(
                post_id=post_id, cursor=cursor, limit=limit, direction=sort
            )
            logfire.info(
                "Comments listed for post",
                post_id=str(post_id),
                count=len(page.items),
                total_count=page.total_count,
            )
            return page

    async def list_replies(self, parent_id: CommentId) -> list[Comment]:
        """List direct, non-deleted replies of a comment, newest first.

        Raises:
            NotFoundError: If the parent comment does not exist
        """
        with logfire.span("comment_service.list_replies", parent_id=str(parent_id)):
            await self._require(parent_id)
            return await self.comment_repository.find_replies(parent_id)

    async def update_comment(
        self,
        comment_id: CommentId,
        content: str | None,
        caller: CallerContext,
    ) -> Comment:
        """Edit a comment's content.

        When ``content`` is None or empty the content is left as is, but
        ``updated_at`` still advances.

        Raises:
            NotFoundError: If the comment does not exist
            ForbiddenError: If the caller is not the author or the comment is deleted
            InvalidArgumentError: If the sanitized content is too long
        """
        with logfire.span(
            "comment_service.update_comment",
            comment_id=str(comment_id),
            user_id=str(caller.user_id),
            request_id=caller.request_id,
        ):
            comment = await self._require(comment_id)

            if comment.author_id != caller.user_id:
                logfire.warn(
                    "Unauthorized comment update attempt",
                    comment_id=str(comment_id),
                    user_id=str(caller.user_id),
                )
                raise ForbiddenError("You can only edit your own comments")

            if comment.is_deleted:
                raise ForbiddenError("Cannot edit deleted comments")

            new_content = _clean(content) if content else comment.content
            updated = await self.comment_repository.update_content(
                comment_id, new_content
            )
            if updated is None:
                raise NotFoundError("Comment", str(comment_id))

            logfire.info(
                "Comment updated",
                comment_id=str(comment_id),
                content_changed=bool(content),
            )
            await self.comment_repository.commit()
            self.notifier.comment_updated(updated, caller.request_id)
            return updated

    async def delete_comment(
        self, comment_id: CommentId, caller: CallerContext
    ) -> None:
        """Soft-delete a comment.

        Raises:
            NotFoundError: If the comment does not exist
            ForbiddenError: If the caller is neither the author nor a moderator
            ConflictError: If the comment is already deleted
        """
        with logfire.span(
            "comment_service.delete_comment",
            comment_id=str(comment_id),
            user_id=str(caller.user_id),
            is_moderator=caller.is_moderator,
            request_id=caller.request_id,
        ):
            comment = await self._require(comment_id)

            if not caller.is_moderator and comment.author_id != caller.user_id:
                logfire.warn(
                    "Unauthorized comment delete attempt",
                    comment_id=str(comment_id),
                    user_id=str(caller.user_id),
                )
                raise ForbiddenError("You can only delete your own comments")

            if comment.is_deleted:
                raise ConflictError("Comment is already deleted")

            deleted = await self.comment_repository.soft_delete(
                comment_id, caller.user_id
            )
            if deleted is None:
                raise NotFoundError("Comment", str(comment_id))

            logfire.info(
                "Comment deleted",
                comment_id=str(comment_id),
                deleted_by=str(caller.user_id),
                by_moderator=caller.is_moderator and comment.author_id != caller.user_id,
            )
            await self.comment_repository.commit()
            self.notifier.comment_deleted(deleted, caller.request_id)

    async def restore_comment(
        self, comment_id: CommentId, caller: CallerContext
    ) -> Comment:
        """Restore a soft-deleted comment.

        Only the author may restore; moderator status does not apply here.

        Raises:
            NotFoundError: If the comment does not exist
            ForbiddenError: If the caller is not the author
            ConflictError: If the comment is not deleted
        """
        with logfire.span(
            "comment_service.restore_comment",
            comment_id=str(comment_id),
            user_id=str(caller.user_id),
            request_id=caller.request_id,
        ):
            comment = await self._require(comment_id)

            if comment.author_id != caller.user_id:
                raise ForbiddenError("You can only restore your own comments")

            if not comment.is_deleted:
                raise ConflictError("Comment is not deleted")

            restored = await self.comment_repository.restore(comment_id)
            if restored is None:
                raise NotFoundError("Comment", str(comment_id))

            logfire.info("Comment restored", comment_id=str(comment_id))
            await self.comment_repository.commit()
            self.notifier.comment_restored(restored, caller.request_id)
            return restored

    async def like_comment(
        self, comment_id: CommentId, caller: CallerContext
    ) -> Comment:
        """Add one like.

        Likes are not tracked per user: repeated likes by the same user all
        count.

        Raises:
            NotFoundError: If the comment does not exist
            ForbiddenError: If the comment is deleted
        """
        with logfire.span(
            "comment_service.like_comment",
            comment_id=str(comment_id),
            user_id=str(caller.user_id),
            request_id=caller.request_id,
        ):
            comment = await self._require(comment_id)

            if comment.is_deleted:
                raise ForbiddenError("Cannot like deleted comments")

            liked = await self.comment_repository.increment_likes(comment_id)
            if liked is None:
                raise NotFoundError("Comment", str(comment_id))

            logfire.info(
                "Comment liked",
                comment_id=str(comment_id),
                likes_count=liked.likes_count,
            )
            await self.comment_repository.commit()
            self.notifier.comment_liked(liked, caller.user_id, caller.request_id)
            return liked

    async def unlike_comment(
        self, comment_id: CommentId, caller: CallerContext
    ) -> Comment:
        """Remove one like; a comment with no likes is returned unchanged.

        Raises:
            NotFoundError: If the comment does not exist
        """
        with logfire.span(
            "comment_service.unlike_comment",
            comment_id=str(comment_id),
            user_id=str(caller.user_id),
            request_id=caller.request_id,
        ):
            await self._require(comment_id)

            unliked = await self.comment_repository.decrement_likes(comment_id)
            if unliked is None:
                raise NotFoundError("Comment", str(comment_id))

            logfire.info(
                "Comment unliked",
                comment_id=str(comment_id),
                likes_count=unliked.likes_count,
            )
            await self.comment_repository.commit()
            self.notifier.comment_unliked(unliked, caller.user_id, caller.request_id)
            return unliked

    async def delete_post_comments(
        self, post_id: PostId, request_id: str | None = None
    ) -> int:
        """Soft-delete every comment of a deleted post.

        Emits a single bulk event, and only when something was deleted.

        Returns:
            Number of comments deleted
        """
        with logfire.span(
            "comment_service.delete_post_comments",
            post_id=str(post_id),
            request_id=request_id,
        ):
            count = await self.comment_repository.soft_delete_by_post(post_id)
            logfire.info("Post comments deleted", post_id=str(post_id), count=count)

            await self.comment_repository.commit()
            if count > 0:
                self.notifier.comments_bulk_deleted(post_id, count, request_id)
            return count

    async def _require(self, comment_id: CommentId) -> Comment:
        comment = await self.comment_repository.find_by_id(comment_id)
        if comment is None:
            logfire.warn("Comment not found", comment_id=str(comment_id))
            raise NotFoundError("Comment", str(comment_id))
        return comment


def _clean(content: str) -> str:
    """Sanitize content and check it still fits the stored length.

    Raises:
        InvalidArgumentError: If escaping pushed the content past the limit
    """
    cleaned = sanitize(content)
    if len(cleaned) > MAX_CONTENT_LENGTH:
        raise InvalidArgumentError(
            f"content must be at most {MAX_CONTENT_LENGTH} characters once "
            f"HTML is escaped (got {len(cleaned)})"
        )
    return cleaned
