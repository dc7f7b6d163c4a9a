"""Mock persistence providers for testing."""

from dishka import Scope, alias, provide

from remark.domain.repository import CommentRepository
from remark.persistence.repository.inmemory import InMemoryCommentRepository
from remark.util.di.infrastructure.persistence import PersistenceProvider


class MockPersistenceProvider(PersistenceProvider):
    """Mock persistence provider using an in-memory repository.

    APP scope so that consecutive HTTP requests of one test share state;
    each test builds its own container, which keeps tests isolated.
    """

    __is_mock__ = True

    @provide(scope=Scope.APP)
    def get_comment_repository(self) -> InMemoryCommentRepository:
        """Provide in-memory comment repository."""
        return InMemoryCommentRepository()

    comment_repository = alias(
        source=InMemoryCommentRepository, provides=CommentRepository
    )
