"""Domain value objects for comments.

Value objects are immutable and defined by their values, not identity.
"""

from enum import Enum

from remark.domain.value.common import ValueObject
from remark.domain.value.identifiers import UserId


class SortDirection(str, Enum):
    """Ordering of a comment listing by creation time."""

    DESC = "desc"
    ASC = "asc"


class EventType(str, Enum):
    """Outbound domain event topics."""

    CREATED = "comment.created"
    UPDATED = "comment.updated"
    DELETED = "comment.deleted"
    RESTORED = "comment.restored"
    LIKED = "comment.liked"
    UNLIKED = "comment.unliked"
    BULK_DELETED = "comments.bulk_deleted"


class CallerContext(ValueObject):
    """Identity of the caller of a mutating operation.

    Built by the transport façades from request side-channels (HTTP headers,
    RPC envelope fields). The domain trusts it as given: verifying that the
    caller really is ``user_id`` happens upstream of the service.
    """

    user_id: UserId
    is_moderator: bool = False
    request_id: str | None = None
