"""Domain layer errors.

Each error kind carries a stable ``code`` that both transports expose
unchanged: the HTTP façade maps it to a status code, the RPC façade
returns it in the response envelope.
"""


class DomainError(Exception):
    """Base domain error."""

    code: str = "Internal"

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class NotFoundError(DomainError):
    """Raised when a requested resource is not found."""

    code = "NotFound"

    def __init__(self, resource: str, identifier: str):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} with ID {identifier} not found")


class ForbiddenError(DomainError):
    """Raised when the caller may not perform the operation.

    Covers both wrong-caller failures and operations that are invalid in the
    comment's current state, such as editing a deleted comment.
    """

    code = "Forbidden"


class ConflictError(DomainError):
    """Raised on an invalid soft-delete state transition."""

    code = "Conflict"


class InvalidArgumentError(DomainError):
    """Raised when a required parameter is missing or malformed."""

    code = "InvalidArgument"


class RateLimitedError(DomainError):
    """Raised at the transport boundary when a caller exceeds its budget."""

    code = "RateLimited"

    def __init__(self, retry_after: int):
        self.retry_after = retry_after
        super().__init__(f"Rate limit exceeded, retry after {retry_after}s")


class InternalError(DomainError):
    """Unexpected store or infrastructure failure."""

    code = "Internal"
