"""Caller identity from HTTP side-channel headers.

Headers are trusted as sent. Verifying that ``x-user-id`` really belongs to
the caller is the job of the gateway in front of this service.
"""

from fastapi import Request

from remark.domain.error import InvalidArgumentError

REQUEST_ID_HEADER = "x-request-id"


def require_user_id(x_user_id: str | None) -> str:
    """Return the ``x-user-id`` header value.

    Raises:
        InvalidArgumentError: If the header is missing
    """
    if not x_user_id:
        raise InvalidArgumentError("x-user-id header is required")
    return x_user_id


def is_moderator(x_is_moderator: str | None) -> bool:
    return (x_is_moderator or "false").strip().lower() == "true"


def request_id(request: Request) -> str | None:
    """Correlation ID assigned by the request ID middleware."""
    return getattr(request.state, "request_id", None)


def rate_limit_key(request: Request, user_id: str | None) -> str:
    """Budget key: the user when known, otherwise the client address."""
    if user_id:
        return f"user:{user_id}"
    host = request.client.host if request.client else "unknown"
    return f"ip:{host}"
