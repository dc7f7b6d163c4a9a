"""Interface layer error translation.

Both transports expose the same error kinds: the HTTP façade as a status
code, the RPC façade as the ``code`` string of the response envelope.
"""

from remark.domain.error import DomainError, InternalError

STATUS_BY_CODE: dict[str, int] = {
    "InvalidArgument": 400,
    "Forbidden": 403,
    "NotFound": 404,
    "Conflict": 409,
    "RateLimited": 429,
    "Internal": 500,
}

# Clients may retry these with backoff; everything else is final
RETRYABLE_CODES = frozenset({"RateLimited", "Internal"})


def to_domain_error(error: Exception) -> DomainError:
    """Classify any exception as a domain error kind."""
    if isinstance(error, DomainError):
        return error
    return InternalError("Internal error")


def status_for(error: DomainError) -> int:
    return STATUS_BY_CODE.get(error.code, 500)
