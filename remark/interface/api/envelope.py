"""HTTP response envelope and error handlers.

Every HTTP response body, success or failure, has the shape::

    {"data": ..., "statusCode": 200, "message": "Success", "timestamp": "..."}
"""

from datetime import datetime
from typing import Any

import logfire
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from remark.application.usecase.comment.common import CamelModel
from remark.domain.error import DomainError, InvalidArgumentError, RateLimitedError
from remark.domain.model.common import utcnow
from remark.interface.error import status_for, to_domain_error


class ApiResponse(CamelModel):
    """Synchronous response envelope."""

    data: Any = None
    status_code: int
    message: str
    timestamp: datetime


def _jsonable(data: Any) -> Any:
    if isinstance(data, BaseModel):
        return data.model_dump(mode="json", by_alias=True)
    if isinstance(data, list):
        return [_jsonable(item) for item in data]
    return data


def envelope(
    data: Any = None, status_code: int = 200, message: str = "Success"
) -> JSONResponse:
    """Wrap a payload in the response envelope."""
    body = ApiResponse(
        data=_jsonable(data),
        status_code=status_code,
        message=message,
        timestamp=utcnow(),
    )
    return JSONResponse(
        status_code=status_code,
        content=body.model_dump(mode="json", by_alias=True),
    )


def error_envelope(error: DomainError) -> JSONResponse:
    """Envelope for a failed request; ``data`` is null."""
    status_code = status_for(error)
    response = envelope(None, status_code=status_code, message=error.message)
    if isinstance(error, RateLimitedError):
        response.headers["Retry-After"] = str(error.retry_after)
    return response


async def _domain_error_handler(request: Request, exc: Exception) -> JSONResponse:
    error = to_domain_error(exc)
    if error.code == "Internal":
        logfire.error(
            "Unhandled error",
            path=request.url.path,
            method=request.method,
            error=str(exc),
            error_type=type(exc).__name__,
        )
    else:
        logfire.warn(
            "Request failed",
            path=request.url.path,
            method=request.method,
            code=error.code,
            error=error.message,
        )
    return error_envelope(error)


async def _validation_error_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    parts = []
    for item in exc.errors():
        location = ".".join(str(p) for p in item["loc"] if p != "body")
        parts.append(f"{location}: {item['msg']}")
    return error_envelope(InvalidArgumentError("; ".join(parts)))


def register_error_handlers(app: FastAPI) -> None:
    """Translate errors into envelopes with the matching status code."""
    app.add_exception_handler(DomainError, _domain_error_handler)
    app.add_exception_handler(RequestValidationError, _validation_error_handler)
    app.add_exception_handler(Exception, _domain_error_handler)
