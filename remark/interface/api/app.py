"""FastAPI application."""

from contextlib import asynccontextmanager
from uuid import uuid4

import logfire
from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware

from remark.interface.api.envelope import register_error_handlers
from remark.interface.api.identity import REQUEST_ID_HEADER
from remark.interface.api.routes import comments, health
from remark.util.di.container import create_container, setup_di
from remark.util.observability import instrument_fastapi


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Close the container on shutdown.

    Closing drains the event channel and releases database and Redis
    connections.
    """
    yield
    await app.state.dishka_container.close()


def create_app() -> FastAPI:
    """Create FastAPI application.

    Note: Logfire should be configured before calling this function.
    In production, start_app.py handles this.
    """
    app_instance = FastAPI(
        title="Remark Comments API",
        description="Comment lifecycle service: threaded comments, likes and moderation",
        version="0.1.0",
        lifespan=lifespan,
    )

    instrument_fastapi(app_instance)

    app_instance.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET", "POST", "DELETE", "OPTIONS", "PATCH"],
        allow_headers=[
            "Content-Type",
            "Accept",
            "Origin",
            "x-user-id",
            "x-is-moderator",
            REQUEST_ID_HEADER,
        ],
        expose_headers=["Content-Length", "Content-Type", REQUEST_ID_HEADER],
        max_age=600,
    )

    @app_instance.middleware("http")
    async def request_id_middleware(request: Request, call_next) -> Response:
        """Assign a correlation ID and echo it back in the response."""
        request_id = request.headers.get(REQUEST_ID_HEADER) or str(uuid4())
        request.state.request_id = request_id
        with logfire.span(
            "{method} {path}",
            method=request.method,
            path=request.url.path,
            request_id=request_id,
        ):
            response = await call_next(request)
        response.headers[REQUEST_ID_HEADER] = request_id
        return response

    register_error_handlers(app_instance)

    container = create_container()
    setup_di(app_instance, container)

    app_instance.include_router(health.router)
    app_instance.include_router(comments.router)
    app_instance.include_router(comments.posts_router)

    return app_instance
