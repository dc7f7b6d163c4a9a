"""Health check routes."""

from datetime import datetime

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from remark.adapter.health import ReadinessChecker
from remark.config import Settings
from remark.domain.model.common import utcnow
from remark.interface.api.envelope import envelope

router = APIRouter(prefix="/health", tags=["health"], route_class=DishkaRoute)


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    timestamp: datetime
    version: str
    git_sha: str


class ReadinessResponse(BaseModel):
    """Readiness check response."""

    status: str
    checks: dict[str, bool]


@router.get("")
async def health_check(settings: FromDishka[Settings]) -> JSONResponse:
    """Basic health check endpoint.

    Returns:
        Health status indicating the service is running
    """
    return envelope(
        HealthResponse(
            status="healthy",
            timestamp=utcnow(),
            version="0.1.0",
            git_sha=settings.git_sha,
        )
    )


@router.get("/liveness")
async def liveness() -> JSONResponse:
    """The process is up and serving requests."""
    return envelope({"status": "alive"})


@router.get("/readiness")
async def readiness(readiness_checker: FromDishka[ReadinessChecker]) -> JSONResponse:
    """Check the database and Redis.

    Returns:
        200 when every backing service answers, otherwise 503
    """
    checks = await readiness_checker.check()
    ready = all(checks.values())
    status_code = status.HTTP_200_OK if ready else status.HTTP_503_SERVICE_UNAVAILABLE
    return envelope(
        ReadinessResponse(status="ready" if ready else "unavailable", checks=checks),
        status_code=status_code,
        message="Success" if ready else "Service unavailable",
    )
