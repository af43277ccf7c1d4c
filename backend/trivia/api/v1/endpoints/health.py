"""Health and readiness endpoints."""

from typing import Literal

from fastapi import APIRouter, Depends, Request, status
from pydantic import BaseModel
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from trivia.core.dependencies import get_environment
from trivia.core.environment import EnvironmentManager
from trivia.core.errors import get_request_id
from trivia.core.logging import get_logger
from trivia.db.session import get_db

logger = get_logger(__name__)

router = APIRouter(tags=["Health"])


class HealthResponse(BaseModel):
    """Health check response."""

    status: Literal["ok"] = "ok"


class ReadinessCheck(BaseModel):
    """Individual readiness check result."""

    status: Literal["ok", "down"]
    message: str | None = None


class ReadinessResponse(BaseModel):
    """Readiness check response."""

    status: Literal["ok", "down"]
    environment: str
    checks: dict[str, ReadinessCheck]
    request_id: str


@router.get(
    "/health",
    response_model=HealthResponse,
    status_code=status.HTTP_200_OK,
    summary="Health check",
    description="Simple health check endpoint. Returns 200 if the API is running.",
)
async def health_check() -> HealthResponse:
    """Health check endpoint - just checks if the process is alive."""
    return HealthResponse(status="ok")


@router.get(
    "/ready",
    response_model=ReadinessResponse,
    summary="Readiness check",
    description="Verifies database connectivity and reports the current content environment.",
)
async def readiness_check(
    request: Request,
    db: Session = Depends(get_db),
    manager: EnvironmentManager = Depends(get_environment),
) -> ReadinessResponse:
    checks: dict[str, ReadinessCheck] = {}
    try:
        db.execute(text("SELECT 1"))
        checks["database"] = ReadinessCheck(status="ok")
    except SQLAlchemyError as e:
        logger.error("Database readiness check failed", extra={"error": str(e)})
        checks["database"] = ReadinessCheck(status="down", message="Database unreachable")

    overall = "ok" if all(c.status == "ok" for c in checks.values()) else "down"
    return ReadinessResponse(
        status=overall,
        environment=manager.get().value,
        checks=checks,
        request_id=get_request_id(request),
    )
