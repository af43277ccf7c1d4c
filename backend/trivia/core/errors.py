"""Error handling and consistent error response format."""

import uuid
from typing import Any

from fastapi import HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from trivia.core.logging import get_logger

logger = get_logger(__name__)


class ErrorResponse(BaseModel):
    """Client-safe error response envelope.

    Format: {error_code, message, details, request_id}
    """

    error_code: str
    message: str
    details: Any | None = None
    request_id: str | None = None


def get_request_id(request: Request) -> str:
    """Get request ID from request state or generate new one."""
    if hasattr(request.state, "request_id"):
        return request.state.request_id
    return str(uuid.uuid4())


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Handle request validation errors (422)."""
    request_id = get_request_id(request)

    details: list[dict[str, Any]] = []
    for error in exc.errors():
        details.append(
            {
                "field": ".".join(str(loc) for loc in error.get("loc", [])),
                "issue": error.get("msg", "Validation error"),
                "type": error.get("type", "validation_error"),
            }
        )

    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content=ErrorResponse(
            error_code="VALIDATION_ERROR",
            message="Invalid request data",
            details=details,
            request_id=request_id,
        ).model_dump(),
    )


async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
    """Handle HTTP exceptions."""
    from trivia.core.app_exceptions import AppError

    request_id = get_request_id(request)

    if isinstance(exc, AppError):
        return JSONResponse(
            status_code=exc.status_code,
            content=ErrorResponse(
                error_code=exc.code,
                message=exc.message,
                details=exc.details,
                request_id=request_id,
            ).model_dump(),
            headers=exc.headers,
        )

    details = None
    code = "HTTP_ERROR"
    if isinstance(exc.detail, dict):
        if "code" in exc.detail:
            code = exc.detail["code"]
            message = exc.detail.get("message", "An error occurred")
            details = exc.detail.get("details")
        else:
            details = exc.detail.copy()
            message = details.pop("message", "An error occurred")
    elif isinstance(exc.detail, str):
        message = exc.detail
    else:
        message = str(exc.detail)

    return JSONResponse(
        status_code=exc.status_code,
        content=ErrorResponse(
            error_code=code,
            message=message,
            details=details,
            request_id=request_id,
        ).model_dump(),
        headers=exc.headers,
    )


async def store_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle content store failures that escape a service (503)."""
    from trivia.services.content_store import StoreError

    request_id = get_request_id(request)
    table = exc.table if isinstance(exc, StoreError) else None

    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        content=ErrorResponse(
            error_code="STORE_ERROR",
            message=str(exc),
            details={"table": table} if table else None,
            request_id=request_id,
        ).model_dump(),
    )


async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle unhandled exceptions (500)."""
    request_id = get_request_id(request)
    logger.error(
        "Unhandled exception",
        extra={"event": "unhandled_exception", "request_id": request_id},
        exc_info=exc,
    )

    # In production, don't expose internal error details
    from trivia.core.config import settings

    if settings.ENV == "prod":
        message = "An internal server error occurred"
        details = None
    else:
        message = str(exc)
        details = {"type": type(exc).__name__}

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=ErrorResponse(
            error_code="INTERNAL_ERROR",
            message=message,
            details=details,
            request_id=request_id,
        ).model_dump(),
    )
