"""Per-request context: request ID and the content environment being served."""

import time
import uuid
from typing import Any, Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp

from trivia.core.environment import EnvironmentManager, environment_manager
from trivia.core.logging import get_logger

logger = get_logger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"
ENVIRONMENT_HEADER = "X-Content-Environment"


class RequestContextMiddleware(BaseHTTPMiddleware):
    """Tag every request with an ID and the current content environment.

    Both are stored on ``request.state``, echoed as response headers and added
    to each request log line, so a write can be traced to the tables it hit.
    """

    def __init__(self, app: ASGIApp, manager: EnvironmentManager | None = None):
        super().__init__(app)
        self.manager = manager or environment_manager

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_id = request.headers.get(REQUEST_ID_HEADER) or str(uuid.uuid4())
        mode = self.manager.get()
        request.state.request_id = request_id
        request.state.content_environment = mode

        fields: dict[str, Any] = {
            "request_id": request_id,
            "content_environment": mode.value,
            "method": request.method,
            "path": request.url.path,
        }
        logger.info("Request started", extra={"event": "request_started", **fields})
        started = time.perf_counter()

        try:
            response = await call_next(request)
        except Exception as e:
            logger.error(
                "Request failed",
                extra={
                    "event": "request_failed",
                    **fields,
                    "latency_ms": int((time.perf_counter() - started) * 1000),
                    "error": str(e),
                },
                exc_info=True,
            )
            raise

        response.headers[REQUEST_ID_HEADER] = request_id
        response.headers[ENVIRONMENT_HEADER] = mode.value
        logger.info(
            "Request completed",
            extra={
                "event": "request_completed",
                **fields,
                "status_code": response.status_code,
                "latency_ms": int((time.perf_counter() - started) * 1000),
            },
        )
        return response
