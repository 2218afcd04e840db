"""Request logging middleware with correlation ids.

Every request runs under a correlation id taken from the
``X-Correlation-ID`` header (or generated). The id is bound into the
structlog context for all services awaited by the route and echoed back
in the response header.

Usage:
    app.add_middleware(LoggingMiddleware)
"""

import time
from typing import Awaitable, Callable

import structlog
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from src.infrastructure.observability.correlation import (
    generate_correlation_id,
    set_correlation_id,
)

CORRELATION_HEADER = "X-Correlation-ID"

logger = structlog.get_logger(__name__)


class LoggingMiddleware(BaseHTTPMiddleware):
    """Sets the correlation id and logs each request's outcome and latency."""

    async def dispatch(
        self,
        request: Request,
        call_next: Callable[[Request], Awaitable[Response]],
    ) -> Response:
        correlation_id = request.headers.get(CORRELATION_HEADER) or generate_correlation_id()
        set_correlation_id(correlation_id)
        log = logger.bind(
            correlation_id=correlation_id,
            method=request.method,
            path=request.url.path,
        )

        started = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception as exc:
            log.exception(
                "request_failed",
                duration_ms=round((time.perf_counter() - started) * 1000, 2),
                error_type=type(exc).__name__,
            )
            raise

        duration_ms = round((time.perf_counter() - started) * 1000, 2)
        if response.status_code >= 500:
            log.error("request_completed", status_code=response.status_code, duration_ms=duration_ms)
        elif response.status_code >= 400:
            log.warning("request_completed", status_code=response.status_code, duration_ms=duration_ms)
        else:
            log.info("request_completed", status_code=response.status_code, duration_ms=duration_ms)
        response.headers[CORRELATION_HEADER] = correlation_id
        return response
