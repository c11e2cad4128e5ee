"""Request logging middleware.

Binds a correlation id to the structlog context for the lifetime of each
request, logs start and completion with timing, and echoes the id back in
the ``X-Correlation-ID`` response header.
"""
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from core.logging import (
    generate_correlation_id,
    bind_context,
    clear_context,
    api_logger,
)

CORRELATION_HEADER = "X-Correlation-ID"

log = api_logger()


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        correlation_id = request.headers.get(CORRELATION_HEADER) or generate_correlation_id()

        clear_context()
        bind_context(
            correlation_id=correlation_id,
            method=request.method,
            path=request.url.path,
            client_ip=request.client.host if request.client else "unknown",
        )

        start = time.perf_counter()
        log.info("request_started", user_agent=request.headers.get("User-Agent", "")[:100])

        try:
            response = await call_next(request)
            duration_ms = (time.perf_counter() - start) * 1000

            response.headers[CORRELATION_HEADER] = correlation_id

            status = response.status_code
            log_method = log.info if status < 400 else (log.warning if status < 500 else log.error)
            log_method("request_completed", status=status, duration_ms=round(duration_ms, 2))
            return response

        except Exception as exc:
            duration_ms = (time.perf_counter() - start) * 1000
            log.exception(
                "request_failed",
                error_type=type(exc).__name__,
                duration_ms=round(duration_ms, 2),
            )
            raise
        finally:
            clear_context()
