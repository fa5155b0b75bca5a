"""
Request middleware.

CorrelationMiddleware binds an X-Correlation-ID to the request context and
echoes it on the response. RequestLoggingMiddleware logs one line when a
request arrives and one when its response starts.

Dependencies: starlette, backend.observability.correlation
System role: Per-request logging context
"""

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from backend.observability.correlation import clear_correlation_id, set_correlation_id

logger = logging.getLogger(__name__)

CORRELATION_HEADER = "X-Correlation-ID"


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    Log method, path, status and latency.

    For the chat stream the latency is time to first byte; the stream itself
    is logged by ChatService.
    """

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        started = time.perf_counter()
        route = f"{request.method} {request.url.path}"
        logger.info(
            route,
            extra={
                "method": request.method,
                "path": request.url.path,
                "client_host": request.client.host if request.client else None,
            },
        )

        try:
            response = await call_next(request)
        except Exception as e:
            logger.exception(
                f"{route} - unhandled {type(e).__name__}",
                extra={"elapsed_ms": round((time.perf_counter() - started) * 1000, 2)},
            )
            raise

        logger.info(
            f"{route} - {response.status_code}",
            extra={
                "status_code": response.status_code,
                "elapsed_ms": round((time.perf_counter() - started) * 1000, 2),
                "streaming": response.headers.get("content-type", "").startswith("text/event-stream"),
            },
        )
        return response


class CorrelationMiddleware(BaseHTTPMiddleware):
    """Bind the caller's X-Correlation-ID, or a fresh one, for the request."""

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        correlation_id = set_correlation_id(request.headers.get(CORRELATION_HEADER))
        try:
            response = await call_next(request)
        finally:
            clear_correlation_id()
        response.headers[CORRELATION_HEADER] = correlation_id
        return response
