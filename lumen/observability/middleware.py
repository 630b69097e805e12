"""
Request observability middleware.

CorrelationMiddleware binds X-Correlation-ID for the duration of a request;
RequestLoggingMiddleware writes one access line per request, at WARNING for
4xx and ERROR for 5xx.

Dependencies: fastapi, starlette, lumen.observability.correlation
System role: Request/response observability injection
"""

import logging
import time

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from lumen.observability.correlation import clear_correlation_id, set_correlation_id

logger = logging.getLogger(__name__)

CORRELATION_HEADER = "X-Correlation-ID"


def _elapsed_ms(start: float) -> float:
    return round((time.perf_counter() - start) * 1000, 2)


def _level_for(status_code: int) -> int:
    if status_code >= 500:
        return logging.ERROR
    if status_code >= 400:
        return logging.WARNING
    return logging.INFO


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """One access log line per request with status and latency."""

    async def dispatch(self, request: Request, call_next):
        start = time.perf_counter()
        context = {
            "method": request.method,
            "path": request.url.path,
            "client_host": request.client.host if request.client else None,
        }

        try:
            response: Response = await call_next(request)
        except Exception as e:
            logger.exception(
                f"{request.method} {request.url.path} - unhandled {type(e).__name__}",
                extra={**context, "process_time_ms": _elapsed_ms(start)},
            )
            raise

        logger.log(
            _level_for(response.status_code),
            f"{request.method} {request.url.path} - {response.status_code}",
            extra={**context, "status_code": response.status_code, "process_time_ms": _elapsed_ms(start)},
        )
        return response


class CorrelationMiddleware(BaseHTTPMiddleware):
    """Reuse the caller's X-Correlation-ID or mint one, and echo it on the response."""

    async def dispatch(self, request: Request, call_next):
        correlation_id = set_correlation_id(request.headers.get(CORRELATION_HEADER))
        try:
            response: Response = await call_next(request)
        finally:
            clear_correlation_id()
        response.headers[CORRELATION_HEADER] = correlation_id
        return response
