"""
Request logging middleware.

Logs one line per request with method, path, status and duration. The
level follows the status class: info for 2xx/3xx, warning for 4xx,
error for 5xx.
"""

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

logger = logging.getLogger("api.requests")


def level_for_status(status_code: int) -> int:
    if status_code >= 500:
        return logging.ERROR
    if status_code >= 400:
        return logging.WARNING
    return logging.INFO


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        start = time.perf_counter()
        response = await call_next(request)
        duration_ms = (time.perf_counter() - start) * 1000
        logger.log(
            level_for_status(response.status_code),
            f"{request.method} {request.url.path} - {response.status_code} ({duration_ms:.1f}ms)",
        )
        return response
