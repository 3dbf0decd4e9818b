"""
NoteKeeper Backend — Request Logging Middleware
=================================================

What:  One access-log line per HTTP request on the `notekeeper.access` logger.
How:   Times the request, then logs method, path, status, duration, request
       ID and client IP. Level follows the status class (see level_for_status).
When:  Runs inside RequestIDMiddleware so the request ID is already set.

Request bodies are never logged; note contents stay out of the logs.
"""

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from notekeeper.middleware.request_id import request_id_var

ACCESS_LOGGER_NAME = "notekeeper.access"

logger = logging.getLogger(ACCESS_LOGGER_NAME)

# Polled by load balancers every few seconds; logging them drowns real traffic
SKIPPED_PATHS = frozenset({"/health"})


def level_for_status(status: int) -> int:
    """5xx → ERROR, 4xx → WARNING, anything else → INFO."""
    if status >= 500:
        return logging.ERROR
    if status >= 400:
        return logging.WARNING
    return logging.INFO


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Access log for every route except SKIPPED_PATHS."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        if request.url.path in SKIPPED_PATHS:
            return await call_next(request)

        started = time.perf_counter()
        response = await call_next(request)
        self._log_access(request, response.status_code, (time.perf_counter() - started) * 1000)
        return response

    @staticmethod
    def _log_access(request: Request, status: int, duration_ms: float) -> None:
        fields = {
            "request_id": request_id_var.get(""),
            "method": request.method,
            "path": request.url.path,
            "status": status,
            "duration_ms": round(duration_ms, 2),
            "client_ip": request.client.host if request.client else "unknown",
        }
        logger.log(
            level_for_status(status),
            "%(method)s %(path)s %(status)d %(duration_ms).1fms [%(request_id)s] from %(client_ip)s",
            fields,
            extra=fields,
        )
