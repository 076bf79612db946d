"""
Diary Notes Backend — Request Logging Middleware
=================================================

What:  One access-log line per HTTP request.
How:   Times the rest of the stack; the line's level follows the status class.
When:  Inside RequestIDMiddleware, so the request ID is already set.

Logged: method, path, status, duration, request ID.
Never logged: bodies (note titles and content are private).
"""

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from diary_notes.middleware.request_id import request_id_var

logger = logging.getLogger("diary_notes.access")

# Polled by health checks every few seconds
QUIET_PATHS = {"/health"}


def level_for_status(status: int) -> int:
    if status >= 500:
        return logging.ERROR
    if status >= 400:
        return logging.WARNING
    return logging.INFO


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    Behavior:
        1. Skip QUIET_PATHS entirely
        2. Time the downstream call
        3. Log one line at the level chosen by level_for_status()
    """

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        if request.url.path in QUIET_PATHS:
            return await call_next(request)

        started = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - started) * 1000

        logger.log(
            level_for_status(response.status_code),
            "%s %s -> %d (%.1f ms) rid=%s",
            request.method,
            request.url.path,
            response.status_code,
            elapsed_ms,
            request_id_var.get(""),
            extra={"status": response.status_code, "duration_ms": round(elapsed_ms, 2)},
        )
        return response
