"""
Diary Notes Backend — Request ID Middleware
============================================

What:  Assigns a correlation ID to each request and echoes it in the response.
How:   Reuses the client's X-Request-ID when it is a plausible token, otherwise
       generates a short UUID; the ID lives in a ContextVar for loggers and on
       request.state for handlers.
"""

import re
import uuid
from contextvars import ContextVar

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

# Coroutine-local: concurrent requests share a thread
request_id_var: ContextVar[str] = ContextVar("request_id", default="")

REQUEST_ID_HEADER = "X-Request-ID"

# Client IDs end up verbatim in log lines
_ACCEPTED_ID = re.compile(r"[A-Za-z0-9._:-]{1,64}")


def resolve_request_id(supplied: str) -> str:
    if supplied and _ACCEPTED_ID.fullmatch(supplied):
        return supplied
    return uuid.uuid4().hex[:8]


class RequestIDMiddleware(BaseHTTPMiddleware):
    """
    Behavior:
        1. Keep a usable client X-Request-ID, otherwise generate one
        2. Expose it through request_id_var and request.state.request_id
        3. Echo it in the response header
    """

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        rid = resolve_request_id(request.headers.get(REQUEST_ID_HEADER, ""))
        token = request_id_var.set(rid)
        request.state.request_id = rid
        try:
            response = await call_next(request)
        finally:
            request_id_var.reset(token)

        response.headers[REQUEST_ID_HEADER] = rid
        return response
