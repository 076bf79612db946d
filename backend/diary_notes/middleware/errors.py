"""
Diary Notes Backend — Unhandled Error Middleware
=================================================

What:  Turns any exception no handler claimed into 500 {"message": "Something went wrong!"}.
How:   Innermost user middleware, so the response still travels back through
       request ID, security headers and CORS.
"""

import logging

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import JSONResponse, Response

logger = logging.getLogger(__name__)

GENERIC_ERROR_MESSAGE = "Something went wrong!"


class UnhandledErrorMiddleware(BaseHTTPMiddleware):
    """
    Behavior:
        1. Pass the request on
        2. On an exception escaping the route and exception handlers, log it
           with its traceback and the request ID
        3. Answer with the fixed 500 body; nothing from the exception leaks
    """

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        try:
            return await call_next(request)
        except Exception as exc:
            rid = getattr(request.state, "request_id", "")
            logger.error("[%s] Unhandled error: %s", rid, str(exc), exc_info=True)
            return JSONResponse(status_code=500, content={"message": GENERIC_ERROR_MESSAGE})
