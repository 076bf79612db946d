"""
Diary Notes Backend — Security Headers Middleware
==================================================

What:  Adds conservative HTTP security headers to every response.
How:   Sets each header unless a route already set it.
Who:   Applied to every request via Starlette middleware.

Headers:
    X-Content-Type-Options: nosniff       → no MIME sniffing of JSON bodies
    X-Frame-Options: SAMEORIGIN           → no framing by other origins
    Referrer-Policy: no-referrer
    Cross-Origin-Resource-Policy: same-origin
    X-DNS-Prefetch-Control: off
"""

from typing import Dict

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

SECURITY_HEADERS: Dict[str, str] = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "SAMEORIGIN",
    "Referrer-Policy": "no-referrer",
    "Cross-Origin-Resource-Policy": "same-origin",
    "X-DNS-Prefetch-Control": "off",
}


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """
    Behavior:
        Adds each SECURITY_HEADERS entry to the response unless the route
        already set that header.
    """

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        response = await call_next(request)
        for name, value in SECURITY_HEADERS.items():
            response.headers.setdefault(name, value)
        return response
