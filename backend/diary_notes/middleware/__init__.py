# Middleware package init
"""
Diary Notes Backend — Middleware Package
=========================================

What:  Cross-cutting concerns applied to every request.

Middleware Chain (order matters!):
    Request → [Request ID] → [Logging] → [Security Headers] → [CORS] → [Unhandled Errors] → Route Handler

    1. Request ID: correlation ID for log lines and the response header
    2. Logging: access line with status and duration, tagged with the ID
    3. Security Headers: added on the way out
    4. CORS: FastAPI's CORSMiddleware (handles preflight)
    5. Unhandled Errors: leftover exceptions become the generic 500

    Responses travel the chain in reverse.
"""
