"""
Diary Notes Client — Exceptions
================================

The client does not distinguish 400, 404 and 500 in its behaviour: every
failed call is an ApiError. The server's own message, when it sent one, is
kept in `detail` for display.
"""

from typing import Optional


class ApiError(Exception):
    """
    A network failure or a non-2xx response.

    Attributes:
        message:      e.g. "Failed to fetch notes: 500 Internal Server Error"
        status_code:  HTTP status, or None when no response was received
        detail:       server-provided message ("Note not found", "Title is required")
    """

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        detail: Optional[str] = None,
    ):
        self.message = message
        self.status_code = status_code
        self.detail = detail
        super().__init__(message)
