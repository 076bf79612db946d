"""
Diary Notes Backend — Custom Exception Hierarchy
=================================================

What:  Application-specific exceptions for each failure class of the note API.
How:   Each exception carries a client-safe message and an optional context
       dict. Handlers registered in main.py turn them into JSON responses;
       the context is logged and never returned.
Who:   Raised by the service and storage layers and by the lifespan handler.

Exception Hierarchy:
    DiaryNotesError (base)
    ├── ValidationError   → 400 {"errors": [...]}
    ├── NotFoundError     → 404 {"message": "Note not found"}
    ├── DatabaseError     → 500 {"message": "<operation> failed"}
    └── StartupError      → process refuses to start (exit status non-zero)
"""

from typing import Any, Dict, List, Optional


class DiaryNotesError(Exception):
    """
    Base exception for all Diary Notes application errors.

    Attributes:
        message:  Client-facing description (safe to return in a response)
        context:  Extra debugging detail (logged, NOT returned to the client)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(DiaryNotesError):
    """
    Raised when a note payload fails validation.

    Carries a list of field-level errors so a client can render each message
    next to its input. Every entry has the shape::

        {"type": "field", "msg": "Title is required", "path": "title",
         "location": "body", "value": ""}

    HTTP: 400 Bad Request, body ``{"errors": [...]}``.
    """

    def __init__(
        self,
        errors: List[Dict[str, Any]],
        message: str = "Validation failed",
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        ctx["fields"] = [e.get("path") for e in errors]
        super().__init__(message=message, context=ctx)
        self.errors = errors


class NotFoundError(DiaryNotesError):
    """
    Raised when an operation targets a note id absent from storage.

    The storage layer returns None for a missing record; the service layer
    converts that into this exception. The message is fixed so clients can
    match on it.
    """

    def __init__(
        self,
        resource_id: Optional[str] = None,
        message: str = "Note not found",
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if resource_id:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)
        self.resource_id = resource_id


class DatabaseError(DiaryNotesError):
    """
    Raised when a storage operation fails (connectivity, constraint, ...).

    The message names the failed operation only ("Error fetching notes");
    driver errors, SQL and table names stay in `context` and in the logs.

    HTTP: 500 Internal Server Error.
    """

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class StartupError(DiaryNotesError):
    """
    Raised while the application starts when it cannot serve correctly:
    missing DATABASE_URL or an unreachable database. Raising it from the
    lifespan aborts startup; `python -m diary_notes` exits with status 1.
    """

    def __init__(
        self,
        message: str = "Application startup failed",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
