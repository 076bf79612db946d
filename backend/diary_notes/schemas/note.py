"""
Diary Notes Backend — Pydantic Request/Response Schemas
========================================================

What:  Pydantic models defining the JSON contract between client and API,
       plus `to_note_response()`, the single record-to-wire mapping.
How:   FastAPI validates request bodies against the input model and
       serializes responses through the response models; the same models
       drive the OpenAPI document.
Who:   Used by route handlers and NoteService.

Design Decision:
    Schemas are separate from the SQLAlchemy model, so the storage key
    naming never leaks into the wire format. Every Note leaving the API goes
    through `to_note_response()`, which always sets `id` (and its `_id` alias
    for clients that read the document-store field name).
"""

from datetime import datetime
from typing import Any, List, Optional

from pydantic import BaseModel, Field

from diary_notes.models.note import Note, ensure_utc


# ══════════════════════════════════════════════════════════════════════════
# Request Models — What clients send
# ══════════════════════════════════════════════════════════════════════════


class NoteInput(BaseModel):
    """
    What:  Body of POST /notes and PUT /notes/{id}.

    Both fields are optional at the schema level: presence and emptiness are
    business rules checked by NoteService so that a missing field and an
    empty one produce the same field-level error.
    """
    title: Optional[str] = Field(default=None, description="Note title (required, non-empty)")
    content: Optional[str] = Field(default=None, description="Note body (required, non-empty)")

    model_config = {"extra": "ignore"}


# ══════════════════════════════════════════════════════════════════════════
# Response Models — What the API returns
# ══════════════════════════════════════════════════════════════════════════


class NoteResponse(BaseModel):
    """
    What:  Wire representation of a Note.
    Who:   Returned by every /notes endpoint (single item or array items).

    `_id` mirrors `id`; clients written against the document-store API read
    `note.id || note._id`.
    """
    id: str = Field(description="Unique note identifier")
    legacy_id: str = Field(alias="_id", description="Alias of `id`")
    title: str = Field(description="Note title")
    content: str = Field(description="Note body")
    created_at: datetime = Field(description="Creation timestamp (UTC ISO 8601)")
    updated_at: datetime = Field(description="Last update timestamp (UTC ISO 8601)")


class FieldError(BaseModel):
    """
    One field-level validation failure.

    Example:
        {"type": "field", "value": "", "msg": "Title is required",
         "path": "title", "location": "body"}
    """
    type: str = Field(default="field")
    value: Optional[Any] = Field(default=None, description="Rejected value, omitted when absent")
    msg: str = Field(description="Human-readable message for the field")
    path: str = Field(description="Name of the offending field")
    location: str = Field(default="body")


class ValidationErrorResponse(BaseModel):
    """Body of every 400 response."""
    errors: List[FieldError]


class MessageResponse(BaseModel):
    """Body of 404 and 500 responses."""
    message: str


class HealthResponse(BaseModel):
    """
    What:  Liveness status returned by GET /health.

    Reports only that the process is serving requests; it never consults the
    database.
    """
    status: str = Field(default="OK")


# ══════════════════════════════════════════════════════════════════════════
# Record → Wire mapping
# ══════════════════════════════════════════════════════════════════════════


def to_note_response(note: Note) -> NoteResponse:
    """
    Map a stored Note to its wire representation.

    Applied uniformly by NoteService to every returned note, so `id` is
    always present whatever the storage layer calls its key.
    """
    note_id = str(note.id)
    return NoteResponse(
        id=note_id,
        _id=note_id,
        title=note.title,
        content=note.content,
        created_at=ensure_utc(note.created_at),
        updated_at=ensure_utc(note.updated_at),
    )
