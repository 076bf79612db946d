"""
Diary Notes Backend — Note Service (Note Lifecycle)
====================================================

What:  Business rules of the note resource: input validation, timestamp
       stamping, not-found translation and response mapping.
How:   Wraps an injected NoteStore; every public method performs at most one
       storage call, and validation always happens before it.
Who:   Called by the /notes route handlers through `get_note_service`.

Operation Flow (PUT /notes/{id}):
    ┌──────────┐    ┌─────────────┐    ┌──────────────┐    ┌──────────────┐
    │  Route   │───▶│  Validate   │───▶│ Stamp        │───▶│ store.update │
    │          │    │  title/body │    │ updated_at   │    │ _by_id       │
    └──────────┘    └─────────────┘    └──────────────┘    └──────────────┘
                          │ 400                                   │ None → 404
"""

import logging
from typing import Any, Dict, List, Optional, Tuple

from fastapi import Request

from diary_notes.exceptions import NotFoundError, ValidationError
from diary_notes.models.note import utc_now
from diary_notes.schemas.note import NoteInput, NoteResponse, to_note_response
from diary_notes.storage.note_store import NoteStore

logger = logging.getLogger(__name__)

# Field name → message returned when the field is missing or blank
REQUIRED_FIELDS = (
    ("title", "Title is required"),
    ("content", "Content is required"),
)


def validate_note_input(payload: Optional[NoteInput]) -> Tuple[str, str]:
    """
    Check that title and content are present and non-empty after trimming.

    Returns:
        (title, content) exactly as submitted.

    Raises:
        ValidationError: one entry per failing field, in field order.
    """
    data = payload or NoteInput()
    errors: List[Dict[str, Any]] = []
    for field, message in REQUIRED_FIELDS:
        value = getattr(data, field)
        if value is None or not value.strip():
            error: Dict[str, Any] = {"type": "field", "msg": message, "path": field, "location": "body"}
            if value is not None:
                error["value"] = value
            errors.append(error)
    if errors:
        raise ValidationError(errors=errors)
    return data.title, data.content


class NoteService:
    """
    Note lifecycle operations over a NoteStore.

    Responsibilities:
        - list_notes / get_note: read and map
        - create_note: validate, stamp created_at == updated_at, insert
        - update_note: validate, stamp updated_at, replace title/content
        - delete_note: remove and return the last representation

    Storage failures surface as DatabaseError from the store and propagate
    untouched to the global handler.
    """

    def __init__(self, store: NoteStore) -> None:
        self.store = store

    async def list_notes(self) -> List[NoteResponse]:
        notes = await self.store.find_all()
        logger.debug("Fetched %d notes", len(notes))
        return [to_note_response(note) for note in notes]

    async def get_note(self, note_id: str) -> NoteResponse:
        """
        Raises:
            NotFoundError: unknown or malformed id (→ 404)
        """
        note = await self.store.find_by_id(note_id)
        if note is None:
            logger.info("Note not found for ID: %s", note_id)
            raise NotFoundError(resource_id=note_id)
        return to_note_response(note)

    async def create_note(self, payload: Optional[NoteInput]) -> NoteResponse:
        """
        Validate and insert a new note.

        Both timestamps are set to the same instant here, at the call site,
        rather than by a storage default.

        Raises:
            ValidationError: missing/blank title or content (no storage call)
        """
        title, content = validate_note_input(payload)
        note = await self.store.insert(title=title, content=content, created_at=utc_now())
        logger.info("Created new note: %s", note.id)
        return to_note_response(note)

    async def update_note(self, note_id: str, payload: Optional[NoteInput]) -> NoteResponse:
        """
        Replace title and content of an existing note and refresh updated_at.

        Validation runs before the id is looked up, so an invalid body on an
        unknown id is a 400, not a 404. The store keeps updated_at monotonic.

        Raises:
            ValidationError: missing/blank title or content (no storage call)
            NotFoundError: unknown or malformed id; nothing is created
        """
        title, content = validate_note_input(payload)
        logger.info("Updating note with ID: %s", note_id)
        note = await self.store.update_by_id(
            note_id, title=title, content=content, updated_at=utc_now()
        )
        if note is None:
            logger.info("Note not found for ID: %s", note_id)
            raise NotFoundError(resource_id=note_id)
        logger.info("Updated note: %s", note.id)
        return to_note_response(note)

    async def delete_note(self, note_id: str) -> NoteResponse:
        note = await self.store.delete_by_id(note_id)
        if note is None:
            logger.info("Note not found for ID: %s", note_id)
            raise NotFoundError(resource_id=note_id)
        logger.info("Deleted note: %s", note.id)
        return to_note_response(note)


# ── FastAPI Dependency ────────────────────────────────────────────────────
def get_note_service(request: Request) -> NoteService:
    """
    Provides a NoteService bound to the application's NoteStore.

    The store lives on `app.state.store`, set by `create_app(store=...)` or by
    the lifespan at startup.
    """
    return NoteService(request.app.state.store)
