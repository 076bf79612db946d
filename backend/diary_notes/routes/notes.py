"""
Diary Notes Backend — Notes Route Handlers
===========================================

What:  CRUD endpoints for notes:
           GET    /notes          list every note
           GET    /notes/{id}     fetch one note
           POST   /notes          create a note            (201)
           PUT    /notes/{id}     replace title/content
           DELETE /notes/{id}     delete, returning the last representation
How:   Handlers are thin: they hand path/body values to NoteService and
       return its response models. Errors are raised as exceptions and
       rendered by the handlers registered in main.py.
Who:   Called by the diary client (list, create, edit, delete flows).
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, status

from diary_notes.schemas.note import (
    MessageResponse,
    NoteInput,
    NoteResponse,
    ValidationErrorResponse,
)
from diary_notes.services.note_service import NoteService, get_note_service

logger = logging.getLogger(__name__)

# ── Router Configuration ──────────────────────────────────────────────────
router = APIRouter(prefix="/notes", tags=["Notes"])

NOT_FOUND = {404: {"description": "Note not found", "model": MessageResponse}}
INVALID = {400: {"description": "Missing or empty fields", "model": ValidationErrorResponse}}
SERVER_ERROR = {500: {"description": "Storage failure", "model": MessageResponse}}


@router.get(
    "",
    response_model=List[NoteResponse],
    responses={**SERVER_ERROR},
    summary="List all notes",
)
async def list_notes(
    service: NoteService = Depends(get_note_service),
) -> List[NoteResponse]:
    """Returns the full collection, oldest first. Search and paging are client-side."""
    return await service.list_notes()


@router.get(
    "/{note_id}",
    response_model=NoteResponse,
    responses={**NOT_FOUND, **SERVER_ERROR},
    summary="Get a single note by ID",
)
async def get_note(
    note_id: str,
    service: NoteService = Depends(get_note_service),
) -> NoteResponse:
    """
    Malformed ids are reported exactly like unknown ids (404), since the
    identifier format belongs to the storage layer.
    """
    return await service.get_note(note_id)


@router.post(
    "",
    response_model=NoteResponse,
    status_code=status.HTTP_201_CREATED,
    responses={**INVALID, **SERVER_ERROR},
    summary="Create a note",
)
async def create_note(
    payload: Optional[NoteInput] = None,
    service: NoteService = Depends(get_note_service),
) -> NoteResponse:
    return await service.create_note(payload)


@router.put(
    "/{note_id}",
    response_model=NoteResponse,
    responses={**INVALID, **NOT_FOUND, **SERVER_ERROR},
    summary="Replace a note's title and content",
)
async def update_note(
    note_id: str,
    payload: Optional[NoteInput] = None,
    service: NoteService = Depends(get_note_service),
) -> NoteResponse:
    """Wholesale replacement: both fields are required, updated_at is refreshed."""
    return await service.update_note(note_id, payload)


@router.delete(
    "/{note_id}",
    response_model=NoteResponse,
    responses={**NOT_FOUND, **SERVER_ERROR},
    summary="Delete a note",
)
async def delete_note(
    note_id: str,
    service: NoteService = Depends(get_note_service),
) -> NoteResponse:
    return await service.delete_note(note_id)
