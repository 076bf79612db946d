"""
Diary Notes Client — Package Initializer
=========================================

What: Headless client for the Diary Notes API.

    ┌─────────────────────────────────────┐
    │     NotesBoard (UI state model)     │  ← notes, form draft, search, page
    ├─────────────────────────────────────┤
    │       NotesApi (HTTP client)        │  ← httpx, one call per action
    └─────────────────────────────────────┘

A UI layer renders `NotesBoard` state and forwards user actions to it.
"""

from diary_client.api import NotesApi
from diary_client.board import NOTES_PER_PAGE, NotesBoard
from diary_client.exceptions import ApiError
from diary_client.models import FormDraft, Note

__version__ = "1.0.0"

__all__ = ["ApiError", "FormDraft", "Note", "NotesApi", "NotesBoard", "NOTES_PER_PAGE"]
