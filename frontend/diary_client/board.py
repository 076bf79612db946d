"""
Diary Notes Client — Notes Board State
=======================================

What:  Everything the notes page shows and every action a user can take on it,
       with no rendering attached.
How:   Holds the loaded notes, one shared form draft, the search term and the
       current page. Network actions go through NotesApi; the local list is
       reconciled from each successful response instead of refetching.
Who:   A UI renders `current_notes`, `page_numbers`, `form`, `error` and
       `is_editing`, and forwards clicks and keystrokes to the methods here.

Feedback:
    - `notify(level, message)` receives every toast ("success" or "error").
    - `confirm(message)` is asked before a delete and must return True.
    - `error` is the dismissible banner; only a failed load sets it.
"""

import logging
import math
from typing import Callable, List, Optional

from diary_client.api import NotesApi
from diary_client.exceptions import ApiError
from diary_client.models import FormDraft, Note

logger = logging.getLogger("diary_client")

NOTES_PER_PAGE = 5

DELETE_PROMPT = "Are you sure you want to delete this note?"

Notifier = Callable[[str, str], None]
Confirmer = Callable[[str], bool]


def log_notifier(level: str, message: str) -> None:
    """Default toast sink: write to the `diary_client` logger."""
    if level == "error":
        logger.error(message)
    else:
        logger.info(message)


def with_detail(message: str, error: ApiError) -> str:
    return f"{message}: {error.detail}" if error.detail else message


class NotesBoard:
    """
    UI state for listing, searching, paginating, creating, editing and
    deleting notes.

    Args:
        api:      NotesApi used for every server call
        confirm:  asked before each delete; a False answer cancels it
        notify:   toast sink; defaults to logging
    """

    def __init__(
        self,
        api: NotesApi,
        confirm: Confirmer,
        notify: Optional[Notifier] = None,
    ) -> None:
        self.api = api
        self.confirm = confirm
        self.notify = notify or log_notifier

        self.notes: List[Note] = []
        self.form = FormDraft()
        self.search_term = ""
        self.current_page = 1
        self.error: Optional[str] = None

    @property
    def is_editing(self) -> bool:
        return self.form.id is not None

    # ── Loading ──────────────────────────────────────────────────────────

    async def load(self) -> None:
        """Replace `notes` with the server's list. On failure keep the old list."""
        try:
            notes = await self.api.list_notes()
        except ApiError as e:
            logger.warning("Loading notes failed: %s", e.message)
            self.error = e.message
            self.notify("error", with_detail("Error fetching notes", e))
            return

        self.notes = notes
        self.error = None
        self.notify("success", "Notes loaded successfully!")

    def dismiss_error(self) -> None:
        self.error = None

    # ── Form ─────────────────────────────────────────────────────────────

    def update_form(self, title: Optional[str] = None, content: Optional[str] = None) -> None:
        if title is not None:
            self.form.title = title
        if content is not None:
            self.form.content = content

    def begin_edit(self, note: Note) -> None:
        """Load `note` into the form; the next submit updates it."""
        self.form = FormDraft(id=note.id, title=note.title, content=note.content)

    def cancel_edit(self) -> None:
        self.form = FormDraft()

    async def submit(self) -> None:
        """
        Create (no draft id) or update (draft id set) from the form.

        A blank title or content is refused locally without a request.
        Success clears the form; failure keeps it so the user can retry.
        """
        if self.form.is_blank():
            self.notify("error", "Title and content are required")
            return

        if self.is_editing:
            await self._update()
        else:
            await self._create()

    async def _create(self) -> None:
        try:
            note = await self.api.create_note(self.form.title, self.form.content)
        except ApiError as e:
            self.notify("error", with_detail("Error adding note", e))
            return

        self.notes.append(note)
        self.form = FormDraft()
        self.notify("success", "Note added successfully!")

    async def _update(self) -> None:
        note_id = self.form.id
        try:
            note = await self.api.update_note(note_id, self.form.title, self.form.content)
        except ApiError as e:
            self.notify("error", with_detail("Error updating note", e))
            return

        self.notes = [note if n.id == note_id else n for n in self.notes]
        self.form = FormDraft()
        self.notify("success", "Note updated successfully!")

    # ── Deleting ─────────────────────────────────────────────────────────

    async def delete(self, note_id: str) -> bool:
        """Delete after confirmation. Returns True if the note was removed."""
        if not self.confirm(DELETE_PROMPT):
            return False

        try:
            await self.api.delete_note(note_id)
        except ApiError as e:
            self.notify("error", with_detail("Error deleting note", e))
            return False

        self.notes = [n for n in self.notes if n.id != note_id]
        if self.form.id == note_id:
            self.form = FormDraft()
        self.notify("success", "Note deleted successfully!")
        return True

    # ── Search and pagination ────────────────────────────────────────────

    def search(self, term: str) -> None:
        self.search_term = term
        self.current_page = 1

    def paginate(self, page: int) -> None:
        if page < 1:
            raise ValueError(f"Page numbers start at 1, got {page}")
        self.current_page = page

    @property
    def filtered_notes(self) -> List[Note]:
        if not self.search_term:
            return list(self.notes)
        return [n for n in self.notes if n.matches(self.search_term)]

    @property
    def page_count(self) -> int:
        return math.ceil(len(self.filtered_notes) / NOTES_PER_PAGE)

    @property
    def page_numbers(self) -> List[int]:
        return list(range(1, self.page_count + 1))

    @property
    def current_notes(self) -> List[Note]:
        start = (self.current_page - 1) * NOTES_PER_PAGE
        return self.filtered_notes[start:start + NOTES_PER_PAGE]
