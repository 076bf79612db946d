"""
Diary Notes Client — NotesBoard Tests
======================================

What we test:
    ✅ load replaces notes on success, keeps them and sets the banner on failure
    ✅ submit refuses blank drafts without a request
    ✅ create appends, update replaces by id, delete filters locally
    ✅ delete asks first and does nothing when declined
    ✅ mutation failures toast (with server detail) but never set the banner
    ✅ search and pagination are local
"""

import pytest
from pydantic import ValidationError as PydanticValidationError

from diary_client.board import DELETE_PROMPT, NOTES_PER_PAGE, NotesBoard
from diary_client.models import Note


def titles(notes):
    return [n.title for n in notes]


class TestLoad:

    @pytest.mark.asyncio
    async def test_load_success(self, board, fake_server, notifications):
        fake_server.seed("A", "a")
        board.error = "stale"

        await board.load()

        assert titles(board.notes) == ["A"]
        assert board.error is None
        assert notifications == [("success", "Notes loaded successfully!")]

    @pytest.mark.asyncio
    async def test_load_failure_keeps_notes(self, board, fake_server, notifications):
        fake_server.seed("A", "a")
        await board.load()
        fake_server.fail_with = (500, {"message": "Error fetching notes"})

        await board.load()

        assert titles(board.notes) == ["A"]
        assert board.error == "Failed to fetch notes: 500 Internal Server Error"
        assert notifications[-1] == ("error", "Error fetching notes: Error fetching notes")

    @pytest.mark.asyncio
    async def test_malformed_list_is_reported(self, board, fake_server, notifications):
        fake_server.seed("A", "a")
        await board.load()
        fake_server.respond_with = (200, [{"title": "no id"}])

        await board.load()

        assert titles(board.notes) == ["A"]
        assert board.error == "Failed to fetch notes: unexpected response shape"
        assert notifications[-1] == ("error", "Error fetching notes")

    @pytest.mark.asyncio
    async def test_dismiss_error(self, board, fake_server):
        fake_server.network_down = True
        await board.load()
        assert board.error

        board.dismiss_error()

        assert board.error is None


class TestSubmit:

    @pytest.mark.asyncio
    @pytest.mark.parametrize("title, content", [("", "body"), ("title", "   "), ("  ", "")])
    async def test_blank_draft_is_refused_locally(self, board, fake_server, notifications, title, content):
        board.update_form(title=title, content=content)

        await board.submit()

        assert fake_server.requests == []
        assert notifications == [("error", "Title and content are required")]

    @pytest.mark.asyncio
    async def test_create_appends_and_clears_form(self, board, fake_server, notifications):
        fake_server.seed("Existing", "x")
        await board.load()
        board.update_form(title="New", content="Body")

        await board.submit()

        assert titles(board.notes) == ["Existing", "New"]
        assert board.form.title == "" and board.form.content == ""
        assert not board.is_editing
        assert notifications[-1] == ("success", "Note added successfully!")
        assert fake_server.requests[-1] == ("POST", "/notes")

    @pytest.mark.asyncio
    async def test_update_replaces_by_id(self, board, fake_server, notifications):
        first = fake_server.seed("First", "1")
        fake_server.seed("Second", "2")
        await board.load()

        board.begin_edit(board.notes[0])
        assert board.is_editing
        assert board.form.id == first["id"]
        board.update_form(title="First, edited")
        await board.submit()

        assert titles(board.notes) == ["First, edited", "Second"]
        assert not board.is_editing
        assert notifications[-1] == ("success", "Note updated successfully!")
        assert fake_server.requests[-1] == ("PUT", f"/notes/{first['id']}")

    @pytest.mark.asyncio
    async def test_edit_uses_document_id(self, board, fake_server):
        legacy = fake_server.seed("Legacy", "body", document_id_only=True)
        await board.load()

        board.begin_edit(board.notes[0])

        assert board.form.id == legacy["_id"]

    @pytest.mark.asyncio
    async def test_cancel_edit(self, board):
        board.begin_edit(Note(id="n1", title="T", content="C"))

        board.cancel_edit()

        assert not board.is_editing
        assert (board.form.title, board.form.content) == ("", "")

    @pytest.mark.asyncio
    async def test_create_failure_keeps_draft(self, board, fake_server, notifications):
        fake_server.fail_with = (400, {"errors": [{"type": "field", "msg": "Title is required",
                                                   "path": "title", "location": "body"}]})
        board.update_form(title="T", content="C")

        await board.submit()

        assert board.notes == []
        assert board.form.title == "T"
        assert board.error is None
        assert notifications == [("error", "Error adding note: Title is required")]

    @pytest.mark.asyncio
    async def test_malformed_created_note_keeps_draft(self, board, fake_server, notifications):
        fake_server.respond_with = (201, {"title": "T"})
        board.update_form(title="T", content="C")

        await board.submit()

        assert board.notes == []
        assert board.form.title == "T"
        assert notifications == [("error", "Error adding note")]

    @pytest.mark.asyncio
    async def test_form_rejects_non_text(self, board):
        with pytest.raises(PydanticValidationError):
            board.update_form(title=123)

        assert board.form.title == ""

    @pytest.mark.asyncio
    async def test_update_of_vanished_note(self, board, notifications):
        board.begin_edit(Note(id="gone", title="T", content="C"))

        await board.submit()

        assert board.is_editing
        assert board.error is None
        assert notifications == [("error", "Error updating note: Note not found")]


class TestDelete:

    @pytest.mark.asyncio
    async def test_delete_after_confirmation(self, board, fake_server, notifications):
        prompts = []
        board.confirm = lambda message: prompts.append(message) or True
        note = fake_server.seed("Doomed", "x")
        await board.load()

        assert await board.delete(note["id"]) is True

        assert prompts == [DELETE_PROMPT]
        assert board.notes == []
        assert notifications[-1] == ("success", "Note deleted successfully!")

    @pytest.mark.asyncio
    async def test_declined_confirmation_sends_nothing(self, board, fake_server, confirm_answers):
        note = fake_server.seed("Kept", "x")
        await board.load()
        requests_before = list(fake_server.requests)
        confirm_answers.append(False)

        assert await board.delete(note["id"]) is False

        assert fake_server.requests == requests_before
        assert titles(board.notes) == ["Kept"]

    @pytest.mark.asyncio
    async def test_delete_failure(self, board, fake_server, notifications):
        note = fake_server.seed("Kept", "x")
        await board.load()
        fake_server.fail_with = (500, {"message": "Error deleting note"})

        assert await board.delete(note["id"]) is False

        assert titles(board.notes) == ["Kept"]
        assert board.error is None
        assert notifications[-1] == ("error", "Error deleting note: Error deleting note")


class TestSearchAndPagination:

    @pytest.fixture
    def loaded_board(self, board) -> NotesBoard:
        board.notes = [
            Note(id=str(i), title=f"Note {i}", content="groceries" if i % 3 == 0 else "work")
            for i in range(1, 13)
        ]
        return board

    @pytest.mark.asyncio
    async def test_pages(self, loaded_board):
        assert loaded_board.page_count == 3
        assert loaded_board.page_numbers == [1, 2, 3]
        assert len(loaded_board.current_notes) == NOTES_PER_PAGE

        loaded_board.paginate(3)

        assert titles(loaded_board.current_notes) == ["Note 11", "Note 12"]

    @pytest.mark.asyncio
    async def test_search_matches_title_or_content_case_insensitively(self, loaded_board, fake_server):
        loaded_board.search("GROCERIES")
        assert titles(loaded_board.filtered_notes) == ["Note 3", "Note 6", "Note 9", "Note 12"]

        loaded_board.search("note 1")
        assert titles(loaded_board.filtered_notes) == ["Note 1", "Note 10", "Note 11", "Note 12"]
        assert fake_server.requests == []

    @pytest.mark.asyncio
    async def test_search_resets_page(self, loaded_board):
        loaded_board.paginate(3)

        loaded_board.search("groceries")

        assert loaded_board.current_page == 1
        assert loaded_board.page_count == 1

    @pytest.mark.asyncio
    async def test_empty_board_has_no_pages(self, board):
        assert board.page_count == 0
        assert board.page_numbers == []
        assert board.current_notes == []

    @pytest.mark.asyncio
    async def test_page_numbers_start_at_one(self, board):
        with pytest.raises(ValueError):
            board.paginate(0)
