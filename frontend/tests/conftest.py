"""
Diary Notes Client — Test Configuration (conftest.py)
======================================================

What:  Fixtures that run NotesApi and NotesBoard against an in-process fake
       server built on httpx.MockTransport.

Fixture Hierarchy (all function-scoped):
    ├── fake_server: in-memory notes collection speaking the API's wire format
    ├── http_client: AsyncClient routed to fake_server
    ├── api: NotesApi on http_client
    ├── notifications: list of (level, message) toasts
    ├── confirm_answers: answers returned to delete confirmations
    └── board: NotesBoard wired to all of the above
"""

import json
import uuid
from datetime import datetime, timezone
from typing import Any, AsyncGenerator, Dict, List, Optional, Tuple

import httpx
import pytest
import pytest_asyncio

from diary_client.api import NotesApi
from diary_client.board import NotesBoard

BASE_URL = "http://api.test/notes"


class FakeNotesServer:
    """
    Minimal stand-in for the notes API.

    `fail_with` forces the next responses to an error status and body;
    `respond_with` does the same for a successful status with any body;
    `requests` records every (method, path) seen.
    """

    def __init__(self) -> None:
        self.notes: Dict[str, dict] = {}
        self.requests: List[Tuple[str, str]] = []
        self.fail_with: Optional[Tuple[int, dict]] = None
        self.respond_with: Optional[Tuple[int, Any]] = None
        self.network_down = False

    def seed(self, title: str, content: str, document_id_only: bool = False) -> dict:
        note_id = uuid.uuid4().hex
        now = datetime.now(timezone.utc).isoformat()
        note = {"_id": note_id, "title": title, "content": content,
                "created_at": now, "updated_at": now}
        if not document_id_only:
            note["id"] = note_id
        self.notes[note_id] = note
        return note

    def handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append((request.method, request.url.path))

        if self.network_down:
            raise httpx.ConnectError("connection refused", request=request)
        if self.fail_with is not None:
            status, body = self.fail_with
            return httpx.Response(status, json=body)
        if self.respond_with is not None:
            status, body = self.respond_with
            return httpx.Response(status, json=body)

        parts = request.url.path.strip("/").split("/")
        note_id = parts[1] if len(parts) > 1 else None

        if note_id is None:
            if request.method == "GET":
                return httpx.Response(200, json=list(self.notes.values()))
            if request.method == "POST":
                body = json.loads(request.content)
                note = self.seed(body["title"], body["content"])
                return httpx.Response(201, json=note)
            return httpx.Response(405)

        note = self.notes.get(note_id)
        if note is None:
            return httpx.Response(404, json={"message": "Note not found"})
        if request.method == "GET":
            return httpx.Response(200, json=note)
        if request.method == "PUT":
            body = json.loads(request.content)
            note.update(title=body["title"], content=body["content"],
                        updated_at=datetime.now(timezone.utc).isoformat())
            return httpx.Response(200, json=note)
        if request.method == "DELETE":
            return httpx.Response(200, json=self.notes.pop(note_id))
        return httpx.Response(405)


@pytest.fixture
def fake_server() -> FakeNotesServer:
    return FakeNotesServer()


@pytest_asyncio.fixture
async def http_client(fake_server) -> AsyncGenerator[httpx.AsyncClient, None]:
    async with httpx.AsyncClient(transport=httpx.MockTransport(fake_server.handle)) as client:
        yield client


@pytest.fixture
def api(http_client) -> NotesApi:
    return NotesApi(BASE_URL, client=http_client)


@pytest.fixture
def notifications() -> List[Tuple[str, str]]:
    return []


@pytest.fixture
def confirm_answers() -> List[bool]:
    """Answers popped per confirmation; an empty list means "yes"."""
    return []


@pytest.fixture
def board(api, notifications, confirm_answers) -> NotesBoard:
    def confirm(message: str) -> bool:
        return confirm_answers.pop(0) if confirm_answers else True

    return NotesBoard(
        api,
        confirm=confirm,
        notify=lambda level, message: notifications.append((level, message)),
    )
