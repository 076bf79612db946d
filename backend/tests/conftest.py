"""
Diary Notes Backend — Test Configuration (conftest.py)
=======================================================

What:  Shared pytest fixtures for the backend test suite.
How:   API tests run the real application against an in-memory SQLite
       database (aiosqlite); failure scenarios swap in AsyncMock stores.

Fixture Hierarchy (all function-scoped):
    ├── test_settings: Settings pointing at in-memory SQLite
    ├── note_store: SqlAlchemyNoteStore with the notes table created
    ├── mock_store: AsyncMock NoteStore (service unit tests)
    ├── unavailable_store: NoteStore double simulating a database outage
    ├── test_client: HTTPX AsyncClient talking to create_app(store=note_store)
    └── make_client: builds a client around any store
"""

import os
from datetime import datetime, timezone
from typing import AsyncGenerator
from unittest.mock import AsyncMock
from uuid import uuid4

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

# ══════════════════════════════════════════════════════════════════════════
# Environment Setup
# ══════════════════════════════════════════════════════════════════════════

# Set BEFORE any application import: the settings singleton reads these.
os.environ["DATABASE_URL"] = "sqlite+aiosqlite://"
os.environ["LOG_LEVEL"] = "WARNING"

from diary_notes.config import Settings  # noqa: E402
from diary_notes.database import build_engine  # noqa: E402
from diary_notes.exceptions import DatabaseError  # noqa: E402
from diary_notes.main import create_app  # noqa: E402
from diary_notes.models.note import Note  # noqa: E402
from diary_notes.storage.note_store import NoteStore, SqlAlchemyNoteStore  # noqa: E402


# ══════════════════════════════════════════════════════════════════════════
# Function-Scoped Fixtures
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def test_settings() -> Settings:
    return Settings(database_url="sqlite+aiosqlite://", log_level="WARNING")


@pytest_asyncio.fixture
async def note_store(test_settings) -> AsyncGenerator[SqlAlchemyNoteStore, None]:
    """
    A real SqlAlchemyNoteStore on a fresh in-memory database.

    Each test gets its own engine, hence its own empty database.
    """
    store = SqlAlchemyNoteStore(build_engine(test_settings))
    await store.create_schema()
    yield store
    await store.close()


@pytest.fixture
def mock_store():
    """
    An AsyncMock standing in for NoteStore.

    Usage:
        mock_store.find_by_id.return_value = None
        with pytest.raises(NotFoundError):
            await NoteService(mock_store).get_note("abc")
    """
    return AsyncMock(spec=NoteStore)


@pytest.fixture
def unavailable_store():
    """
    A NoteStore double whose every operation fails like a dead database.
    """
    store = AsyncMock(spec=NoteStore)
    outage = DatabaseError(message="Database is unreachable", context={"operation": "ping"})
    store.ping.side_effect = outage
    store.find_all.side_effect = DatabaseError(message="Error fetching notes")
    store.find_by_id.side_effect = DatabaseError(message="Error fetching note")
    store.insert.side_effect = DatabaseError(message="Error creating note")
    store.update_by_id.side_effect = DatabaseError(message="Error updating note")
    store.delete_by_id.side_effect = DatabaseError(message="Error deleting note")
    return store


@pytest.fixture
def sample_note() -> Note:
    """A transient Note as the store would return it."""
    now = datetime.now(timezone.utc)
    return Note(
        id=uuid4(),
        title="Test Note",
        content="This is a test note.",
        created_at=now,
        updated_at=now,
    )


@pytest.fixture
def make_client(test_settings):
    """
    Factory for HTTPX clients bound to a fresh app around `store`.

    `raise_app_exceptions=False` lets tests observe the 500 produced by the
    catch-all handler instead of the re-raised exception.
    """
    def _make(store: NoteStore, raise_app_exceptions: bool = True) -> AsyncClient:
        app = create_app(settings=test_settings, store=store)
        transport = ASGITransport(app=app, raise_app_exceptions=raise_app_exceptions)
        return AsyncClient(transport=transport, base_url="http://test")

    return _make


@pytest_asyncio.fixture
async def test_client(make_client, note_store) -> AsyncGenerator[AsyncClient, None]:
    """
    HTTPX AsyncClient wired to the application and a real SQLite store.

    Usage:
        async def test_health(test_client):
            response = await test_client.get("/health")
            assert response.status_code == 200
    """
    async with make_client(note_store) as client:
        yield client
