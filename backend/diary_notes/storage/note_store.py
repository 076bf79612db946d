"""
Diary Notes Backend — Note Storage Client
==========================================

What:  The storage collaborator of the note API: find-all, find-by-id,
       insert, update-by-id and delete-by-id over the `notes` table.
How:   `NoteStore` is the abstract contract; `SqlAlchemyNoteStore` implements
       it with one AsyncSession transaction per call, so each create, update
       or delete is a single atomic storage operation.
Who:   Built by the application lifespan (or handed to `create_app()` by
       tests) and used only through NoteService.

Error Handling:
    Missing records are reported as None; the service layer decides that
    means 404. Any SQLAlchemyError is logged and re-raised as DatabaseError
    carrying the operation's client-safe message.
"""

import logging
import uuid
from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional

from sqlalchemy import select, text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from diary_notes.database import build_session_factory, create_schema
from diary_notes.exceptions import DatabaseError
from diary_notes.models.note import Note, ensure_utc

logger = logging.getLogger(__name__)


def parse_note_id(note_id: str) -> Optional[uuid.UUID]:
    """Returns the UUID key for `note_id`, or None when it cannot be one."""
    try:
        return uuid.UUID(str(note_id))
    except (TypeError, ValueError):
        return None


class NoteStore(ABC):
    """Abstract storage contract for notes."""

    @abstractmethod
    async def find_all(self) -> List[Note]:
        """Return every note, oldest first."""

    @abstractmethod
    async def find_by_id(self, note_id: str) -> Optional[Note]:
        """Return the note with `note_id`, or None if unknown or malformed."""

    @abstractmethod
    async def insert(self, title: str, content: str, created_at: datetime) -> Note:
        """Store a new note stamped with `created_at` for both timestamps."""

    @abstractmethod
    async def update_by_id(
        self, note_id: str, title: str, content: str, updated_at: datetime
    ) -> Optional[Note]:
        """Replace title/content and refresh updated_at. None if not found."""

    @abstractmethod
    async def delete_by_id(self, note_id: str) -> Optional[Note]:
        """Delete the note and return its last state. None if not found."""

    @abstractmethod
    async def ping(self) -> None:
        """Raise DatabaseError unless the backend answers a trivial query."""

    async def close(self) -> None:
        """Release backend resources. No-op by default."""


class SqlAlchemyNoteStore(NoteStore):
    """
    NoteStore backed by an async SQLAlchemy engine.

    Works with any async driver SQLAlchemy supports (asyncpg in production,
    aiosqlite in tests).
    """

    def __init__(
        self,
        engine: AsyncEngine,
        session_factory: Optional[async_sessionmaker[AsyncSession]] = None,
    ) -> None:
        self._engine = engine
        self._session_factory = session_factory or build_session_factory(engine)

    @property
    def engine(self) -> AsyncEngine:
        return self._engine

    async def create_schema(self) -> None:
        try:
            await create_schema(self._engine)
        except SQLAlchemyError as e:
            raise self._wrap(e, "Error creating notes table", "create_schema")

    async def find_all(self) -> List[Note]:
        try:
            async with self._session_factory() as session:
                result = await session.execute(select(Note).order_by(Note.created_at))
                return list(result.scalars().all())
        except SQLAlchemyError as e:
            raise self._wrap(e, "Error fetching notes", "find_all")

    async def find_by_id(self, note_id: str) -> Optional[Note]:
        key = parse_note_id(note_id)
        if key is None:
            return None
        try:
            async with self._session_factory() as session:
                return await session.get(Note, key)
        except SQLAlchemyError as e:
            raise self._wrap(e, "Error fetching note", "find_by_id", note_id)

    async def insert(self, title: str, content: str, created_at: datetime) -> Note:
        note = Note(title=title, content=content, created_at=created_at, updated_at=created_at)
        try:
            async with self._session_factory() as session:
                async with session.begin():
                    session.add(note)
            return note
        except SQLAlchemyError as e:
            raise self._wrap(e, "Error creating note", "insert")

    async def update_by_id(
        self, note_id: str, title: str, content: str, updated_at: datetime
    ) -> Optional[Note]:
        key = parse_note_id(note_id)
        if key is None:
            return None
        try:
            async with self._session_factory() as session:
                async with session.begin():
                    note = await session.get(Note, key, with_for_update=True)
                    if note is None:
                        return None
                    note.title = title
                    note.content = content
                    # updated_at never moves backwards, even if the clock does
                    note.updated_at = max(ensure_utc(note.updated_at), ensure_utc(updated_at))
            return note
        except SQLAlchemyError as e:
            raise self._wrap(e, "Error updating note", "update_by_id", note_id)

    async def delete_by_id(self, note_id: str) -> Optional[Note]:
        key = parse_note_id(note_id)
        if key is None:
            return None
        try:
            async with self._session_factory() as session:
                async with session.begin():
                    note = await session.get(Note, key)
                    if note is None:
                        return None
                    await session.delete(note)
            return note
        except SQLAlchemyError as e:
            raise self._wrap(e, "Error deleting note", "delete_by_id", note_id)

    async def ping(self) -> None:
        try:
            async with self._engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
        except (SQLAlchemyError, OSError) as e:
            raise self._wrap(e, "Database is unreachable", "ping")

    async def close(self) -> None:
        await self._engine.dispose()

    @staticmethod
    def _wrap(
        exc: Exception, message: str, operation: str, note_id: Optional[str] = None
    ) -> DatabaseError:
        context = {"operation": operation, "original_error": type(exc).__name__}
        if note_id is not None:
            context["note_id"] = note_id
        logger.error("%s: %s | Context: %s", message, str(exc), context)
        return DatabaseError(message=message, context=context)
