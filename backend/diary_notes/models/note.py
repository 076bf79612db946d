"""
Diary Notes Backend — Note SQLAlchemy Model
============================================

What:  ORM model representing the `notes` table.
How:   Inherits from the shared DeclarativeBase; Alembic reads it for
       migrations and `create_schema()` uses it to build the table directly.
Who:   Used by SqlAlchemyNoteStore for every persistence operation.

Table Design:
    - UUID primary key generated by the persistence layer on insert
    - title / content: TEXT, NOT NULL (emptiness is rejected before writes)
    - created_at: set once on insert
    - updated_at: set on insert and refreshed by every update
    - Index on created_at: the list endpoint orders by it
"""

import uuid
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import DateTime, Index, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from diary_notes.database import Base


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def ensure_utc(value: Optional[datetime]) -> Optional[datetime]:
    """
    Attach UTC to naive datetimes.

    Some backends (SQLite) hand back naive values even for timezone-aware
    columns; everything stored here was written as UTC.
    """
    if value is None or value.tzinfo is not None:
        return value
    return value.replace(tzinfo=timezone.utc)


class Note(Base):
    """
    A diary note.

    Lifecycle:
        1. Inserted by POST /notes with created_at == updated_at
        2. title/content replaced wholesale by PUT /notes/{id}, updated_at refreshed
        3. Removed by DELETE /notes/{id}; ids are never reused
    """

    __tablename__ = "notes"

    # ── Primary Key ───────────────────────────────────────────────────────
    id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
        comment="Unique identifier assigned on insert",
    )

    # ── Content ───────────────────────────────────────────────────────────
    title: Mapped[str] = mapped_column(
        Text,
        nullable=False,
        comment="Note title (non-empty)",
    )

    content: Mapped[str] = mapped_column(
        Text,
        nullable=False,
        comment="Note body (non-empty)",
    )

    # ── Timestamps ────────────────────────────────────────────────────────
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utc_now,
        comment="When this note was created (UTC)",
    )

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utc_now,
        comment="When this note was last updated (UTC)",
    )

    __table_args__ = (
        Index("idx_notes_created_at", "created_at"),
    )

    def __repr__(self) -> str:
        return f"<Note(id={self.id}, title={self.title!r}, updated_at='{self.updated_at}')>"
