"""
Diary Notes Backend — Database Engine & Session Factories
==========================================================

What:  Builds the async SQLAlchemy engine and session factory for a given
       Settings object, and declares the ORM base class.
How:   `build_engine()` picks pool options by backend (pooled for server
       databases, single shared connection for in-memory SQLite) and
       `build_session_factory()` wraps it in an `async_sessionmaker`.
Who:   Called by the application lifespan when it constructs the
       SqlAlchemyNoteStore, and by the test suite.
When:  Once per process (or per test); nothing here runs at import time.

Connection Pooling:
    pool_size / max_overflow:  from settings (server databases only)
    pool_pre_ping:             validates pooled connections before use
    pool_recycle=3600:         recycles connections every hour
"""

from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase
from sqlalchemy.pool import StaticPool

from diary_notes.config import Settings


# ── Base Model ────────────────────────────────────────────────────────────
class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy ORM models.

    Shares a single metadata object between the models, `create_schema()`
    and Alembic's autogenerate.
    """
    pass


# ── Engine Configuration ──────────────────────────────────────────────────
def build_engine(settings: Settings) -> AsyncEngine:
    """
    Create the async engine described by `settings`.

    SQLite URLs get no pool sizing; an in-memory SQLite database is pinned to
    one connection (StaticPool) so every session sees the same data.
    """
    url = settings.database_url
    echo = settings.log_level == "DEBUG"

    if settings.uses_sqlite:
        if make_url(url).database in (None, "", ":memory:"):
            return create_async_engine(
                url,
                echo=echo,
                poolclass=StaticPool,
                connect_args={"check_same_thread": False},
            )
        return create_async_engine(url, echo=echo)

    return create_async_engine(
        url,
        pool_size=settings.db_pool_size,
        max_overflow=settings.db_max_overflow,
        pool_pre_ping=settings.db_pool_pre_ping,
        pool_recycle=3600,
        echo=echo,
    )


# ── Session Factory ───────────────────────────────────────────────────────
def build_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """
    Sessions keep loaded attributes after commit (expire_on_commit=False), so
    a deleted note's last representation can still be read once the
    transaction has closed.
    """
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )


async def create_schema(engine: AsyncEngine) -> None:
    """Create every table registered on Base.metadata (idempotent)."""
    # Importing the model registers the `notes` table on the metadata.
    from diary_notes.models.note import Note  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
