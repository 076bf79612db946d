"""
Diary Notes Backend — Application Package Initializer
======================================================

What: Marks the `diary_notes` directory as a Python package.
Who:  Imported by uvicorn (`diary_notes.main:app`), Alembic and pytest.

Architecture Note:
    The backend is layered:

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │      Services (Note lifecycle)      │  ← validation, timestamps, mapping
    ├─────────────────────────────────────┤
    │       Storage (NoteStore client)    │  ← one atomic operation per call
    ├─────────────────────────────────────┤
    │    Models, Schemas & Database       │  ← SQLAlchemy ORM + Pydantic
    └─────────────────────────────────────┘

    The storage client is built explicitly and handed to the application
    factory, so every layer above it can run against a test double.
"""

__version__ = "1.0.0"
