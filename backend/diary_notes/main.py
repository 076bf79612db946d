"""
Diary Notes Backend — FastAPI Application Factory
==================================================

What:  Creates and configures the FastAPI application instance.
How:   Factory pattern: create_app() returns a configured FastAPI instance
       bound to explicit Settings and, optionally, an explicit NoteStore.
Who:   Called by uvicorn (`diary_notes.main:app`), by `python -m diary_notes`
       and by the test suite (with a test-double store).
When:  Once per process; the lifespan connects the store before the first
       request and disposes it on shutdown.

Application Architecture:
    ┌─────────────────────────────────────────────────────┐
    │                   FastAPI App                       │
    │                                                     │
    │  Middleware Chain:                                  │
    │  Req ID → Logging → Sec headers → CORS → Errors     │
    │                                                     │
    │  Routes:                                            │
    │  ┌──────────────────────┐ ┌──────────────────────┐  │
    │  │ /notes, /notes/{id}  │ │ GET /health, GET /   │  │
    │  └──────────────────────┘ └──────────────────────┘  │
    │                                                     │
    │  Exception Handlers:                                │
    │  ┌────────────────────────────────────────────────┐ │
    │  │ Validation→400 │ NotFound→404 │ DB/other→500   │ │
    │  └────────────────────────────────────────────────┘ │
    └─────────────────────────────────────────────────────┘

Lifecycle:
    Startup:
    1. Configure logging
    2. Validate configuration (StartupError if DATABASE_URL is missing)
    3. Build the NoteStore unless one was injected
    4. Ping the database (StartupError if unreachable)
    5. Optionally create the notes table

    Shutdown:
    1. Dispose the store's engine (only if the lifespan built it)
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import Any, AsyncGenerator, Dict, List, Optional

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from diary_notes import __version__
from diary_notes.config import Settings, settings as default_settings
from diary_notes.database import build_engine
from diary_notes.exceptions import (
    DatabaseError,
    NotFoundError,
    StartupError,
    ValidationError,
)
from diary_notes.middleware.errors import GENERIC_ERROR_MESSAGE, UnhandledErrorMiddleware
from diary_notes.middleware.logging import RequestLoggingMiddleware
from diary_notes.middleware.request_id import REQUEST_ID_HEADER, RequestIDMiddleware, request_id_var
from diary_notes.middleware.security_headers import SecurityHeadersMiddleware
from diary_notes.routes import health, notes
from diary_notes.storage.note_store import NoteStore, SqlAlchemyNoteStore

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging(level: str = "INFO") -> None:
    """
    Configure the root logger for the whole application.

    Format: %(asctime)s [%(levelname)s] %(name)s: %(message)s, on stdout.
    Called once during startup, before anything else logs.
    """
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    # Quiet chatty third-party loggers
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("aiosqlite").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

def _build_store(app_settings: Settings) -> NoteStore:
    try:
        app_settings.validate_required()
    except ValueError as e:
        logger.error("Configuration error: %s", str(e))
        raise StartupError(message=str(e), context={"stage": "configuration"}) from e

    try:
        return SqlAlchemyNoteStore(build_engine(app_settings))
    except (SQLAlchemyError, ImportError, ValueError) as e:
        logger.error("Could not create database engine: %s", str(e))
        raise StartupError(
            message="Could not create database engine",
            context={"stage": "engine", "original_error": type(e).__name__},
        ) from e


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Bring the storage client up before serving and tear it down afterwards.

    Any failure before `yield` raises StartupError, which aborts server
    startup: the process must not serve requests it cannot fulfil.
    """
    app_settings: Settings = app.state.settings

    # ── Startup ───────────────────────────────────────────────────────────
    setup_logging(app_settings.log_level)
    logger.info("Diary Notes Backend %s starting up...", __version__)

    owns_store = app.state.store is None
    if owns_store:
        app.state.store = _build_store(app_settings)
    store: NoteStore = app.state.store

    try:
        await store.ping()
        if app_settings.db_create_schema and isinstance(store, SqlAlchemyNoteStore):
            await store.create_schema()
    except DatabaseError as e:
        logger.error("Database unavailable at startup: %s | Context: %s", e.message, e.context)
        if owns_store:
            await store.close()
            app.state.store = None
        raise StartupError(message="Could not connect to the database", context=e.context) from e

    logger.info("Connected to database")
    logger.info("Server ready at http://%s:%d", app_settings.host, app_settings.port)

    yield

    # ── Shutdown ──────────────────────────────────────────────────────────
    logger.info("Diary Notes Backend shutting down...")
    if owns_store:
        await store.close()
        app.state.store = None
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def request_validation_errors(exc: RequestValidationError) -> List[Dict[str, Any]]:
    """
    Translate FastAPI/Pydantic request errors into the field-error shape used
    by every 400 response.
    """
    errors = []
    for err in exc.errors():
        loc = [str(part) for part in err.get("loc", ())]
        location = loc[0] if loc and loc[0] in {"body", "path", "query", "header"} else "body"
        path = ".".join(loc[1:] if loc and loc[0] == location else loc)
        entry: Dict[str, Any] = {
            "type": "field",
            "msg": err.get("msg", "Invalid value"),
            "path": path,
            "location": location,
        }
        if path and err.get("type") != "missing" and "input" in err:
            entry["value"] = err["input"]
        errors.append(entry)
    return errors


def register_exception_handlers(app: FastAPI) -> None:
    """
    Map exception types to HTTP status codes and response bodies.

    Handler hierarchy:
        ValidationError         → 400 {"errors": [...]}
        RequestValidationError  → 400 {"errors": [...]}
        NotFoundError           → 404 {"message": "Note not found"}
        DatabaseError           → 500 {"message": "Error creating note", ...}
        Exception (fallback)    → 500 {"message": "Something went wrong!"}

    Response bodies never contain stack traces, SQL or driver messages;
    those are logged server-side with the request ID.
    """

    @app.exception_handler(ValidationError)
    async def handle_validation_error(request: Request, exc: ValidationError):
        rid = request_id_var.get("")
        logger.warning("[%s] Validation errors: %s", rid, exc.errors)
        return JSONResponse(
            status_code=400,
            content=jsonable_encoder({"errors": exc.errors}),
        )

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation_error(request: Request, exc: RequestValidationError):
        rid = request_id_var.get("")
        errors = request_validation_errors(exc)
        logger.warning("[%s] Request validation errors: %s", rid, errors)
        return JSONResponse(
            status_code=400,
            content=jsonable_encoder({"errors": errors}),
        )

    @app.exception_handler(NotFoundError)
    async def handle_not_found(request: Request, exc: NotFoundError):
        return JSONResponse(
            status_code=404,
            content={"message": exc.message},
        )

    @app.exception_handler(DatabaseError)
    async def handle_database_error(request: Request, exc: DatabaseError):
        """Storage failure: operation-level message out, details in the log only."""
        rid = request_id_var.get("")
        logger.error("[%s] Database error: %s | Context: %s", rid, exc.message, exc.context)
        return JSONResponse(
            status_code=500,
            content={"message": exc.message},
        )

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        """Last resort for errors raised outside UnhandledErrorMiddleware."""
        rid = getattr(request.state, "request_id", "")
        logger.error("[%s] Unhandled error: %s", rid, str(exc), exc_info=True)
        return JSONResponse(
            status_code=500,
            content={"message": GENERIC_ERROR_MESSAGE},
        )


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app(
    settings: Optional[Settings] = None,
    store: Optional[NoteStore] = None,
) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        settings: configuration; defaults to the environment-loaded singleton.
        store:    storage client; when omitted the lifespan builds a
                  SqlAlchemyNoteStore from `settings.database_url`.

    Returns:
        Fully configured FastAPI instance.
    """
    app_settings = settings or default_settings

    app = FastAPI(
        title="Diary Notes API",
        description="Create, list, edit and delete private diary notes.",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.settings = app_settings
    app.state.store = store

    # ── Register Middleware ───────────────────────────────────────────────
    # Middleware executes in REVERSE order of addition.
    app.add_middleware(UnhandledErrorMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=app_settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE"],
        allow_headers=["*"],
        expose_headers=[REQUEST_ID_HEADER],
    )
    app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    # ── Register Exception Handlers ───────────────────────────────────────
    register_exception_handlers(app)

    # ── Register Routes ───────────────────────────────────────────────────
    app.include_router(health.router)
    app.include_router(notes.router)

    return app


# ── Application Instance ─────────────────────────────────────────────────
# uvicorn expects `diary_notes.main:app`; building it touches no database.
app = create_app()
