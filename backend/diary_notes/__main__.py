"""
Diary Notes Backend — Server Entry Point
=========================================

Usage:
    DATABASE_URL=postgresql+asyncpg://... python -m diary_notes

Exits with status 1 when required configuration is missing. If the database
cannot be reached, the lifespan aborts startup and uvicorn exits non-zero.
"""

import logging
import sys

import uvicorn

from diary_notes.config import settings
from diary_notes.main import setup_logging

logger = logging.getLogger("diary_notes")


def main() -> int:
    setup_logging(settings.log_level)
    try:
        settings.validate_required()
    except ValueError as e:
        logger.error("Configuration error: %s", str(e))
        return 1

    uvicorn.run(
        "diary_notes.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
        lifespan="on",
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
