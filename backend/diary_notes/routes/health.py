"""
Diary Notes Backend — Health Check & Root Routes
=================================================

What:  Liveness endpoint (GET /health) and the plain-text banner (GET /).
How:   Both return constants; neither touches the database.
Who:   Called by container health checks, load balancers and uptime monitors.

Health Check Philosophy:
    /health answers "is the process serving HTTP?", not "is the database
    reachable?". It returns 200 {"status": "OK"} even during a database
    outage, so an orchestrator does not restart a healthy process because of
    an external dependency.
"""

import logging

from fastapi import APIRouter
from fastapi.responses import PlainTextResponse

from diary_notes.schemas.note import HealthResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

WELCOME_BANNER = "Welcome to the Diary Notes API!"


@router.get(
    "/",
    response_class=PlainTextResponse,
    summary="Service banner",
)
async def root() -> str:
    logger.debug("Root route requested")
    return WELCOME_BANNER


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Service liveness check",
    description="Always returns {\"status\": \"OK\"} while the process is up.",
)
async def health_check() -> HealthResponse:
    logger.debug("Health endpoint requested")
    return HealthResponse(status="OK")
