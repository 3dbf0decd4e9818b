"""
NoteKeeper Backend — Health Check Route
=========================================

What:  Health check endpoint for monitoring and load balancer checks.
How:   Reports whether the backing JSON file can be written and how many
       notes are held in memory.
Who:   Called by Docker health checks, load balancers, and monitoring systems.

Status levels:
    - healthy:   note file can be written (HTTP 200)
    - unhealthy: note file (or its directory) is not writable (HTTP 200, flagged)
"""

import logging
import os
import time
from pathlib import Path

from fastapi import APIRouter, Request

from notekeeper import __version__
from notekeeper.schemas.note import HealthResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

_start_time = time.time()


def _storage_writable(storage_path: Path) -> bool:
    """The file itself if it exists, else the nearest existing parent directory."""
    if storage_path.exists():
        return os.access(storage_path, os.W_OK)
    parent = storage_path.parent
    while not parent.exists() and parent != parent.parent:
        parent = parent.parent
    return os.access(parent, os.W_OK)


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Service health check",
)
async def health_check(request: Request) -> HealthResponse:
    repository = request.app.state.note_repository

    storage_status = "writable"
    overall = "healthy"
    if not _storage_writable(repository.storage_path):
        storage_status = "unwritable"
        overall = "unhealthy"
        logger.warning("Health check: note file %s is not writable", repository.storage_path)

    return HealthResponse(
        status=overall,
        version=__version__,
        storage=storage_status,
        note_count=await repository.count(),
        uptime_seconds=round(time.time() - _start_time, 2),
    )
