"""
NoteKeeper Backend — FastAPI Application Factory
===================================================

What:  Creates and configures the FastAPI application instance.
How:   Factory pattern: create_app() returns a configured FastAPI instance
       with its repository and service attached to app.state.
Who:   Called by uvicorn (uvicorn notekeeper.main:app), by the `notekeeper`
       console script, and by tests with their own Settings.

Application Architecture:
    ┌─────────────────────────────────────────────────────┐
    │                   FastAPI App                       │
    │                                                     │
    │  Middleware Chain:                                  │
    │  ┌──────────┐ ┌─────────────┐ ┌──────┐ ┌────────┐  │
    │  │  Req ID  │→│  Logging    │→│ GZip │→│  CORS  │  │
    │  └──────────┘ └─────────────┘ └──────┘ └────────┘  │
    │                                                     │
    │  Routes:                                            │
    │  ┌──────────────────────────┐ ┌─────────────────┐  │
    │  │ /notes  (CRUD + search)  │ │ GET /health     │  │
    │  └──────────────────────────┘ └─────────────────┘  │
    │                                                     │
    │  Exception Handlers (all render {message, data}):   │
    │  ┌──────────────────────────────────────────────┐  │
    │  │ Validation→400 │ NotFound→404 │ Storage→500  │  │
    │  │ InjectedFault→500 │ anything else→500        │  │
    │  └──────────────────────────────────────────────┘  │
    └─────────────────────────────────────────────────────┘

Lifecycle:
    Startup:
    1. Initialize logging
    2. Load the note file into memory (fails fast on a corrupt file)

    Shutdown:
    1. Log shutdown complete (every mutation is already on disk)
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse

from notekeeper import __version__
from notekeeper.config import Settings, settings
from notekeeper.exceptions import (
    InjectedFaultError,
    NoteKeeperError,
    NotFoundError,
    StorageError,
    ValidationError,
)
from notekeeper.middleware.logging import RequestLoggingMiddleware
from notekeeper.middleware.request_id import RequestIDMiddleware, request_id_var
from notekeeper.repository import NoteRepository
from notekeeper.routes import health, notes
from notekeeper.services.note_service import FaultInjector, NoteService

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging(log_level: str = "INFO") -> None:
    """
    Configure logging for the entire application.

    Format: %(asctime)s [%(levelname)s] %(name)s: %(message)s
    When:   Called once during app startup, before the note file is loaded.
    """
    logging.basicConfig(
        level=getattr(logging, log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[
            logging.StreamHandler(sys.stdout),  # Docker captures stdout
        ],
        force=True,
    )

    # Third-party noise
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Load notes on startup; nothing to flush on shutdown."""
    app_settings: Settings = app.state.settings
    repository: NoteRepository = app.state.note_repository

    # ── Startup ───────────────────────────────────────────────────────────
    setup_logging(app_settings.log_level)
    logger.info("=" * 60)
    logger.info("NoteKeeper Backend starting up...")

    await repository.load()

    logger.info("Note file: %s", repository.storage_path.resolve())
    logger.info("Update failure rate: %.2f", app_settings.update_failure_rate)
    logger.info("Server ready at http://%s:%d", app_settings.backend_host, app_settings.backend_port)
    logger.info("=" * 60)

    yield

    # ── Shutdown ──────────────────────────────────────────────────────────
    logger.info("NoteKeeper Backend shutting down...")
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def _envelope(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"message": message, "data": None})


def register_exception_handlers(app: FastAPI) -> None:
    """
    Map exception types to HTTP status codes, all rendered as envelopes.

    Handler hierarchy:
        ValidationError         → 400 Bad Request
        RequestValidationError  → 400 Bad Request (malformed body)
        NotFoundError           → 404 Not Found
        StorageError            → 500 Internal Server Error
        InjectedFaultError      → 500 Internal Server Error
        NoteKeeperError (base)  → 500 Internal Server Error
        Exception (fallback)    → 500 Internal Server Error

    Exception context (paths, OS errors) is logged server-side only.
    """

    @app.exception_handler(ValidationError)
    async def handle_validation_error(request: Request, exc: ValidationError):
        rid = request_id_var.get("")
        logger.warning("[%s] Validation error: %s", rid, exc.message)
        return _envelope(400, exc.message)

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation_error(request: Request, exc: RequestValidationError):
        rid = request_id_var.get("")
        logger.warning("[%s] Malformed request: %s", rid, exc.errors())
        return _envelope(400, "Invalid request body")

    @app.exception_handler(NotFoundError)
    async def handle_not_found(request: Request, exc: NotFoundError):
        return _envelope(404, exc.message)

    @app.exception_handler(StorageError)
    async def handle_storage_error(request: Request, exc: StorageError):
        rid = request_id_var.get("")
        logger.error("[%s] Storage error: %s | Context: %s", rid, exc.message, exc.context)
        return _envelope(500, exc.message)

    @app.exception_handler(InjectedFaultError)
    async def handle_injected_fault(request: Request, exc: InjectedFaultError):
        rid = request_id_var.get("")
        logger.error("[%s] Injected fault: %s | Context: %s", rid, exc.message, exc.context)
        return _envelope(500, exc.message)

    @app.exception_handler(NoteKeeperError)
    async def handle_app_error(request: Request, exc: NoteKeeperError):
        rid = request_id_var.get("")
        logger.error("[%s] Application error: %s | Context: %s", rid, exc.message, exc.context)
        return _envelope(500, exc.message)

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        """Catch-all; the stack trace is logged, never returned."""
        rid = request_id_var.get("")
        logger.error("[%s] Unexpected error: %s", rid, str(exc), exc_info=True)
        return _envelope(500, "An unexpected error occurred")


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app(
    app_settings: Optional[Settings] = None,
    repository: Optional[NoteRepository] = None,
    fault_injector: Optional[FaultInjector] = None,
) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        app_settings:   Overrides the module-level settings (tests).
        repository:     Pre-built repository, e.g. one with a fake clock.
        fault_injector: Pre-built injector, e.g. one with a seeded RNG.

    Returns: Fully configured FastAPI instance ready to receive requests.
    """
    app_settings = app_settings or settings
    repository = repository or NoteRepository(app_settings.notes_storage_path)
    fault_injector = fault_injector or FaultInjector(app_settings.update_failure_rate)

    app = FastAPI(
        title="NoteKeeper API",
        description="CRUD and search over notes, mirrored to a JSON file.",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    app.state.settings = app_settings
    app.state.note_repository = repository
    app.state.note_service = NoteService(repository, fault_injector)

    # ── Register Middleware ───────────────────────────────────────────────
    # Last added = first to execute: RequestID → Logging → GZip → CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=app_settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
    )
    app.add_middleware(GZipMiddleware, minimum_size=500)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    # ── Register Exception Handlers ───────────────────────────────────────
    register_exception_handlers(app)

    # ── Register Routes ───────────────────────────────────────────────────
    app.include_router(notes.router)
    app.include_router(health.router)

    return app


def run() -> None:
    """Console-script entry point: serve the app with uvicorn."""
    uvicorn.run(
        "notekeeper.main:app",
        host=settings.backend_host,
        port=settings.backend_port,
        log_level=settings.log_level.lower(),
    )


# uvicorn expects `notekeeper.main:app` to be importable
app = create_app()


if __name__ == "__main__":
    run()
