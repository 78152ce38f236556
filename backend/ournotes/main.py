"""
OurNotes Backend — FastAPI Application Factory
================================================

What:  Creates and configures the Note Service FastAPI application.
How:   Factory pattern: create_app() returns a configured FastAPI instance.
Who:   Called by uvicorn (uvicorn ournotes.main:app, or python -m ournotes).
When:  Once at server startup.

Application Architecture:
    ┌─────────────────────────────────────────────────────┐
    │                   FastAPI App                       │
    │                                                     │
    │  Middleware Chain:                                  │
    │  ┌────────┐ ┌─────────┐ ┌────────┐ ┌────────────┐   │
    │  │ Req ID │→│ Logging │→│  CORS  │→│ Unhandled  │   │
    │  └────────┘ └─────────┘ └────────┘ └────────────┘   │
    │                                                     │
    │  Routes:                                            │
    │  ┌───────────────────────────────┐ ┌─────────────┐  │
    │  │ /api/{shopping,map,calendar}  │ │ / , /health │  │
    │  │        -notes[/{id}]          │ │             │  │
    │  └───────────────────────────────┘ └─────────────┘  │
    │                                                     │
    │  Exception Handlers:                                │
    │  ┌──────────────────────────────────────────────┐   │
    │  │ Validation→400 │ NotFound→404 │ Store→500    │   │
    │  └──────────────────────────────────────────────┘   │
    └─────────────────────────────────────────────────────┘

Every error body has the same shape: {"error": "<message>"}.
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from ournotes import __version__
from ournotes.config import settings
from ournotes.database import dispose_engine
from ournotes.exceptions import NotFoundError, StoreError, ValidationError
from ournotes.middleware.errors import UnhandledErrorMiddleware
from ournotes.middleware.logging import RequestLoggingMiddleware
from ournotes.middleware.request_id import RequestIDMiddleware, request_id_var
from ournotes.routes import health, notes

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging() -> None:
    """
    Configure logging for the whole process.

    Format: 2024-01-15T12:00:00 [INFO] ournotes.services.note_service: ...
    Called once from the lifespan handler, before anything else logs.
    """
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    # Third-party loggers that are chatty at INFO
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Startup: configure logging and announce the listening address.
    Shutdown: dispose the database engine (closes pooled connections).
    """
    setup_logging()
    logger.info("=" * 60)
    logger.info("OurNotes Backend %s starting up...", __version__)
    logger.info("Server ready at http://%s:%d", settings.backend_host, settings.backend_port)
    logger.info("=" * 60)

    yield

    logger.info("OurNotes Backend shutting down...")
    await dispose_engine()
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def register_exception_handlers(app: FastAPI) -> None:
    """
    Map exception types to HTTP status codes and {"error": ...} bodies.

    Handler hierarchy:
        ValidationError         → 400 (required field missing / bad value)
        RequestValidationError  → 400 (body not JSON or wrong field types)
        NotFoundError           → 404
        StoreError              → 500 (per-kind generic message)
        anything else           → 500 via UnhandledErrorMiddleware

    Store and unexpected errors are logged server-side with their context;
    the response never carries driver messages or SQL.
    """

    @app.exception_handler(ValidationError)
    async def handle_validation_error(request: Request, exc: ValidationError):
        logger.warning("[%s] Validation error: %s", request_id_var.get(""), exc.message)
        return JSONResponse(status_code=400, content={"error": exc.message})

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation_error(request: Request, exc: RequestValidationError):
        logger.warning("[%s] Malformed request body: %s", request_id_var.get(""), exc.errors())
        return JSONResponse(status_code=400, content={"error": "Invalid request body"})

    @app.exception_handler(NotFoundError)
    async def handle_not_found(request: Request, exc: NotFoundError):
        return JSONResponse(status_code=404, content={"error": exc.message})

    @app.exception_handler(StoreError)
    async def handle_store_error(request: Request, exc: StoreError):
        logger.error(
            "[%s] Store error: %s | Context: %s",
            request_id_var.get(""),
            exc.message,
            exc.context,
        )
        return JSONResponse(status_code=500, content={"error": exc.message})


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Returns: FastAPI instance with middleware, exception handlers and the
             liveness, health and note routes registered.
    """
    app = FastAPI(
        title="OurNotes API",
        description="Shopping list, map and calendar notes shared between two people.",
        version=__version__,
        lifespan=lifespan,
    )

    # ── Register Middleware ───────────────────────────────────────────────
    # Last added runs first: RequestID → Logging → CORS → UnhandledError
    app.add_middleware(UnhandledErrorMiddleware)

    # Any origin is reflected back (credentials cannot be combined with "*")
    app.add_middleware(
        CORSMiddleware,
        allow_origin_regex=".*",
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization"],
        expose_headers=["Content-Length", "X-Request-ID"],
        max_age=settings.cors_max_age,
    )
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    # ── Register Exception Handlers ───────────────────────────────────────
    register_exception_handlers(app)

    # ── Register Routes ───────────────────────────────────────────────────
    app.include_router(health.router)
    for router in notes.routers:
        app.include_router(router)

    return app


# uvicorn expects `ournotes.main:app` to be importable
app = create_app()
