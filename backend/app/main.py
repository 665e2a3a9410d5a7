"""
ButtonUp Backend — FastAPI Application Factory
================================================

What:  Creates and configures the FastAPI application instance.
Why:   Centralizes middleware registration, route mounting, exception handling,
       and lifecycle management in one place.
How:   Factory pattern: create_app() returns a configured FastAPI instance.
Who:   Called by uvicorn to start the server (uvicorn app.main:app).

Application Architecture:
    ┌──────────────────────────────────────────────────────┐
    │                    FastAPI App                       │
    │                                                      │
    │  Middleware Chain:                                   │
    │  ┌──────────┐ ┌─────────────┐ ┌──────┐ ┌──────┐      │
    │  │  Req ID  │→│   Logging   │→│ GZip │→│ CORS │      │
    │  └──────────┘ └─────────────┘ └──────┘ └──────┘      │
    │                                                      │
    │  Routes:                                             │
    │  /api/files/*   /api/tags   /api/indexnow*           │
    │  /robots.txt    /health                              │
    │                                                      │
    │  Exception Handlers:                                 │
    │  ClientInput→400 │ Unauthorized→401 │ NotFound→404   │
    │  Upstream→500    │ Configuration→500 │ other→500     │
    └──────────────────────────────────────────────────────┘

Lifecycle:
    Startup:  configure logging, warn about unconfigured integrations
    Shutdown: log shutdown (no pooled resources are held)
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse

from app import __version__
from app.config import settings
from app.exceptions import (
    ButtonUpError,
    ClientInputError,
    ConfigurationError,
    NotFoundError,
    StorageObjectNotFoundError,
    UnauthorizedError,
    UpstreamError,
)
from app.middleware.logging import RequestLoggingMiddleware
from app.middleware.request_id import RequestIDMiddleware, request_id_var
from app.routes import files, health, indexnow, seo, tags

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging() -> None:
    """
    Configure logging for the entire application.

    Format: 2024-01-15T12:00:00 [INFO] app.routes.tags: Tags API returning 12 tags
    Called once during startup, before anything else logs.
    """
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    # These log every HTTP exchange with Supabase / Notion / search engines
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("notion_client").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    setup_logging()
    logger.info("=" * 60)
    logger.info("ButtonUp Backend %s starting up...", __version__)

    # Missing credentials are warnings, not fatal: each integration fails
    # independently on its own endpoints
    for problem in settings.report_missing():
        logger.warning("Configuration: %s", problem)

    logger.info("Storage bucket: %s", settings.supabase_bucket)
    logger.info("Server ready at http://%s:%d", settings.backend_host, settings.backend_port)
    logger.info("=" * 60)

    yield

    logger.info("ButtonUp Backend shutting down...")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def error_body(exc: ButtonUpError, rid: str) -> dict:
    body = {"error": exc.message}
    if exc.details:
        body["details"] = exc.details
    body["request_id"] = rid
    return body


def register_exception_handlers(app: FastAPI) -> None:
    """
    Map exception types to HTTP status codes.

    Handler hierarchy (most specific wins, by MRO):
        ClientInputError            → 400
        UnauthorizedError           → 401
        NotFoundError               → 404
        StorageObjectNotFoundError  → 404
        ConfigurationError          → 500
        UpstreamError               → 500 (Storage/Content errors, message surfaced)
        ButtonUpError (base)        → 500
        Exception (fallback)        → 500, generic message, stack trace logged
    """

    @app.exception_handler(ClientInputError)
    async def handle_client_input(request: Request, exc: ClientInputError):
        rid = request_id_var.get("")
        logger.warning("[%s] Client input error: %s", rid, exc.message)
        return JSONResponse(status_code=400, content=error_body(exc, rid))

    @app.exception_handler(UnauthorizedError)
    async def handle_unauthorized(request: Request, exc: UnauthorizedError):
        rid = request_id_var.get("")
        logger.warning("[%s] Unauthorized request to %s", rid, request.url.path)
        return JSONResponse(status_code=401, content=error_body(exc, rid))

    @app.exception_handler(NotFoundError)
    async def handle_not_found(request: Request, exc: NotFoundError):
        rid = request_id_var.get("")
        return JSONResponse(status_code=404, content=error_body(exc, rid))

    @app.exception_handler(StorageObjectNotFoundError)
    async def handle_storage_not_found(request: Request, exc: StorageObjectNotFoundError):
        rid = request_id_var.get("")
        logger.warning("[%s] Storage object not found: %s", rid, exc.file_name)
        return JSONResponse(status_code=404, content=error_body(exc, rid))

    @app.exception_handler(ConfigurationError)
    async def handle_configuration(request: Request, exc: ConfigurationError):
        rid = request_id_var.get("")
        logger.error("[%s] Configuration error: %s", rid, exc.message)
        return JSONResponse(status_code=500, content=error_body(exc, rid))

    @app.exception_handler(UpstreamError)
    async def handle_upstream(request: Request, exc: UpstreamError):
        rid = request_id_var.get("")
        logger.error(
            "[%s] %s: %s | Context: %s",
            rid, type(exc).__name__, exc.details or exc.message, exc.context,
        )
        return JSONResponse(status_code=500, content=error_body(exc, rid))

    @app.exception_handler(ButtonUpError)
    async def handle_app_error(request: Request, exc: ButtonUpError):
        rid = request_id_var.get("")
        logger.error("[%s] Application error: %s | Context: %s", rid, exc.message, exc.context)
        return JSONResponse(status_code=500, content=error_body(exc, rid))

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        rid = request_id_var.get("")
        logger.error("[%s] Unexpected error: %s", rid, str(exc), exc_info=True)
        return JSONResponse(
            status_code=500,
            content={"error": "An unexpected error occurred", "request_id": rid},
        )


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app() -> FastAPI:
    app = FastAPI(
        title="ButtonUp API",
        description=(
            "Backend for the ButtonUp blog: file storage on Supabase, tags from "
            "the Notion content database, and SEO endpoints."
        ),
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    # Middleware executes in REVERSE order of addition:
    # RequestID → Logging → GZip → CORS → route
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
    )
    app.add_middleware(GZipMiddleware, minimum_size=500)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    register_exception_handlers(app)

    app.include_router(files.router)
    app.include_router(tags.router)
    app.include_router(indexnow.router)
    app.include_router(seo.router)
    app.include_router(health.router)

    return app


app = create_app()
