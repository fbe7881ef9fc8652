"""
TimeTracker Backend - FastAPI Application Factory
=================================================

What:  Creates and configures the FastAPI application instance.
How:   create_app() registers middleware, exception handlers and routers;
       uvicorn serves the module-level `app` (uvicorn timetracker.main:app).

Application Architecture:
    ┌──────────────────────────────────────────────────────────┐
    │                      FastAPI App                         │
    │                                                          │
    │  Middleware Chain (outermost first):                     │
    │  ┌────────┐ ┌────────────┐ ┌────────────┐ ┌──────┐       │
    │  │ Req ID │→│ Access log │→│ Rate limit │→│ CORS │       │
    │  └────────┘ └────────────┘ └────────────┘ └──────┘       │
    │                                                          │
    │  Routes under /api:                                      │
    │  users · clients · projects · time-entries               │
    │  deprecated /api/v1: all but users                       │
    │  plus /get-token (demo) and /health                      │
    │                                                          │
    │  Exception Handlers → RFC 7807 problem+json:             │
    │  400 validation · 401 · 403 · 404 · 429 · 500            │
    └──────────────────────────────────────────────────────────┘

Lifecycle:
    Startup:
    1. Configure logging
    2. Validate token configuration (logged, not fatal)
    3. Create the schema (retried while the database starts)
    4. Seed demo data into an empty database

    Shutdown:
    1. Dispose database engine (close all connections)
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.exc import SQLAlchemyError

from timetracker import __version__
from timetracker.config import settings
from timetracker.database import dispose_engine, init_database
from timetracker.exceptions import (
    AuthenticationError,
    DatabaseError,
    TimeTrackerError,
    ValidationError,
)
from timetracker.middleware.logging import RequestLoggingMiddleware
from timetracker.middleware.rate_limit import RateLimitMiddleware
from timetracker.middleware.request_id import RequestIDMiddleware, request_id_var
from timetracker.problems import problem_response
from timetracker.routes import auth, clients, health, projects, time_entries, users
from timetracker.seed import seed_demo_data
from timetracker.services.rate_limiter import TokenRateLimiter

logger = logging.getLogger(__name__)

RESOURCE_ROUTERS = (users.router, clients.router, projects.router, time_entries.router)

# Users never had a v1 surface
V1_ROUTERS = (clients.router, projects.router, time_entries.router)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging() -> None:
    """Configure the root logger once, before anything else logs."""
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    # These log every statement / connection at INFO
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("aiosqlite").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    # ── Startup ───────────────────────────────────────────────────────────
    setup_logging()
    logger.info("=" * 60)
    logger.info("TimeTracker Backend %s starting up...", __version__)

    # Not fatal: /health and the docs stay usable, token routes answer 500
    try:
        settings.validate_required_for_production()
    except ValueError as e:
        logger.error("Configuration error: %s", str(e))
        logger.error("Fix the configuration and restart the server.")

    try:
        await init_database()
    except (SQLAlchemyError, OSError) as e:
        raise DatabaseError(
            message="Could not create the database schema",
            context={"error": str(e)},
        ) from e

    if settings.seed_demo_data:
        await seed_demo_data()

    if settings.demo_token_endpoint_enabled:
        logger.warning("GET /get-token is enabled: anyone can mint tokens. Not for production.")

    logger.info("Server ready at http://%s:%d", settings.backend_host, settings.backend_port)
    logger.info("API docs: http://%s:%d/docs", settings.backend_host, settings.backend_port)
    logger.info("=" * 60)

    yield

    # ── Shutdown ──────────────────────────────────────────────────────────
    logger.info("TimeTracker Backend shutting down...")
    await dispose_engine()
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def _field_name(loc) -> str:
    # ("body", "hourRate") → "hourRate"; ("query", "size") → "size"
    parts = [str(p) for p in loc if p not in ("body", "query", "path", "header")]
    return ".".join(parts) or "body"


def register_exception_handlers(app: FastAPI) -> None:
    """
    Map exceptions to RFC 7807 problem responses.

    Handler hierarchy:
        RequestValidationError  → 400 (FastAPI's own 422 remapped)
        ValidationError         → 400 with field errors
        AuthenticationError     → 401 + WWW-Authenticate: Bearer
        TimeTrackerError (base) → the subclass's status_code (403/404/429/500)
        Exception (fallback)    → 500, opaque unless DEBUG is on

    Context dicts are logged, never returned.
    """

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(request: Request, exc: RequestValidationError):
        errors = [
            {"field": _field_name(err.get("loc", ())), "message": err.get("msg", "")}
            for err in exc.errors()
        ]
        logger.info(
            "[%s] Validation failed on %s: %s", request_id_var.get(""), request.url.path, errors
        )
        return problem_response(
            request,
            status=ValidationError.status_code,
            title=ValidationError.title,
            slug=ValidationError.slug,
            detail="One or more fields are invalid",
            errors=errors,
        )

    @app.exception_handler(ValidationError)
    async def handle_validation_error(request: Request, exc: ValidationError):
        logger.info("[%s] Validation error: %s", request_id_var.get(""), exc.message)
        return problem_response(
            request,
            status=exc.status_code,
            title=exc.title,
            slug=exc.slug,
            detail=exc.message,
            errors=exc.errors,
        )

    @app.exception_handler(AuthenticationError)
    async def handle_authentication_error(request: Request, exc: AuthenticationError):
        logger.info(
            "[%s] Authentication failed: %s | Context: %s",
            request_id_var.get(""),
            exc.message,
            exc.context,
        )
        return problem_response(
            request,
            status=exc.status_code,
            title=exc.title,
            slug=exc.slug,
            detail=exc.message,
            headers={"WWW-Authenticate": "Bearer"},
        )

    @app.exception_handler(TimeTrackerError)
    async def handle_timetracker_error(request: Request, exc: TimeTrackerError):
        rid = request_id_var.get("")
        if exc.status_code >= 500:
            logger.error("[%s] %s: %s | Context: %s", rid, type(exc).__name__, exc.message, exc.context)
        else:
            logger.info("[%s] %s: %s", rid, type(exc).__name__, exc.message)
        headers = None
        if getattr(exc, "retry_after", None):
            headers = {"Retry-After": str(exc.retry_after)}
        return problem_response(
            request,
            status=exc.status_code,
            title=exc.title,
            slug=exc.slug,
            detail=exc.message,
            headers=headers,
        )

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        """Stack trace goes to the log; the client sees a request id to quote."""
        rid = request_id_var.get("")
        logger.error("[%s] Unexpected error: %s", rid, str(exc), exc_info=True)
        detail = str(exc) if settings.debug else "An unexpected error occurred. Please try again or contact support."
        return problem_response(
            request,
            status=TimeTrackerError.status_code,
            title=TimeTrackerError.title,
            slug=TimeTrackerError.slug,
            detail=detail,
        )


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Every call builds a fresh limiter, so tests get isolated token state.
    """
    app = FastAPI(
        title="TimeTracker API",
        description=(
            "Track billable hours of users on client projects. "
            "Reads need a bearer token; changes need the admin role."
        ),
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    # ── Register Middleware ───────────────────────────────────────────────
    # Starlette runs middleware in REVERSE order of addition, so adding
    # CORS → RateLimit → Logging → RequestID executes
    # RequestID → Logging → RateLimit → CORS.
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID", "Location", "Retry-After"],
    )

    if settings.rate_limit_enabled:
        limiter = TokenRateLimiter(
            cooldown=settings.rate_limit_cooldown_seconds,
            extend_on_reject=settings.rate_limit_extend_on_reject,
            entry_ttl=settings.rate_limit_entry_ttl_seconds,
            sweep_interval=settings.rate_limit_sweep_interval,
        )
        app.add_middleware(RateLimitMiddleware, limiter=limiter)
        app.state.rate_limiter = limiter

    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    # ── Register Exception Handlers ───────────────────────────────────────
    register_exception_handlers(app)

    # ── Register Routes ───────────────────────────────────────────────────
    for router in RESOURCE_ROUTERS:
        app.include_router(router, prefix="/api")
    for router in V1_ROUTERS:
        app.include_router(router, prefix="/api/v1", deprecated=True)

    if settings.demo_token_endpoint_enabled:
        app.include_router(auth.router)
    app.include_router(health.router)

    return app


app = create_app()
