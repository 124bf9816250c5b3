"""CampusPool API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map CampusPoolError → structured JSON responses
    - CORS configured from settings (not hardcoded)
    - Database initialized on startup via lifespan context manager
    - Every request gets a request id (X-Request-ID in, or generated) bound to its logs

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - Error handlers live in api/error_handlers.py: CampusPoolError (domain),
      RequestValidationError (pydantic), Exception (catch-all 500)
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from campuspool.api.error_handlers import register_error_handlers
from campuspool.api.routes import auth, carpool_requests, conversations, health, profiles
from campuspool.config import get_settings
from campuspool.infrastructure import database
from campuspool.infrastructure.observability import (
    bind_request_context, clear_request_context, setup_logging,
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    database.init_db(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
    )
    logger.info("CampusPool API started")
    yield
    if database.db_manager:
        await database.db_manager.dispose()
    logger.info("CampusPool API shutting down")


app = FastAPI(
    title="CampusPool API", version="1.0.0", lifespan=lifespan,
)

# CORS — configured from settings, not hardcoded
settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def request_context(request: Request, call_next):
    """Tag every log record of this request; echo the id back as X-Request-ID."""
    request_id = bind_request_context(
        request.headers.get("X-Request-ID"),
        method=request.method,
        path=request.url.path,
    )
    # Left bound on error so the 500 handler can report the id
    response = await call_next(request)
    clear_request_context()
    response.headers["X-Request-ID"] = request_id
    return response


# Routes — explicit registration
app.include_router(health.router)
app.include_router(auth.router)
app.include_router(profiles.router)
app.include_router(carpool_requests.router)
app.include_router(conversations.router)

register_error_handlers(app)
