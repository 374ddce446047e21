"""Backoffice API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - The AuthorizationGate is built once from settings and stored on app.state
    - Global error handlers map BackofficeError → structured JSON responses and
      AuthorizationError → the plain unknown-route 404
    - Denied callers are turned away under the admin prefix before routing;
      no trailing-slash redirects
    - CORS configured from settings (not hardcoded)
    - Database initialized on startup via lifespan context manager
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from backoffice.api.admin_gate import register_admin_gate
from backoffice.api.error_handlers import register_error_handlers
from backoffice.api.routes import admin, airports, health, parks
from backoffice.config import get_settings
from backoffice.core.authorization import build_authorization_gate
from backoffice.infrastructure import database
from backoffice.infrastructure.observability import setup_logging

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
    if not settings.admin_emails:
        logger.warning("Admin allowlist is empty; every admin request will be denied")
    logger.info("Backoffice API started")
    yield
    if database.db_manager:
        await database.db_manager.dispose()
    logger.info("Backoffice API shutting down")


app = FastAPI(
    title="Backoffice API", version="1.0.0", lifespan=lifespan,
    redirect_slashes=False,
)

settings = get_settings()
app.state.authorization_gate = build_authorization_gate(settings.admin_emails)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(admin.router)
app.include_router(parks.router)
app.include_router(airports.router)

register_admin_gate(app)
register_error_handlers(app)
