"""Dashboard Actions API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map DashboardError → structured JSON responses
    - CORS configured from settings (not hardcoded)
    - Database and the path revalidator initialized on startup via lifespan

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - Error handlers live in api/error_handlers.py; main only wires them
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from dashboard_actions.api.error_handlers import register_error_handlers
from dashboard_actions.api.routes import auth, health, invoices
from dashboard_actions.config import get_settings
from dashboard_actions.infrastructure import database
from dashboard_actions.infrastructure.observability import setup_logging
from dashboard_actions.infrastructure.revalidation import PathRevalidator

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
    app.state.revalidator = PathRevalidator()
    logger.info("Dashboard Actions API started")
    yield
    if database.db_manager:
        await database.db_manager.dispose()
    logger.info("Dashboard Actions API shutting down")


app = FastAPI(
    title="Dashboard Actions API", version="1.0.0", lifespan=lifespan,
)

settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(auth.router)
app.include_router(invoices.router)

register_error_handlers(app)
