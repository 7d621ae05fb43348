"""Exercise Tracker API - FastAPI application factory and entry point.

Invariants:
    - create_app() receives its Settings explicitly; no handler reads the environment
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map every failure to a plain-text response
    - Database manager created on startup, stored on app.state, disposed on shutdown
"""

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from exercise_tracker import __version__
from exercise_tracker.api.error_handlers import register_error_handlers
from exercise_tracker.api.routes import exercise, health
from exercise_tracker.config import Settings, get_settings
from exercise_tracker.infrastructure.database import DatabaseSessionManager
from exercise_tracker.infrastructure.observability import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings: Settings = app.state.settings
    setup_logging(settings.log_level, settings.log_format)
    db_manager = DatabaseSessionManager(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
    )
    await db_manager.create_schema()
    app.state.db_manager = db_manager
    logger.info("Exercise Tracker API started")
    yield
    logger.info("Exercise Tracker API shutting down")
    await db_manager.dispose()
    app.state.db_manager = None


def create_app(settings: Settings) -> FastAPI:
    app = FastAPI(
        title="Exercise Tracker API", version=__version__, lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.db_manager = None

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(health.router)
    app.include_router(exercise.router)

    register_error_handlers(app)
    return app


app = create_app(get_settings())


def run() -> None:
    """Console entry point: serve the module-level app with uvicorn."""
    settings = get_settings()
    uvicorn.run(
        "exercise_tracker.main:app", host=settings.host, port=settings.port,
    )
