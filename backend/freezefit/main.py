"""FreezeFit API - FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map every failure to the failure envelope
    - OPTIONS short-circuits before routing; CORS headers on every response
    - The connection pool is built in the lifespan, stored on app.state.db
      and disposed on shutdown
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from freezefit.api.cors import register_cors
from freezefit.api.error_handlers import register_error_handlers
from freezefit.api.routes import (
    activities, appointments, business_hours, gallery, health, institutes,
    loyalty, messages, profiles, reviews, services, therapists, workshops,
)
from freezefit.config import get_settings
from freezefit.infrastructure.database import DatabaseSessionManager
from freezefit.infrastructure.observability import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    app.state.db = DatabaseSessionManager.from_settings(settings)
    logger.info("FreezeFit API started")
    try:
        yield
    finally:
        await app.state.db.dispose()
        app.state.db = None
        logger.info("FreezeFit API shut down")


app = FastAPI(title="FreezeFit API", version="1.0.0", lifespan=lifespan)

register_cors(app)
register_error_handlers(app)

app.include_router(health.router)
app.include_router(messages.router)
app.include_router(appointments.router)
app.include_router(profiles.router)
app.include_router(institutes.router)
app.include_router(reviews.router)
app.include_router(business_hours.router)
app.include_router(gallery.router)
app.include_router(therapists.router)
app.include_router(services.router)
app.include_router(loyalty.router)
app.include_router(workshops.router)
app.include_router(activities.router)
