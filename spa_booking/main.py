"""Entry point for the spa booking FastAPI application."""

import logging

from fastapi import FastAPI

from spa_booking import models  # noqa: F401  registers every table on Base.metadata
from spa_booking.api.v1 import router as v1_router
from spa_booking.core.config import settings
from spa_booking.core.database import Base, engine
from spa_booking.core.error_handlers import register_exception_handlers

logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)

# Ensure database tables exist when the application starts (for development purposes).
Base.metadata.create_all(bind=engine)

app = FastAPI(title=settings.PROJECT_NAME)

register_exception_handlers(app)

app.include_router(
    v1_router,
    prefix="/api/spa/v1",
)
