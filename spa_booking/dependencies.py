"""Shared dependencies for the spa booking service."""

from typing import Generator

from spa_booking.core.database import SessionLocal
from spa_booking.services.notification_client import NotificationClient


def get_db() -> Generator:
    """Provide a transactional scope around a series of operations."""

    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_notification_client() -> NotificationClient:
    return NotificationClient()
