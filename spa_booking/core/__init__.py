"""Core configuration and infrastructure helpers for the spa booking service."""

from spa_booking.core.config import settings

__all__ = ["settings"]
