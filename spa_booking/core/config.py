"""Configuration settings for the spa booking service."""

import os
from functools import lru_cache

from dotenv import load_dotenv

load_dotenv()


def _to_bool(value: str, *, default: bool = False) -> bool:
    lowered = value.strip().lower()
    if not lowered:
        return default
    return lowered in {"true", "1", "yes", "y", "on"}


class Settings:
    PROJECT_NAME: str = os.getenv("PROJECT_NAME", "Spa Booking Service")
    DATABASE_URL: str = os.getenv("DATABASE_URL", "sqlite:///./spa_booking.db")
    SECRET_KEY: str = os.getenv("SECRET_KEY", "")
    ALGORITHM: str = os.getenv("ALGORITHM", "HS256")
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    NOTIFICATION_SERVICE_URL: str = os.getenv(
        "NOTIFICATION_SERVICE_URL",
        "http://localhost:8004",
    )
    NOTIFICATION_SERVICE_TIMEOUT: float = float(
        os.getenv("NOTIFICATION_SERVICE_TIMEOUT", "10")
    )

    # Every stored instant is naive wall-clock time at this offset.
    OPERATING_UTC_OFFSET_MINUTES: int = int(
        os.getenv("OPERATING_UTC_OFFSET_MINUTES", "0")
    )

    # When enabled, booking status changes must follow ALLOWED_TRANSITIONS.
    STRICT_STATUS_TRANSITIONS: bool = _to_bool(
        os.getenv("STRICT_STATUS_TRANSITIONS", "false"), default=False
    )


@lru_cache()
def get_settings() -> Settings:
    return Settings()


settings = get_settings()

__all__ = ["settings", "get_settings", "Settings"]
