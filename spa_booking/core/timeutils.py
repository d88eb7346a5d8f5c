"""Helpers for working with instants in the single operating timezone."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Optional

from fastapi import HTTPException, status

from spa_booking.core.config import settings


def operating_timezone() -> timezone:
    return timezone(timedelta(minutes=settings.OPERATING_UTC_OFFSET_MINUTES))


def to_operating_time(value: datetime) -> datetime:
    """Return ``value`` as naive wall-clock time in the operating timezone.

    Naive values are assumed to already be operating time.
    """

    if value.tzinfo is None:
        return value
    return value.astimezone(operating_timezone()).replace(tzinfo=None)


def operating_now() -> datetime:
    return datetime.now(operating_timezone()).replace(tzinfo=None)


def parse_instant(value: Optional[str]) -> datetime:
    """Parse an ISO-8601 string into operating time.

    Raises an HTTP 400 error when the value is missing or malformed.
    """

    if not value or not isinstance(value, str):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="A date in ISO 8601 format is required (e.g. 2024-01-01T10:00:00Z)",
        )

    normalized = value.strip()
    if normalized.endswith(("Z", "z")):
        normalized = f"{normalized[:-1]}+00:00"

    try:
        parsed = datetime.fromisoformat(normalized)
    except ValueError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Invalid date format. Use ISO 8601 (e.g. 2024-01-01T10:00:00Z)",
        ) from exc

    return to_operating_time(parsed)


__all__ = ["operating_timezone", "to_operating_time", "operating_now", "parse_instant"]
