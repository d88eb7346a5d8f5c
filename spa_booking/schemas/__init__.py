"""Pydantic schemas for the spa booking service."""

from spa_booking.schemas.booking import (
    AvailableStaffResponse,
    BookingCreate,
    BookingReschedule,
    BookingResponse,
    BookingStatusUpdate,
    RescheduleDecision,
)
from spa_booking.schemas.loyalty import (
    LoyaltyHistoryResponse,
    LoyaltyPointsCreate,
    LoyaltyRankResponse,
    LoyaltyRankUpdate,
    LoyaltyResponse,
)

__all__ = [
    "AvailableStaffResponse",
    "BookingCreate",
    "BookingReschedule",
    "BookingResponse",
    "BookingStatusUpdate",
    "RescheduleDecision",
    "LoyaltyHistoryResponse",
    "LoyaltyPointsCreate",
    "LoyaltyRankResponse",
    "LoyaltyRankUpdate",
    "LoyaltyResponse",
]
