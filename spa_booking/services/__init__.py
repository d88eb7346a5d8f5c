"""Domain services for the spa booking service."""

from spa_booking.services.booking_lifecycle import (
    BookingLifecycle,
    RescheduleActor,
    RescheduleRequest,
)
from spa_booking.services.booking_service import BookingService
from spa_booking.services.loyalty_service import LoyaltyService
from spa_booking.services.notification_client import NotificationClient
from spa_booking.services.pricing_service import PricingEngine
from spa_booking.services.staff_selector import StaffSelector

__all__ = [
    "BookingLifecycle",
    "BookingService",
    "LoyaltyService",
    "NotificationClient",
    "PricingEngine",
    "RescheduleActor",
    "RescheduleRequest",
    "StaffSelector",
]
