"""SQLAlchemy models for the spa booking service."""
from spa_booking.models.user import User
from spa_booking.models.spa import Spa, SpaService
from spa_booking.models.staff import Shift, ShiftDay, Staff, TimeOff
from spa_booking.models.coupon import Coupon
from spa_booking.models.booking import Booking, BookingStatus
from spa_booking.models.payment import Payment, PaymentMethod, PaymentStatus
from spa_booking.models.loyalty import Loyalty, LoyaltyHistory, LoyaltyRank
from spa_booking.models.system_setting import SystemSetting

__all__ = [
    "User",
    "Spa",
    "SpaService",
    "Staff",
    "Shift",
    "ShiftDay",
    "TimeOff",
    "Coupon",
    "Booking",
    "BookingStatus",
    "Payment",
    "PaymentMethod",
    "PaymentStatus",
    "Loyalty",
    "LoyaltyHistory",
    "LoyaltyRank",
    "SystemSetting",
]
