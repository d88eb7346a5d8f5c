from .booking_repository import (
    add_booking,
    get_booking,
    get_booking_for_update,
    list_bookings,
    save_booking,
)
from .coupon_repository import get_coupon_by_code, increment_redemptions
from .loyalty_repository import add_history, add_loyalty, get_loyalty, list_history
from .payment_repository import add_payment, get_payment_for_booking
from .setting_repository import get_setting_value
from .spa_repository import get_approved_spa, get_spa, get_spa_service, get_user
from .staff_repository import get_active_staff, list_active_staff

__all__ = [
    "add_booking",
    "get_booking",
    "get_booking_for_update",
    "list_bookings",
    "save_booking",
    "get_coupon_by_code",
    "increment_redemptions",
    "add_history",
    "add_loyalty",
    "get_loyalty",
    "list_history",
    "add_payment",
    "get_payment_for_booking",
    "get_setting_value",
    "get_approved_spa",
    "get_spa",
    "get_spa_service",
    "get_user",
    "get_active_staff",
    "list_active_staff",
]
