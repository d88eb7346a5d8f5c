import logging
import time
from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from fastapi import BackgroundTasks, HTTPException, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from spa_booking.core.timeutils import parse_instant
from spa_booking.models.booking import Booking, BookingStatus
from spa_booking.models.payment import PaymentMethod, PaymentStatus
from spa_booking.models.staff import Staff
from spa_booking.repository import booking_repository, payment_repository, spa_repository
from spa_booking.schemas.booking import BookingCreate
from spa_booking.services.notification_client import NotificationClient, build_notification
from spa_booking.services.pricing_service import (
    CommissionRateProvider,
    PricingEngine,
    calculate_commission,
)
from spa_booking.services.side_effects import dispatch_after_commit
from spa_booking.services.staff_selector import StaffSelector

logger = logging.getLogger(__name__)


def build_transaction_reference(booking_id: int, *, epoch_millis: Optional[int] = None) -> str:
    if epoch_millis is None:
        epoch_millis = int(time.time() * 1000)
    return f"TXN-{booking_id}-{epoch_millis}"


class BookingService:
    def __init__(
        self,
        db: Session,
        *,
        notifier: Optional[NotificationClient] = None,
        background_tasks: Optional[BackgroundTasks] = None,
        commission_provider: Optional[CommissionRateProvider] = None,
    ):
        self.db = db
        self.notifier = notifier or NotificationClient()
        self.background_tasks = background_tasks
        self.staff_selector = StaffSelector(db)
        self.pricing = PricingEngine(db, commission_provider=commission_provider)

    def _ensure_customer_exists(self, customer_id: int) -> None:
        if spa_repository.get_user(self.db, customer_id) is None:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Customer not found.",
            )

    def get_booking(self, booking_id: int) -> Booking:
        booking = booking_repository.get_booking(self.db, booking_id)
        if booking is None:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Booking not found.",
            )
        return booking

    def list_bookings(self, *, status_filter: Optional[str] = None) -> List[Booking]:
        return booking_repository.list_bookings(self.db, status_filter=status_filter)

    def list_customer_bookings(self, customer_id: Optional[int]) -> List[Booking]:
        if not customer_id:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="User ID is required.",
            )
        return booking_repository.list_bookings(self.db, customer_id=customer_id)

    def list_owner_bookings(self, owner_id: int) -> List[Booking]:
        return booking_repository.list_bookings(self.db, owner_id=owner_id)

    def list_available_staff(self, spa_id: int, scheduled_at: Optional[str]) -> List[Staff]:
        if spa_repository.get_spa(self.db, spa_id) is None:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Spa not found.",
            )
        instant = parse_instant(scheduled_at)
        return self.staff_selector.list_available(spa_id, instant)

    def create_booking(self, payload: BookingCreate) -> Booking:
        """Create a booking and its payment record in a single transaction.

        Coupon redemption, the booking row and the payment row are committed
        together or not at all. The customer is notified after commit.
        """

        scheduled_at = parse_instant(payload.scheduled_at)
        # Resolved before any write so a failed lookup cannot poison the transaction.
        commission_rate = self.pricing.commission_rate()

        try:
            booking_id = self._create_booking_records(payload, scheduled_at, commission_rate)
            self.db.commit()
        except HTTPException:
            self.db.rollback()
            raise
        except SQLAlchemyError as exc:
            self.db.rollback()
            logger.exception("Database error while creating booking for customer %s", payload.customer_id)
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail="Failed to create booking",
            ) from exc

        booking = self.get_booking(booking_id)
        logger.info(
            "Created booking %s for customer %s at spa %s (staff=%s, final_price=%s)",
            booking.id,
            booking.customer_id,
            booking.spa_id,
            booking.staff_id,
            booking.final_price,
        )

        dispatch_after_commit(
            self.background_tasks,
            f"notify customer {booking.customer_id} of booking {booking.id}",
            self.notifier.send_notification,
            build_notification(
                booking.customer_id,
                f"Your booking #{booking.id} at {booking.spa.name} has been received.",
                booking_id=booking.id,
                scheduled_at=booking.scheduled_at.isoformat(),
                status=booking.status,
            ),
        )
        return booking

    def _create_booking_records(
        self,
        payload: BookingCreate,
        scheduled_at: datetime,
        commission_rate: Decimal,
    ) -> int:
        spa = spa_repository.get_approved_spa(self.db, payload.spa_id)
        if spa is None:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Spa not found or not approved.",
            )

        service = spa_repository.get_spa_service(
            self.db, spa_id=spa.id, service_id=payload.service_id
        )
        if service is None:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Service not found for spa.",
            )

        if payload.customer_id is None:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Customer not found.",
            )
        self._ensure_customer_exists(payload.customer_id)

        staff = self.staff_selector.select(spa.id, payload.staff_id, scheduled_at)

        base_price = Decimal(service.price)
        quote = self.pricing.price(base_price, payload.coupon_code)
        commission_amount = calculate_commission(quote.final_price, commission_rate)

        booking = booking_repository.add_booking(
            self.db,
            {
                "spa_id": spa.id,
                "service_id": service.id,
                "customer_id": payload.customer_id,
                "staff_id": staff.id if staff is not None else None,
                "scheduled_at": scheduled_at,
                "status": BookingStatus.PENDING.value,
                "coupon_code": payload.coupon_code or None,
                "total_price": base_price,
                "final_price": quote.final_price,
                "commission_amount": commission_amount,
            },
        )

        method = payload.payment_method or PaymentMethod.CASH
        transaction_reference = None
        if method != PaymentMethod.CASH:
            transaction_reference = build_transaction_reference(booking.id)

        payment_repository.add_payment(
            self.db,
            {
                "booking_id": booking.id,
                "amount": quote.final_price,
                "method": method.value,
                "status": PaymentStatus.COMPLETED.value,
                "commission_percent": commission_rate,
                "commission_amount": commission_amount,
                "transaction_reference": transaction_reference,
            },
        )
        return booking.id


__all__ = ["BookingService", "build_transaction_reference"]
