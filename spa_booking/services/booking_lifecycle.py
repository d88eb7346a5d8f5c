"""Status transitions and reschedule handling for existing bookings."""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass
from typing import Dict, FrozenSet, Optional

from fastapi import BackgroundTasks, HTTPException, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from spa_booking.core.config import settings
from spa_booking.core.timeutils import operating_now, parse_instant
from spa_booking.models.booking import Booking, BookingStatus
from spa_booking.repository import booking_repository
from spa_booking.services.loyalty_service import LoyaltyService
from spa_booking.services.notification_client import NotificationClient, build_notification
from spa_booking.services.side_effects import dispatch_after_commit, fire_and_log

logger = logging.getLogger(__name__)

LOYALTY_COMPLETION_POINTS = 10

ALLOWED_TRANSITIONS: Dict[BookingStatus, FrozenSet[BookingStatus]] = {
    BookingStatus.PENDING: frozenset(
        {BookingStatus.CONFIRMED, BookingStatus.CANCELLED, BookingStatus.COMPLETED}
    ),
    BookingStatus.CONFIRMED: frozenset({BookingStatus.COMPLETED, BookingStatus.CANCELLED}),
    BookingStatus.COMPLETED: frozenset(),
    BookingStatus.CANCELLED: frozenset(),
}

_STATUS_MESSAGES: Dict[BookingStatus, str] = {
    BookingStatus.PENDING: "Your booking #{id} is waiting for confirmation.",
    BookingStatus.CONFIRMED: "Your booking #{id} has been confirmed.",
    BookingStatus.COMPLETED: "Your booking #{id} has been completed. Thank you for visiting!",
    BookingStatus.CANCELLED: "Your booking #{id} has been cancelled.",
}


class RescheduleActor(str, enum.Enum):
    CUSTOMER = "CUSTOMER"
    OWNER_OR_ADMIN = "OWNER_OR_ADMIN"


@dataclass(frozen=True)
class RescheduleRequest:
    scheduled_at: str
    actor: RescheduleActor
    requester_id: Optional[int] = None


def is_transition_allowed(current: BookingStatus, target: BookingStatus) -> bool:
    if current == target:
        return True
    return target in ALLOWED_TRANSITIONS.get(current, frozenset())


class BookingLifecycle:
    def __init__(
        self,
        db: Session,
        *,
        notifier: Optional[NotificationClient] = None,
        background_tasks: Optional[BackgroundTasks] = None,
        loyalty_service: Optional[LoyaltyService] = None,
        strict_transitions: Optional[bool] = None,
    ):
        self.db = db
        self.notifier = notifier or NotificationClient()
        self.background_tasks = background_tasks
        self.loyalty = loyalty_service or LoyaltyService(db)
        if strict_transitions is None:
            strict_transitions = settings.STRICT_STATUS_TRANSITIONS
        self.strict_transitions = strict_transitions

    def _get_booking(self, booking_id: int) -> Booking:
        booking = booking_repository.get_booking(self.db, booking_id)
        if booking is None:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Booking not found.",
            )
        return booking

    def _lock_booking(self, booking_id: int) -> Booking:
        booking = booking_repository.get_booking_for_update(self.db, booking_id)
        if booking is None:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Booking not found.",
            )
        return booking

    def _save(self, booking: Booking, action: str) -> Booking:
        try:
            booking_repository.save_booking(self.db, booking)
        except SQLAlchemyError as exc:
            self.db.rollback()
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail=f"Failed to {action} booking",
            ) from exc
        return self._get_booking(booking.id)

    def _notify(self, booking: Booking, message: str, **meta) -> None:
        dispatch_after_commit(
            self.background_tasks,
            f"notify customer {booking.customer_id} about booking {booking.id}",
            self.notifier.send_notification,
            build_notification(booking.customer_id, message, booking_id=booking.id, **meta),
        )

    def reschedule(self, booking_id: int, request: RescheduleRequest) -> Booking:
        """Move a booking, or record a customer's request to move it.

        The booking's own customer only creates a pending request that the spa
        owner must answer, whatever role their token carries. Owners and admins
        acting on someone else's booking move it directly and discard any
        pending request.
        """

        logger.debug(
            "Rescheduling booking %s to %s by %s %s",
            booking_id,
            request.scheduled_at,
            request.actor.value,
            request.requester_id,
        )
        booking = self._get_booking(booking_id)

        new_instant = parse_instant(request.scheduled_at)
        if new_instant <= operating_now():
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="The new booking time must be in the future.",
            )

        actor = request.actor
        if request.requester_id is not None and request.requester_id == booking.customer_id:
            actor = RescheduleActor.CUSTOMER

        if actor == RescheduleActor.CUSTOMER:
            if request.requester_id != booking.customer_id:
                raise HTTPException(
                    status_code=status.HTTP_403_FORBIDDEN,
                    detail="You can only reschedule your own bookings.",
                )
            booking.requested_scheduled_at = new_instant
            updated = self._save(booking, "reschedule")
            logger.debug("Customer requested reschedule of booking %s", booking_id)
            self._notify(
                updated,
                f"Your request to move booking #{updated.id} is waiting for the spa's approval.",
                requested_scheduled_at=new_instant.isoformat(),
            )
            return updated

        booking.scheduled_at = new_instant
        booking.requested_scheduled_at = None
        updated = self._save(booking, "reschedule")
        logger.debug("Booking %s rescheduled directly to %s", booking_id, new_instant)
        self._notify(
            updated,
            f"Your booking #{updated.id} has been moved to {new_instant.isoformat()}.",
            scheduled_at=new_instant.isoformat(),
        )
        return updated

    def respond_to_reschedule(self, booking_id: int, approved: bool, owner_id: int) -> Booking:
        booking = self._get_booking(booking_id)

        if booking.spa is None or booking.spa.owner_id != owner_id:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="You can only respond to reschedule requests for your own spa bookings.",
            )

        if booking.requested_scheduled_at is None:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="This booking does not have a pending reschedule request.",
            )

        if approved:
            booking.scheduled_at = booking.requested_scheduled_at
        booking.requested_scheduled_at = None
        updated = self._save(booking, "update")

        if approved:
            message = f"Your request to move booking #{updated.id} was approved."
        else:
            message = (
                f"Your request to move booking #{updated.id} was declined. "
                "The original time is kept."
            )
        self._notify(
            updated,
            message,
            approved=approved,
            scheduled_at=updated.scheduled_at.isoformat(),
        )
        return updated

    def cancel(self, booking_id: int) -> Booking:
        return self.update_status(booking_id, BookingStatus.CANCELLED)

    def update_status(self, booking_id: int, new_status: BookingStatus) -> Booking:
        """Overwrite the booking status.

        Moving into COMPLETED from any other status credits the customer's
        loyalty balance once. Unless strict transitions are enabled any status
        may be written.
        """

        # Held until _save commits, so concurrent completions see each other.
        booking = self._lock_booking(booking_id)
        new_status = BookingStatus(new_status)
        previous_status = BookingStatus(booking.status)

        if self.strict_transitions and not is_transition_allowed(previous_status, new_status):
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail=(
                    f"Booking status cannot change from {previous_status.value} "
                    f"to {new_status.value}."
                ),
            )

        booking.status = new_status.value
        updated = self._save(booking, "update")
        logger.debug(
            "Booking %s status %s -> %s", booking_id, previous_status.value, new_status.value
        )

        if new_status == BookingStatus.COMPLETED and previous_status != BookingStatus.COMPLETED:
            # Runs inline after the status commit: background tasks would outlive
            # the request session. Failures are logged and never reach the caller.
            fire_and_log(
                f"award completion points for booking {booking_id}",
                self.loyalty.add_points,
                updated.customer_id,
                LOYALTY_COMPLETION_POINTS,
                f"Booking #{booking_id} completed",
            )

        self._notify(
            updated,
            _STATUS_MESSAGES[new_status].format(id=updated.id),
            status=new_status.value,
            previous_status=previous_status.value,
        )
        return updated


__all__ = [
    "ALLOWED_TRANSITIONS",
    "BookingLifecycle",
    "LOYALTY_COMPLETION_POINTS",
    "RescheduleActor",
    "RescheduleRequest",
    "is_transition_allowed",
]
