from __future__ import annotations

from typing import Dict, Optional

from sqlalchemy.orm import Session, joinedload

from spa_booking.models.booking import Booking
from spa_booking.models.spa import Spa


def _with_relations(query):
    return query.options(
        joinedload(Booking.spa),
        joinedload(Booking.service),
        joinedload(Booking.customer),
        joinedload(Booking.staff),
        joinedload(Booking.payment),
    )


def list_bookings(
    db: Session,
    *,
    customer_id: Optional[int] = None,
    owner_id: Optional[int] = None,
    status_filter: Optional[str] = None,
) -> list[Booking]:
    query = _with_relations(db.query(Booking))

    if owner_id is not None:
        query = query.join(Spa, Booking.spa_id == Spa.id).filter(Spa.owner_id == owner_id)
    if customer_id is not None:
        query = query.filter(Booking.customer_id == customer_id)
    if status_filter is not None:
        query = query.filter(Booking.status == status_filter)

    if owner_id is not None:
        order_clause = Booking.scheduled_at.desc()
    else:
        order_clause = Booking.created_at.desc()

    return query.order_by(order_clause, Booking.id.desc()).all()


def get_booking(db: Session, booking_id: int) -> Optional[Booking]:
    return _with_relations(db.query(Booking)).filter(Booking.id == booking_id).first()


def get_booking_for_update(db: Session, booking_id: int) -> Optional[Booking]:
    """Load a booking with a row lock held until the caller commits."""

    return (
        db.query(Booking)
        .filter(Booking.id == booking_id)
        .with_for_update()
        .populate_existing()
        .first()
    )


def add_booking(db: Session, booking_data: Dict[str, object]) -> Booking:
    """Stage a new booking in the current transaction without committing it."""

    booking = Booking(**booking_data)
    db.add(booking)
    db.flush()
    return booking


def save_booking(db: Session, booking: Booking) -> Booking:
    db.add(booking)
    db.flush()
    db.commit()
    db.refresh(booking)
    return booking


__all__ = [
    "list_bookings",
    "get_booking",
    "get_booking_for_update",
    "add_booking",
    "save_booking",
]
