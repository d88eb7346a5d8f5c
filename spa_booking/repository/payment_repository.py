"""Helpers to persist the payment record created with each booking."""

from __future__ import annotations

from typing import Dict, Optional

from sqlalchemy.orm import Session

from spa_booking.models.payment import Payment


def get_payment_for_booking(db: Session, booking_id: int) -> Optional[Payment]:
    return db.query(Payment).filter(Payment.booking_id == booking_id).first()


def add_payment(db: Session, payment_data: Dict[str, object]) -> Payment:
    """Stage a payment in the current transaction without committing it."""

    payment = Payment(**payment_data)
    db.add(payment)
    db.flush()
    return payment


__all__ = ["get_payment_for_booking", "add_payment"]
