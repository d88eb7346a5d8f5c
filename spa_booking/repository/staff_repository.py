from __future__ import annotations

from typing import Optional

from sqlalchemy.orm import Session, selectinload

from spa_booking.models.staff import Shift, Staff


def _with_schedule(query):
    return query.options(
        selectinload(Staff.shifts).selectinload(Shift.shift_days),
        selectinload(Staff.time_off),
    )


def get_active_staff(db: Session, *, spa_id: int, staff_id: int) -> Optional[Staff]:
    return (
        _with_schedule(db.query(Staff))
        .filter(Staff.id == staff_id)
        .filter(Staff.spa_id == spa_id)
        .filter(Staff.is_active.is_(True))
        .first()
    )


def list_active_staff(db: Session, spa_id: int) -> list[Staff]:
    """Active staff of a spa in listing order (ascending id)."""

    return (
        _with_schedule(db.query(Staff))
        .filter(Staff.spa_id == spa_id)
        .filter(Staff.is_active.is_(True))
        .order_by(Staff.id)
        .all()
    )


__all__ = ["get_active_staff", "list_active_staff"]
