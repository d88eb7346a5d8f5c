from __future__ import annotations

from typing import Optional

from sqlalchemy.orm import Session

from spa_booking.models.coupon import Coupon


def get_coupon_by_code(db: Session, code: str, *, for_update: bool = False) -> Optional[Coupon]:
    query = db.query(Coupon).filter(Coupon.code == code)
    if for_update:
        # Serializes concurrent redemptions of the same coupon row.
        query = query.with_for_update()
    return query.first()


def increment_redemptions(db: Session, coupon: Coupon) -> Coupon:
    """Bump the redemption counter inside the caller's transaction."""

    coupon.current_redemptions = (coupon.current_redemptions or 0) + 1
    db.add(coupon)
    db.flush()
    return coupon


__all__ = ["get_coupon_by_code", "increment_redemptions"]
