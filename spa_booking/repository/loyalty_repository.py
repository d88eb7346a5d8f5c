from __future__ import annotations

from typing import Optional

from sqlalchemy.orm import Session

from spa_booking.models.loyalty import Loyalty, LoyaltyHistory


def get_loyalty(db: Session, user_id: int) -> Optional[Loyalty]:
    return db.query(Loyalty).filter(Loyalty.user_id == user_id).first()


def list_history(db: Session, user_id: int) -> list[LoyaltyHistory]:
    return (
        db.query(LoyaltyHistory)
        .filter(LoyaltyHistory.user_id == user_id)
        .order_by(LoyaltyHistory.created_at.desc(), LoyaltyHistory.id.desc())
        .all()
    )


def add_loyalty(db: Session, loyalty: Loyalty) -> Loyalty:
    db.add(loyalty)
    db.flush()
    return loyalty


def add_history(db: Session, *, user_id: int, points: int, reason: str) -> LoyaltyHistory:
    entry = LoyaltyHistory(user_id=user_id, points=points, reason=reason)
    db.add(entry)
    db.flush()
    return entry


__all__ = ["get_loyalty", "list_history", "add_loyalty", "add_history"]
