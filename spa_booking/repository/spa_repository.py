from __future__ import annotations

from typing import Optional

from sqlalchemy.orm import Session

from spa_booking.models.spa import Spa, SpaService
from spa_booking.models.user import User


def get_spa(db: Session, spa_id: int) -> Optional[Spa]:
    return db.query(Spa).filter(Spa.id == spa_id).first()


def get_approved_spa(db: Session, spa_id: int) -> Optional[Spa]:
    return (
        db.query(Spa)
        .filter(Spa.id == spa_id)
        .filter(Spa.is_approved.is_(True))
        .first()
    )


def get_spa_service(db: Session, *, spa_id: int, service_id: int) -> Optional[SpaService]:
    return (
        db.query(SpaService)
        .filter(SpaService.id == service_id)
        .filter(SpaService.spa_id == spa_id)
        .first()
    )


def get_user(db: Session, user_id: int) -> Optional[User]:
    return db.query(User).filter(User.id == user_id).first()


__all__ = ["get_spa", "get_approved_spa", "get_spa_service", "get_user"]
