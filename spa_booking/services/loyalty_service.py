from __future__ import annotations

import logging
from typing import List, Tuple

from fastapi import HTTPException, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from spa_booking.models.loyalty import Loyalty, LoyaltyHistory, LoyaltyRank
from spa_booking.repository import loyalty_repository, spa_repository

logger = logging.getLogger(__name__)

# Checked from the top down; the first threshold reached wins.
RANK_THRESHOLDS: Tuple[Tuple[int, LoyaltyRank], ...] = (
    (300, LoyaltyRank.PLATINUM),
    (200, LoyaltyRank.GOLD),
    (100, LoyaltyRank.SILVER),
)


def determine_rank(points: int) -> LoyaltyRank:
    for threshold, rank in RANK_THRESHOLDS:
        if points >= threshold:
            return rank
    return LoyaltyRank.BRONZE


class LoyaltyService:
    def __init__(self, db: Session):
        self.db = db

    def _ensure_customer_exists(self, customer_id: int) -> None:
        if spa_repository.get_user(self.db, customer_id) is None:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Customer not found.",
            )

    def _get_or_create(self, customer_id: int, *, rank: LoyaltyRank = LoyaltyRank.BRONZE) -> Loyalty:
        loyalty = loyalty_repository.get_loyalty(self.db, customer_id)
        if loyalty is None:
            loyalty = loyalty_repository.add_loyalty(
                self.db,
                Loyalty(user_id=customer_id, points=0, rank=rank.value),
            )
        return loyalty

    def add_points(self, customer_id: int, points: int, reason: str) -> Loyalty:
        """Credit ``points`` to a customer and append a history entry.

        The balance update and the history row are committed together.
        """

        if isinstance(points, bool) or not isinstance(points, int) or points <= 0:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Points must be a positive integer.",
            )
        if not reason or not reason.strip():
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="A reason for the loyalty update is required.",
            )

        self._ensure_customer_exists(customer_id)

        try:
            loyalty = self._get_or_create(customer_id)
            loyalty.points = (loyalty.points or 0) + points
            loyalty.rank = determine_rank(loyalty.points).value
            loyalty_repository.add_loyalty(self.db, loyalty)
            loyalty_repository.add_history(
                self.db,
                user_id=customer_id,
                points=points,
                reason=reason.strip(),
            )
            self.db.commit()
        except SQLAlchemyError as exc:
            self.db.rollback()
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail="Failed to update loyalty points",
            ) from exc

        self.db.refresh(loyalty)
        logger.info(
            "Added %s loyalty points to customer %s (total=%s, rank=%s)",
            points,
            customer_id,
            loyalty.points,
            loyalty.rank,
        )
        return loyalty

    def get_rank(self, customer_id: int) -> Tuple[LoyaltyRank, int]:
        loyalty = loyalty_repository.get_loyalty(self.db, customer_id)
        if loyalty is None:
            return LoyaltyRank.BRONZE, 0
        return LoyaltyRank(loyalty.rank), loyalty.points

    def get_history(self, customer_id: int) -> List[LoyaltyHistory]:
        self._ensure_customer_exists(customer_id)
        return loyalty_repository.list_history(self.db, customer_id)

    def update_rank(self, customer_id: int, rank: LoyaltyRank) -> Loyalty:
        """Admin override of a customer's rank; points are left untouched."""

        self._ensure_customer_exists(customer_id)

        try:
            loyalty = self._get_or_create(customer_id, rank=rank)
            loyalty.rank = rank.value
            loyalty_repository.add_loyalty(self.db, loyalty)
            self.db.commit()
        except SQLAlchemyError as exc:
            self.db.rollback()
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail="Failed to update loyalty rank",
            ) from exc

        self.db.refresh(loyalty)
        return loyalty


__all__ = ["LoyaltyService", "RANK_THRESHOLDS", "determine_rank"]
