"""Loyalty balance and its append-only ledger."""

import enum

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, Text, func

from spa_booking.core.database import Base, IdentifierType


class LoyaltyRank(str, enum.Enum):
    BRONZE = "BRONZE"
    SILVER = "SILVER"
    GOLD = "GOLD"
    PLATINUM = "PLATINUM"


class Loyalty(Base):
    __tablename__ = "loyalty"

    id = Column(IdentifierType, primary_key=True, index=True)
    user_id = Column(
        IdentifierType,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        unique=True,
    )
    points = Column(Integer, nullable=False, default=0)
    rank = Column(String(20), nullable=False, default=LoyaltyRank.BRONZE.value)
    updated_at = Column(DateTime, nullable=True, onupdate=func.now())


class LoyaltyHistory(Base):
    """One row per point delta. Rows are never updated after insert."""

    __tablename__ = "loyalty_history"

    id = Column(IdentifierType, primary_key=True, index=True)
    user_id = Column(IdentifierType, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    points = Column(Integer, nullable=False)
    reason = Column(Text, nullable=False)
    created_at = Column(DateTime, nullable=False, server_default=func.now())


__all__ = ["Loyalty", "LoyaltyHistory", "LoyaltyRank"]
