from sqlalchemy import Boolean, Column, DateTime, Integer, Numeric, String

from spa_booking.core.database import Base, IdentifierType


class Coupon(Base):
    """A discount code. ``max_redemptions`` of 0 or NULL means unlimited."""

    __tablename__ = "coupons"

    id = Column(IdentifierType, primary_key=True, index=True)
    code = Column(String(50), nullable=False, unique=True, index=True)
    is_active = Column(Boolean, nullable=False, default=True)
    discount_percent = Column(Numeric(5, 2), nullable=False)
    expires_at = Column(DateTime, nullable=True)
    max_redemptions = Column(Integer, nullable=True)
    current_redemptions = Column(Integer, nullable=False, default=0)

    def __repr__(self) -> str:  # pragma: no cover - debugging helper
        return (
            f"<Coupon(code={self.code}, discount_percent={self.discount_percent}, "
            f"redemptions={self.current_redemptions}/{self.max_redemptions})>"
        )


__all__ = ["Coupon"]
