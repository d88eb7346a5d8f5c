"""SQLAlchemy model for the payment record attached to each booking."""

import enum

from sqlalchemy import Column, DateTime, ForeignKey, Numeric, String, func
from sqlalchemy.orm import relationship

from spa_booking.core.database import Base, IdentifierType


class PaymentMethod(str, enum.Enum):
    CASH = "CASH"
    CARD = "CARD"
    BANK_TRANSFER = "BANK_TRANSFER"
    E_WALLET = "E_WALLET"


class PaymentStatus(str, enum.Enum):
    PENDING = "PENDING"
    COMPLETED = "COMPLETED"
    REFUNDED = "REFUNDED"


class Payment(Base):
    """Bookkeeping row only; no gateway settlement happens for it."""

    __tablename__ = "payments"

    id = Column(IdentifierType, primary_key=True, index=True)
    amount = Column(Numeric(10, 2), nullable=False)
    method = Column(String(30), nullable=False, default=PaymentMethod.CASH.value)
    status = Column(String(30), nullable=False)
    commission_percent = Column(Numeric(5, 2), nullable=False)
    commission_amount = Column(Numeric(10, 2), nullable=False)
    transaction_reference = Column(String(100), nullable=True, unique=True)
    created_at = Column(DateTime, nullable=False, server_default=func.now())
    booking_id = Column(
        IdentifierType,
        ForeignKey("bookings.id", ondelete="CASCADE"),
        nullable=False,
        unique=True,
    )

    booking = relationship("Booking", back_populates="payment")


__all__ = ["Payment", "PaymentMethod", "PaymentStatus"]
