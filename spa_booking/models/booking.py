import enum

from sqlalchemy import Column, DateTime, ForeignKey, Numeric, String, func
from sqlalchemy.orm import relationship

from spa_booking.core.database import Base, IdentifierType


class BookingStatus(str, enum.Enum):
    PENDING = "PENDING"
    CONFIRMED = "CONFIRMED"
    COMPLETED = "COMPLETED"
    CANCELLED = "CANCELLED"


class Booking(Base):
    """A customer's appointment for one spa service.

    ``requested_scheduled_at`` is only set while a customer reschedule request
    waits for the spa owner's decision.
    """

    __tablename__ = "bookings"

    id = Column(IdentifierType, primary_key=True, index=True)
    scheduled_at = Column(DateTime, nullable=False)
    requested_scheduled_at = Column(DateTime, nullable=True)
    status = Column(String(30), nullable=False, default=BookingStatus.PENDING.value)
    total_price = Column(Numeric(10, 2), nullable=False)
    final_price = Column(Numeric(10, 2), nullable=False)
    commission_amount = Column(Numeric(10, 2), nullable=False)
    coupon_code = Column(String(50), nullable=True)
    created_at = Column(DateTime, nullable=False, server_default=func.now())
    updated_at = Column(DateTime, nullable=True, onupdate=func.now())

    spa_id = Column(IdentifierType, ForeignKey("spas.id", ondelete="CASCADE"), nullable=False)
    service_id = Column(
        IdentifierType, ForeignKey("spa_services.id", ondelete="CASCADE"), nullable=False
    )
    customer_id = Column(
        IdentifierType, ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    staff_id = Column(IdentifierType, ForeignKey("staff.id", ondelete="SET NULL"), nullable=True)

    spa = relationship("Spa")
    service = relationship("SpaService")
    customer = relationship("User")
    staff = relationship("Staff")
    payment = relationship(
        "Payment",
        back_populates="booking",
        uselist=False,
        cascade="all, delete-orphan",
    )

    @property
    def has_pending_reschedule(self) -> bool:
        return self.requested_scheduled_at is not None

    def __repr__(self) -> str:
        return (
            f"<Booking(id={self.id}, status={self.status}, "
            f"scheduled_at={self.scheduled_at}, "
            f"requested_scheduled_at={self.requested_scheduled_at})>"
        )


__all__ = ["Booking", "BookingStatus"]
