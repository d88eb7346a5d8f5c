"""ORM models describing spa staff and their working hours."""

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer, String, Text, Time
from sqlalchemy.orm import relationship

from spa_booking.core.database import Base, IdentifierType


class Staff(Base):
    __tablename__ = "staff"

    id = Column(IdentifierType, primary_key=True, index=True)
    name = Column(String(200), nullable=False)
    is_active = Column(Boolean, nullable=False, default=True)
    spa_id = Column(IdentifierType, ForeignKey("spas.id", ondelete="CASCADE"), nullable=False)

    spa = relationship("Spa", back_populates="staff")
    shifts = relationship(
        "Shift",
        back_populates="staff",
        cascade="all, delete-orphan",
        order_by="Shift.id",
    )
    time_off = relationship(
        "TimeOff",
        back_populates="staff",
        cascade="all, delete-orphan",
        order_by="TimeOff.start_at",
    )

    def __repr__(self) -> str:  # pragma: no cover - debugging helper
        return f"<Staff(id={self.id}, name={self.name}, is_active={self.is_active})>"


class Shift(Base):
    """A recurring weekly working window. Shifts never cross midnight."""

    __tablename__ = "shifts"

    id = Column(IdentifierType, primary_key=True, index=True)
    start_time = Column(Time, nullable=False)
    end_time = Column(Time, nullable=False)
    staff_id = Column(IdentifierType, ForeignKey("staff.id", ondelete="CASCADE"), nullable=False)

    staff = relationship("Staff", back_populates="shifts")
    shift_days = relationship("ShiftDay", back_populates="shift", cascade="all, delete-orphan")

    def __repr__(self) -> str:  # pragma: no cover - debugging helper
        return (
            "<Shift(id={id}, start_time={start}, end_time={end})>"
        ).format(id=self.id, start=self.start_time, end=self.end_time)


class ShiftDay(Base):
    __tablename__ = "shift_days"

    id = Column(IdentifierType, primary_key=True, index=True)
    # 0 = Sunday ... 6 = Saturday
    weekday = Column(Integer, nullable=False)
    shift_id = Column(IdentifierType, ForeignKey("shifts.id", ondelete="CASCADE"), nullable=False)

    shift = relationship("Shift", back_populates="shift_days")


class TimeOff(Base):
    __tablename__ = "staff_time_off"

    id = Column(IdentifierType, primary_key=True, index=True)
    start_at = Column(DateTime, nullable=False)
    end_at = Column(DateTime, nullable=False)
    reason = Column(Text, nullable=True)
    staff_id = Column(IdentifierType, ForeignKey("staff.id", ondelete="CASCADE"), nullable=False)

    staff = relationship("Staff", back_populates="time_off")


__all__ = ["Staff", "Shift", "ShiftDay", "TimeOff"]
