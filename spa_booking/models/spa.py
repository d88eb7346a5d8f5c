"""ORM models for spas and the services they sell."""

from sqlalchemy import Boolean, Column, ForeignKey, Integer, Numeric, String, Text
from sqlalchemy.orm import relationship

from spa_booking.core.database import Base, IdentifierType


class Spa(Base):
    __tablename__ = "spas"

    id = Column(IdentifierType, primary_key=True, index=True)
    name = Column(String(300), nullable=False)
    address = Column(Text, nullable=True)
    is_approved = Column(Boolean, nullable=False, default=False)
    owner_id = Column(IdentifierType, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)

    owner = relationship("User", lazy="joined")
    services = relationship("SpaService", back_populates="spa", cascade="all, delete-orphan")
    staff = relationship(
        "Staff",
        back_populates="spa",
        cascade="all, delete-orphan",
        order_by="Staff.id",
    )

    def __repr__(self) -> str:  # pragma: no cover - debug helper
        return f"<Spa(id={self.id}, name={self.name}, is_approved={self.is_approved})>"


class SpaService(Base):
    """A bookable treatment offered by a spa."""

    __tablename__ = "spa_services"

    id = Column(IdentifierType, primary_key=True, index=True)
    name = Column(String(200), nullable=False)
    price = Column(Numeric(10, 2), nullable=False)
    duration_minutes = Column(Integer, nullable=False, default=60)
    spa_id = Column(IdentifierType, ForeignKey("spas.id", ondelete="CASCADE"), nullable=False)

    spa = relationship("Spa", back_populates="services")

    def __repr__(self) -> str:  # pragma: no cover - debug helper
        return f"<SpaService(id={self.id}, name={self.name}, price={self.price})>"


__all__ = ["Spa", "SpaService"]
