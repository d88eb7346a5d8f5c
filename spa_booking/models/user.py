"""SQLAlchemy model for platform accounts (customers, spa owners and admins)."""

from sqlalchemy import Column, DateTime, String
from sqlalchemy.sql import func

from spa_booking.core.database import Base, IdentifierType


class User(Base):
    __tablename__ = "users"

    id = Column(IdentifierType, primary_key=True, index=True)
    name = Column(String(200), nullable=False)
    email = Column(String(255), nullable=False, unique=True, index=True)
    phone = Column(String(20), nullable=True)
    role = Column(String(20), nullable=False, default="customer")
    created_at = Column(DateTime, server_default=func.now())

    def __repr__(self) -> str:  # pragma: no cover - debugging helper
        return f"<User(id={self.id}, email={self.email}, role={self.role})>"


__all__ = ["User"]
