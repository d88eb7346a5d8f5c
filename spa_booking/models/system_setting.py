from sqlalchemy import Column, String, Text

from spa_booking.core.database import Base, IdentifierType


class SystemSetting(Base):
    """Key/value platform settings maintained by admins (e.g. ``commission_rate``)."""

    __tablename__ = "system_settings"

    id = Column(IdentifierType, primary_key=True, index=True)
    key = Column(String(100), nullable=False, unique=True, index=True)
    value = Column(Text, nullable=True)
    description = Column(Text, nullable=True)


__all__ = ["SystemSetting"]
