"""Read access to admin-maintained platform settings."""

from __future__ import annotations

from typing import Optional

from sqlalchemy.orm import Session

from spa_booking.models.system_setting import SystemSetting


def get_setting_value(db: Session, key: str) -> Optional[str]:
    setting = db.query(SystemSetting).filter(SystemSetting.key == key).first()
    if setting is None:
        return None
    return setting.value


__all__ = ["get_setting_value"]
