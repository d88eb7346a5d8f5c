from __future__ import annotations

import logging
from datetime import datetime
from typing import List, Optional

from fastapi import HTTPException, status
from sqlalchemy.orm import Session

from spa_booking.models.staff import Staff
from spa_booking.repository import staff_repository
from spa_booking.services.availability import is_staff_available

logger = logging.getLogger(__name__)


class StaffSelector:
    def __init__(self, db: Session):
        self.db = db

    def select(
        self,
        spa_id: int,
        staff_id: Optional[int],
        instant: datetime,
    ) -> Optional[Staff]:
        """Validate the requested staff member or auto-assign the first available one.

        Returns ``None`` when no staff id was given and nobody is available; the
        booking is then created unassigned.
        """

        if staff_id is not None:
            staff = staff_repository.get_active_staff(self.db, spa_id=spa_id, staff_id=staff_id)
            if staff is None:
                raise HTTPException(
                    status_code=status.HTTP_404_NOT_FOUND,
                    detail="Staff member not available.",
                )
            if not is_staff_available(staff, instant):
                raise HTTPException(
                    status_code=status.HTTP_404_NOT_FOUND,
                    detail="Staff member is not available on this date.",
                )
            return staff

        for candidate in staff_repository.list_active_staff(self.db, spa_id):
            if is_staff_available(candidate, instant):
                logger.debug("Auto-assigned staff %s for spa %s at %s", candidate.id, spa_id, instant)
                return candidate

        logger.info("No staff available for spa %s at %s; booking stays unassigned", spa_id, instant)
        return None

    def list_available(self, spa_id: int, instant: datetime) -> List[Staff]:
        return [
            staff
            for staff in staff_repository.list_active_staff(self.db, spa_id)
            if is_staff_available(staff, instant)
        ]


__all__ = ["StaffSelector"]
