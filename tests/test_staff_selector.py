from datetime import time, timedelta

import pytest
from fastapi import HTTPException

from spa_booking.services.staff_selector import StaffSelector

from conftest import WEDNESDAY, WEDNESDAY_INDEX

TEN_AM = WEDNESDAY.replace(hour=10)


class TestExplicitStaff:
    def test_available_staff_is_returned(self, db, seed):
        spa = seed.spa()
        staff = seed.staff(spa)

        selected = StaffSelector(db).select(spa.id, staff.id, TEN_AM)

        assert selected.id == staff.id

    def test_unknown_staff(self, db, seed):
        spa = seed.spa()
        with pytest.raises(HTTPException) as exc_info:
            StaffSelector(db).select(spa.id, 999, TEN_AM)
        assert exc_info.value.status_code == 404
        assert exc_info.value.detail == "Staff member not available."

    def test_inactive_staff(self, db, seed):
        spa = seed.spa()
        staff = seed.staff(spa, active=False)
        with pytest.raises(HTTPException) as exc_info:
            StaffSelector(db).select(spa.id, staff.id, TEN_AM)
        assert exc_info.value.detail == "Staff member not available."

    def test_staff_of_another_spa(self, db, seed):
        spa = seed.spa()
        other_staff = seed.staff(seed.spa())
        with pytest.raises(HTTPException) as exc_info:
            StaffSelector(db).select(spa.id, other_staff.id, TEN_AM)
        assert exc_info.value.detail == "Staff member not available."

    def test_staff_off_shift(self, db, seed):
        spa = seed.spa()
        staff = seed.staff(spa)
        with pytest.raises(HTTPException) as exc_info:
            StaffSelector(db).select(spa.id, staff.id, WEDNESDAY.replace(hour=20))
        assert exc_info.value.status_code == 404
        assert exc_info.value.detail == "Staff member is not available on this date."

    def test_staff_on_time_off(self, db, seed):
        spa = seed.spa()
        staff = seed.staff(spa, time_off=[(TEN_AM, TEN_AM + timedelta(hours=2))])
        with pytest.raises(HTTPException) as exc_info:
            StaffSelector(db).select(spa.id, staff.id, TEN_AM)
        assert exc_info.value.detail == "Staff member is not available on this date."


class TestAutoAssignment:
    def test_lowest_id_available_staff_wins(self, db, seed):
        spa = seed.spa()
        off_shift = seed.staff(spa, shifts=[((WEDNESDAY_INDEX,), time(18, 0), time(22, 0))])
        first = seed.staff(spa)
        seed.staff(spa)

        selected = StaffSelector(db).select(spa.id, None, TEN_AM)

        assert selected.id == first.id
        assert selected.id != off_shift.id

    def test_inactive_staff_are_skipped(self, db, seed):
        spa = seed.spa()
        seed.staff(spa, active=False)
        active = seed.staff(spa)

        assert StaffSelector(db).select(spa.id, None, TEN_AM).id == active.id

    def test_nobody_available_returns_none(self, db, seed):
        spa = seed.spa()
        seed.staff(spa, shifts=[((0,), time(9, 0), time(17, 0))])

        assert StaffSelector(db).select(spa.id, None, TEN_AM) is None

    def test_spa_without_staff_returns_none(self, db, seed):
        spa = seed.spa()
        assert StaffSelector(db).select(spa.id, None, TEN_AM) is None


class TestListAvailable:
    def test_only_available_staff_in_id_order(self, db, seed):
        spa = seed.spa()
        first = seed.staff(spa)
        seed.staff(spa, time_off=[(TEN_AM, TEN_AM)])
        seed.staff(spa, active=False)
        last = seed.staff(spa)
        seed.staff(seed.spa())

        available = StaffSelector(db).list_available(spa.id, TEN_AM)

        assert [staff.id for staff in available] == [first.id, last.id]
