from datetime import datetime, time, timedelta

import pytest

from spa_booking.models import Shift, ShiftDay, Staff, TimeOff
from spa_booking.services.availability import is_staff_available, weekday_index

from conftest import WEDNESDAY, WEDNESDAY_INDEX


def _staff(shifts=(), time_off=()):
    staff = Staff(name="Therapist", is_active=True)
    for weekdays, start, end in shifts:
        staff.shifts.append(
            Shift(
                start_time=start,
                end_time=end,
                shift_days=[ShiftDay(weekday=day) for day in weekdays],
            )
        )
    for start_at, end_at in time_off:
        staff.time_off.append(TimeOff(start_at=start_at, end_at=end_at))
    return staff


def _at(hour, minute=0, second=0, day=WEDNESDAY):
    return day.replace(hour=hour, minute=minute, second=second)


WEDNESDAY_DAY_SHIFT = ((WEDNESDAY_INDEX,), time(9, 0), time(17, 0))


class TestWeekdayIndex:
    """Weekdays are numbered from Sunday."""

    def test_wednesday_is_three(self):
        assert weekday_index(WEDNESDAY) == 3

    def test_sunday_and_saturday(self):
        assert weekday_index(datetime(2030, 1, 6)) == 0
        assert weekday_index(datetime(2030, 1, 5)) == 6


class TestIsStaffAvailable:
    """Shift and time-off evaluation for a single staff member."""

    def test_shift_start_is_available(self):
        staff = _staff(shifts=[WEDNESDAY_DAY_SHIFT])
        assert is_staff_available(staff, _at(9, 0)) is True

    def test_shift_end_is_excluded(self):
        staff = _staff(shifts=[WEDNESDAY_DAY_SHIFT])
        assert is_staff_available(staff, _at(17, 0)) is False

    def test_before_shift_start(self):
        staff = _staff(shifts=[WEDNESDAY_DAY_SHIFT])
        assert is_staff_available(staff, _at(8, 59)) is False

    def test_last_minute_of_shift(self):
        staff = _staff(shifts=[WEDNESDAY_DAY_SHIFT])
        assert is_staff_available(staff, _at(16, 59, 59)) is True

    def test_seconds_are_ignored(self):
        staff = _staff(shifts=[((WEDNESDAY_INDEX,), time(9, 0, 30), time(17, 0))])
        assert is_staff_available(staff, _at(9, 0, 0)) is True

    def test_no_shifts_means_unavailable(self):
        assert is_staff_available(_staff(), _at(10)) is False

    def test_shift_without_days_never_matches(self):
        staff = _staff(shifts=[((), time(9, 0), time(17, 0))])
        assert is_staff_available(staff, _at(10)) is False

    def test_other_weekday_is_unavailable(self):
        staff = _staff(shifts=[WEDNESDAY_DAY_SHIFT])
        thursday = WEDNESDAY + timedelta(days=1)
        assert is_staff_available(staff, _at(10, day=thursday)) is False

    def test_shift_on_several_days(self):
        staff = _staff(shifts=[((1, 3, 5), time(9, 0), time(17, 0))])
        friday = WEDNESDAY + timedelta(days=2)
        assert is_staff_available(staff, _at(10, day=friday)) is True

    def test_split_shifts_are_evaluated_independently(self):
        staff = _staff(
            shifts=[
                ((WEDNESDAY_INDEX,), time(9, 0), time(12, 0)),
                ((WEDNESDAY_INDEX,), time(14, 0), time(18, 0)),
            ]
        )
        assert is_staff_available(staff, _at(10)) is True
        assert is_staff_available(staff, _at(13)) is False
        assert is_staff_available(staff, _at(17, 30)) is True

    def test_overlapping_shifts_are_tolerated(self):
        staff = _staff(
            shifts=[
                ((WEDNESDAY_INDEX,), time(9, 0), time(15, 0)),
                ((WEDNESDAY_INDEX,), time(12, 0), time(17, 0)),
            ]
        )
        assert is_staff_available(staff, _at(13)) is True

    @pytest.mark.parametrize(
        "instant",
        [_at(10, 0), _at(11, 0), _at(12, 0)],
        ids=["window-start", "inside", "window-end"],
    )
    def test_time_off_window_is_closed(self, instant):
        staff = _staff(
            shifts=[WEDNESDAY_DAY_SHIFT],
            time_off=[(_at(10, 0), _at(12, 0))],
        )
        assert is_staff_available(staff, instant) is False

    def test_available_right_after_time_off(self):
        staff = _staff(
            shifts=[WEDNESDAY_DAY_SHIFT],
            time_off=[(_at(10, 0), _at(12, 0))],
        )
        assert is_staff_available(staff, _at(12, 1)) is True

    def test_multi_day_time_off_overrides_shift(self):
        staff = _staff(
            shifts=[WEDNESDAY_DAY_SHIFT],
            time_off=[(WEDNESDAY - timedelta(days=2), WEDNESDAY + timedelta(days=2))],
        )
        assert is_staff_available(staff, _at(10)) is False
