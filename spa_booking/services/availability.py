"""Decide whether a staff member can take a booking at a given instant.

Only shifts and time-off windows are consulted; other bookings at the same
instant are not.
"""

from __future__ import annotations

from datetime import datetime, time
from typing import Iterable

from spa_booking.models.staff import Shift, Staff, TimeOff


def weekday_index(instant: datetime) -> int:
    """Return the weekday with 0 = Sunday ... 6 = Saturday."""

    return (instant.weekday() + 1) % 7


def _to_minute(value: time) -> time:
    return value.replace(second=0, microsecond=0)


def shift_covers(shift: Shift, instant: datetime) -> bool:
    """True when ``instant`` falls on one of the shift's days within ``[start, end)``."""

    shift_days = shift.shift_days or []
    if not shift_days:
        return False

    weekday = weekday_index(instant)
    if not any(int(day.weekday) == weekday for day in shift_days):
        return False

    time_of_day = _to_minute(instant.time())
    return _to_minute(shift.start_time) <= time_of_day < _to_minute(shift.end_time)


def is_on_time_off(windows: Iterable[TimeOff], instant: datetime) -> bool:
    return any(window.start_at <= instant <= window.end_at for window in windows)


def is_staff_available(staff: Staff, instant: datetime) -> bool:
    shifts = staff.shifts or []
    if not shifts:
        return False

    if not any(shift_covers(shift, instant) for shift in shifts):
        return False

    return not is_on_time_off(staff.time_off or [], instant)


__all__ = ["is_staff_available", "is_on_time_off", "shift_covers", "weekday_index"]
