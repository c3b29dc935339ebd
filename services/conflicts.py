"""
Scheduling predicates shared by booking creation, acceptance and walker search.

Times are compared as seconds since midnight over half-open ``[start, end)``
intervals, so walks that only touch at an endpoint never conflict. A booking
without a time window occupies the whole day.
"""
from datetime import time

INTERVAL = "interval"
WHOLE_DAY = "whole_day"
CONFLICT_MODES = (INTERVAL, WHOLE_DAY)

DAY_START = 0
DAY_END = 24 * 60 * 60


def validate_mode(mode: str) -> str:
    if mode not in CONFLICT_MODES:
        raise ValueError(f"BOOKING_CONFLICT_MODE must be one of {CONFLICT_MODES}, got {mode!r}")
    return mode


def to_seconds(value: time) -> int:
    return value.hour * 3600 + value.minute * 60 + value.second


def window_bounds(start_time, end_time) -> tuple[int, int]:
    start = DAY_START if start_time is None else to_seconds(start_time)
    end = DAY_END if end_time is None else to_seconds(end_time)
    return start, end


def intervals_overlap(a: tuple[int, int], b: tuple[int, int]) -> bool:
    a_start, a_end = a
    b_start, b_end = b
    return not (a_end <= b_start or a_start >= b_end)


def fits_availability(start_time, end_time, windows) -> bool:
    """True when [start, end) lies inside at least one window (objects with start_time/end_time)."""
    start, end = window_bounds(start_time, end_time)
    for w in windows:
        w_start, w_end = window_bounds(w.start_time, w.end_time)
        if w_start <= start and w_end >= end:
            return True
    return False


def find_conflict(start_time, end_time, accepted_bookings, mode: str = INTERVAL):
    """
    Returns the first accepted booking that blocks [start_time, end_time), or None.

    Callers pass only bookings of the same walker and date.
    """
    if mode == WHOLE_DAY:
        return next(iter(accepted_bookings), None)

    candidate = window_bounds(start_time, end_time)
    for other in accepted_bookings:
        if intervals_overlap(candidate, window_bounds(other.start_time, other.end_time)):
            return other
    return None
