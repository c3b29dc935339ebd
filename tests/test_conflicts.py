from collections import namedtuple
from datetime import time

import pytest

from services import conflicts

Slot = namedtuple("Slot", ["start_time", "end_time"])


def test_overlapping_intervals_conflict():
    taken = [Slot(time(10, 0), time(11, 0))]
    assert conflicts.find_conflict(time(10, 30), time(11, 30), taken) is taken[0]


def test_touching_intervals_do_not_conflict():
    taken = [Slot(time(10, 0), time(11, 0))]
    assert conflicts.find_conflict(time(11, 0), time(11, 30), taken) is None
    assert conflicts.find_conflict(time(9, 30), time(10, 0), taken) is None


def test_contained_interval_conflicts():
    taken = [Slot(time(9, 0), time(12, 0))]
    assert conflicts.find_conflict(time(10, 0), time(10, 30), taken) is taken[0]


def test_booking_without_window_occupies_the_whole_day():
    taken = [Slot(None, None)]
    assert conflicts.find_conflict(time(23, 0), time(23, 30), taken) is taken[0]
    assert conflicts.find_conflict(None, None, [Slot(time(6, 0), time(6, 30))]) is not None


def test_whole_day_mode_blocks_any_accepted_booking():
    taken = [Slot(time(6, 0), time(6, 30))]
    assert conflicts.find_conflict(time(20, 0), time(20, 30), taken, conflicts.WHOLE_DAY) is taken[0]
    assert conflicts.find_conflict(time(20, 0), time(20, 30), [], conflicts.WHOLE_DAY) is None


def test_fits_availability_requires_full_containment():
    windows = [Slot(time(8, 0), time(12, 0)), Slot(time(14, 0), time(18, 0))]

    assert conflicts.fits_availability(time(8, 0), time(12, 0), windows)
    assert conflicts.fits_availability(time(15, 0), time(15, 30), windows)
    assert not conflicts.fits_availability(time(11, 30), time(12, 30), windows)
    assert not conflicts.fits_availability(time(12, 0), time(14, 0), windows)
    assert not conflicts.fits_availability(time(9, 0), time(9, 30), [])


def test_unknown_mode_is_rejected():
    with pytest.raises(ValueError):
        conflicts.validate_mode("hourly")
