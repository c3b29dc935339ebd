from datetime import time
from decimal import Decimal

import pytest

from models.booking import Booking, BookingDog, BookingAddon, ACCEPTED, PENDING
from services import booking_engine
from services.errors import Conflict, Forbidden, InternalError, ValidationError
from tests.factories import (
    WALK_DAY, make_addon, make_booking, make_dog, make_user, make_walker, make_window,
)


@pytest.fixture
def setup(app):
    owner = make_user()
    walker = make_walker()
    make_window(walker, start=time(8, 0), end=time(12, 0))
    dog = make_dog(owner)
    return owner, walker, dog


def _row_counts():
    return Booking.query.count(), BookingDog.query.count(), BookingAddon.query.count()


def test_create_stores_pending_booking_with_dogs_and_addon_snapshots(setup):
    owner, walker, dog = setup
    second = make_dog(owner, name="Bella")
    addon = make_addon(walker, price="4.50")

    booking = booking_engine.create_booking(
        owner.id, walker.id, WALK_DAY, [dog.id, second.id, dog.id],
        addon_ids=[addon.id], start_time=time(9, 0), end_time=time(9, 30),
    )

    assert booking.status == PENDING
    assert booking.total_price is None
    assert sorted(d.dog_id for d in booking.dogs) == sorted([dog.id, second.id])
    assert [(a.addon_id, a.price_snapshot) for a in booking.addons] == [(addon.id, Decimal("4.50"))]


def test_create_without_window_skips_availability(setup):
    owner, walker, dog = setup

    booking = booking_engine.create_booking(owner.id, walker.id, WALK_DAY.replace(day=2), [dog.id])

    assert booking.start_time is None and booking.end_time is None


def test_foreign_dog_is_rejected_and_nothing_persisted(setup):
    owner, walker, dog = setup
    stranger_dog = make_dog(make_user(), name="Not mine")

    with pytest.raises(Forbidden) as exc_info:
        booking_engine.create_booking(owner.id, walker.id, WALK_DAY, [dog.id, stranger_dog.id])

    assert str(stranger_dog.id) not in exc_info.value.message
    assert _row_counts() == (0, 0, 0)


def test_banned_owner_cannot_book(app):
    owner = make_user(banned=True)
    walker = make_walker()
    dog = make_dog(owner)

    with pytest.raises(Forbidden):
        booking_engine.create_booking(owner.id, walker.id, WALK_DAY, [dog.id])


@pytest.mark.parametrize("banned", [True, False])
def test_banned_or_missing_walker_is_rejected(setup, banned):
    owner, _, dog = setup
    walker_id = make_walker(banned=True).id if banned else 9999

    with pytest.raises(Forbidden):
        booking_engine.create_booking(owner.id, walker_id, WALK_DAY, [dog.id])


def test_empty_dog_list_is_invalid(setup):
    owner, walker, _ = setup

    with pytest.raises(ValidationError):
        booking_engine.create_booking(owner.id, walker.id, WALK_DAY, [])


def test_half_window_is_invalid(setup):
    owner, walker, dog = setup

    with pytest.raises(ValidationError):
        booking_engine.create_booking(owner.id, walker.id, WALK_DAY, [dog.id], start_time=time(9, 0))


def test_window_outside_availability_is_rejected(setup):
    owner, walker, dog = setup

    with pytest.raises(ValidationError, match="availability"):
        booking_engine.create_booking(
            owner.id, walker.id, WALK_DAY, [dog.id], start_time=time(11, 45), end_time=time(12, 15)
        )
    assert _row_counts() == (0, 0, 0)


def test_overlap_with_accepted_booking_is_a_conflict(setup):
    owner, walker, dog = setup
    make_booking(owner, walker, [dog], start=time(9, 0), end=time(10, 0), status=ACCEPTED)

    with pytest.raises(Conflict):
        booking_engine.create_booking(
            owner.id, walker.id, WALK_DAY, [dog.id], start_time=time(9, 30), end_time=time(10, 30)
        )


def test_touching_accepted_booking_is_fine(setup):
    owner, walker, dog = setup
    make_booking(owner, walker, [dog], start=time(9, 0), end=time(10, 0), status=ACCEPTED)

    booking = booking_engine.create_booking(
        owner.id, walker.id, WALK_DAY, [dog.id], start_time=time(10, 0), end_time=time(10, 30)
    )
    assert booking.status == PENDING


def test_pending_bookings_do_not_block_creation(setup):
    owner, walker, dog = setup
    make_booking(owner, walker, [dog], start=time(9, 0), end=time(10, 0), status=PENDING)

    booking_engine.create_booking(
        owner.id, walker.id, WALK_DAY, [dog.id], start_time=time(9, 0), end_time=time(10, 0)
    )
    assert Booking.query.count() == 2


def test_addon_of_another_walker_is_rejected(setup):
    owner, walker, dog = setup
    other_addon = make_addon(make_walker(), name="Bath")

    with pytest.raises(ValidationError, match="addons"):
        booking_engine.create_booking(owner.id, walker.id, WALK_DAY, [dog.id], addon_ids=[other_addon.id])
    assert _row_counts() == (0, 0, 0)


def test_failure_after_booking_insert_rolls_back_every_row(setup, monkeypatch):
    owner, walker, dog = setup
    addon = make_addon(walker)

    # the add-on link violates NOT NULL during flush, after the booking row went out
    def broken_snapshot(addon_id, price_snapshot):
        return BookingAddon(addon_id=addon_id, price_snapshot=None)

    monkeypatch.setattr("services.booking_engine.BookingAddon", broken_snapshot)
    with pytest.raises(InternalError):
        booking_engine.create_booking(owner.id, walker.id, WALK_DAY, [dog.id], addon_ids=[addon.id])

    assert _row_counts() == (0, 0, 0)
