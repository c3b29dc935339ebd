"""
Booking lifecycle: pending -> accepted -> done, with pending/accepted ->
cancelled (owner) and pending/accepted -> declined (admin).

Every transition runs in one transaction. Acceptance locks the walker row
before re-checking conflicts so two acceptances for the same walker are
serialized and cannot both pass the overlap check.
"""
import logging
from collections import namedtuple
from datetime import datetime

from flask import current_app

from models import db
from models.booking import (
    Booking, BookingDog, BookingAddon,
    PENDING, ACCEPTED, DONE, CANCELLED, DECLINED, OPEN_STATUSES,
)
from models.dog import Dog
from models.user import User
from models.walker import Walker, WalkerAvailability, WalkerAddon
from services import conflicts, pricing
from services.errors import Conflict, Forbidden, NotFound, ValidationError
from services.loyalty import apply_loyalty_rule
from services.subscriptions import active_discount_percent
from services.tx import atomic

logger = logging.getLogger(__name__)

DoneResult = namedtuple("DoneResult", ["booking", "loyalty"])


def _conflict_mode() -> str:
    return conflicts.validate_mode(current_app.config.get("BOOKING_CONFLICT_MODE", conflicts.INTERVAL))


def _unique_ids(values, field: str, required: bool) -> list:
    if values is None:
        values = []
    if not isinstance(values, (list, tuple)):
        raise ValidationError(f"{field} must be a list")
    if required and not values:
        raise ValidationError(f"{field} must not be empty")

    out = []
    for v in values:
        if isinstance(v, bool) or not isinstance(v, int):
            raise ValidationError(f"{field} must contain integer ids")
        if v not in out:
            out.append(v)
    return out


def _check_window(start_time, end_time):
    if (start_time is None) != (end_time is None):
        raise ValidationError("start_time and end_time must be given together")
    if start_time is not None and end_time <= start_time:
        raise ValidationError("end_time must be after start_time")


def accepted_bookings_for(walker_id: int, day, exclude_id=None, lock=False):
    q = Booking.query.filter(
        Booking.walker_id == walker_id,
        Booking.date == day,
        Booking.status == ACCEPTED,
    )
    if exclude_id is not None:
        q = q.filter(Booking.id != exclude_id)
    if lock:
        q = q.with_for_update()
    return q.all()


def create_booking(owner_id: int, walker_id: int, day, dog_ids, addon_ids=None,
                   start_time=None, end_time=None) -> Booking:
    """Validates and stores a pending booking with its dogs and add-on price snapshots."""
    if not walker_id or day is None:
        raise ValidationError("walker_id and date are required")
    dog_ids = _unique_ids(dog_ids, "dog_ids", required=True)
    addon_ids = _unique_ids(addon_ids, "addon_ids", required=False)
    _check_window(start_time, end_time)

    with atomic("booking create"):
        owner = db.session.get(User, owner_id)
        if not owner or owner.is_banned:
            raise Forbidden("User is banned")

        walker = db.session.get(Walker, walker_id)
        if not walker or walker.is_banned:
            raise Forbidden("Walker unavailable")

        owned = Dog.query.filter(Dog.user_id == owner_id, Dog.id.in_(dog_ids)).count()
        if owned != len(dog_ids):
            raise Forbidden("One or more dogs are not yours")

        if start_time is not None:
            windows = WalkerAvailability.query.filter_by(walker_id=walker.id, date=day).all()
            if not conflicts.fits_availability(start_time, end_time, windows):
                raise ValidationError("Time outside availability")

            taken = accepted_bookings_for(walker.id, day)
            if conflicts.find_conflict(start_time, end_time, taken, _conflict_mode()):
                raise Conflict("Time slot already booked")

        addons = []
        if addon_ids:
            addons = WalkerAddon.query.filter(
                WalkerAddon.walker_id == walker.id,
                WalkerAddon.id.in_(addon_ids),
            ).all()
            if len(addons) != len(addon_ids):
                raise ValidationError("Invalid addons")

        booking = Booking(
            user_id=owner_id,
            walker_id=walker.id,
            date=day,
            start_time=start_time,
            end_time=end_time,
            status=PENDING,
        )
        booking.dogs = [BookingDog(dog_id=d) for d in dog_ids]
        booking.addons = [BookingAddon(addon_id=a.id, price_snapshot=a.price) for a in addons]
        db.session.add(booking)
        db.session.flush()

    logger.info("Booking %s created by user %s for walker %s", booking.id, owner_id, walker_id)
    return booking


def cancel_booking(owner_id: int, booking_id: int, reason=None) -> Booking:
    with atomic("booking cancel"):
        booking = (
            Booking.query
            .filter(
                Booking.id == booking_id,
                Booking.user_id == owner_id,
                Booking.status.in_(OPEN_STATUSES),
            )
            .with_for_update()
            .first()
        )
        # absent, someone else's and already closed all look the same
        if not booking:
            raise NotFound("Booking not found")

        booking.status = CANCELLED
        booking.cancelled_at = datetime.utcnow()
        booking.cancel_reason = reason
    return booking


def accept_booking(booking_id: int, walker_id=None) -> Booking:
    """
    Assigns the walker, re-checks conflicts under a walker lock, prices the
    walk from the walker's current rates and freezes the result.
    An accepted booking may be accepted again, which re-prices it.
    """
    with atomic("booking accept"):
        booking = db.session.get(Booking, booking_id, with_for_update=True)
        if not booking:
            raise NotFound("Booking not found")
        if booking.is_terminal:
            raise Conflict(f"Booking is {booking.status}")

        if booking.walker_id and walker_id and walker_id != booking.walker_id:
            raise ValidationError("Booking is assigned to another walker")
        target_id = booking.walker_id or walker_id
        if not target_id:
            raise ValidationError("walker_id is required")

        # row lock on the walker serializes concurrent acceptances for it
        # (SQLite already holds the database write lock, see use_immediate_transactions)
        walker = db.session.get(Walker, target_id, with_for_update=True)
        if not walker:
            raise NotFound("Walker not found")
        if walker.is_banned:
            raise ValidationError("Walker unavailable")

        taken = accepted_bookings_for(walker.id, booking.date, exclude_id=booking.id, lock=True)
        if conflicts.find_conflict(booking.start_time, booking.end_time, taken, _conflict_mode()):
            raise Conflict("Walker already has an accepted booking at that time")

        q = pricing.quote_for_walker(
            walker,
            dog_count=len(booking.dogs),
            addon_prices=[a.price_snapshot for a in booking.addons],
            discount_percent=active_discount_percent(booking.user_id),
        )

        booking.walker_id = walker.id
        booking.status = ACCEPTED
        booking.accepted_at = datetime.utcnow()
        booking.base_price = q.base_price
        booking.extra_dogs_fee = q.extra_dogs_fee
        booking.addons_total = q.addons_total
        booking.discount_amount = q.discount_amount
        booking.total_price = q.total_price

    logger.info("Booking %s accepted for walker %s, total %s", booking.id, booking.walker_id, q.total_price)
    return booking


def decline_booking(booking_id: int) -> Booking:
    """Closes the booking without touching any price already frozen on it."""
    with atomic("booking decline"):
        booking = db.session.get(Booking, booking_id, with_for_update=True)
        if not booking:
            raise NotFound("Booking not found")
        if booking.is_terminal:
            raise Conflict(f"Booking is {booking.status}")

        booking.status = DECLINED
        booking.declined_at = datetime.utcnow()
    return booking


def mark_done(walker_user_id: int, booking_id: int) -> DoneResult:
    with atomic("booking done"):
        walker = Walker.query.filter_by(user_id=walker_user_id).first()
        booking = db.session.get(Booking, booking_id, with_for_update=True)
        if not walker or not booking or booking.walker_id != walker.id:
            raise NotFound("Booking not found or not yours")
        if booking.status != ACCEPTED:
            raise Conflict(f"Booking is {booking.status}")

        booking.status = DONE
        booking.completed_at = datetime.utcnow()

    # status is committed; the loyalty hook reports instead of raising
    loyalty = apply_loyalty_rule(booking.user_id)
    if loyalty.error is not None:
        logger.error("Booking %s done but loyalty update failed: %s", booking.id, loyalty.error)
    return DoneResult(booking, loyalty)


def delete_booking(booking_id: int) -> None:
    with atomic("booking delete"):
        booking = db.session.get(Booking, booking_id, with_for_update=True)
        if not booking:
            raise NotFound("Booking not found")
        # dog links, add-on snapshots and review go with it (cascade)
        db.session.delete(booking)


def serialize_booking(b: Booking) -> dict:
    def money(v):
        return str(v) if v is not None else None

    return {
        "id": b.id,
        "user_id": b.user_id,
        "walker_id": b.walker_id,
        "date": b.date.isoformat(),
        "start_time": b.start_time.isoformat() if b.start_time else None,
        "end_time": b.end_time.isoformat() if b.end_time else None,
        "status": b.status,
        "dog_ids": [d.dog_id for d in b.dogs],
        "addons": [
            {"addon_id": a.addon_id, "name": a.addon.name if a.addon else None, "price": money(a.price_snapshot)}
            for a in b.addons
        ],
        "base_price": money(b.base_price),
        "extra_dogs_fee": money(b.extra_dogs_fee),
        "addons_total": money(b.addons_total),
        "discount_amount": money(b.discount_amount),
        "total_price": money(b.total_price),
        "reviewed": b.review is not None,
        "created_at": b.created_at.isoformat() if b.created_at else None,
    }
