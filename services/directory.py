from decimal import Decimal, InvalidOperation

from flask import current_app

from models import db
from models.walker import Walker, WalkerAvailability
from services import conflicts
from services.booking_engine import accepted_bookings_for
from services.errors import NotFound, ValidationError
from services.tx import atomic


def search_walkers(location: str, day, start_time, end_time, dogs: int):
    """
    Non-banned walkers near ``location`` who take ``dogs`` dogs, advertise a
    window covering the interval and have no accepted walk blocking it.
    """
    mode = conflicts.validate_mode(current_app.config.get("BOOKING_CONFLICT_MODE", conflicts.INTERVAL))
    # user text is matched literally, wildcards included
    pattern = location.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    candidates = (
        Walker.query
        .filter(
            Walker.is_banned.is_(False),
            Walker.location.ilike(f"%{pattern}%", escape="\\"),
            Walker.max_dogs_per_walk >= dogs,
        )
        .order_by(Walker.created_at.desc(), Walker.id.desc())
        .all()
    )

    out = []
    for w in candidates:
        windows = WalkerAvailability.query.filter_by(walker_id=w.id, date=day).all()
        if not conflicts.fits_availability(start_time, end_time, windows):
            continue
        if conflicts.find_conflict(start_time, end_time, accepted_bookings_for(w.id, day), mode):
            continue
        out.append(w)
    return out


def money_field(data: dict, key: str, required: bool, default=None):
    raw = data.get(key)
    if raw is None:
        if required:
            raise ValidationError(f"{key} is required")
        return default
    try:
        value = Decimal(str(raw))
    except InvalidOperation:
        raise ValidationError(f"{key} must be a number")
    if not value.is_finite() or value < 0:
        raise ValidationError(f"{key} must be a non-negative number")
    return value


def upsert_walker_profile(user_id: int, data: dict) -> Walker:
    walker = Walker.query.filter_by(user_id=user_id).first()
    creating = walker is None

    name = (data.get("name") or "").strip()
    location = (data.get("location") or "").strip()
    if creating and (not name or not location):
        raise ValidationError("name and location are required")

    price = money_field(data, "price_per_30min", required=creating)
    fee = money_field(data, "extra_dog_fee_per_dog", required=False)

    max_dogs = data.get("max_dogs_per_walk")
    if max_dogs is not None and (isinstance(max_dogs, bool) or not isinstance(max_dogs, int) or max_dogs < 1):
        raise ValidationError("max_dogs_per_walk must be a positive integer")

    with atomic("walker profile upsert"):
        if creating:
            walker = Walker(user_id=user_id, max_dogs_per_walk=1, extra_dog_fee_per_dog=Decimal("0"))
            db.session.add(walker)
        if name:
            walker.name = name
        if location:
            walker.location = location
        if "bio" in data:
            walker.bio = (data.get("bio") or "").strip() or None
        if price is not None:
            walker.price_per_30min = price
        if fee is not None:
            walker.extra_dog_fee_per_dog = fee
        if max_dogs is not None:
            walker.max_dogs_per_walk = max_dogs
    return walker


def walker_for_user(user_id: int) -> Walker:
    walker = Walker.query.filter_by(user_id=user_id).first()
    if not walker:
        raise NotFound("Walker profile not found")
    return walker


def add_availability(user_id: int, day, start_time, end_time) -> WalkerAvailability:
    if day is None or start_time is None or end_time is None:
        raise ValidationError("date, start_time and end_time are required")
    if end_time <= start_time:
        raise ValidationError("end_time must be after start_time")

    walker = walker_for_user(user_id)
    with atomic("availability create", integrity_conflict="Window already exists"):
        row = WalkerAvailability(walker_id=walker.id, date=day, start_time=start_time, end_time=end_time)
        db.session.add(row)
    return row


def remove_availability(user_id: int, window_id: int) -> None:
    walker = walker_for_user(user_id)
    with atomic("availability delete"):
        row = WalkerAvailability.query.filter_by(id=window_id, walker_id=walker.id).first()
        if not row:
            raise NotFound("Availability window not found")
        db.session.delete(row)


def serialize_walker(w: Walker) -> dict:
    return {
        "id": w.id,
        "name": w.name,
        "location": w.location,
        "bio": w.bio,
        "price_per_30min": str(w.price_per_30min),
        "max_dogs_per_walk": w.max_dogs_per_walk,
        "extra_dog_fee_per_dog": str(w.extra_dog_fee_per_dog),
    }
