from datetime import date, datetime, time, timedelta
from decimal import Decimal

from models import db
from models.booking import Booking, BookingDog, BookingAddon, PENDING
from models.dog import Dog
from models.subscription import UserSubscription
from models.user import User, Role
from models.walker import Walker, WalkerAvailability, WalkerAddon
from security.password import hash_password
from utils.seed import OWNER, WALKER

PASSWORD = "password123"
WALK_DAY = date(2030, 6, 1)

_seq = {"n": 0}


def _next():
    _seq["n"] += 1
    return _seq["n"]


def make_user(email=None, role=OWNER, banned=False, full_name="Test User"):
    user = User(
        email=email or f"user{_next()}@test.com",
        password_hash=hash_password(PASSWORD),
        full_name=full_name,
        is_banned=banned,
    )
    user.roles.append(Role.query.filter_by(name=role).one())
    db.session.add(user)
    db.session.commit()
    return user


def make_walker(user=None, price="20.00", max_dogs=1, extra_fee="5.00", location="Dublin", banned=False):
    user = user or make_user(role=WALKER)
    walker = Walker(
        user_id=user.id,
        name=user.full_name or "Walker",
        location=location,
        price_per_30min=Decimal(price),
        max_dogs_per_walk=max_dogs,
        extra_dog_fee_per_dog=Decimal(extra_fee),
        is_banned=banned,
    )
    db.session.add(walker)
    db.session.commit()
    return walker


def make_dog(owner, name="Rex"):
    dog = Dog(user_id=owner.id, name=name, breed="Beagle", age=3)
    db.session.add(dog)
    db.session.commit()
    return dog


def make_window(walker, day=WALK_DAY, start=time(8, 0), end=time(18, 0)):
    row = WalkerAvailability(walker_id=walker.id, date=day, start_time=start, end_time=end)
    db.session.add(row)
    db.session.commit()
    return row


def make_addon(walker, name="Towel dry", price="4.50"):
    addon = WalkerAddon(walker_id=walker.id, name=name, price=Decimal(price))
    db.session.add(addon)
    db.session.commit()
    return addon


def make_subscription(user, percent=10, days=30):
    sub = UserSubscription(
        user_id=user.id,
        discount_percent=percent,
        active_until=datetime.utcnow() + timedelta(days=days),
    )
    db.session.add(sub)
    db.session.commit()
    return sub


def make_booking(owner, walker, dogs, day=WALK_DAY, start=time(10, 0), end=time(10, 30),
                 status=PENDING, addons=()):
    booking = Booking(
        user_id=owner.id,
        walker_id=walker.id if walker else None,
        date=day,
        start_time=start,
        end_time=end,
        status=status,
    )
    booking.dogs = [BookingDog(dog_id=d.id) for d in dogs]
    booking.addons = [BookingAddon(addon_id=a.id, price_snapshot=a.price) for a in addons]
    db.session.add(booking)
    db.session.commit()
    return booking
