from datetime import datetime
from models.db import db

# status values
PENDING = "pending"
ACCEPTED = "accepted"
DONE = "done"
CANCELLED = "cancelled"
DECLINED = "declined"

BOOKING_STATUSES = (PENDING, ACCEPTED, DONE, CANCELLED, DECLINED)
TERMINAL_STATUSES = (DONE, CANCELLED, DECLINED)
OPEN_STATUSES = (PENDING, ACCEPTED)


class Booking(db.Model):
    __tablename__ = "bookings"

    id = db.Column(db.Integer, primary_key=True)

    user_id = db.Column(db.Integer, db.ForeignKey("users.id"), nullable=False, index=True)
    walker_id = db.Column(db.Integer, db.ForeignKey("walkers.id"), nullable=True, index=True)

    date = db.Column(db.Date, nullable=False, index=True)
    # both null means the walk may happen any time that day
    start_time = db.Column(db.Time, nullable=True)
    end_time = db.Column(db.Time, nullable=True)

    status = db.Column(db.String(20), nullable=False, default=PENDING, index=True)

    # set at acceptance, frozen until a re-acceptance
    base_price = db.Column(db.Numeric(10, 2), nullable=True)
    extra_dogs_fee = db.Column(db.Numeric(10, 2), nullable=True)
    addons_total = db.Column(db.Numeric(10, 2), nullable=True)
    discount_amount = db.Column(db.Numeric(10, 2), nullable=True)
    total_price = db.Column(db.Numeric(10, 2), nullable=True)

    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)
    accepted_at = db.Column(db.DateTime, nullable=True)
    completed_at = db.Column(db.DateTime, nullable=True)
    cancelled_at = db.Column(db.DateTime, nullable=True)
    cancel_reason = db.Column(db.String(120), nullable=True)
    declined_at = db.Column(db.DateTime, nullable=True)

    dogs = db.relationship("BookingDog", back_populates="booking", cascade="all, delete-orphan")
    addons = db.relationship("BookingAddon", back_populates="booking", cascade="all, delete-orphan")
    review = db.relationship("Review", back_populates="booking", uselist=False, cascade="all, delete-orphan")

    @property
    def is_terminal(self):
        return self.status in TERMINAL_STATUSES


class BookingDog(db.Model):
    __tablename__ = "booking_dogs"

    booking_id = db.Column(db.Integer, db.ForeignKey("bookings.id"), primary_key=True)
    dog_id = db.Column(db.Integer, db.ForeignKey("dogs.id"), primary_key=True, index=True)

    booking = db.relationship("Booking", back_populates="dogs")
    dog = db.relationship("Dog")


class BookingAddon(db.Model):
    __tablename__ = "booking_addons"

    booking_id = db.Column(db.Integer, db.ForeignKey("bookings.id"), primary_key=True)
    addon_id = db.Column(db.Integer, db.ForeignKey("walker_addons.id"), primary_key=True)

    # price of the add-on when the booking was made
    price_snapshot = db.Column(db.Numeric(10, 2), nullable=False)

    booking = db.relationship("Booking", back_populates="addons")
    addon = db.relationship("WalkerAddon")
