from datetime import datetime
from models.db import db

class Walker(db.Model):
    __tablename__ = "walkers"

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey("users.id"), nullable=False, unique=True, index=True)

    name = db.Column(db.String(120), nullable=False)
    location = db.Column(db.String(160), nullable=False, index=True)
    bio = db.Column(db.Text, nullable=True)

    # pricing is per 30 minute walk unit
    price_per_30min = db.Column(db.Numeric(10, 2), nullable=False)
    max_dogs_per_walk = db.Column(db.Integer, nullable=False, default=1)
    extra_dog_fee_per_dog = db.Column(db.Numeric(10, 2), nullable=False, default=0)

    is_banned = db.Column(db.Boolean, default=False, nullable=False)
    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)

    availability = db.relationship(
        "WalkerAvailability", back_populates="walker", cascade="all, delete-orphan"
    )
    addons = db.relationship("WalkerAddon", back_populates="walker", cascade="all, delete-orphan")


class WalkerAvailability(db.Model):
    __tablename__ = "walker_availability"

    id = db.Column(db.Integer, primary_key=True)
    walker_id = db.Column(db.Integer, db.ForeignKey("walkers.id"), nullable=False, index=True)

    date = db.Column(db.Date, nullable=False, index=True)
    start_time = db.Column(db.Time, nullable=False)
    end_time = db.Column(db.Time, nullable=False)

    walker = db.relationship("Walker", back_populates="availability")

    __table_args__ = (
        db.UniqueConstraint("walker_id", "date", "start_time", "end_time", name="uq_walker_window"),
    )


class WalkerAddon(db.Model):
    __tablename__ = "walker_addons"

    id = db.Column(db.Integer, primary_key=True)
    walker_id = db.Column(db.Integer, db.ForeignKey("walkers.id"), nullable=False, index=True)

    name = db.Column(db.String(120), nullable=False)
    price = db.Column(db.Numeric(10, 2), nullable=False)

    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)

    walker = db.relationship("Walker", back_populates="addons")
