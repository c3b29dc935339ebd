from datetime import datetime
from models.db import db

class Review(db.Model):
    __tablename__ = "reviews"

    id = db.Column(db.Integer, primary_key=True)

    booking_id = db.Column(db.Integer, db.ForeignKey("bookings.id"), nullable=False, index=True)
    walker_id = db.Column(db.Integer, db.ForeignKey("walkers.id"), nullable=False, index=True)
    user_id = db.Column(db.Integer, db.ForeignKey("users.id"), nullable=False, index=True)

    rating = db.Column(db.Integer, nullable=False)
    comment = db.Column(db.Text, nullable=True)

    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)

    booking = db.relationship("Booking", back_populates="review")

    __table_args__ = (
        # one review per walk
        db.UniqueConstraint("booking_id", name="uq_review_booking_once"),
        db.CheckConstraint("rating BETWEEN 1 AND 5", name="ck_review_rating_range"),
    )
