from decimal import Decimal, ROUND_HALF_UP

from sqlalchemy import func

from models import db
from models.booking import Booking, DONE
from models.review import Review
from models.user import User
from services.errors import Conflict, Forbidden, ValidationError
from services.tx import atomic


def _valid_rating(rating) -> bool:
    return isinstance(rating, int) and not isinstance(rating, bool) and 1 <= rating <= 5


def submit_review(user_id: int, booking_id: int, rating, comment=None) -> Review:
    """One review per done booking, written by the booking's owner."""
    if not booking_id or not _valid_rating(rating):
        raise ValidationError("Invalid input")
    if comment is not None and not isinstance(comment, str):
        raise ValidationError("comment must be a string")
    comment = (comment or "").strip() or None

    # the unique constraint catches a concurrent second review
    with atomic("review create", integrity_conflict="Booking already reviewed"):
        booking = Booking.query.filter_by(id=booking_id, user_id=user_id, status=DONE).first()
        if not booking:
            raise Forbidden("Not allowed to review")

        if Review.query.filter_by(booking_id=booking.id).first():
            raise Conflict("Booking already reviewed")

        review = Review(
            booking_id=booking.id,
            walker_id=booking.walker_id,
            user_id=user_id,
            rating=rating,
            comment=comment,
        )
        db.session.add(review)
        db.session.flush()
    return review


def walker_reviews(walker_id: int):
    """Returns (average_rating, rows) for a walker, newest first."""
    avg = db.session.query(func.avg(Review.rating)).filter(Review.walker_id == walker_id).scalar()
    average = Decimal(str(avg or 0)).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)

    rows = (
        db.session.query(Review, User.full_name)
        .join(User, User.id == Review.user_id)
        .filter(Review.walker_id == walker_id)
        .order_by(Review.created_at.desc(), Review.id.desc())
        .all()
    )
    return float(average), [
        {
            "id": r.id,
            "rating": r.rating,
            "comment": r.comment,
            "created_at": r.created_at.isoformat(),
            "user_name": name,
        }
        for r, name in rows
    ]
