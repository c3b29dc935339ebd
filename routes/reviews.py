from flask import Blueprint, request, jsonify, g

from services import reviews
from utils.auth_context import login_required
from utils.audit import log_event
from utils.parsing import parse_int

review_bp = Blueprint("reviews", __name__, url_prefix="/reviews")


@review_bp.post("")
@login_required
def create_review():
    data = request.get_json(silent=True) or {}

    review = reviews.submit_review(
        g.user.id,
        parse_int(data.get("booking_id"), "booking_id"),
        data.get("rating"),
        data.get("comment"),
    )

    log_event("REVIEW_CREATE", user_id=g.user.id, entity="review", entity_id=review.id,
              metadata={"booking_id": review.booking_id, "rating": review.rating})
    return jsonify(success=True, id=review.id), 201


@review_bp.get("/walker/<int:walker_id>")
def walker_reviews(walker_id: int):
    average, rows = reviews.walker_reviews(walker_id)
    return jsonify(average_rating=average, reviews=rows), 200
