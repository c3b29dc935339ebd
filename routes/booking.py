from flask import Blueprint, request, jsonify, g

from models.booking import Booking
from security.rbac import require_roles
from services import booking_engine
from services.booking_engine import serialize_booking
from services.directory import walker_for_user
from utils.auth_context import login_required
from utils.audit import log_event
from utils.parsing import parse_date, parse_int, parse_time
from utils.seed import WALKER

booking_bp = Blueprint("booking", __name__, url_prefix="/bookings")


# ---------- OWNERS: book a walk ----------
@booking_bp.post("")
@login_required
def create_booking():
    data = request.get_json(silent=True) or {}

    booking = booking_engine.create_booking(
        owner_id=g.user.id,
        walker_id=parse_int(data.get("walker_id"), "walker_id"),
        day=parse_date(data.get("date")),
        dog_ids=data.get("dog_ids"),
        addon_ids=data.get("addon_ids"),
        start_time=parse_time(data.get("start_time"), "start_time"),
        end_time=parse_time(data.get("end_time"), "end_time"),
    )

    log_event(
        "BOOKING_CREATE",
        user_id=g.user.id,
        entity="booking",
        entity_id=booking.id,
        metadata={"walker_id": booking.walker_id, "dog_ids": [d.dog_id for d in booking.dogs]},
    )
    return jsonify(id=booking.id, status=booking.status), 201


# ---------- OWNERS: view my bookings ----------
@booking_bp.get("/me")
@login_required
def my_bookings():
    status = request.args.get("status")
    q = Booking.query.filter_by(user_id=g.user.id)
    if status:
        q = q.filter_by(status=status)

    rows = q.order_by(Booking.created_at.desc(), Booking.id.desc()).all()
    return jsonify([serialize_booking(b) for b in rows]), 200


# ---------- OWNERS: cancel ----------
@booking_bp.post("/<int:booking_id>/cancel")
@login_required
def cancel_booking(booking_id: int):
    data = request.get_json(silent=True) or {}
    reason = (data.get("reason") or "").strip()[:120] or None

    booking_engine.cancel_booking(g.user.id, booking_id, reason=reason)

    log_event("BOOKING_CANCEL", user_id=g.user.id, entity="booking", entity_id=booking_id, metadata={"reason": reason})
    return jsonify(success=True), 200


# ---------- WALKERS: assigned walks ----------
@booking_bp.get("/walker")
@require_roles(WALKER)
def walker_bookings():
    walker = walker_for_user(g.user.id)
    rows = (
        Booking.query
        .filter_by(walker_id=walker.id)
        .order_by(Booking.date.asc(), Booking.start_time.asc())
        .all()
    )
    return jsonify([serialize_booking(b) for b in rows]), 200


# ---------- WALKERS: mark walk done ----------
@booking_bp.post("/walker/<int:booking_id>/done")
@require_roles(WALKER)
def mark_done(booking_id: int):
    result = booking_engine.mark_done(g.user.id, booking_id)

    log_event("BOOKING_DONE", user_id=g.user.id, entity="booking", entity_id=booking_id)
    if result.loyalty.granted:
        log_event(
            "LOYALTY_GRANT",
            user_id=result.booking.user_id,
            entity="user_subscription",
            entity_id=result.booking.user_id,
            metadata={"completed_count": result.loyalty.completed_count},
        )
    return jsonify(success=True, loyalty_granted=result.loyalty.granted), 200
