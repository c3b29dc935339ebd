from flask import Blueprint, jsonify, g, request

from models import db
from models.booking import Booking, BOOKING_STATUSES
from models.user import User
from models.walker import Walker
from security.rbac import require_roles
from services import booking_engine, subscriptions
from services.booking_engine import serialize_booking
from services.subscriptions import serialize_subscription
from utils.audit import log_event
from utils.parsing import parse_int
from utils.seed import ADMIN

admin_bp = Blueprint("admin", __name__, url_prefix="/admin")


# ---------- USERS ----------
@admin_bp.get("/users")
@require_roles(ADMIN)
def list_users():
    users = User.query.order_by(User.created_at.desc(), User.id.desc()).limit(200).all()
    return jsonify([
        {
            "id": u.id,
            "email": u.email,
            "full_name": u.full_name,
            "roles": sorted(u.role_names),
            "is_banned": u.is_banned,
            "subscription": serialize_subscription(subscriptions.get_subscription(u.id)),
            "created_at": u.created_at.isoformat(),
        }
        for u in users
    ]), 200


def _set_user_ban(user_id: int, banned: bool):
    user = db.session.get(User, user_id)
    if not user:
        return jsonify(error="User not found"), 404
    if user.id == g.user.id:
        return jsonify(error="Cannot change your own ban state"), 403

    user.is_banned = banned
    db.session.commit()

    log_event("USER_BAN" if banned else "USER_UNBAN", user_id=g.user.id, entity="user", entity_id=user.id)
    return jsonify(success=True), 200


@admin_bp.post("/users/<int:user_id>/ban")
@require_roles(ADMIN)
def ban_user(user_id: int):
    return _set_user_ban(user_id, True)


@admin_bp.post("/users/<int:user_id>/unban")
@require_roles(ADMIN)
def unban_user(user_id: int):
    return _set_user_ban(user_id, False)


# ---------- SUBSCRIPTIONS ----------
@admin_bp.post("/users/<int:user_id>/subscription")
@require_roles(ADMIN)
def grant_subscription(user_id: int):
    data = request.get_json(silent=True) or {}
    if not db.session.get(User, user_id):
        return jsonify(error="User not found"), 404

    sub = subscriptions.grant_subscription(
        user_id,
        data.get("discount_percent"),
        data.get("months", 1),
    )

    log_event(
        "SUBSCRIPTION_GRANT",
        user_id=g.user.id,
        entity="user",
        entity_id=user_id,
        metadata={"discount_percent": sub.discount_percent, "active_until": sub.active_until},
    )
    return jsonify(serialize_subscription(sub)), 200


@admin_bp.delete("/users/<int:user_id>/subscription")
@require_roles(ADMIN)
def revoke_subscription(user_id: int):
    subscriptions.revoke_subscription(user_id)
    log_event("SUBSCRIPTION_REVOKE", user_id=g.user.id, entity="user", entity_id=user_id)
    return jsonify(success=True), 200


# ---------- WALKERS ----------
@admin_bp.get("/walkers")
@require_roles(ADMIN)
def list_walkers():
    rows = Walker.query.order_by(Walker.created_at.desc(), Walker.id.desc()).limit(200).all()
    return jsonify([
        {
            "id": w.id,
            "user_id": w.user_id,
            "name": w.name,
            "location": w.location,
            "price_per_30min": str(w.price_per_30min),
            "is_banned": w.is_banned,
        }
        for w in rows
    ]), 200


def _set_walker_ban(walker_id: int, banned: bool):
    walker = db.session.get(Walker, walker_id)
    if not walker:
        return jsonify(error="Walker not found"), 404

    walker.is_banned = banned
    db.session.commit()

    log_event("WALKER_BAN" if banned else "WALKER_UNBAN", user_id=g.user.id, entity="walker", entity_id=walker.id)
    return jsonify(success=True), 200


@admin_bp.post("/walkers/<int:walker_id>/ban")
@require_roles(ADMIN)
def ban_walker(walker_id: int):
    return _set_walker_ban(walker_id, True)


@admin_bp.post("/walkers/<int:walker_id>/unban")
@require_roles(ADMIN)
def unban_walker(walker_id: int):
    return _set_walker_ban(walker_id, False)


# ---------- BOOKINGS ----------
@admin_bp.get("/bookings")
@require_roles(ADMIN)
def list_bookings():
    status = request.args.get("status")
    if status and status not in BOOKING_STATUSES:
        return jsonify(error="Invalid status"), 400

    q = Booking.query
    if status:
        q = q.filter_by(status=status)

    rows = q.order_by(Booking.created_at.desc(), Booking.id.desc()).limit(200).all()
    return jsonify([serialize_booking(b) for b in rows]), 200


@admin_bp.post("/bookings/<int:booking_id>/accept")
@require_roles(ADMIN)
def accept_booking(booking_id: int):
    data = request.get_json(silent=True) or {}
    walker_id = parse_int(data.get("walker_id"), "walker_id")

    booking = booking_engine.accept_booking(booking_id, walker_id=walker_id)

    log_event(
        "BOOKING_ACCEPT",
        user_id=g.user.id,
        entity="booking",
        entity_id=booking.id,
        metadata={"walker_id": booking.walker_id, "total_price": booking.total_price},
    )
    return jsonify(success=True, booking=serialize_booking(booking), total_price=str(booking.total_price)), 200


@admin_bp.post("/bookings/<int:booking_id>/decline")
@require_roles(ADMIN)
def decline_booking(booking_id: int):
    booking_engine.decline_booking(booking_id)
    log_event("BOOKING_DECLINE", user_id=g.user.id, entity="booking", entity_id=booking_id)
    return jsonify(success=True), 200


@admin_bp.delete("/bookings/<int:booking_id>")
@require_roles(ADMIN)
def delete_booking(booking_id: int):
    booking_engine.delete_booking(booking_id)
    log_event("BOOKING_DELETE", user_id=g.user.id, entity="booking", entity_id=booking_id)
    return jsonify(success=True), 200
