from flask import Blueprint, request, jsonify, g

from models import db
from models.walker import Walker, WalkerAvailability
from security.rbac import require_roles
from services import directory
from services.directory import serialize_walker
from utils.audit import log_event
from utils.parsing import parse_date, parse_int, parse_time
from utils.seed import WALKER

walker_bp = Blueprint("walkers", __name__, url_prefix="/walkers")


def _serialize_window(w: WalkerAvailability) -> dict:
    return {
        "id": w.id,
        "date": w.date.isoformat(),
        "start_time": w.start_time.isoformat(),
        "end_time": w.end_time.isoformat(),
    }


# ---------- PUBLIC: search ----------
@walker_bp.get("/search")
def search():
    location = (request.args.get("location") or "").strip()
    day = parse_date(request.args.get("date"))
    start_time = parse_time(request.args.get("start_time"), "start_time")
    end_time = parse_time(request.args.get("end_time"), "end_time")
    dogs = parse_int(request.args.get("dogs"), "dogs")

    if not location or not day or not start_time or not end_time or not dogs:
        return jsonify(error="Missing filters"), 400
    if dogs < 1:
        return jsonify(error="dogs must be at least 1"), 400
    if end_time <= start_time:
        return jsonify(error="end_time must be after start_time"), 400

    walkers = directory.search_walkers(location, day, start_time, end_time, dogs)
    return jsonify([serialize_walker(w) for w in walkers]), 200


# ---------- PUBLIC: profile ----------
@walker_bp.get("/<int:walker_id>")
def walker_profile(walker_id: int):
    walker = db.session.get(Walker, walker_id)
    if not walker or walker.is_banned:
        return jsonify(error="Walker not found"), 404
    return jsonify(serialize_walker(walker)), 200


@walker_bp.get("/<int:walker_id>/availability")
def walker_availability(walker_id: int):
    rows = (
        WalkerAvailability.query
        .filter_by(walker_id=walker_id)
        .order_by(WalkerAvailability.date.asc(), WalkerAvailability.start_time.asc())
        .all()
    )
    return jsonify([_serialize_window(w) for w in rows]), 200


# ---------- WALKERS: own profile ----------
@walker_bp.put("/me")
@require_roles(WALKER)
def upsert_my_profile():
    data = request.get_json(silent=True) or {}
    walker = directory.upsert_walker_profile(g.user.id, data)
    log_event("WALKER_PROFILE_UPDATE", user_id=g.user.id, entity="walker", entity_id=walker.id)
    return jsonify(serialize_walker(walker)), 200


@walker_bp.post("/me/availability")
@require_roles(WALKER)
def add_my_availability():
    data = request.get_json(silent=True) or {}
    row = directory.add_availability(
        g.user.id,
        parse_date(data.get("date")),
        parse_time(data.get("start_time"), "start_time"),
        parse_time(data.get("end_time"), "end_time"),
    )
    return jsonify(_serialize_window(row)), 201


@walker_bp.delete("/me/availability/<int:window_id>")
@require_roles(WALKER)
def delete_my_availability(window_id: int):
    directory.remove_availability(g.user.id, window_id)
    return jsonify(success=True), 200
