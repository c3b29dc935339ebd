from flask import Blueprint, request, jsonify, g

from models import db
from models.walker import WalkerAddon
from security.rbac import require_roles
from services.directory import walker_for_user, money_field
from utils.audit import log_event
from utils.seed import WALKER

addon_bp = Blueprint("addons", __name__, url_prefix="/addons")


def _serialize_addon(a: WalkerAddon) -> dict:
    return {"id": a.id, "walker_id": a.walker_id, "name": a.name, "price": str(a.price)}


@addon_bp.post("")
@require_roles(WALKER)
def create_addon():
    data = request.get_json(silent=True) or {}
    name = (data.get("name") or "").strip()
    if not name:
        return jsonify(error="Missing fields"), 400
    price = money_field(data, "price", required=True)

    walker = walker_for_user(g.user.id)
    addon = WalkerAddon(walker_id=walker.id, name=name[:120], price=price)
    db.session.add(addon)
    db.session.commit()

    log_event("ADDON_CREATE", user_id=g.user.id, entity="walker_addon", entity_id=addon.id)
    return jsonify(id=addon.id), 201


@addon_bp.put("/<int:addon_id>")
@require_roles(WALKER)
def update_addon(addon_id: int):
    # existing bookings keep their price snapshot
    data = request.get_json(silent=True) or {}
    walker = walker_for_user(g.user.id)

    addon = WalkerAddon.query.filter_by(id=addon_id, walker_id=walker.id).first()
    if not addon:
        return jsonify(error="Addon not found"), 404

    name = (data.get("name") or "").strip()
    if name:
        addon.name = name[:120]
    price = money_field(data, "price", required=False)
    if price is not None:
        addon.price = price
    db.session.commit()

    log_event("ADDON_UPDATE", user_id=g.user.id, entity="walker_addon", entity_id=addon.id)
    return jsonify(_serialize_addon(addon)), 200


@addon_bp.get("/walker/<int:walker_id>")
def list_walker_addons(walker_id: int):
    rows = WalkerAddon.query.filter_by(walker_id=walker_id).order_by(WalkerAddon.name.asc()).all()
    return jsonify([_serialize_addon(a) for a in rows]), 200
