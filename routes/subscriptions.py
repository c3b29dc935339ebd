from flask import Blueprint, jsonify, g

from services import subscriptions
from services.subscriptions import serialize_subscription
from utils.auth_context import login_required
from utils.audit import log_event

subscription_bp = Blueprint("subscriptions", __name__, url_prefix="/subscriptions")


@subscription_bp.post("/toggle")
@login_required
def toggle():
    sub = subscriptions.toggle_subscription(g.user.id)
    subscribed = sub.is_active()

    log_event("SUBSCRIPTION_TOGGLE", user_id=g.user.id, metadata={"subscribed": subscribed})
    return jsonify(
        subscribed=subscribed,
        discount_percent=sub.discount_percent if subscribed else None,
    ), 200


@subscription_bp.get("/me")
@login_required
def my_subscription():
    return jsonify(serialize_subscription(subscriptions.get_subscription(g.user.id))), 200
