from datetime import datetime

from dateutil.relativedelta import relativedelta
from flask import current_app

from models import db
from models.subscription import UserSubscription
from services.errors import NotFound, ValidationError
from services.tx import atomic

SOURCE_SELF = "SELF"
SOURCE_ADMIN = "ADMIN"
SOURCE_LOYALTY = "LOYALTY"


def get_subscription(user_id: int):
    return UserSubscription.query.filter_by(user_id=user_id).first()


def active_discount_percent(user_id: int, now=None):
    """Discount percent of the user's active subscription, or None."""
    sub = get_subscription(user_id)
    if sub and sub.is_active(now):
        return sub.discount_percent
    return None


def upsert_subscription(user_id: int, discount_percent: int, months: int, source: str, now=None):
    """
    Sets the user's single ledger row to ``discount_percent`` active for
    ``months`` from now. Caller owns the transaction.
    """
    now = now or datetime.utcnow()
    active_until = now + relativedelta(months=months)

    sub = UserSubscription.query.filter_by(user_id=user_id).with_for_update().first()
    if not sub:
        sub = UserSubscription(user_id=user_id)
        db.session.add(sub)

    sub.discount_percent = discount_percent
    sub.active_until = active_until
    sub.source = source
    return sub


def toggle_subscription(user_id: int):
    """Switches a self-service subscription off if active, otherwise on. Returns the row."""
    with atomic("subscription toggle"):
        sub = UserSubscription.query.filter_by(user_id=user_id).with_for_update().first()
        if sub and sub.is_active():
            sub.active_until = None
        else:
            sub = upsert_subscription(
                user_id,
                current_app.config.get("SUBSCRIPTION_DISCOUNT_PERCENT", 10),
                current_app.config.get("SUBSCRIPTION_MONTHS", 1),
                SOURCE_SELF,
            )
    return sub


def grant_subscription(user_id: int, discount_percent, months):
    if not isinstance(discount_percent, int) or isinstance(discount_percent, bool) \
            or not 1 <= discount_percent <= 100:
        raise ValidationError("discount_percent must be an integer between 1 and 100")
    if not isinstance(months, int) or isinstance(months, bool) or months < 1:
        raise ValidationError("months must be a positive integer")

    with atomic("subscription grant"):
        sub = upsert_subscription(user_id, discount_percent, months, SOURCE_ADMIN)
    return sub


def revoke_subscription(user_id: int):
    with atomic("subscription revoke"):
        sub = UserSubscription.query.filter_by(user_id=user_id).with_for_update().first()
        if not sub:
            raise NotFound("Subscription not found")
        sub.active_until = None
    return sub


def serialize_subscription(sub):
    if not sub:
        return {"active": False, "discount_percent": None, "active_until": None, "source": None}
    return {
        "active": sub.is_active(),
        "discount_percent": sub.discount_percent,
        "active_until": sub.active_until.isoformat() if sub.active_until else None,
        "source": sub.source,
    }
