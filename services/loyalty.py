"""
Loyalty rule, run after a walk is marked done and its status has committed.

The outcome is returned, not raised: a failed upsert is logged for operators
and never undoes the completed walk.
"""
import logging
from collections import namedtuple

from flask import current_app
from sqlalchemy.exc import SQLAlchemyError

from models import db
from models.booking import Booking, DONE
from services.subscriptions import SOURCE_LOYALTY, upsert_subscription

logger = logging.getLogger(__name__)

LoyaltyOutcome = namedtuple("LoyaltyOutcome", ["user_id", "completed_count", "granted", "error"])


def completed_count(user_id: int) -> int:
    return Booking.query.filter_by(user_id=user_id, status=DONE).count()


def apply_loyalty_rule(user_id: int) -> LoyaltyOutcome:
    threshold = current_app.config.get("LOYALTY_THRESHOLD", 10)
    count = None
    try:
        count = completed_count(user_id)
        if count < threshold:
            return LoyaltyOutcome(user_id, count, False, None)

        upsert_subscription(
            user_id,
            current_app.config.get("LOYALTY_DISCOUNT_PERCENT", 20),
            current_app.config.get("LOYALTY_MONTHS", 1),
            SOURCE_LOYALTY,
        )
        db.session.commit()
    except SQLAlchemyError as exc:
        db.session.rollback()
        logger.exception("Loyalty subscription upsert failed for user %s", user_id)
        return LoyaltyOutcome(user_id, count, False, exc)

    logger.info("Loyalty discount granted to user %s after %s completed walks", user_id, count)
    return LoyaltyOutcome(user_id, count, True, None)
