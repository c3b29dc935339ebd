from datetime import datetime
from models.db import db

class UserSubscription(db.Model):
    __tablename__ = "user_subscriptions"

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey("users.id"), nullable=False, unique=True, index=True)

    discount_percent = db.Column(db.Integer, nullable=False)
    # null means switched off
    active_until = db.Column(db.DateTime, nullable=True)
    source = db.Column(db.String(20), nullable=False, default="SELF")  # SELF, ADMIN, LOYALTY

    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    def is_active(self, now=None):
        now = now or datetime.utcnow()
        return self.active_until is not None and self.active_until > now
