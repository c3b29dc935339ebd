import json
from datetime import datetime
from models.db import db

class AuditLog(db.Model):
    """Append-only trail of security and booking events."""
    __tablename__ = "audit_logs"

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, nullable=True, index=True)  # nullable for unauth events
    action = db.Column(db.String(80), nullable=False, index=True)  # e.g. BOOKING_ACCEPT, LOGIN_FAIL
    entity = db.Column(db.String(80), nullable=True)   # e.g. booking, walker
    entity_id = db.Column(db.String(80), nullable=True)

    ip = db.Column(db.String(64), nullable=True)
    user_agent = db.Column(db.String(255), nullable=True)
    metadata_json = db.Column(db.Text, nullable=True)

    timestamp = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "created_at": self.timestamp.isoformat(),
            "user_id": self.user_id,
            "action": self.action,
            "entity": self.entity,
            "entity_id": self.entity_id,
            "ip": self.ip,
            "metadata": json.loads(self.metadata_json) if self.metadata_json else None,
        }
