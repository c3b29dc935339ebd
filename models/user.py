from datetime import datetime
from models.db import db

# many-to-many User <-> Role
user_roles = db.Table(
    "user_roles",
    db.Column("user_id", db.Integer, db.ForeignKey("users.id"), primary_key=True),
    db.Column("role_id", db.Integer, db.ForeignKey("roles.id"), primary_key=True),
)

class User(db.Model):
    """An account. Owners book walks, walkers hold a Walker profile, admins run the queue."""
    __tablename__ = "users"

    id = db.Column(db.Integer, primary_key=True)

    email = db.Column(db.String(255), unique=True, nullable=False, index=True)
    password_hash = db.Column(db.String(255), nullable=False)
    full_name = db.Column(db.String(120), nullable=True)

    # banned owners cannot book; banned walkers/admins fail every role gate
    is_banned = db.Column(db.Boolean, default=False, nullable=False)
    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)

    roles = db.relationship("Role", secondary=user_roles, back_populates="users")
    dogs = db.relationship("Dog", back_populates="owner", order_by="Dog.id.desc()")

    @property
    def role_names(self):
        return {r.name for r in self.roles}

class Role(db.Model):
    __tablename__ = "roles"

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(50), unique=True, nullable=False)  # OWNER, WALKER, ADMIN

    users = db.relationship("User", secondary=user_roles, back_populates="roles")
