from flask import Blueprint, request, jsonify, g

from models import db
from models.user import User, Role
from security.password import hash_password, verify_password
from security.session import (
    create_session, set_session_cookie, clear_session_cookie, revoke_sessions, current_raw_token,
)
from security.csrf import issue_csrf_token
from utils.audit import log_event
from utils.auth_context import login_required
from utils.seed import OWNER, SELF_SERVICE_ROLES


auth_bp = Blueprint("auth", __name__, url_prefix="/auth")

MIN_PASSWORD_LENGTH = 8


def _is_valid_email(email: str) -> bool:
    return isinstance(email, str) and "@" in email and len(email) <= 255


@auth_bp.post("/register")
def register():
    data = request.get_json(silent=True) or {}
    email = (data.get("email") or "").strip().lower()
    password = data.get("password") or ""
    full_name = (data.get("full_name") or "").strip() or None
    role_name = (data.get("role") or OWNER).strip().upper()

    if not _is_valid_email(email):
        return jsonify(error="Invalid email"), 400
    if not isinstance(password, str) or len(password) < MIN_PASSWORD_LENGTH:
        return jsonify(error=f"Password must be at least {MIN_PASSWORD_LENGTH} characters"), 400
    if role_name not in SELF_SERVICE_ROLES:
        return jsonify(error="role must be OWNER or WALKER"), 400

    if User.query.filter_by(email=email).first():
        log_event("REGISTER_FAIL_EMAIL_EXISTS", metadata={"email": email})
        return jsonify(error="Email already registered"), 409

    user = User(email=email, password_hash=hash_password(password), full_name=full_name)
    db.session.add(user)
    db.session.flush()

    role = Role.query.filter_by(name=role_name).first()
    if role:
        user.roles.append(role)

    db.session.commit()
    log_event("REGISTER_SUCCESS", user_id=user.id, metadata={"role": role_name})

    return jsonify(id=user.id, email=user.email, role=role_name), 201


@auth_bp.post("/login")
def login():
    data = request.get_json(silent=True) or {}
    email = (data.get("email") or "").strip().lower()
    password = data.get("password") or ""

    if not email or not password:
        return jsonify(error="Missing fields"), 400

    user = User.query.filter_by(email=email).first()
    if not user or not verify_password(password, user.password_hash):
        log_event("LOGIN_FAIL", user_id=user.id if user else None, metadata={"email": email})
        return jsonify(error="Invalid credentials"), 401

    # Rotate: revoke any existing sessions for this user
    revoked_count = revoke_sessions(user.id)
    raw_token = create_session(user.id)

    resp = jsonify(
        message="Login OK",
        user={"id": user.id, "email": user.email, "roles": sorted(user.role_names)},
    )
    resp = set_session_cookie(resp, raw_token)
    resp = issue_csrf_token(resp)

    log_event("LOGIN_SUCCESS", user_id=user.id, metadata={"revoked_sessions": revoked_count})
    return resp, 200


@auth_bp.get("/me")
@login_required
def me():
    return jsonify(
        id=g.user.id,
        email=g.user.email,
        full_name=g.user.full_name,
        roles=sorted(g.user.role_names),
        is_banned=g.user.is_banned,
    ), 200


@auth_bp.post("/logout")
@login_required
def logout():
    revoke_sessions(g.user.id, current_raw_token())
    log_event("LOGOUT", user_id=g.user.id)

    resp = jsonify(message="Logged out")
    return clear_session_cookie(resp), 200
