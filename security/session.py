import hashlib
import secrets
from datetime import datetime, timedelta
from flask import request, current_app

from models import db
from models.session import Session

def _hash_token(token: str) -> str:
    # SHA-256 is fine for hashing random session tokens
    return hashlib.sha256(token.encode("utf-8")).hexdigest()

def _cookie_name() -> str:
    return current_app.config.get("AUTH_COOKIE_NAME", "pawwalk_session")

def create_session(user_id: int) -> str:
    """
    Creates a server-side session and returns the RAW token (to set as cookie).
    Only the hash is stored in DB.
    """
    raw_token = secrets.token_urlsafe(32)
    lifetime = current_app.config.get("SESSION_LIFETIME_SECONDS", 28800)

    db.session.add(Session(
        user_id=user_id,
        token_hash=_hash_token(raw_token),
        expires_at=datetime.utcnow() + timedelta(seconds=lifetime),
        ip=request.headers.get("X-Forwarded-For", request.remote_addr),
        user_agent=(request.headers.get("User-Agent") or "")[:255],
    ))
    db.session.commit()
    return raw_token

def set_session_cookie(resp, raw_token: str):
    resp.set_cookie(
        _cookie_name(),
        raw_token,
        httponly=True,
        secure=current_app.config.get("SESSION_COOKIE_SECURE", False),
        samesite=current_app.config.get("SESSION_COOKIE_SAMESITE", "Lax"),
        max_age=current_app.config.get("SESSION_LIFETIME_SECONDS", 28800),
        path="/",
    )
    return resp

def clear_session_cookie(resp):
    resp.delete_cookie(_cookie_name(), path="/")
    return resp

def get_session_from_request():
    raw_token = request.cookies.get(_cookie_name())
    if not raw_token:
        return None

    now = datetime.utcnow()
    sess = Session.query.filter_by(token_hash=_hash_token(raw_token), revoked=False).first()
    if not sess or not sess.is_live(now, current_app.config.get("IDLE_TIMEOUT_SECONDS", 1200)):
        return None

    sess.last_seen_at = now
    db.session.commit()
    return sess

def revoke_sessions(user_id: int, raw_token: str = None) -> int:
    """Revokes one session (by raw token) or, without a token, all of the user's sessions."""
    q = Session.query.filter_by(user_id=user_id, revoked=False)
    if raw_token:
        q = q.filter_by(token_hash=_hash_token(raw_token))
    sessions = q.all()
    for s in sessions:
        s.revoked = True
    db.session.commit()
    return len(sessions)

def current_raw_token():
    return request.cookies.get(_cookie_name())
