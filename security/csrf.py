import secrets
from flask import request, jsonify, current_app, g

CSRF_COOKIE = "csrf_token"
CSRF_HEADER = "X-CSRF-Token"

# auth bootstrap endpoints have no token yet
CSRF_EXEMPT_PATHS = {
    "/auth/login",
    "/auth/register",
    "/health",
}

STATE_CHANGING_METHODS = ("POST", "PUT", "PATCH", "DELETE")

def issue_csrf_token(resp):
    token = secrets.token_urlsafe(32)
    resp.set_cookie(
        CSRF_COOKIE,
        token,
        httponly=False,  # must be readable by client JS
        secure=current_app.config.get("SESSION_COOKIE_SECURE", False),
        samesite=current_app.config.get("SESSION_COOKIE_SAMESITE", "Lax"),
        path="/",
    )
    return resp

def require_csrf():
    cookie_token = request.cookies.get(CSRF_COOKIE)
    header_token = request.headers.get(CSRF_HEADER)
    if not cookie_token or not header_token or not secrets.compare_digest(cookie_token, header_token):
        return jsonify(error="CSRF validation failed"), 403
    return None

def csrf_protect():
    """before_request hook: double-submit check for cookie-authenticated writes."""
    if request.method not in STATE_CHANGING_METHODS:
        return None
    if request.path in CSRF_EXEMPT_PATHS:
        return None
    if getattr(g, "user", None) is None:
        return None
    return require_csrf()
