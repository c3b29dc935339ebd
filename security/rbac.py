from functools import wraps
from flask import g, jsonify

def require_roles(*role_names: str):
    """
    Usage: @require_roles(ADMIN)

    Banned accounts keep read access elsewhere but never pass a role gate.
    """
    def decorator(fn):
        @wraps(fn)
        def wrapper(*args, **kwargs):
            user = getattr(g, "user", None)
            if user is None:
                return jsonify(error="Authentication required"), 401

            if user.is_banned or not user.role_names.intersection(role_names):
                return jsonify(error="Forbidden"), 403

            return fn(*args, **kwargs)
        return wrapper
    return decorator
