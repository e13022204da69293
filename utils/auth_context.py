from functools import wraps
from flask import g, jsonify, request, current_app

def load_current_user():
    """
    Identity is established upstream by the auth service, which forwards
    the user id and roles as request headers.
    """
    g.user_id = None
    g.roles = set()

    user_header = current_app.config.get("AUTH_USER_HEADER", "X-User-Id")
    raw_user = (request.headers.get(user_header) or "").strip()
    if not raw_user.isdigit():
        return
    g.user_id = int(raw_user)

    roles_header = current_app.config.get("AUTH_ROLES_HEADER", "X-User-Roles")
    raw_roles = request.headers.get(roles_header) or ""
    g.roles = {r.strip().upper() for r in raw_roles.split(",") if r.strip()}

def login_required(fn):
    @wraps(fn)
    def wrapper(*args, **kwargs):
        if getattr(g, "user_id", None) is None:
            return jsonify(error="Authentication required"), 401
        return fn(*args, **kwargs)
    return wrapper
