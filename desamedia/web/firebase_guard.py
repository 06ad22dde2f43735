from functools import wraps
from flask import current_app, request, redirect, url_for, abort

from desamedia.errors import PortalError
from desamedia.extensions import get_identity, get_profiles


def current_identity():
    """Decode session cookie Firebase; None kalau belum login / cookie tidak valid."""
    cookie_name = current_app.config["FIREBASE_SESSION_COOKIE"]
    try:
        return get_identity().verify_session(request.cookies.get(cookie_name))
    except PortalError:
        return None


def firebase_web_required(roles=None):
    roles = roles or []

    def decorator(f):
        @wraps(f)
        def wrapper(*args, **kwargs):
            decoded = current_identity()
            if not decoded:
                return redirect(url_for("auth.login", next=request.path))

            uid = decoded.get("uid")
            profile = get_profiles().ensure(uid, decoded.get("email") or "")

            if roles and profile.role not in roles:
                abort(403)

            request.current_user = profile
            return f(*args, **kwargs)
        return wrapper
    return decorator
