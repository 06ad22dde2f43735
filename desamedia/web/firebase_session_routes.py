from flask import Blueprint, request, jsonify, make_response, current_app

from desamedia.errors import PortalError
from desamedia.extensions import get_identity, get_profiles
from desamedia.models.user import AUTHOR_ROLES
from desamedia.signals import identity_changed
from desamedia.web.firebase_guard import current_identity

web_session_bp = Blueprint("web_session", __name__)


def set_session_cookie(resp, id_token: str):
    days = current_app.config["FIREBASE_SESSION_DAYS"]
    session_cookie = get_identity().create_session_cookie(id_token, days)
    resp.set_cookie(
        current_app.config["FIREBASE_SESSION_COOKIE"],
        session_cookie,
        max_age=days * 24 * 60 * 60,
        httponly=True,
        secure=current_app.config.get("SESSION_COOKIE_SECURE", False),
        samesite="Lax",
    )
    return resp


def end_session(resp):
    decoded = current_identity()
    get_identity().sign_out(decoded.get("uid") if decoded else None)
    resp.delete_cookie(current_app.config["FIREBASE_SESSION_COOKIE"])
    identity_changed.send(current_app._get_current_object(), profile=None)
    return resp


@web_session_bp.post("/sessionLogin")
def session_login():
    """Login dari Firebase JS SDK di browser: tukar idToken jadi session cookie."""
    body = request.get_json(silent=True) or {}
    id_token = body.get("idToken")

    if not id_token:
        return jsonify({"error": "Missing idToken"}), 400

    try:
        decoded = get_identity().verify_id_token(id_token)
        profile = get_profiles().ensure(decoded["uid"], (decoded.get("email") or "").lower())

        if profile.role not in AUTHOR_ROLES:
            return jsonify({"error": "Akses hanya untuk penulis & editor"}), 403

        resp = make_response(jsonify({"status": "ok", "role": profile.role}))
        set_session_cookie(resp, id_token)
        identity_changed.send(current_app._get_current_object(), profile=profile)
        return resp

    except PortalError as e:
        current_app.logger.info("sessionLogin ditolak: %s", e.message)
        return jsonify({"error": e.message}), e.status_code


@web_session_bp.post("/sessionLogout")
def session_logout():
    return end_session(make_response(jsonify({"status": "ok"})))
