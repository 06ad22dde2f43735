# desamedia/web/auth_routes.py
from flask import Blueprint, current_app, render_template, request, redirect, url_for, flash

from desamedia.errors import PortalError, ValidationError
from desamedia.extensions import get_identity, get_profiles
from desamedia.signals import identity_changed
from desamedia.utils.validators import validate_register_form
from desamedia.web.firebase_guard import current_identity
from desamedia.web.firebase_session_routes import end_session, set_session_cookie

auth_bp = Blueprint("auth", __name__, url_prefix="/auth")


def _safe_next(target: str | None) -> str:
    # hanya izinkan redirect internal; browser membaca "/\" sama dengan "//"
    if target and target.startswith("/") and target[1:2] not in ("/", "\\"):
        return target
    return url_for("author.dashboard")


def _login_response(result: dict, next_url: str | None = None, name: str | None = None):
    profile = get_profiles().ensure(result["uid"], result["email"], name)
    resp = redirect(_safe_next(next_url))
    set_session_cookie(resp, result["id_token"])
    identity_changed.send(current_app._get_current_object(), profile=profile)
    flash(f"Login berhasil! Selamat datang {profile.display_name}", "success")
    return resp


@auth_bp.route("/login", methods=["GET", "POST"])
def login():
    # Kalau sudah login, langsung ke dashboard
    if request.method == "GET" and current_identity():
        return redirect(url_for("author.dashboard"))

    if request.method == "POST":
        username = (request.form.get("username") or "").strip()
        password = request.form.get("password") or ""

        if not username or not password:
            flash("Username dan password wajib diisi", "danger")
            return redirect(url_for("auth.login"))

        try:
            result = get_identity().sign_in(username, password)
            return _login_response(result, request.form.get("next"))
        except PortalError as e:
            flash(e.message, "danger")
            return redirect(url_for("auth.login"))

    return render_template("auth/login.html", next=request.args.get("next"))


@auth_bp.route("/daftar", methods=["GET", "POST"])
def register():
    if request.method == "POST":
        data = {
            "username": (request.form.get("username") or "").strip().lower(),
            "password": request.form.get("password") or "",
            "name": (request.form.get("name") or "").strip(),
        }
        try:
            errors = validate_register_form(data)
            if errors:
                raise ValidationError(errors)
            result = get_identity().sign_up(data["username"], data["password"], data["name"])
            return _login_response(result, name=data["name"])
        except PortalError as e:
            for message in getattr(e, "errors", [e.message]):
                flash(message, "danger")
            return redirect(url_for("auth.register"))

    return render_template("auth/register.html")


@auth_bp.route("/logout")
def logout():
    resp = end_session(redirect(url_for("auth.login")))
    flash("Anda telah logout", "info")
    return resp
