# desamedia/web/author_routes.py

from flask import Blueprint, current_app, render_template, request, redirect, url_for, flash

from desamedia.errors import PortalError
from desamedia.extensions import get_articles, get_profiles
from desamedia.models.user import AUTHOR_ROLES
from desamedia.signals import identity_changed
from desamedia.web.firebase_guard import firebase_web_required

author_bp = Blueprint("author", __name__, url_prefix="/penulis")


@author_bp.route("/dashboard")
@firebase_web_required(roles=AUTHOR_ROLES)
def dashboard():
    author = request.current_user
    service = get_articles()

    articles = service.list_by_author(author.uid)

    return render_template(
        "author/dashboard.html",
        author=author,
        stats=service.author_stats(articles),
    )


@author_bp.route("/profil", methods=["GET", "POST"])
@firebase_web_required(roles=AUTHOR_ROLES)
def profile():
    author = request.current_user

    if request.method == "POST":
        form = {
            "name": request.form.get("name"),
            "email": request.form.get("email"),
            "bio": request.form.get("bio"),
            "photo": request.form.get("photo"),
        }
        try:
            updated = get_profiles().save(author.uid, form)
        except PortalError as e:
            for message in getattr(e, "errors", [e.message]):
                flash(message, "danger")
            return render_template("author/profile.html", author=author, form=form), e.status_code

        identity_changed.send(current_app._get_current_object(), profile=updated)
        flash("Profil berhasil diperbarui!", "success")
        return redirect(url_for("author.profile"))

    return render_template("author/profile.html", author=author, form=author.to_dict())
