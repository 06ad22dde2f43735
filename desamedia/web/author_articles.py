from flask import Blueprint, render_template, request, redirect, url_for, flash, current_app

from desamedia.errors import NotFound, PortalError
from desamedia.extensions import get_articles, get_state, get_storage
from desamedia.models.article import STATUSES, STATUS_LABELS
from desamedia.models.user import AUTHOR_ROLES
from desamedia.services.formatter import strip_markup
from desamedia.services.storage_service import upload_article_image
from desamedia.web import session_state
from desamedia.web.firebase_guard import firebase_web_required

author_article_bp = Blueprint("author_article", __name__, url_prefix="/penulis/artikel")


def _form_data() -> dict:
    return {
        "title": (request.form.get("title") or "").strip(),
        "category": (request.form.get("category") or "").strip(),
        "status": (request.form.get("status") or "").strip(),
        "content": request.form.get("content") or "",
        "tags": request.form.get("tags") or "",
        "excerpt": request.form.get("excerpt") or "",
    }


def _uploaded_image(author):
    file = request.files.get("image")
    if not file or not file.filename:
        return None
    return upload_article_image(get_storage(), file, author.uid, current_app.config["MAX_IMAGE_SIZE"])


def _render_form(author, form, article_id=None):
    return render_template(
        "author/articles/form.html",
        author=author,
        form=form,
        article_id=article_id,
        categories=get_articles().categories(),
        statuses=[(s, STATUS_LABELS[s]) for s in STATUSES],
    )


def _flash_errors(e: PortalError):
    for message in getattr(e, "errors", [e.message]):
        flash(message, "danger")


# ===========================
# LIST ARTIKEL PENULIS
# ===========================
@author_article_bp.route("/")
@firebase_web_required(roles=AUTHOR_ROLES)
def list_articles():
    author = request.current_user
    articles = get_articles().list_by_author(author.uid)
    return render_template("author/articles/list.html", articles=articles, author=author)


@author_article_bp.route("/baru", methods=["GET", "POST"])
@firebase_web_required(roles=AUTHOR_ROLES)
def create_article():
    author = request.current_user
    session_state.forget(session_state.EDITING_ARTICLE_ID)

    if request.method == "POST":
        form = _form_data()
        try:
            get_articles().create_article(author, form, upload=lambda: _uploaded_image(author))
        except PortalError as e:
            _flash_errors(e)
            return _render_form(author, form), e.status_code

        get_state().invalidate()
        if form["status"] == "published":
            flash("Artikel berhasil dipublikasikan!", "success")
        else:
            flash("Artikel berhasil disimpan sebagai draft!", "success")
        return redirect(url_for("author_article.list_articles"))

    return _render_form(author, {"status": "draft"})


@author_article_bp.route("/<article_id>/edit", methods=["GET", "POST"])
@firebase_web_required(roles=AUTHOR_ROLES)
def edit_article(article_id):
    author = request.current_user
    service = get_articles()

    if request.method == "POST":
        form = _form_data()
        try:
            service.update_article(article_id, author, form, upload=lambda: _uploaded_image(author))
        except NotFound:
            flash("Artikel tidak ditemukan.", "danger")
            return redirect(url_for("author_article.list_articles"))
        except PortalError as e:
            _flash_errors(e)
            if e.status_code == 403:
                return redirect(url_for("author_article.list_articles"))
            return _render_form(author, form, article_id), e.status_code

        session_state.forget(session_state.EDITING_ARTICLE_ID)
        get_state().invalidate()
        flash("Artikel berhasil diperbarui!", "success")
        return redirect(url_for("author_article.list_articles"))

    try:
        article = service.get_owned(article_id, author)
    except PortalError as e:
        flash(e.message, "danger")
        return redirect(url_for("author_article.list_articles"))

    session_state.remember(session_state.EDITING_ARTICLE_ID, article_id)
    form = {
        "title": article.title,
        "category": article.category,
        "status": article.status,
        # artikel lama tidak punya contentSource, jadi tag HTML-nya dibuang
        "content": article.content_source or strip_markup(article.content),
        "tags": ", ".join(article.tags),
        "image": article.image,
    }
    flash("Artikel siap untuk diedit", "info")
    return _render_form(author, form, article_id)


@author_article_bp.route("/<article_id>/hapus", methods=["POST"])
@firebase_web_required(roles=AUTHOR_ROLES)
def delete_article(article_id):
    author = request.current_user

    try:
        get_articles().delete_article(article_id, author)
    except PortalError as e:
        flash(e.message, "danger")
        return redirect(url_for("author_article.list_articles"))

    get_state().invalidate()
    flash("Artikel berhasil dihapus!", "success")
    return redirect(url_for("author_article.list_articles"))
