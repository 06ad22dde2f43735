from flask import Blueprint, current_app, render_template, request, redirect, url_for, flash

from desamedia.errors import PortalError
from desamedia.extensions import get_articles, get_profiles, get_state
from desamedia.services import presenter, selection
from desamedia.web import session_state
from desamedia.web.firebase_guard import current_identity

public_bp = Blueprint("public", __name__)


def _sidebar():
    service = get_articles()
    return {
        "popular": [presenter.article_card(a) for a in service.popular()],
        "categories": service.categories_with_counts(),
    }


@public_bp.route("/")
def index():
    try:
        articles = get_state().snapshot(get_articles())
        load_failed = False
    except PortalError as e:
        current_app.logger.error("Gagal memuat artikel beranda: %s", e.message)
        articles, load_failed = [], True

    current_filter = session_state.recall(session_state.CURRENT_FILTER)
    listed = selection.filter_by_category(articles, current_filter) if current_filter else articles

    return render_template(
        "index.html",
        sections=presenter.home_sections(listed, selection.popular_articles(articles)),
        current_filter=current_filter,
        load_failed=load_failed,
        categories=get_articles().categories_with_counts(),
    )


@public_bp.route("/kategori/<name>")
def category(name):
    articles = get_articles().list_by_category(name)
    if articles:
        session_state.remember(session_state.CURRENT_FILTER, name)
        flash(f"Menampilkan {len(articles)} artikel dalam kategori: {name}", "info")
    else:
        flash(f"Belum ada artikel dalam kategori: {name}", "info")
    return redirect(url_for("public.index"))


@public_bp.route("/semua")
def reset_filter():
    session_state.forget(session_state.CURRENT_FILTER)
    flash("Menampilkan semua artikel", "info")
    return redirect(url_for("public.index"))


@public_bp.route("/artikel/<article_id>")
def article(article_id):
    service = get_articles()
    found = service.get_article(article_id)

    if found and not found.is_published:
        # draft/review hanya bisa dilihat penulisnya (preview dari dashboard)
        decoded = current_identity()
        if not decoded or decoded.get("uid") != found.author_id:
            found = None

    if not found:
        return render_template("article_not_found.html"), 404

    session_state.remember(session_state.CURRENT_ARTICLE, article_id)
    service.increment_views(article_id)
    found.views += 1

    profile = get_profiles().find_by_username(found.author)
    return render_template(
        "article.html",
        article=presenter.article_detail(found),
        author=presenter.author_box(found.author, profile),
        share=presenter.share_links(request.url, found.title),
        related=[presenter.article_card(a) for a in service.related(found)],
        **_sidebar(),
    )


@public_bp.route("/cari")
def search():
    term = (request.args.get("q") or "").strip()
    if term:
        session_state.remember(session_state.SEARCH_TERM, term)
    else:
        term = session_state.recall(session_state.SEARCH_TERM, "")

    results = []
    if term:
        try:
            results = get_articles().search(term, get_state().snapshot(get_articles()))
        except PortalError as e:
            current_app.logger.error("Pencarian gagal: %s", e.message)

    return render_template(
        "search.html",
        term=term,
        results=[presenter.article_card(a) for a in results],
    )
