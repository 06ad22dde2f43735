from flask import Blueprint, request

from desamedia.extensions import get_articles, get_state
from desamedia.services import selection
from desamedia.services.presenter import article_card, article_detail
from desamedia.utils.response import success, error

article_bp = Blueprint('article_api', __name__, url_prefix='/api')


def _limit_arg(default: int, maximum: int = 50) -> int:
    limit = request.args.get("limit", default=default, type=int)
    return max(1, min(limit, maximum))


# --- 1. LIST ARTIKEL PUBLISHED (opsional ?q= dan ?category=) ---
@article_bp.route('/articles', methods=['GET'])
def get_articles_list():
    search_query = (request.args.get('q') or "").strip()
    category = (request.args.get('category') or "").strip()

    articles = get_state().snapshot(get_articles())

    if category:
        articles = selection.filter_by_category(articles, category)
    if search_query:
        articles = selection.search_articles(articles, search_query)

    return success([article_card(a) for a in articles], "Berhasil mengambil daftar artikel")


# --- 2. ARTIKEL POPULER (views terbanyak) ---
@article_bp.route('/articles/popular', methods=['GET'])
def get_popular_articles():
    popular = get_articles().popular(_limit_arg(selection.POPULAR_LIMIT))
    return success([article_card(a) for a in popular], "Berhasil mengambil artikel populer")


# --- 3. DETAIL ARTIKEL (sekaligus menambah views) ---
@article_bp.route('/articles/<article_id>', methods=['GET'])
def get_article_detail(article_id):
    service = get_articles()
    article = service.get_article(article_id)

    if not article or not article.is_published:
        return error("Artikel tidak ditemukan", 404)

    service.increment_views(article_id)
    article.views += 1

    return success(article_detail(article), "Detail artikel ditemukan")


# --- 4. ARTIKEL TERKAIT ---
@article_bp.route('/articles/<article_id>/related', methods=['GET'])
def get_related_articles(article_id):
    service = get_articles()
    article = service.get_article(article_id)

    if not article or not article.is_published:
        return error("Artikel tidak ditemukan", 404)

    related = service.related(article, _limit_arg(selection.RELATED_LIMIT))
    return success([article_card(a) for a in related], "Berhasil mengambil artikel terkait")


# --- 5. KATEGORI + JUMLAH ARTIKEL ---
@article_bp.route('/categories', methods=['GET'])
def get_categories():
    categories = get_articles().categories_with_counts()
    return success(
        [{"name": c.name, "icon": c.icon, "count": c.count} for c in categories],
        "Berhasil mengambil kategori",
    )
