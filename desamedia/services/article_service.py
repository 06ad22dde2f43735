"""
Operasi artikel di atas ContentStore: listing publik, artikel terkait,
artikel populer, hitung views, kategori, dan CRUD dari dashboard penulis.
"""

import logging

from desamedia.errors import Forbidden, NotFound, PortalError, QueryPreconditionFailed, ValidationError
from desamedia.models.article import FORMAT_HTML, STATUS_DRAFT, STATUS_PUBLISHED, Article
from desamedia.models.category import Category, default_image_for
from desamedia.services import selection
from desamedia.services.content_meta import derive_summary
from desamedia.services.content_store import ARTICLES, CATEGORIES, SERVER_TIME
from desamedia.services.formatter import render_markup
from desamedia.utils.validators import parse_tags, validate_article_form

logger = logging.getLogger(__name__)

PUBLISHED = ("status", "==", STATUS_PUBLISHED)


def _to_articles(rows) -> list[Article]:
    return [Article.from_doc(doc_id, data) for doc_id, data in rows]


class ArticleService:
    def __init__(self, store, listing_limit: int = 50):
        self.store = store
        self.listing_limit = listing_limit

    # =========================
    # BACA
    # =========================
    def get_article(self, article_id: str) -> Article | None:
        if not article_id:
            return None
        data = self.store.get(ARTICLES, article_id)
        return Article.from_doc(article_id, data) if data else None

    def _ordered_query(self, where, order_by, limit=None):
        """Query dengan orderBy; kalau index belum ada, ambil tanpa orderBy lalu urutkan sendiri."""
        try:
            return _to_articles(self.store.query(ARTICLES, where=where, order_by=order_by, descending=True, limit=limit))
        except QueryPreconditionFailed:
            logger.warning("Index belum dibuat untuk %s, sorting manual", order_by)

        articles = _to_articles(self.store.query(ARTICLES, where=where))
        if order_by == "createdAt":
            articles = selection.newest_first(articles)
        else:
            articles = sorted(articles, key=lambda a: a.views, reverse=True)
        return articles[:limit] if limit else articles

    def list_published(self, limit: int | None = None) -> list[Article]:
        return self._ordered_query([PUBLISHED], "createdAt", limit or self.listing_limit)

    def list_by_author(self, author_id: str) -> list[Article]:
        return self._ordered_query([("authorId", "==", author_id)], "createdAt")

    def list_by_category(self, category: str) -> list[Article]:
        try:
            return selection.newest_first(
                _to_articles(self.store.query(ARTICLES, where=[PUBLISHED, ("category", "==", category)]))
            )
        except PortalError as e:
            logger.error("Gagal memuat kategori %s: %s", category, e)
            return []

    def related(self, current: Article, limit: int = selection.RELATED_LIMIT) -> list[Article]:
        try:
            # +1 karena artikel yang sedang dibaca bisa ikut terambil
            same_category = _to_articles(self.store.query(
                ARTICLES,
                where=[PUBLISHED, ("category", "==", current.category)],
                limit=limit + 1,
            ))
            related = [a for a in same_category if a.id != current.id]
            if related:
                return selection.related_articles(related, current, limit)

            recent = self._ordered_query([PUBLISHED], "createdAt", limit + 1)
            return selection.related_articles(recent, current, limit)
        except PortalError as e:
            logger.error("Gagal memuat artikel terkait %s: %s", current.id, e)
            return []

    def popular(self, limit: int = selection.POPULAR_LIMIT) -> list[Article]:
        try:
            return selection.popular_articles(self._ordered_query([PUBLISHED], "views", limit), limit)
        except PortalError as e:
            logger.error("Gagal memuat artikel populer: %s", e)
            return []

    def search(self, term: str, articles: list[Article] | None = None) -> list[Article]:
        if articles is None:
            articles = self.list_published()
        return selection.search_articles(articles, term)

    def increment_views(self, article_id: str) -> None:
        try:
            self.store.increment(ARTICLES, article_id, "views", 1, stamp_field="lastViewed")
        except PortalError as e:
            # gagal hitung views tidak boleh menggagalkan halaman artikel
            logger.error("Gagal menambah views %s: %s", article_id, e)

    # =========================
    # KATEGORI
    # =========================
    def categories(self) -> list[Category]:
        try:
            rows = self.store.query(CATEGORIES, where=[("isActive", "==", True)], order_by="order")
        except PortalError as e:
            logger.warning("Kategori dari store gagal dimuat, pakai daftar bawaan: %s", e)
            rows = []
        return [Category.from_doc(doc_id, data) for doc_id, data in rows] or Category.fallback()

    def categories_with_counts(self, articles: list[Article] | None = None) -> list[Category]:
        if articles is None:
            try:
                articles = _to_articles(self.store.query(ARTICLES, where=[PUBLISHED]))
            except PortalError as e:
                logger.error("Gagal menghitung artikel per kategori: %s", e)
                articles = []

        categories = self.categories()
        for category in categories:
            category.count = len(selection.filter_by_category(articles, category.name))
        return categories

    # =========================
    # DASHBOARD PENULIS
    # =========================
    def author_stats(self, articles: list[Article]) -> dict:
        return {
            "total": len(articles),
            "published": len([a for a in articles if a.status == STATUS_PUBLISHED]),
            "draft": len([a for a in articles if a.status == STATUS_DRAFT]),
            "views": sum(a.views for a in articles),
            "recent": articles[:5],
        }

    def _validate(self, form: dict) -> None:
        errors = validate_article_form(form)
        if errors:
            raise ValidationError(errors)

    def _payload(self, form: dict, image_url: str | None) -> dict:
        raw = form["content"]
        category = form["category"].strip()
        return {
            "title": form["title"].strip(),
            "category": category,
            "status": form.get("status") or STATUS_DRAFT,
            "image": image_url or default_image_for(category),
            "content": render_markup(raw),
            "contentFormat": FORMAT_HTML,
            "contentSource": raw,
            "tags": parse_tags(form.get("tags")),
            "updatedAt": SERVER_TIME,
            **derive_summary(raw, (form.get("excerpt") or "").strip() or None),
        }

    def create_article(self, author, form: dict, image_url: str | None = None, upload=None) -> str:
        """`upload` dipanggil setelah form valid, supaya form yang ditolak tidak meninggalkan file."""
        self._validate(form)
        if upload:
            image_url = upload() or image_url
        data = self._payload(form, image_url)
        data.update({
            "author": author.username,
            "authorId": author.uid,
            "views": 0,
            "createdAt": SERVER_TIME,
        })
        article_id = self.store.add(ARTICLES, data)
        logger.info("Artikel dibuat id=%s author=%s status=%s", article_id, author.uid, data["status"])
        return article_id

    def get_owned(self, article_id: str, author) -> Article:
        article = self.get_article(article_id)
        if not article:
            raise NotFound()
        if article.author_id != author.uid:
            raise Forbidden("Anda tidak memiliki izin mengubah artikel ini")
        return article

    def update_article(self, article_id: str, author, form: dict, image_url: str | None = None, upload=None) -> Article:
        article = self.get_owned(article_id, author)
        self._validate(form)
        if upload:
            image_url = upload() or image_url
        # gambar lama dipertahankan kalau tidak ada upload baru
        data = self._payload(form, image_url or article.image)
        self.store.update(ARTICLES, article_id, data)
        logger.info("Artikel diupdate id=%s", article_id)
        return self.get_article(article_id)

    def delete_article(self, article_id: str, author) -> None:
        self.get_owned(article_id, author)
        self.store.delete(ARTICLES, article_id)
        logger.info("Artikel dihapus id=%s author=%s", article_id, author.uid)
