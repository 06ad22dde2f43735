import math
from datetime import datetime, timezone
from urllib.parse import quote

from desamedia.models.article import Article
from desamedia.models.category import default_image_for, icon_for
from desamedia.models.user import DEFAULT_BIO
from desamedia.services.content_meta import read_time
from desamedia.services.formatter import format_content, sanitize_html, strip_tags

HARI = ["Senin", "Selasa", "Rabu", "Kamis", "Jumat", "Sabtu", "Minggu"]
BULAN = [
    "Januari", "Februari", "Maret", "April", "Mei", "Juni",
    "Juli", "Agustus", "September", "Oktober", "November", "Desember",
]
DEFAULT_TAG = "BeritaDesa"
CARD_EXCERPT_LENGTH = 100


def format_date(value: datetime | None, with_time: bool = False) -> str:
    """Tanggal panjang gaya id-ID, misal 'Senin, 5 Januari 2026'."""
    if not isinstance(value, datetime):
        return "Tanggal tidak tersedia"
    text = f"{HARI[value.weekday()]}, {value.day} {BULAN[value.month - 1]} {value.year}"
    if with_time:
        text += f" {value:%H.%M}"
    return text


def relative_time(value: datetime | None, now: datetime | None = None) -> str:
    if not isinstance(value, datetime):
        return "Beberapa waktu lalu"
    now = now or datetime.now(timezone.utc)
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)

    days = math.ceil(abs((now - value).total_seconds()) / 86400)
    if days == 1:
        return "1 hari lalu"
    if days < 7:
        return f"{days} hari lalu"
    if days < 30:
        return f"{days // 7} minggu lalu"
    return f"{days // 30} bulan lalu"


def card_excerpt(article: Article, length: int = CARD_EXCERPT_LENGTH) -> str:
    if article.excerpt:
        return article.excerpt
    text = article.content_source or strip_tags(article.content)
    return " ".join(text.split())[:length] + "..."


def article_card(article: Article) -> dict:
    return {
        "id": article.id,
        "title": article.title,
        "category": article.category,
        "category_icon": icon_for(article.category),
        "image": article.image or default_image_for(article.category),
        "excerpt": card_excerpt(article),
        "author": article.author,
        "views": article.views,
        "read_time": article.read_time or read_time(article.content),
        "date": format_date(article.created_at),
        "relative": relative_time(article.created_at),
        "created_at": article.created_at.isoformat() if article.created_at else None,
    }


def article_detail(article: Article) -> dict:
    detail = article_card(article)
    detail.update({
        "status": article.status,
        "body": sanitize_html(format_content(article.content, article.content_format)),
        "tags": article.tags or [DEFAULT_TAG],
        "date_long": format_date(article.created_at, with_time=True),
    })
    return detail


def author_box(author_name: str, profile=None) -> dict:
    if profile:
        return {
            "name": profile.display_name,
            "bio": profile.display_bio,
            "photo": profile.photo or None,
            "initial": profile.initial,
        }
    return {
        "name": author_name,
        "bio": DEFAULT_BIO,
        "photo": None,
        "initial": (author_name[:1] or "?").upper(),
    }


def share_links(url: str, title: str) -> dict:
    u = quote(url, safe="")
    t = quote(title, safe="")
    return {
        "facebook": f"https://www.facebook.com/sharer/sharer.php?u={u}&quote={t}",
        "twitter": f"https://twitter.com/intent/tweet?text={t}&url={u}",
        "whatsapp": f"https://wa.me/?text={t}%20{u}",
        "telegram": f"https://t.me/share/url?url={u}&text={t}",
        "link": url,
    }


def breaking_news(articles: list[Article]) -> str:
    if articles:
        return f"TERBARU: {articles[0].title} - Baca selengkapnya di halaman utama"
    return "Selamat datang di DesaMedia - Portal berita desa terpercaya"


def home_sections(articles: list[Article], popular: list[Article]) -> dict:
    return {
        "breaking": breaking_news(articles),
        "hero": article_card(articles[0]) if articles else None,
        "featured": [article_card(a) for a in articles[:3]],
        "latest": [article_card(a) for a in articles[:4]],
        "popular": [article_card(a) for a in popular],
    }
