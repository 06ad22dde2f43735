from desamedia.models.article import Article

RELATED_LIMIT = 3
POPULAR_LIMIT = 5


def published(articles: list[Article]) -> list[Article]:
    return [a for a in articles if a.is_published]


def newest_first(articles: list[Article]) -> list[Article]:
    return sorted(articles, key=lambda a: a.sort_key, reverse=True)


def related_articles(articles: list[Article], current: Article, limit: int = RELATED_LIMIT) -> list[Article]:
    """
    Artikel terkait: kategori sama dulu (urutan dari store), kalau kosong
    ambil artikel terbaru selain artikel yang sedang dibaca.
    """
    candidates = [a for a in published(articles) if a.id != current.id]

    same_category = [a for a in candidates if a.category == current.category]
    if same_category:
        return same_category[:limit]

    return newest_first(candidates)[:limit]


def popular_articles(articles: list[Article], limit: int = POPULAR_LIMIT) -> list[Article]:
    # sorted() stabil, jadi views yang sama tetap mengikuti urutan snapshot
    return sorted(published(articles), key=lambda a: a.views, reverse=True)[:limit]


def filter_by_category(articles: list[Article], category: str) -> list[Article]:
    return [a for a in published(articles) if a.category == category]


def search_articles(articles: list[Article], term: str) -> list[Article]:
    needle = (term or "").strip().lower()
    if not needle:
        return []

    def matches(article: Article) -> bool:
        return (
            needle in article.title.lower()
            or needle in article.content.lower()
            or any(needle in tag.lower() for tag in article.tags)
            or needle in article.category.lower()
            or needle in article.author.lower()
        )

    return [a for a in published(articles) if matches(a)]
