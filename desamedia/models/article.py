from dataclasses import dataclass, field
from datetime import datetime, timezone

STATUS_DRAFT = "draft"
STATUS_REVIEW = "review"
STATUS_PUBLISHED = "published"
STATUSES = (STATUS_DRAFT, STATUS_REVIEW, STATUS_PUBLISHED)

STATUS_LABELS = {
    STATUS_DRAFT: "Draft",
    STATUS_REVIEW: "Review",
    STATUS_PUBLISHED: "Published",
}

FORMAT_PLAIN = "plain"
FORMAT_HTML = "html"

EPOCH = datetime.min.replace(tzinfo=timezone.utc)


def as_datetime(value):
    """Timestamp Firestore, datetime biasa, atau string ISO -> datetime aware (UTC)."""
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value if value.tzinfo else value.replace(tzinfo=timezone.utc)
    if isinstance(value, str):
        try:
            parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
        except ValueError:
            return None
        return parsed if parsed.tzinfo else parsed.replace(tzinfo=timezone.utc)
    return None


@dataclass
class Article:
    id: str
    title: str = ""
    category: str = ""
    author: str = ""
    author_id: str = ""
    status: str = STATUS_DRAFT
    content: str = ""
    content_format: str | None = None
    content_source: str | None = None
    image: str | None = None
    tags: list[str] = field(default_factory=list)
    views: int = 0
    read_time: int | None = None
    excerpt: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
    last_viewed: datetime | None = None

    @property
    def is_published(self) -> bool:
        return self.status == STATUS_PUBLISHED

    @property
    def status_label(self) -> str:
        return STATUS_LABELS.get(self.status, self.status)

    @property
    def sort_key(self) -> datetime:
        return self.created_at or EPOCH

    @classmethod
    def from_doc(cls, doc_id: str, data: dict) -> "Article":
        tags = data.get("tags") or []
        if isinstance(tags, str):
            # data lama menyimpan tags sebagai "Pertanian,Panen"
            tags = [t.strip() for t in tags.split(",") if t.strip()]

        return cls(
            id=doc_id,
            title=data.get("title") or "",
            category=data.get("category") or "",
            author=data.get("author") or "",
            author_id=data.get("authorId") or "",
            status=data.get("status") or STATUS_DRAFT,
            content=data.get("content") or "",
            content_format=data.get("contentFormat"),
            content_source=data.get("contentSource"),
            image=data.get("image") or None,
            tags=list(tags),
            views=int(data.get("views") or 0),
            read_time=data.get("readTime"),
            excerpt=data.get("excerpt"),
            created_at=as_datetime(data.get("createdAt")),
            updated_at=as_datetime(data.get("updatedAt")),
            last_viewed=as_datetime(data.get("lastViewed")),
        )

    def to_dict(self) -> dict:
        """Bentuk dokumen di collection `articles` (tanpa id)."""
        return {
            "title": self.title,
            "category": self.category,
            "author": self.author,
            "authorId": self.author_id,
            "status": self.status,
            "content": self.content,
            "contentFormat": self.content_format,
            "contentSource": self.content_source,
            "image": self.image,
            "tags": list(self.tags),
            "views": self.views,
            "readTime": self.read_time,
            "excerpt": self.excerpt,
            "createdAt": self.created_at,
            "updatedAt": self.updated_at,
            "lastViewed": self.last_viewed,
        }

    def __repr__(self):
        return f"<Article {self.id} {self.title!r}>"
