from dataclasses import dataclass

FALLBACK_CATEGORIES = [
    "Pemerintahan",
    "Pertanian",
    "Kesehatan",
    "Pendidikan",
    "Ekonomi",
    "Keamanan",
    "Pembangunan",
    "Lingkungan",
    "Sosial",
]

CATEGORY_ICONS = {
    "Pemerintahan": "🏛️",
    "Pertanian": "🌾",
    "Kesehatan": "🏥",
    "Pendidikan": "📚",
    "Ekonomi": "💼",
    "Keamanan": "🛡️",
    "Pembangunan": "🏗️",
    "Lingkungan": "🌳",
    "Sosial": "👥",
}
DEFAULT_ICON = "📄"

_UNSPLASH = "https://images.unsplash.com/{}?ixlib=rb-4.0.3&auto=format&fit=crop&w=1200&q=80"

DEFAULT_IMAGES = {
    "Pemerintahan": _UNSPLASH.format("photo-1582213782179-e0d53f98f2ca"),
    "Pertanian": _UNSPLASH.format("photo-1559028012-481c04fa702d"),
    "Kesehatan": _UNSPLASH.format("photo-1559757148-5c350d0d3c56"),
    "Pendidikan": _UNSPLASH.format("photo-1523050854058-8df90110c9f1"),
    "Ekonomi": _UNSPLASH.format("photo-1660513502582-4a4c7b0c8bab"),
    "Keamanan": _UNSPLASH.format("photo-1600463246951-8b9dfb8b6c72"),
    "Pembangunan": _UNSPLASH.format("photo-1541976590-713941681591"),
    "Lingkungan": _UNSPLASH.format("photo-1542601906990-b4d3fb778b09"),
    "Sosial": _UNSPLASH.format("photo-1559028012-481c04fa702d"),
}


def default_image_for(category: str | None) -> str:
    return DEFAULT_IMAGES.get(category or "", DEFAULT_IMAGES["Pemerintahan"])


def icon_for(category: str | None) -> str:
    return CATEGORY_ICONS.get(category or "", DEFAULT_ICON)


@dataclass
class Category:
    name: str
    order: int = 0
    is_active: bool = True
    id: str | None = None
    count: int = 0

    @property
    def icon(self) -> str:
        return icon_for(self.name)

    @classmethod
    def from_doc(cls, doc_id: str, data: dict) -> "Category":
        return cls(
            id=doc_id,
            name=data.get("name") or doc_id,
            order=int(data.get("order") or 0),
            is_active=bool(data.get("isActive", True)),
        )

    @classmethod
    def fallback(cls) -> list["Category"]:
        return [cls(id=name, name=name, order=i) for i, name in enumerate(FALLBACK_CATEGORIES)]
