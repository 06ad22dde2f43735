import math

from desamedia.services.formatter import strip_tags

WORDS_PER_MINUTE = 200
EXCERPT_LENGTH = 150
ELLIPSIS = "..."


def excerpt(content: str | None, max_length: int = EXCERPT_LENGTH) -> str:
    """Potong konten mentah di karakter ke-`max_length`, tanpa peduli batas kata."""
    return (content or "")[:max_length] + ELLIPSIS


def word_count(content: str | None) -> int:
    if not content:
        return 0
    if "<" in content:
        content = strip_tags(content)
    return len(content.split())


def read_time(content: str | None) -> int:
    """Estimasi menit baca, 200 kata per menit, minimal 1 menit."""
    return max(1, math.ceil(word_count(content) / WORDS_PER_MINUTE))


def derive_summary(content: str, excerpt_text: str | None = None, minutes: int | None = None) -> dict:
    """Isi `excerpt` dan `readTime` bila pemanggil tidak mengirimnya."""
    return {
        "excerpt": excerpt_text or excerpt(content),
        "readTime": minutes or read_time(content),
    }
