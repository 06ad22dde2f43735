import re

from desamedia.models.article import STATUSES

EMAIL_REGEX = r"^[^\s@]+@[^\s@]+\.[^\s@]+$"

TITLE_MIN_LENGTH = 5
CONTENT_MIN_LENGTH = 50


def is_valid_email(email: str) -> bool:
    return bool(re.match(EMAIL_REGEX, email or ""))


def validate_article_form(data: dict) -> list[str]:
    errors: list[str] = []

    title = (data.get("title") or "").strip()
    category = (data.get("category") or "").strip()
    content = data.get("content") or ""
    status = data.get("status")

    if not title:
        errors.append("Judul artikel wajib diisi")
    elif len(title) < TITLE_MIN_LENGTH:
        errors.append(f"Judul minimal {TITLE_MIN_LENGTH} karakter")

    if not category:
        errors.append("Kategori wajib dipilih")

    if not content.strip():
        errors.append("Konten artikel wajib diisi")
    elif len(content) < CONTENT_MIN_LENGTH:
        errors.append(f"Konten minimal {CONTENT_MIN_LENGTH} karakter")

    if status and status not in STATUSES:
        errors.append("Status artikel tidak valid")

    return errors


def validate_profile_form(data: dict) -> list[str]:
    errors: list[str] = []

    if not (data.get("name") or "").strip():
        errors.append("Nama lengkap wajib diisi")

    email = (data.get("email") or "").strip()
    if not email:
        errors.append("Email wajib diisi")
    elif not is_valid_email(email):
        errors.append("Format email tidak valid")

    return errors


def validate_register_form(data: dict) -> list[str]:
    errors: list[str] = []

    username = (data.get("username") or "").strip()
    password = data.get("password") or ""

    if not username:
        errors.append("Username wajib diisi")
    elif not re.match(r"^[a-z0-9._-]{3,32}$", username.lower()):
        errors.append("Username hanya huruf, angka, titik, strip (3-32 karakter)")

    if not password:
        errors.append("Password wajib diisi")
    elif len(password) < 6:
        errors.append("Password minimal 6 karakter")

    return errors


def parse_tags(raw: str | None) -> list[str]:
    return [tag.strip() for tag in (raw or "").split(",") if tag.strip()]
