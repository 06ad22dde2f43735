"""
Formatter konten artikel.

Dua mode:
- `format_content`  : dipakai saat menampilkan artikel. Teks polos dipecah per
  paragraf, baris pendek tanpa titik dianggap judul.
- `render_markup`   : dipakai saat artikel disimpan dari dashboard. Mendukung
  markup ringan (**tebal**, _miring_, `kode`, [link](url), #, >, -).
"""

import html
import re

import bleach
from markupsafe import escape

from desamedia.models.article import FORMAT_HTML, FORMAT_PLAIN

EMPTY_CONTENT_HTML = "<p>Konten tidak tersedia.</p>"

HEADING_MAX_LENGTH = 100
HEADING_MIN_LENGTH = 10

ALLOWED_TAGS = [
    "p", "br", "strong", "b", "em", "i", "u", "code", "pre",
    "h1", "h2", "h3", "h4", "h5", "h6",
    "ul", "ol", "li", "blockquote", "a", "img", "hr",
    "table", "thead", "tbody", "tr", "th", "td",
]
ALLOWED_ATTRIBUTES = {
    "a": ["href", "title", "target", "rel"],
    "img": ["src", "alt", "title"],
}

_PARAGRAPH_SPLIT = re.compile(r"\n[ \t]*\n")
_TAG = re.compile(r"<[^>]*>")

_CODE = re.compile(r"`([^`]+)`")
_BOLD = re.compile(r"\*\*(.+?)\*\*")
_ITALIC_STAR = re.compile(r"(?<![\w*])\*(?!\s)(.+?)(?<!\s)\*(?![\w*])")
_ITALIC_UNDERSCORE = re.compile(r"(?<!\w)_(?!\s)(.+?)(?<!\s)_(?!\w)")
_LINK = re.compile(r"\[([^\]]+)\]\(([^)\s]+)\)")

_HEADING = re.compile(r"^(#{1,3}) (.*)$")
_QUOTE = re.compile(r"^> (.*)$")
_LIST_ITEM = re.compile(r"^[-*] (.*)$")


def is_html(content: str, content_format: str | None = None) -> bool:
    if content_format == FORMAT_HTML:
        return True
    if content_format == FORMAT_PLAIN:
        return False
    # artikel lama tanpa contentFormat: deteksi dari karakter '<'
    return "<" in content


def _normalize_newlines(content: str) -> str:
    return content.replace("\r\n", "\n").replace("\r", "\n")


def _looks_like_heading(paragraph: str) -> bool:
    return (
        len(paragraph) < HEADING_MAX_LENGTH
        and "." not in paragraph
        and len(paragraph) > HEADING_MIN_LENGTH
    )


def format_content(content: str | None, content_format: str | None = None) -> str:
    if not content:
        return EMPTY_CONTENT_HTML

    if is_html(content, content_format):
        return content

    parts = []
    for paragraph in _PARAGRAPH_SPLIT.split(_normalize_newlines(content)):
        paragraph = paragraph.strip()
        if not paragraph:
            continue
        tag = "h2" if _looks_like_heading(paragraph) else "p"
        parts.append(f"<{tag}>{escape(paragraph)}</{tag}>")

    return "".join(parts) or EMPTY_CONTENT_HTML


def _emphasis(text: str) -> str:
    text = _BOLD.sub(r"<strong>\1</strong>", text)
    text = _ITALIC_STAR.sub(r"<em>\1</em>", text)
    return _ITALIC_UNDERSCORE.sub(r"<em>\1</em>", text)


def render_inline(text: str) -> str:
    """Konversi markup inline untuk satu baris teks (sudah di-escape di sini)."""
    stash: list[str] = []

    def _keep(fragment: str) -> str:
        stash.append(fragment)
        return f"\x00{len(stash) - 1}\x00"

    out = str(escape(text))
    out = _CODE.sub(lambda m: _keep(f"<code>{m.group(1)}</code>"), out)
    # href disimpan utuh supaya _ dan * di URL tidak jadi <em>
    out = _LINK.sub(
        lambda m: _keep(f'<a href="{m.group(2)}" target="_blank" rel="noopener">{_emphasis(m.group(1))}</a>'),
        out,
    )
    out = _emphasis(out)

    # link bisa berisi placeholder kode, jadi kembalikan dari belakang
    for i in reversed(range(len(stash))):
        out = out.replace(f"\x00{i}\x00", stash[i])
    return out


def render_markup(content: str | None) -> str:
    if not content:
        return ""

    blocks: list[str] = []
    list_items: list[str] = []
    paragraph: list[str] = []

    def close_list():
        if list_items:
            blocks.append("<ul>" + "".join(list_items) + "</ul>")
            list_items.clear()

    def close_paragraph():
        if paragraph:
            blocks.append("<p>" + "<br>".join(paragraph) + "</p>")
            paragraph.clear()

    for raw_line in _normalize_newlines(content).split("\n"):
        line = raw_line.strip()

        if not line:
            close_list()
            close_paragraph()
            continue

        heading = _HEADING.match(line)
        quote = _QUOTE.match(line)
        item = _LIST_ITEM.match(line)

        if item:
            close_paragraph()
            list_items.append(f"<li>{render_inline(item.group(1))}</li>")
            continue

        close_list()
        if heading:
            close_paragraph()
            level = len(heading.group(1))
            blocks.append(f"<h{level}>{render_inline(heading.group(2))}</h{level}>")
        elif quote:
            close_paragraph()
            blocks.append(f"<blockquote>{render_inline(quote.group(1))}</blockquote>")
        else:
            paragraph.append(render_inline(line))

    close_list()
    close_paragraph()
    return "".join(blocks)


def sanitize_html(fragment: str) -> str:
    return bleach.clean(fragment, tags=ALLOWED_TAGS, attributes=ALLOWED_ATTRIBUTES, strip=True)


def strip_markup(fragment: str | None) -> str:
    """Hapus tag HTML lalu decode entitas, untuk mengisi ulang form edit."""
    if not fragment:
        return ""
    text = re.sub(r"<br\s*/?>", "\n", fragment)
    text = re.sub(r"</(p|h[1-6]|blockquote|li|ul)>", "\n\n", text)
    text = _TAG.sub("", text)
    text = re.sub(r"\n{3,}", "\n\n", text)
    return html.unescape(text).strip()


def strip_tags(fragment: str) -> str:
    return _TAG.sub(" ", fragment)
