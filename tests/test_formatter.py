from desamedia.services.formatter import (
    EMPTY_CONTENT_HTML,
    format_content,
    render_inline,
    render_markup,
    sanitize_html,
    strip_markup,
)


# =========================
# format_content (tampilan)
# =========================
def test_heading_and_paragraph():
    html = format_content("Judul Besar\n\nIni adalah paragraf pertama.")
    assert html == "<h2>Judul Besar</h2><p>Ini adalah paragraf pertama.</p>"


def test_short_line_stays_paragraph():
    # 10 karakter atau kurang bukan judul
    assert format_content("Pengumuman") == "<p>Pengumuman</p>"


def test_line_with_period_is_paragraph():
    assert format_content("Rapat desa dimulai pukul 09.00") == "<p>Rapat desa dimulai pukul 09.00</p>"


def test_long_line_is_paragraph():
    text = "x" * 120
    assert format_content(text) == f"<p>{text}</p>"


def test_paragraph_split_tolerates_whitespace_lines():
    html = format_content("Paragraf satu.\n   \nParagraf dua.")
    assert html == "<p>Paragraf satu.</p><p>Paragraf dua.</p>"


def test_windows_newlines():
    html = format_content("Paragraf satu.\r\n\r\nParagraf dua.")
    assert html == "<p>Paragraf satu.</p><p>Paragraf dua.</p>"


def test_plain_text_is_escaped():
    html = format_content("a & b tidak sama.", content_format="plain")
    assert html == "<p>a &amp; b tidak sama.</p>"


def test_html_content_returned_as_is():
    content = "<p>Sudah <strong>HTML</strong></p>"
    assert format_content(content) == content
    assert format_content(content, content_format="html") == content


def test_empty_content():
    assert format_content("") == EMPTY_CONTENT_HTML
    assert format_content(None) == EMPTY_CONTENT_HTML
    assert format_content("  \n\n  ") == EMPTY_CONTENT_HTML


# =========================
# render_markup (saat simpan)
# =========================
def test_inline_markup():
    out = render_inline("**tebal** dan _miring_ dan *juga* dan `kode`")
    assert out == "<strong>tebal</strong> dan <em>miring</em> dan <em>juga</em> dan <code>kode</code>"


def test_link_opens_new_tab():
    out = render_inline("[Situs desa](https://desa.id)")
    assert out == '<a href="https://desa.id" target="_blank" rel="noopener">Situs desa</a>'


def test_inline_escapes_html():
    assert render_inline("<script>x</script>") == "&lt;script&gt;x&lt;/script&gt;"


def test_code_span_not_formatted():
    assert render_inline("`**x**`") == "<code>**x**</code>"


def test_snake_case_words_not_italic():
    assert render_inline("nama_file_baru") == "nama_file_baru"


def test_headings_levels():
    out = render_markup("# Satu\n## Dua\n### Tiga")
    assert out == "<h1>Satu</h1><h2>Dua</h2><h3>Tiga</h3>"


def test_consecutive_list_items_merge_into_one_list():
    out = render_markup("- padi\n- jagung\n* kedelai")
    assert out == "<ul><li>padi</li><li>jagung</li><li>kedelai</li></ul>"


def test_list_then_paragraph():
    out = render_markup("- padi\n- jagung\nSelesai.")
    assert out == "<ul><li>padi</li><li>jagung</li></ul><p>Selesai.</p>"


def test_blockquote():
    assert render_markup("> Kata kepala desa") == "<blockquote>Kata kepala desa</blockquote>"


def test_paragraph_lines_joined_with_br():
    assert render_markup("baris satu\nbaris dua\n\nparagraf baru") == (
        "<p>baris satu<br>baris dua</p><p>paragraf baru</p>"
    )


def test_render_markup_empty():
    assert render_markup("") == ""
    assert render_markup(None) == ""


# =========================
# sanitize / strip
# =========================
def test_sanitize_removes_script():
    out = sanitize_html("<p>Aman</p><script>alert(1)</script>")
    assert "<script>" not in out
    assert "<p>Aman</p>" in out


def test_sanitize_drops_event_handlers():
    out = sanitize_html('<a href="https://desa.id" onclick="x()">link</a>')
    assert "onclick" not in out
    assert 'href="https://desa.id"' in out


def test_strip_markup_restores_text():
    html = render_markup("# Judul\nIsi &amp; lanjut\n\n- satu")
    text = strip_markup(html)
    assert "<" not in text
    assert "Judul" in text
    assert "Isi &amp; lanjut" in text
    assert "satu" in text


def test_format_is_idempotent_on_html():
    once = format_content("<h2>Judul</h2><p>Isi.</p>")
    assert format_content(once) == once


def test_formatting_twice_does_not_double_wrap():
    once = format_content("Judul Besar\n\nIni adalah paragraf pertama.")
    assert format_content(once) == once


def test_blockquote_needs_space_after_marker():
    assert render_markup(">tanpa spasi") == "<p>&gt;tanpa spasi</p>"
    assert render_markup(">>> kutip") == "<p>&gt;&gt;&gt; kutip</p>"


def test_link_url_is_not_formatted():
    out = render_inline("[x](https://desa.id/_a_) dan [y](https://desa.id/*b*)")
    assert out == (
        '<a href="https://desa.id/_a_" target="_blank" rel="noopener">x</a> dan '
        '<a href="https://desa.id/*b*" target="_blank" rel="noopener">y</a>'
    )


def test_link_text_keeps_emphasis():
    out = render_inline("[**Pengumuman**](https://desa.id)")
    assert out == '<a href="https://desa.id" target="_blank" rel="noopener"><strong>Pengumuman</strong></a>'
