import os
from io import BytesIO

import pytest
import reportlab
from pypdf import PdfReader

from resume_tailor import config
from resume_tailor.errors import PdfRenderError
from resume_tailor.services import pdf as pdf_service
from resume_tailor.services.pdf import WRAP_COLUMNS, build_resume_html, render_resume_pdf, wrap_text

VERA_TTF = os.path.join(os.path.dirname(reportlab.__file__), "fonts", "Vera.ttf")


def _pdf_text(data):
    return "\n".join(page.extract_text() for page in PdfReader(BytesIO(data)).pages)


def test_render_produces_letter_pdf_with_text():
    data = render_resume_pdf("Jane Doe\nBackend Engineer")
    assert data.startswith(b"%PDF")

    reader = PdfReader(BytesIO(data))
    box = reader.pages[0].mediabox
    assert round(float(box.width)) == 612
    assert round(float(box.height)) == 792
    assert "Jane Doe" in reader.pages[0].extract_text()


def test_html_has_page_setup_and_escapes_text():
    doc = build_resume_html("Skills: C++ <templates> & more")
    assert "size: letter" in doc
    assert "margin: 1in" in doc
    assert "<pre>Skills: C++ &lt;templates&gt; &amp; more</pre>" in doc


def test_wrap_text_bounds_line_length_and_keeps_indent():
    long_bullet = "  - " + " ".join(["keyword"] * 40)
    wrapped = wrap_text("Name\n" + long_bullet, width=40).split("\n")
    assert wrapped[0] == "Name"
    assert all(len(line) <= 40 for line in wrapped)
    assert all(line.startswith("  ") for line in wrapped[1:])


def test_wrap_text_preserves_blank_lines():
    assert wrap_text("a\n\nb") == "a\n\nb"


def test_wrap_text_keeps_words_under_deep_indentation():
    wrapped = wrap_text(" " * 90 + "word " * 30)
    assert wrapped.split().count("word") == 30
    assert all(len(line) <= WRAP_COLUMNS for line in wrapped.split("\n"))


def test_wrap_text_keeps_overlong_whitespace_line_as_blank():
    assert wrap_text(" " * 200 + "\nnext") == "\nnext"


def test_wrap_text_counts_wide_characters_twice():
    line = "李" * 100
    wrapped = wrap_text(line).split("\n")
    assert len(wrapped) == 3
    assert all(len(part) <= WRAP_COLUMNS // 2 for part in wrapped)
    assert "".join(wrapped) == line


def test_render_keeps_every_word_under_deep_indentation():
    data = render_resume_pdf("Jane Doe\n" + " " * 90 + "word " * 30)
    assert _pdf_text(data).split().count("word") == 30


def test_cjk_runs_use_builtin_cid_faces():
    doc = build_resume_html("李雷 Senior Engineer\n김민수")
    assert '<span style="font-family: STSong-Light">李雷</span> Senior Engineer' in doc
    assert '<span style="font-family: HYGothic-Medium">김민수</span>' in doc
    assert "@font-face" not in doc


def test_cjk_font_is_configurable(monkeypatch):
    monkeypatch.setattr(config, "PDF_CJK_FONT", "HeiseiMin-W3")
    assert "font-family: HeiseiMin-W3" in build_resume_html("山田太郎")


def test_render_reads_back_cjk_name():
    text = _pdf_text(render_resume_pdf("李雷 Senior Engineer\n- Built APIs"))
    assert "李雷" in text
    assert "Senior Engineer" in text


def test_configured_ttf_is_embedded(monkeypatch):
    monkeypatch.setattr(config, "PDF_FONT_PATH", VERA_TTF)
    doc = build_resume_html("Jane Doe")
    assert "@font-face" in doc
    assert "font-family: ResumeUnicode" in doc
    assert "<pre>Jane Doe</pre>" in doc

    data = render_resume_pdf("Jane Doe\nBackend Engineer")
    assert "Jane Doe" in _pdf_text(data)
    fonts = PdfReader(BytesIO(data)).pages[0]["/Resources"]["/Font"]
    assert any("Vera" in str(f.get_object()["/BaseFont"]) for f in fonts.values())


def test_missing_ttf_falls_back_to_builtin_faces(monkeypatch, tmp_path):
    monkeypatch.setattr(config, "PDF_FONT_PATH", str(tmp_path / "missing.ttf"))
    doc = build_resume_html("Jane Doe")
    assert "@font-face" not in doc
    assert "Courier" in doc


def test_render_failure_raises_pdf_render_error(monkeypatch):
    class Status:
        err = 1

    monkeypatch.setattr(pdf_service.pisa, "CreatePDF", lambda **kwargs: Status())
    with pytest.raises(PdfRenderError):
        render_resume_pdf("text")
