import html
import logging
import os
import unicodedata
from io import BytesIO
from itertools import groupby
from typing import Optional

from xhtml2pdf import pisa

from resume_tailor import config
from resume_tailor.errors import PdfRenderError

logger = logging.getLogger(__name__)

# Letter is 8.5in wide; 1in margins leave 6.5in = 468pt, Courier 10pt is 6pt/char
WRAP_COLUMNS = 78

# ReportLab's built-in CID face for Hangul; the configured CJK face covers the rest
HANGUL_FONT = "HYGothic-Medium"

RESUME_HTML = """<html>
  <head>
    <style>
      @page {{ size: letter portrait; margin: 1in; }}
      {font_face}
      body {{ font-family: Helvetica, Arial, sans-serif; line-height: 1.6; }}
      pre {{ font-family: {pre_font}; font-size: 10pt; white-space: pre-wrap; }}
    </style>
  </head>
  <body>
    <pre>{body}</pre>
  </body>
</html>
"""

FONT_FACE = '@font-face {{ font-family: ResumeUnicode; src: url("{path}"); }}'


def _char_columns(ch: str) -> int:
    return 2 if unicodedata.east_asian_width(ch) in ("W", "F") else 1

def _columns(s: str) -> int:
    return sum(_char_columns(ch) for ch in s)

def _split_long(word: str, avail: int) -> list[str]:
    pieces: list[str] = []
    cur, n = "", 0
    for ch in word:
        w = _char_columns(ch)
        if cur and n + w > avail:
            pieces.append(cur)
            cur, n = "", 0
        cur += ch
        n += w
    if cur:
        pieces.append(cur)
    return pieces

def wrap_line(line: str, width: int = WRAP_COLUMNS) -> list[str]:
    line = line.expandtabs(4)
    if _columns(line) <= width:
        return [line]
    if not line.strip():
        return [""]

    # indentation is carried onto continuations, capped so words always fit
    indent = line[: len(line) - len(line.lstrip())]
    while _columns(indent) > width // 2:
        indent = indent[:-1]
    avail = width - _columns(indent)

    lines: list[str] = []
    cur = ""
    for word in line.split():
        for piece in _split_long(word, avail):
            if not cur:
                cur = piece
            elif _columns(cur) + 1 + _columns(piece) <= avail:
                cur += " " + piece
            else:
                lines.append(cur)
                cur = piece
    if cur:
        lines.append(cur)
    return [indent + l for l in lines]

def wrap_text(text: str, width: int = WRAP_COLUMNS) -> str:
    """Hard-wrap long lines by display columns (wide CJK characters count as two)."""
    out: list[str] = []
    for line in text.replace("\r\n", "\n").split("\n"):
        out.extend(wrap_line(line, width))
    return "\n".join(out)


def _unicode_font_path() -> Optional[str]:
    path = config.PDF_FONT_PATH
    if not path:
        return None
    if not os.path.isfile(path):
        logger.warning("PDF_FONT_PATH %s does not exist; using built-in faces", path)
        return None
    return path

def _fallback_face(ch: str) -> Optional[str]:
    """The face for a character Courier cannot draw, None when Courier can."""
    if ch == "\n":
        return None
    try:
        ch.encode("cp1252")
        return None
    except UnicodeEncodeError:
        pass
    if "HANGUL" in unicodedata.name(ch, ""):
        return HANGUL_FONT
    return config.PDF_CJK_FONT

def _builtin_markup(text: str) -> str:
    parts = []
    for face, run in groupby(text, key=_fallback_face):
        escaped = html.escape("".join(run))
        if face is None:
            parts.append(escaped)
        else:
            parts.append(f'<span style="font-family: {face}">{escaped}</span>')
    return "".join(parts)

def build_resume_html(resume_text: str) -> str:
    wrapped = wrap_text(resume_text)
    font_path = _unicode_font_path()
    if font_path:
        return RESUME_HTML.format(
            font_face=FONT_FACE.format(path=font_path.replace("\\", "/").replace('"', '\\"')),
            pre_font="ResumeUnicode",
            body=html.escape(wrapped),
        )
    return RESUME_HTML.format(
        font_face="",
        pre_font="Courier, monospace",
        body=_builtin_markup(wrapped),
    )

def render_resume_pdf(resume_text: str) -> bytes:
    buf = BytesIO()
    try:
        status = pisa.CreatePDF(src=build_resume_html(resume_text), dest=buf, encoding="utf-8")
    except Exception as e:
        logger.exception("PDF rendering raised")
        raise PdfRenderError() from e

    if status.err:
        logger.error("PDF rendering reported %s error(s)", status.err)
        raise PdfRenderError()

    pdf = buf.getvalue()
    logger.debug("PDF rendered (%d bytes)", len(pdf))
    return pdf
