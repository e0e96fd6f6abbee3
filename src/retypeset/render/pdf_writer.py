"""PDF writer.

Draws every reconstructed line as one string at its source position, one
output page per input page, black fill on a white page.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Iterable

from reportlab.lib.pagesizes import A4, letter
from reportlab.pdfbase import pdfmetrics
from reportlab.pdfgen import canvas

from retypeset.config.schema import RenderSettings
from retypeset.model import Line, PageLines
from retypeset.utils.errors import OutputFileError, RenderError
from retypeset.utils.logging import get_logger

from .fonts import ResolvedFont, resolve_font

log = get_logger(__name__)

PAGE_SIZES: dict[str, tuple[float, float]] = {"A4": A4, "letter": letter}
MIN_SCALE = 50.0
MAX_SCALE = 200.0
# PDF base fonts are written with WinAnsiEncoding.
BASE_FONT_ENCODING = "cp1252"


def page_size_for(page: PageLines, setting: str) -> tuple[float, float]:
    """Return the output page size for ``page`` under ``setting``."""

    if setting == "source":
        return (page.width, page.height)
    return PAGE_SIZES[setting]


def encodable_text(text: str, font: ResolvedFont) -> str:
    """Replace characters a base font cannot encode with ``?``."""

    if not font.builtin:
        return text
    return text.encode(BASE_FONT_ENCODING, errors="replace").decode(BASE_FONT_ENCODING)


def horizontal_scale(line: Line, text: str, font: ResolvedFont) -> float:
    """Percentage scale stretching ``text`` to the line's source extent."""

    natural = pdfmetrics.stringWidth(text, font.name, line.size)
    target = line.right - line.x
    if natural <= 0 or target <= 0:
        return 100.0
    return max(MIN_SCALE, min(MAX_SCALE, 100.0 * target / natural))


def _draw_line(c: canvas.Canvas, line: Line, font: ResolvedFont, fit_width: bool) -> bool:
    text = encodable_text(line.text, font)
    if not text.strip() or line.size <= 0:
        return False
    t = c.beginText(line.x, line.y)
    t.setFont(font.name, line.size)
    if fit_width:
        t.setHorizScale(horizontal_scale(line, text, font))
    t.textOut(text)
    c.drawText(t)
    return True


def write_pdf(
    pages: Iterable[PageLines],
    path: str | os.PathLike[str],
    settings: RenderSettings,
    font: ResolvedFont | None = None,
) -> ResolvedFont:
    """Write ``pages`` to ``path`` and return the font used.

    A document without pages still receives one blank page so the output is a
    valid PDF.

    Raises
    ------
    OutputFileError
        If the destination directory is missing or the file cannot be written.
    RenderError
        If reportlab fails to build the document.
    """

    out = Path(path)
    if not out.parent.exists():
        raise OutputFileError(f"Output directory does not exist: {out.parent}")
    if font is None:
        font = resolve_font(settings.font)

    pages = list(pages)
    first_size = page_size_for(pages[0], settings.page_size) if pages else A4
    try:
        c = canvas.Canvas(str(out), pagesize=first_size)
        c.setCreator("retypeset")
        c.setTitle(out.name)
        for page in pages:
            c.setPageSize(page_size_for(page, settings.page_size))
            c.setFillColorRGB(0, 0, 0)
            drawn = sum(_draw_line(c, line, font, settings.fit_width) for line in page.lines)
            log.debug("page %d: drew %d of %d lines", page.index + 1, drawn, len(page.lines))
            c.showPage()
        if not pages:
            c.showPage()
        c.save()
    except OSError as exc:
        raise OutputFileError(f"Failed to write {out}: {exc}") from exc
    except Exception as exc:  # reportlab has no common error base class
        raise RenderError(f"Failed to render {out}: {exc}") from exc
    return font


__all__ = [
    "PAGE_SIZES",
    "encodable_text",
    "horizontal_scale",
    "page_size_for",
    "write_pdf",
]
