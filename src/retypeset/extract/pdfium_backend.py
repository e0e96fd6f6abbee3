"""PDFium extraction backend built on ``pypdfium2``.

Each character of a page's text page yields one glyph: its Unicode value, the
loose character box, the scaled font size and the font name reported by
PDFium.  Characters PDFium cannot map to Unicode become ``?``.
"""

from __future__ import annotations

import ctypes
import math
import os

from retypeset.model import Glyph, PageGlyphs
from retypeset.utils.errors import BackendUnavailableError, ExtractionError
from retypeset.utils.logging import get_logger

from .base import UNKNOWN_CHAR, check_input

log = get_logger(__name__)


def _load_pdfium():
    try:
        import pypdfium2 as pdfium
        import pypdfium2.raw as pdfium_c
    except ImportError as exc:
        raise BackendUnavailableError(
            "PDFium backend requires 'pypdfium2' (pip install pypdfium2)"
        ) from exc
    return pdfium, pdfium_c


def _font_name(pdfium_c, textpage_raw, index: int) -> str:
    needed = pdfium_c.FPDFText_GetFontInfo(textpage_raw, index, None, 0, None)
    if needed <= 0:
        return ""
    buffer = ctypes.create_string_buffer(needed)
    pdfium_c.FPDFText_GetFontInfo(textpage_raw, index, buffer, needed, None)
    return buffer.value.decode("utf-8", errors="replace")


def _matrix_scale(pdfium_c, textpage_raw, index: int) -> float:
    """Vertical scale of the character matrix (text matrix times CTM)."""

    matrix = pdfium_c.FS_MATRIX()
    if not pdfium_c.FPDFText_GetMatrix(textpage_raw, index, ctypes.byref(matrix)):
        return 1.0
    scale = math.hypot(matrix.c, matrix.d)
    return scale if scale > 0 else 1.0


def _char_at(textpage, index: int) -> str:
    text = textpage.get_text_range(index=index, count=1)
    return text[:1] if text else UNKNOWN_CHAR


class PdfiumBackend:
    """Extract glyphs through the PDFium native library."""

    def __init__(self) -> None:
        self._pdfium, self._pdfium_c = _load_pdfium()

    def name(self) -> str:
        return "pdfium"

    def _open(self, path: str | os.PathLike[str]):
        p = check_input(path)
        try:
            return self._pdfium.PdfDocument(str(p))
        except self._pdfium.PdfiumError as exc:
            raise ExtractionError(f"PDFium could not open {p}: {exc}") from exc

    def count_pages(self, path: str | os.PathLike[str]) -> int:
        pdf = self._open(path)
        try:
            return len(pdf)
        finally:
            pdf.close()

    def extract(self, path: str | os.PathLike[str]) -> list[PageGlyphs]:
        pdf = self._open(path)
        try:
            pages = [self._extract_page(pdf, i) for i in range(len(pdf))]
        except self._pdfium.PdfiumError as exc:
            raise ExtractionError(f"PDFium failed to read {path}: {exc}") from exc
        finally:
            pdf.close()
        return pages

    def _extract_page(self, pdf, index: int) -> PageGlyphs:
        page = pdf[index]
        try:
            width, height = page.get_size()
            textpage = page.get_textpage()
            try:
                glyphs = [self._glyph(textpage, i) for i in range(textpage.count_chars())]
            finally:
                textpage.close()
        finally:
            page.close()
        log.debug("page %d: %d chars", index + 1, len(glyphs))
        return PageGlyphs(index=index, width=width, height=height, glyphs=glyphs)

    def _glyph(self, textpage, index: int) -> Glyph:
        left, bottom, right, _top = textpage.get_charbox(index, loose=True)
        # FPDFText_GetFontSize is the Tf operand, before the text matrix and CTM.
        size = self._pdfium_c.FPDFText_GetFontSize(textpage.raw, index)
        size *= _matrix_scale(self._pdfium_c, textpage.raw, index)
        return Glyph(
            char=_char_at(textpage, index),
            x=float(left),
            y=float(bottom),
            width=float(right - left),
            size=float(size),
            font=_font_name(self._pdfium_c, textpage.raw, index),
        )


__all__ = ["PdfiumBackend"]
