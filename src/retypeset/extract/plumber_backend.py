"""pdfplumber extraction backend.

pdfplumber reports character boxes with ``y0`` measured from the bottom of
the page, which matches the coordinate convention of :mod:`retypeset.model`.
"""

from __future__ import annotations

import os

from retypeset.model import Glyph, PageGlyphs
from retypeset.utils.errors import BackendUnavailableError, ExtractionError
from retypeset.utils.logging import get_logger

from .base import UNKNOWN_CHAR, check_input

log = get_logger(__name__)


def _load_pdfplumber():
    try:
        import pdfplumber
    except ImportError as exc:
        raise BackendUnavailableError(
            "pdfplumber backend requires 'pdfplumber' (pip install pdfplumber)"
        ) from exc
    return pdfplumber


def _to_glyph(char: dict) -> Glyph:
    text = char.get("text") or UNKNOWN_CHAR
    x0 = float(char["x0"])
    return Glyph(
        char=text[:1],
        x=x0,
        y=float(char["y0"]),
        width=float(char["x1"]) - x0,
        size=float(char.get("size") or 0.0),
        font=str(char.get("fontname") or ""),
    )


class PdfplumberBackend:
    """Extract glyphs from ``page.chars`` using pdfplumber."""

    def __init__(self) -> None:
        self._pdfplumber = _load_pdfplumber()

    def name(self) -> str:
        return "pdfplumber"

    def _open(self, path: str | os.PathLike[str]):
        p = check_input(path)
        try:
            return self._pdfplumber.open(str(p))
        except Exception as exc:  # pdfminer raises a variety of parser errors
            raise ExtractionError(f"pdfplumber could not open {p}: {exc}") from exc

    def count_pages(self, path: str | os.PathLike[str]) -> int:
        with self._open(path) as pdf:
            try:
                return len(pdf.pages)
            except Exception as exc:
                raise ExtractionError(f"pdfplumber could not read pages of {path}: {exc}") from exc

    def extract(self, path: str | os.PathLike[str]) -> list[PageGlyphs]:
        pages: list[PageGlyphs] = []
        with self._open(path) as pdf:
            try:
                pdf_pages = list(pdf.pages)
            except Exception as exc:
                raise ExtractionError(f"pdfplumber could not read pages of {path}: {exc}") from exc
            for index, page in enumerate(pdf_pages):
                try:
                    glyphs = [_to_glyph(c) for c in page.chars]
                except Exception as exc:
                    raise ExtractionError(
                        f"pdfplumber failed on page {index + 1} of {path}: {exc}"
                    ) from exc
                log.debug("page %d: %d chars", index + 1, len(glyphs))
                pages.append(
                    PageGlyphs(
                        index=index,
                        width=float(page.width),
                        height=float(page.height),
                        glyphs=glyphs,
                    )
                )
        return pages


__all__ = ["PdfplumberBackend"]
