"""Font lookup for the output document.

Candidates are tried in order and the first TrueType font reportlab can load
wins.  PostScript-flavoured OpenType fonts and missing files are skipped.
When nothing loads, one of the PDF base fonts is used instead.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from reportlab.pdfbase import pdfmetrics
from reportlab.pdfbase.ttfonts import TTFError, TTFont

from retypeset.config.schema import BASE_FONTS, FontSettings
from retypeset.utils.logging import get_logger

log = get_logger(__name__)


@dataclass(slots=True, frozen=True)
class ResolvedFont:
    """A font registered with reportlab and ready for drawing."""

    name: str
    path: Path | None = None

    @property
    def builtin(self) -> bool:
        return self.path is None


def _register(path: Path, explicit: bool = False) -> ResolvedFont | None:
    if not path.is_file():
        if explicit:
            log.warning("font %s not found, trying other candidates", path)
        else:
            log.info("skipping font %s: not found", path)
        return None
    name = f"Retypeset-{path.stem}"
    try:
        font = TTFont(name, str(path), subfontIndex=0)
    except (TTFError, OSError) as exc:
        log.log(logging.WARNING if explicit else logging.INFO, "skipping font %s: %s", path, exc)
        return None
    pdfmetrics.registerFont(font)
    return ResolvedFont(name=name, path=path)


def font_candidates(settings: FontSettings) -> list[Path]:
    """Return candidate font paths in lookup order."""

    paths = [settings.path] if settings.path else []
    paths.extend(settings.candidates)
    return [Path(p).expanduser() for p in paths]


def resolve_font(settings: FontSettings) -> ResolvedFont:
    """Return the first loadable candidate or the configured base font."""

    explicit = Path(settings.path).expanduser() if settings.path else None
    for path in font_candidates(settings):
        font = _register(path, explicit=path == explicit)
        if font is not None:
            log.info("using font %s", path)
            return font
    if settings.fallback not in BASE_FONTS:
        raise ValueError(f"Unsupported fallback font: {settings.fallback}")
    log.warning("no usable font found, falling back to %s", settings.fallback)
    return ResolvedFont(name=settings.fallback)


__all__ = ["ResolvedFont", "font_candidates", "resolve_font"]
