"""Core records passed between the extraction, layout and render stages.

Coordinates are PDF user-space points with the origin at the bottom-left
corner of the page, so larger ``y`` values are nearer the top.
"""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(slots=True, frozen=True)
class Glyph:
    """A single extracted character and its loose bounding box."""

    char: str
    x: float
    y: float
    width: float
    size: float
    font: str = ""

    @property
    def right(self) -> float:
        """Return the right edge of the glyph box."""

        return self.x + self.width


@dataclass(slots=True)
class Line:
    """Glyphs sharing a baseline, ordered left to right."""

    glyphs: list[Glyph]
    y: float
    font: str
    size: float

    @property
    def x(self) -> float:
        return self.glyphs[0].x if self.glyphs else 0.0

    @property
    def right(self) -> float:
        return self.glyphs[-1].right if self.glyphs else 0.0

    @property
    def text(self) -> str:
        return "".join(g.char for g in self.glyphs)


@dataclass(slots=True)
class PageGlyphs:
    """Extraction output for one page."""

    index: int
    width: float
    height: float
    glyphs: list[Glyph] = field(default_factory=list)


@dataclass(slots=True)
class PageLines:
    """Layout output for one page."""

    index: int
    width: float
    height: float
    lines: list[Line] = field(default_factory=list)


__all__ = ["Glyph", "Line", "PageGlyphs", "PageLines"]
