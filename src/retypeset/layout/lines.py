"""Line reconstruction from positioned glyphs.

Glyphs are bucketed top to bottom: a glyph joins the first bucket whose
anchor (the first glyph placed in it) lies within ``size * tolerance``
vertically, otherwise it starts a new bucket.  Buckets are then ordered left
to right and turned into :class:`~retypeset.model.Line` records whose font
and size come from the leftmost glyph.

The baseline is estimated by lifting the leftmost glyph's bottom edge by
``size * baseline_shift``; loose character boxes include the descender.
"""

from __future__ import annotations

import unicodedata
from collections.abc import Iterable

from retypeset.config.schema import LayoutSettings
from retypeset.model import Glyph, Line, PageGlyphs, PageLines

DEFAULT_TOLERANCE = 0.4
DEFAULT_BASELINE_SHIFT = 0.22


def is_control(char: str) -> bool:
    """Return ``True`` for control characters (Unicode category ``Cc``)."""

    return bool(char) and unicodedata.category(char[0]) == "Cc"


def _bucket(glyphs: list[Glyph], tolerance: float) -> list[list[Glyph]]:
    ordered = sorted(glyphs, key=lambda g: g.y, reverse=True)
    buckets: list[list[Glyph]] = []
    for g in ordered:
        for bucket in buckets:
            if abs(bucket[0].y - g.y) < g.size * tolerance:
                bucket.append(g)
                break
        else:
            buckets.append([g])
    return buckets


def _insert_spaces(glyphs: list[Glyph], word_gap: float) -> list[Glyph]:
    out: list[Glyph] = []
    for g in glyphs:
        if out:
            prev = out[-1]
            gap = g.x - prev.right
            if (
                gap > word_gap * max(prev.size, g.size)
                and not prev.char.isspace()
                and not g.char.isspace()
            ):
                out.append(Glyph(" ", prev.right, prev.y, gap, prev.size, prev.font))
        out.append(g)
    return out


def group_lines(
    glyphs: Iterable[Glyph],
    tolerance: float = DEFAULT_TOLERANCE,
    baseline_shift: float = DEFAULT_BASELINE_SHIFT,
    word_gap: float | None = None,
) -> list[Line]:
    """Group ``glyphs`` into lines ordered from the top of the page down.

    Parameters
    ----------
    glyphs:
        Glyphs of a single page.  Control characters are discarded.
    tolerance:
        Maximum vertical distance, as a fraction of the glyph size, between a
        glyph and a line's anchor glyph.
    baseline_shift:
        Fraction of the line size added to the leftmost glyph's bottom edge.
    word_gap:
        When set, a space is inserted wherever the horizontal gap between two
        non-space glyphs exceeds ``word_gap * size``.
    """

    visible = [g for g in glyphs if g.char and not is_control(g.char)]
    lines: list[Line] = []
    for bucket in _bucket(visible, tolerance):
        bucket.sort(key=lambda g: g.x)
        if word_gap is not None:
            bucket = _insert_spaces(bucket, word_gap)
        first = bucket[0]
        lines.append(
            Line(
                glyphs=bucket,
                y=first.y + first.size * baseline_shift,
                font=first.font,
                size=first.size,
            )
        )
    return lines


def layout_pages(pages: Iterable[PageGlyphs], settings: LayoutSettings) -> list[PageLines]:
    """Apply :func:`group_lines` to every page."""

    return [
        PageLines(
            index=page.index,
            width=page.width,
            height=page.height,
            lines=group_lines(
                page.glyphs,
                tolerance=settings.line_tolerance,
                baseline_shift=settings.baseline_shift,
                word_gap=settings.word_gap,
            ),
        )
        for page in pages
    ]


__all__ = [
    "DEFAULT_TOLERANCE",
    "DEFAULT_BASELINE_SHIFT",
    "group_lines",
    "is_control",
    "layout_pages",
]
