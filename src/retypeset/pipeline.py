"""End-to-end extraction and re-rendering.

``retypeset`` runs the stages in order: extract glyphs with the configured
backend, group them into lines, write the new PDF and, unless disabled,
re-open the output with the same backend.  Each stage is timed and logged.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from time import perf_counter
from types import TracebackType
from typing import Iterable

from .config import ConfigModel
from .extract import ExtractionBackend, check_input, get_backend
from .layout import layout_pages
from .model import PageLines
from .render import write_pdf
from .utils.errors import ExtractionError, VerificationError
from .utils.logging import get_logger

log = get_logger(__name__)


class Timing:
    """Context manager measuring elapsed milliseconds."""

    def __init__(self) -> None:
        self._start = 0.0
        self._end = 0.0

    def __enter__(self) -> "Timing":
        self._start = perf_counter()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self._end = perf_counter()

    @property
    def ms(self) -> float:
        return (self._end - self._start) * 1000.0


@dataclass(slots=True)
class RetypesetResult:
    """Summary of one run."""

    output: Path
    backend: str
    font: str
    pages: list[PageLines]
    glyph_count: int
    verified: bool | None = None
    timings: dict[str, float] = field(default_factory=dict)

    @property
    def page_count(self) -> int:
        return len(self.pages)

    @property
    def line_count(self) -> int:
        return sum(len(p.lines) for p in self.pages)


def verify_output(
    path: str | os.PathLike[str],
    backend: ExtractionBackend,
    expected_pages: int,
) -> int:
    """Re-open ``path`` with ``backend`` and check its page count.

    Returns the page count on success.

    Raises
    ------
    VerificationError
        If the output cannot be opened or has an unexpected number of pages.
    """

    try:
        count = backend.count_pages(path)
    except ExtractionError as exc:
        raise VerificationError(f"Output {path} could not be re-opened: {exc}") from exc
    if count != expected_pages:
        raise VerificationError(
            f"Output {path} has {count} pages, expected {expected_pages}"
        )
    return count


def describe_lines(pages: Iterable[PageLines]) -> list[str]:
    """Return one listing row per line: page, position, size and text."""

    rows: list[str] = []
    for page in pages:
        for line in page.lines:
            rows.append(
                f"page {page.index + 1:>2}  {line.x:3.0f} {line.y:3.0f}  "
                f"size {line.size:>4.1f}  '{line.text}'"
            )
    return rows


def retypeset(
    input_path: str | os.PathLike[str],
    output_path: str | os.PathLike[str],
    cfg: ConfigModel,
    *,
    backend: ExtractionBackend | None = None,
) -> RetypesetResult:
    """Extract the text of ``input_path`` and write it to ``output_path``."""

    src = check_input(input_path)
    out = Path(output_path)
    if backend is None:
        backend = get_backend(cfg.extract.backend)
    timings: dict[str, float] = {}

    with Timing() as t_extract:
        glyph_pages = backend.extract(src)
    timings["extract"] = t_extract.ms
    glyph_count = sum(len(p.glyphs) for p in glyph_pages)
    log.info(
        "extracted %d glyphs from %d pages with %s in %.1f ms",
        glyph_count,
        len(glyph_pages),
        backend.name(),
        t_extract.ms,
    )

    with Timing() as t_layout:
        pages = layout_pages(glyph_pages, cfg.layout)
    timings["layout"] = t_layout.ms
    log.info("grouped into %d lines in %.1f ms", sum(len(p.lines) for p in pages), t_layout.ms)

    with Timing() as t_render:
        font = write_pdf(pages, out, cfg.render)
    timings["render"] = t_render.ms
    log.info("wrote %s with font %s in %.1f ms", out, font.name, t_render.ms)

    result = RetypesetResult(
        output=out,
        backend=backend.name(),
        font=font.name,
        pages=pages,
        glyph_count=glyph_count,
        timings=timings,
    )

    if cfg.verification.reopen:
        with Timing() as t_verify:
            verify_output(out, backend, expected_pages=max(1, len(pages)))
        timings["verify"] = t_verify.ms
        result.verified = True
        log.info("verified %s in %.1f ms", out, t_verify.ms)

    return result


__all__ = [
    "RetypesetResult",
    "Timing",
    "describe_lines",
    "retypeset",
    "verify_output",
]
