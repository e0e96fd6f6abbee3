"""Extraction backend protocol.

A backend opens a PDF and returns one :class:`~retypeset.model.PageGlyphs`
per page in document order.  Backends own every native handle they open and
must release them before returning, including on failure.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Protocol, runtime_checkable

from retypeset.model import PageGlyphs
from retypeset.utils.errors import InputFileError

UNKNOWN_CHAR = "?"


@runtime_checkable
class ExtractionBackend(Protocol):
    """Protocol for glyph extraction backends."""

    def name(self) -> str:
        """Return a short, stable identifier for the backend."""

        ...

    def extract(self, path: str | os.PathLike[str]) -> list[PageGlyphs]:
        """Extract positioned glyphs from every page of ``path``."""

        ...

    def count_pages(self, path: str | os.PathLike[str]) -> int:
        """Open ``path`` and return its page count."""

        ...


def check_input(path: str | os.PathLike[str]) -> Path:
    """Return ``path`` as a :class:`Path` after checking it can be read.

    Raises
    ------
    InputFileError
        If the file does not exist, is not a regular file, or is not readable.
    """

    p = Path(path)
    if not p.exists():
        raise InputFileError(f"File not found: {p}")
    if not p.is_file():
        raise InputFileError(f"Not a file: {p}")
    if not os.access(p, os.R_OK):
        raise InputFileError(f"File is not readable: {p}")
    return p


__all__ = ["UNKNOWN_CHAR", "ExtractionBackend", "check_input"]
