"""Name based registry for glyph extraction backends.

``pdfium`` (pypdfium2) and ``pdfplumber`` are registered by default.  The
special name ``auto`` returns the first registered default backend whose
library can be imported, trying PDFium first.

``UnknownBackendError`` is raised for names with no registered factory and
``BackendUnavailableError`` when a backend's library is not installed.
"""

from __future__ import annotations

from typing import Callable

from retypeset.utils.errors import BackendUnavailableError, UnknownBackendError
from retypeset.utils.logging import get_logger

from .base import ExtractionBackend, check_input
from .pdfium_backend import PdfiumBackend
from .plumber_backend import PdfplumberBackend

log = get_logger(__name__)

BackendFactory = Callable[[], ExtractionBackend]

_BACKENDS: dict[str, BackendFactory] = {}
AUTO_ORDER: tuple[str, ...] = ("pdfium", "pdfplumber")


def register_backend(name: str, factory: BackendFactory) -> None:
    """Register ``factory`` under ``name`` (case-insensitive)."""

    _BACKENDS[name.lower()] = factory


def available_backends() -> list[str]:
    """Return registered backend names in registration order."""

    return list(_BACKENDS)


def get_backend(name: str = "auto") -> ExtractionBackend:
    """Instantiate the backend registered under ``name``.

    Raises
    ------
    UnknownBackendError
        If ``name`` is neither ``auto`` nor a registered backend.
    BackendUnavailableError
        If the backend (or, for ``auto``, every default backend) cannot load
        its library.
    """

    key = name.lower()
    if key == "auto":
        errors: list[str] = []
        for candidate in AUTO_ORDER:
            factory = _BACKENDS.get(candidate)
            if factory is None:
                continue
            try:
                return factory()
            except BackendUnavailableError as exc:
                log.info("backend %s unavailable: %s", candidate, exc)
                errors.append(str(exc))
        raise BackendUnavailableError(
            "No extraction backend available: " + "; ".join(errors)
        )

    factory = _BACKENDS.get(key)
    if factory is None:
        raise UnknownBackendError(f"Unknown extraction backend: '{name}'")
    return factory()


register_backend("pdfium", PdfiumBackend)
register_backend("pdfplumber", PdfplumberBackend)

__all__ = [
    "AUTO_ORDER",
    "BackendFactory",
    "ExtractionBackend",
    "PdfiumBackend",
    "PdfplumberBackend",
    "available_backends",
    "check_input",
    "get_backend",
    "register_backend",
]
