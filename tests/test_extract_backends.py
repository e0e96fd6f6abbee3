from __future__ import annotations

from pathlib import Path

import pytest

from retypeset.extract import (
    ExtractionBackend,
    PdfplumberBackend,
    available_backends,
    get_backend,
    register_backend,
)
from retypeset.extract import _BACKENDS
from retypeset.layout import group_lines
from retypeset.utils.errors import (
    BackendUnavailableError,
    ExtractionError,
    InputFileError,
    UnknownBackendError,
)


@pytest.fixture(params=["pdfplumber", "pdfium"])
def backend(request: pytest.FixtureRequest) -> ExtractionBackend:
    if request.param == "pdfium":
        pytest.importorskip("pypdfium2")
    return get_backend(request.param)


def test_default_registry() -> None:
    assert available_backends()[:2] == ["pdfium", "pdfplumber"]


def test_unknown_backend() -> None:
    with pytest.raises(UnknownBackendError):
        get_backend("ghostscript")


def test_backends_satisfy_protocol(backend: ExtractionBackend) -> None:
    assert isinstance(backend, ExtractionBackend)


def test_extract_sample(backend: ExtractionBackend, sample_pdf: Path) -> None:
    pages = backend.extract(sample_pdf)
    assert len(pages) == 2
    assert pages[0].width == pytest.approx(612, abs=0.5)
    assert pages[0].height == pytest.approx(792, abs=0.5)

    lines = group_lines(pages[0].glyphs)
    assert [line.text.strip() for line in lines] == ["Hello World", "Second line"]
    first = lines[0]
    assert first.size == pytest.approx(12, abs=0.5)
    assert first.x == pytest.approx(72, abs=1.5)
    assert first.y == pytest.approx(700, abs=3)
    assert "Helvetica" in first.font


def test_count_pages(backend: ExtractionBackend, sample_pdf: Path) -> None:
    assert backend.count_pages(sample_pdf) == 2


def test_missing_input(backend: ExtractionBackend, tmp_path: Path) -> None:
    with pytest.raises(InputFileError):
        backend.extract(tmp_path / "missing.pdf")


def test_corrupt_input(backend: ExtractionBackend, tmp_path: Path) -> None:
    bad = tmp_path / "bad.pdf"
    bad.write_bytes(b"this is not a pdf")
    with pytest.raises(ExtractionError):
        backend.extract(bad)


def test_auto_falls_back(monkeypatch: pytest.MonkeyPatch) -> None:
    def unavailable() -> ExtractionBackend:
        raise BackendUnavailableError("pdfium missing")

    monkeypatch.setitem(_BACKENDS, "pdfium", unavailable)
    assert isinstance(get_backend("auto"), PdfplumberBackend)


def test_auto_with_nothing_available(monkeypatch: pytest.MonkeyPatch) -> None:
    def unavailable() -> ExtractionBackend:
        raise BackendUnavailableError("missing")

    monkeypatch.setitem(_BACKENDS, "pdfium", unavailable)
    monkeypatch.setitem(_BACKENDS, "pdfplumber", unavailable)
    with pytest.raises(BackendUnavailableError, match="No extraction backend"):
        get_backend("auto")


def test_register_custom_backend(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr("retypeset.extract._BACKENDS", dict(_BACKENDS))
    register_backend("Plumber2", PdfplumberBackend)
    assert isinstance(get_backend("plumber2"), PdfplumberBackend)


def test_size_includes_text_matrix_scale(backend: ExtractionBackend, scaled_pdf: Path) -> None:
    (page,) = backend.extract(scaled_pdf)
    (line,) = group_lines(page.glyphs)
    assert line.text.strip() == "Scaled text"
    assert line.size == pytest.approx(12, abs=0.5)
    assert all(g.size == pytest.approx(12, abs=0.5) for g in page.glyphs if not g.char.isspace())
    assert line.x == pytest.approx(72, abs=1.5)
    assert line.y == pytest.approx(700, abs=3)
