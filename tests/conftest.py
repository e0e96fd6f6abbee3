from __future__ import annotations

from pathlib import Path

import pytest
from reportlab.lib.pagesizes import letter
from reportlab.pdfgen import canvas

from retypeset.config import ConfigModel, load_config

SAMPLE_PAGES: list[list[tuple[float, float, str]]] = [
    [(72, 700, "Hello World"), (72, 680, "Second line")],
    [(100, 500, "Page two")],
]


def make_pdf(path: Path, pages: list[list[tuple[float, float, str]]] = SAMPLE_PAGES) -> Path:
    """Write a letter-sized PDF with Helvetica 12 text at the given positions."""

    c = canvas.Canvas(str(path), pagesize=letter)
    for lines in pages:
        c.setFont("Helvetica", 12)
        for x, y, text in lines:
            c.drawString(x, y, text)
        c.showPage()
    c.save()
    return path


@pytest.fixture
def sample_pdf(tmp_path: Path) -> Path:
    return make_pdf(tmp_path / "sample.pdf")


@pytest.fixture
def cfg() -> ConfigModel:
    """Defaults with the base font forced and the pdfplumber backend."""

    config = load_config(env={})
    config.render.font.candidates = []
    config.extract.backend = "pdfplumber"
    return config


@pytest.fixture
def base_font_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    monkeypatch.delenv("RETYPESET_FONT", raising=False)
    path = tmp_path / "cfg.yml"
    path.write_text(
        "extract:\n  backend: pdfplumber\nrender:\n  font:\n    candidates: []\n",
        encoding="utf-8",
    )
    return path


@pytest.fixture
def pdf_factory(tmp_path: Path):
    def _make(name: str, pages: list[list[tuple[float, float, str]]]) -> Path:
        return make_pdf(tmp_path / name, pages)

    return _make


def make_scaled_pdf(path: Path, text: str = "Scaled text", size: float = 12.0) -> Path:
    """Write text with a ``1 Tf`` font size enlarged through the CTM."""

    c = canvas.Canvas(str(path), pagesize=letter)
    c.saveState()
    c.translate(72, 700)
    c.scale(size, size)
    c.setFont("Helvetica", 1)
    c.drawString(0, 0, text)
    c.restoreState()
    c.showPage()
    c.save()
    return path


@pytest.fixture
def scaled_pdf(tmp_path: Path) -> Path:
    return make_scaled_pdf(tmp_path / "scaled.pdf")
