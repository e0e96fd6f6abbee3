from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from retypeset.config import load_config
from retypeset.config.schema import deep_merge_dicts


def test_default_values() -> None:
    cfg = load_config(env={})
    assert cfg.extract.backend == "auto"
    assert cfg.layout.line_tolerance == 0.4
    assert cfg.layout.baseline_shift == 0.22
    assert cfg.render.page_size == "source"
    assert cfg.render.fit_width is False
    assert cfg.render.font.fallback == "Times-Roman"
    assert cfg.render.font.path is None
    assert cfg.render.font.candidates[0] == "NewCM10-Regular.otf"
    assert cfg.verification.reopen is True


def test_user_yaml_overrides_defaults(tmp_path: Path) -> None:
    cfg_file = tmp_path / "cfg.yml"
    cfg_file.write_text("render:\n  page_size: A4\nlayout:\n  word_gap: null\n")
    cfg = load_config(cfg_file, env={})
    assert cfg.render.page_size == "A4"
    assert cfg.render.fit_width is False
    assert cfg.layout.word_gap is None


def test_unknown_key_rejected(tmp_path: Path) -> None:
    cfg_file = tmp_path / "bad.yml"
    cfg_file.write_text("unknown: true\n")
    with pytest.raises(ValidationError):
        load_config(cfg_file, env={})


def test_invalid_backend_rejected(tmp_path: Path) -> None:
    cfg_file = tmp_path / "bad.yml"
    cfg_file.write_text("extract:\n  backend: ghostscript\n")
    with pytest.raises(ValidationError):
        load_config(cfg_file, env={})


def test_non_mapping_rejected(tmp_path: Path) -> None:
    cfg_file = tmp_path / "list.yml"
    cfg_file.write_text("- a\n- b\n")
    with pytest.raises(ValueError):
        load_config(cfg_file, env={})


def test_font_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("RETYPESET_FONT", "/fonts/custom.ttf")
    cfg = load_config()
    assert cfg.render.font.path == "/fonts/custom.ttf"


def test_custom_font_env_name(tmp_path: Path) -> None:
    cfg_file = tmp_path / "cfg.yml"
    cfg_file.write_text('render:\n  font:\n    path_env: "MY_FONT"\n')
    cfg = load_config(cfg_file, env={"MY_FONT": "/x.ttf", "RETYPESET_FONT": "/y.ttf"})
    assert cfg.render.font.path == "/x.ttf"


def test_deep_merge_keeps_siblings() -> None:
    merged = deep_merge_dicts({"a": {"b": 1, "c": 2}, "d": 3}, {"a": {"b": 5}})
    assert merged == {"a": {"b": 5, "c": 2}, "d": 3}
