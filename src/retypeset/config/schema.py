"""Typed configuration schema and loader for retypeset."""

from __future__ import annotations

import os
from collections.abc import Mapping
from importlib import resources as importlib_resources
from pathlib import Path
from typing import Any, Literal

import yaml
from pydantic import BaseModel, ConfigDict, confloat, conint

# ---------------------------------------------------------------------------
# Pydantic models
# ---------------------------------------------------------------------------

BASE_FONTS = (
    "Courier",
    "Helvetica",
    "Times-Roman",
)


class ExtractSettings(BaseModel):
    """Which library is used to pull glyphs out of the input."""

    backend: Literal["auto", "pdfium", "pdfplumber"]

    model_config = ConfigDict(extra="forbid")


class LayoutSettings(BaseModel):
    """Line grouping parameters, all relative to the glyph font size."""

    line_tolerance: confloat(gt=0.0, le=2.0)
    baseline_shift: confloat(ge=-1.0, le=1.0)
    word_gap: confloat(gt=0.0) | None = None

    model_config = ConfigDict(extra="forbid")


class FontSettings(BaseModel):
    """Font lookup order for the output document."""

    path_env: str
    path: str | None = None
    candidates: list[str]
    fallback: Literal["Courier", "Helvetica", "Times-Roman"]

    model_config = ConfigDict(extra="forbid")


class RenderSettings(BaseModel):
    """Output document settings."""

    page_size: Literal["source", "A4", "letter"]
    fit_width: bool
    font: FontSettings

    model_config = ConfigDict(extra="forbid")


class VerificationSettings(BaseModel):
    """Checks performed on the written output."""

    reopen: bool

    model_config = ConfigDict(extra="forbid")


class ConfigModel(BaseModel):
    """Top-level configuration model."""

    schema_version: conint(ge=1)
    extract: ExtractSettings
    layout: LayoutSettings
    render: RenderSettings
    verification: VerificationSettings

    model_config = ConfigDict(extra="forbid")


# ---------------------------------------------------------------------------
# Loader utilities
# ---------------------------------------------------------------------------


def deep_merge_dicts(a: dict[str, Any], b: dict[str, Any]) -> dict[str, Any]:
    """Recursively merge mapping ``b`` onto ``a`` returning a new dict."""

    result: dict[str, Any] = dict(a)
    for key, b_val in b.items():
        if key in result and isinstance(result[key], dict) and isinstance(b_val, dict):
            result[key] = deep_merge_dicts(result[key], b_val)
        else:
            result[key] = b_val
    return result


def load_config(
    path: str | os.PathLike[str] | None = None,
    *,
    env: Mapping[str, str] | None = None,
) -> ConfigModel:
    """Load configuration from defaults and optional user overrides.

    Precedence of sources: package ``defaults.yml`` < user-provided YAML <
    environment variable named by ``render.font.path_env``.
    """

    with (
        importlib_resources.files("retypeset.config")
        .joinpath("defaults.yml")
        .open("r", encoding="utf-8") as f
    ):
        defaults = yaml.safe_load(f) or {}

    if path is not None:
        with Path(path).open("r", encoding="utf-8") as f:
            overrides = yaml.safe_load(f) or {}
        if not isinstance(overrides, dict):
            raise ValueError(f"Config file {path} must contain a mapping")
        merged = deep_merge_dicts(defaults, overrides)
    else:
        merged = defaults

    cfg = ConfigModel.model_validate(merged)

    environ = env if env is not None else os.environ
    font_env = cfg.render.font.path_env
    if environ.get(font_env):
        cfg.render.font.path = environ[font_env]

    return cfg


__all__ = [
    "BASE_FONTS",
    "ConfigModel",
    "ExtractSettings",
    "LayoutSettings",
    "FontSettings",
    "RenderSettings",
    "VerificationSettings",
    "deep_merge_dicts",
    "load_config",
]
