"""Typer-based command line interface.

``retypeset INPUT OUTPUT`` extracts the text of ``INPUT`` through the
configured backend and writes it to a new PDF at ``OUTPUT``.

Exit codes
----------
0 success
2 usage error
3 I/O error (missing input, unwritable output)
4 configuration error
5 pipeline error (backend unavailable, extraction or rendering failed)
6 verification failure (output could not be re-opened)
"""

from __future__ import annotations

import os
import sys
from pathlib import Path
from typing import Any, Optional

import typer
import yaml
from pydantic import ValidationError

from . import __version__
from .config import ConfigModel, load_config
from .config.schema import deep_merge_dicts
from .pipeline import RetypesetResult, describe_lines, retypeset
from .utils.errors import (
    BackendUnavailableError,
    ExtractionError,
    InputFileError,
    OutputFileError,
    RenderError,
    VerificationError,
)
from .utils.logging import configure_logging

if not sys.stdout.isatty():  # pragma: no cover - CLI test context
    os.environ.setdefault("NO_COLOR", "1")

EXIT_IO = 3
EXIT_CONFIG = 4
EXIT_PIPELINE = 5
EXIT_VERIFY = 6

app = typer.Typer(
    name="retypeset",
    help="Extract the text of a PDF and typeset it into a new PDF.",
    add_completion=False,
)


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _safe_exit(code: int, msg: str | None = None) -> None:
    """Exit the CLI with ``code`` emitting ``msg`` to stderr if provided."""

    if msg:
        typer.echo(msg, err=True)
    raise typer.Exit(code)


def _apply_overrides(
    cfg: ConfigModel,
    *,
    backend: str | None,
    font: Path | None,
    page_size: str | None,
    fit_width: bool | None,
    verify: bool | None,
) -> ConfigModel:
    """Return a validated copy of ``cfg`` with CLI overrides applied."""

    overrides: dict[str, Any] = {}
    if backend is not None:
        overrides.setdefault("extract", {})["backend"] = backend
    if font is not None:
        overrides.setdefault("render", {}).setdefault("font", {})["path"] = str(font)
    if page_size is not None:
        overrides.setdefault("render", {})["page_size"] = page_size
    if fit_width is not None:
        overrides.setdefault("render", {})["fit_width"] = fit_width
    if verify is not None:
        overrides["verification"] = {"reopen": verify}
    if not overrides:
        return cfg
    return ConfigModel.model_validate(deep_merge_dicts(cfg.model_dump(), overrides))


def _print_summary(result: RetypesetResult) -> None:
    typer.echo("=== Retypeset Summary ===")
    typer.echo(f" Backend:  {result.backend}")
    typer.echo(f" Font:     {result.font}")
    typer.echo(f" Pages:    {result.page_count}")
    typer.echo(f" Lines:    {result.line_count}")
    typer.echo(f" Glyphs:   {result.glyph_count}")
    if result.verified is None:
        typer.echo(" Verified: skipped")
    else:
        typer.echo(f" Verified: {'yes' if result.verified else 'no'}")


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"retypeset {__version__}")
        raise typer.Exit()


@app.command()
def run(  # noqa: PLR0913
    in_path: Path = typer.Argument(..., help="Input PDF"),  # noqa: B008
    out_path: Path = typer.Argument(..., help="Output PDF"),  # noqa: B008
    config_path: Optional[Path] = typer.Option(  # noqa: B008
        None, "--config", help="YAML config to override defaults"
    ),
    backend: Optional[str] = typer.Option(  # noqa: B008
        None, "--backend", help="Extraction backend [auto|pdfium|pdfplumber]"
    ),
    font: Optional[Path] = typer.Option(  # noqa: B008
        None, "--font", help="TrueType font to typeset with (tried first)"
    ),
    page_size: Optional[str] = typer.Option(  # noqa: B008
        None, "--page-size", help="Output page size [source|A4|letter]"
    ),
    fit_width: Optional[bool] = typer.Option(  # noqa: B008
        None,
        "--fit-width/--natural-width",
        help="Stretch each line to the width it had in the input",
    ),
    verify: Optional[bool] = typer.Option(  # noqa: B008
        None,
        "--verify/--no-verify",
        help="Re-open the output with the extraction backend",
    ),
    dump: bool = typer.Option(  # noqa: B008
        False, "--dump", help="Print every reconstructed line"
    ),
    verbose: bool = typer.Option(  # noqa: B008
        False, "--verbose", "-v", help="Log progress to stderr"
    ),
    version: bool = typer.Option(  # noqa: B008
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show the version and exit",
    ),
) -> None:
    """Extract the text of IN_PATH and write it as a new PDF to OUT_PATH."""

    configure_logging(verbose)

    try:
        cfg = load_config(config_path)
        cfg = _apply_overrides(
            cfg,
            backend=backend,
            font=font,
            page_size=page_size,
            fit_width=fit_width,
            verify=verify,
        )
    except (ValidationError, yaml.YAMLError, OSError, ValueError) as exc:
        _safe_exit(EXIT_CONFIG, str(exc).splitlines()[0])

    try:
        result = retypeset(in_path, out_path, cfg)
    except (InputFileError, OutputFileError) as exc:
        _safe_exit(EXIT_IO, str(exc))
    except VerificationError as exc:
        _safe_exit(EXIT_VERIFY, str(exc))
    except (BackendUnavailableError, ExtractionError, RenderError) as exc:
        _safe_exit(EXIT_PIPELINE, str(exc))
    except Exception as exc:  # pragma: no cover - unexpected
        msg = str(exc)
        if verbose:
            msg = f"{type(exc).__name__}: {msg}"
        _safe_exit(EXIT_PIPELINE, msg)

    if dump:
        for row in describe_lines(result.pages):
            typer.echo(row)
    _print_summary(result)
    typer.echo(f"Done: {result.output}")


def main() -> None:
    """Console script entry point."""

    app()


if __name__ == "__main__":  # pragma: no cover
    main()
