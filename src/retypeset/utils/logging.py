"""Logging utilities.

All modules obtain their logger through :func:`get_logger` so that records
propagate to the ``retypeset`` package logger.  :func:`configure_logging`
keeps exactly one stderr handler on that logger, bound to the ``sys.stderr``
current at the time of the call.
"""

from __future__ import annotations

import logging
import sys

ROOT_LOGGER = "retypeset"
HANDLER_NAME = "retypeset-stderr"
_FORMAT = "%(levelname)s %(name)s: %(message)s"


def get_logger(name: str) -> logging.Logger:
    """Return a logger below the package namespace."""

    if name == ROOT_LOGGER or name.startswith(ROOT_LOGGER + "."):
        return logging.getLogger(name)
    return logging.getLogger(f"{ROOT_LOGGER}.{name}")


def configure_logging(verbose: bool = False) -> logging.Logger:
    """Configure the package logger; safe to call more than once."""

    logger = logging.getLogger(ROOT_LOGGER)
    level = logging.DEBUG if verbose else logging.WARNING
    logger.setLevel(level)
    for old in [h for h in logger.handlers if h.get_name() == HANDLER_NAME]:
        logger.removeHandler(old)
    handler = logging.StreamHandler(sys.stderr)
    handler.set_name(HANDLER_NAME)
    handler.setFormatter(logging.Formatter(_FORMAT))
    handler.setLevel(level)
    logger.addHandler(handler)
    return logger


__all__ = ["HANDLER_NAME", "ROOT_LOGGER", "get_logger", "configure_logging"]
