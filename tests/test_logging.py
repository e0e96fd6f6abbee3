from __future__ import annotations

import io
import logging
import sys

import pytest

from retypeset.utils.logging import HANDLER_NAME, ROOT_LOGGER, configure_logging, get_logger


def test_get_logger_namespaces() -> None:
    assert get_logger("retypeset.render").name == "retypeset.render"
    assert get_logger("other").name == "retypeset.other"


def test_configure_logging_idempotent() -> None:
    logger = configure_logging(verbose=True)
    count = len(logger.handlers)
    configure_logging(verbose=False)
    assert len(logging.getLogger(ROOT_LOGGER).handlers) == count
    assert logger.level == logging.WARNING


def test_handler_follows_current_stderr(monkeypatch: pytest.MonkeyPatch) -> None:
    first = io.StringIO()
    monkeypatch.setattr(sys, "stderr", first)
    configure_logging(verbose=False)
    second = io.StringIO()
    monkeypatch.setattr(sys, "stderr", second)
    logger = configure_logging(verbose=False)
    get_logger("tests").warning("hello")

    handlers = [h for h in logger.handlers if h.get_name() == HANDLER_NAME]
    assert len(handlers) == 1
    assert isinstance(handlers[0], logging.StreamHandler)
    assert "hello" in second.getvalue()
    assert first.getvalue() == ""
