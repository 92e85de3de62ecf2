from __future__ import annotations

import logging
import sys

from logfmter import Logfmter

from cookie_mcp.config import Settings
from cookie_mcp.logging_setup import configure_logging


def test_configure_logging_writes_to_stderr_with_level() -> None:
    logger = configure_logging(Settings(log_level="DEBUG", logfmt_enabled=False))

    assert logger.name == "cookie_mcp"
    assert logger.level == logging.DEBUG
    assert len(logger.handlers) == 1
    assert logger.handlers[0].stream is sys.stderr
    assert logger.propagate is False


def test_configure_logging_uses_logfmt_when_enabled() -> None:
    logger = configure_logging(Settings(logfmt_enabled=True))

    assert isinstance(logger.handlers[0].formatter, Logfmter)
    assert logger.level == logging.INFO
