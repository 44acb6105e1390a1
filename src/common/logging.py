"""Logging setup shared by the CLI and the proxy server."""

from __future__ import annotations

import logging
import sys
import time
from typing import TextIO

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logging(
    level: int = logging.INFO,
    module_name: str = "src",
    stream: TextIO | None = None,
) -> logging.Logger:
    """Attach a single formatted handler to ``module_name`` and return it.

    Calling this twice for the same logger is a no-op, so both the
    Flask factory and the CLI can call it unconditionally.

    Args:
        level: Logging level (default INFO).
        module_name: Logger to configure. ``"src"`` covers every package
            module, since they log through ``logging.getLogger(__name__)``.
        stream: Output stream, stdout by default.
    """
    logger = logging.getLogger(module_name)

    if logger.handlers:
        return logger

    logger.setLevel(level)

    handler = logging.StreamHandler(stream or sys.stdout)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT))
    logger.addHandler(handler)
    logger.propagate = False

    return logger


def elapsed_ms(started: float) -> int:
    """Milliseconds since a ``time.monotonic()`` reading."""
    return int((time.monotonic() - started) * 1000)
