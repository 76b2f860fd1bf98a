"""
Logging setup for the espacescan CLI.

Library modules only create named loggers (logging.getLogger(__name__));
handlers are attached here, once, by entry points. Diagnostics go to stderr
so they never mix with command output on stdout.
"""

from __future__ import annotations

import logging
import sys

_HANDLER: logging.Handler | None = None


def setup_logging(level: int | str = logging.WARNING, *, verbose: bool = False) -> logging.Handler:
    """
    Attach a stderr handler to the `espacescan` logger (idempotent).

    Args:
        level:   Level name or number for the package logger.
        verbose: Force DEBUG and include logger names and timestamps.

    Returns:
        The handler, so callers can flush or remove it.
    """
    global _HANDLER

    package_logger = logging.getLogger("espacescan")
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
    package_logger.setLevel(logging.DEBUG if verbose else level)

    if _HANDLER is None:
        _HANDLER = logging.StreamHandler(sys.stderr)
        package_logger.addHandler(_HANDLER)

    _HANDLER.setFormatter(
        logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
            if verbose
            else "[%(levelname)s] %(message)s"
        )
    )
    return _HANDLER
