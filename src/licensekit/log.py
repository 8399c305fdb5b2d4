"""Package-wide logging helpers.

A NullHandler is installed on the package logger so library use stays quiet
until an application (or the CLI) calls :func:`configure_logging`.
"""

from __future__ import annotations

import logging
import sys
from typing import IO, Optional, Union

PACKAGE_LOGGER_NAME = "licensekit"
DEFAULT_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

logging.getLogger(PACKAGE_LOGGER_NAME).addHandler(logging.NullHandler())


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return a logger scoped to licensekit."""
    return logging.getLogger(name or PACKAGE_LOGGER_NAME)


def configure_logging(
    level: Union[int, str] = logging.INFO,
    stream: Optional[IO[str]] = None,
    fmt: Optional[str] = None,
) -> logging.Logger:
    """Attach a stream handler to the package logger.
    
    Calling this more than once replaces the handler installed by the
    previous call instead of stacking duplicates.
    """
    logger = logging.getLogger(PACKAGE_LOGGER_NAME)
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
    logger.setLevel(level)
    
    for handler in list(logger.handlers):
        if getattr(handler, "_licensekit", False):
            logger.removeHandler(handler)
    
    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(logging.Formatter(fmt or DEFAULT_FORMAT))
    handler._licensekit = True  # type: ignore[attr-defined]
    logger.addHandler(handler)
    return logger
