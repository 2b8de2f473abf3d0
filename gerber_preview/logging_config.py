"""Logging setup for gerber_preview.

Library modules only create loggers under the "gerber_preview" namespace;
applications and scripts call setup_logging() once at start-up.
"""

from __future__ import annotations

import logging
import os
import sys
from typing import Optional, Union

DEFAULT_FORMAT = "%(asctime)s [%(levelname)s] [%(name)s] %(message)s"


def setup_logging(
    level: Optional[Union[int, str]] = None,
    format_string: Optional[str] = None,
) -> logging.Logger:
    """Configure the gerber_preview logger.

    Args:
        level: Logging level (e.g. 'DEBUG', 'INFO'). Defaults to the
               LOGGING_LEVEL env var or 'WARNING'.
        format_string: Custom log format string.

    Returns:
        The package logger.
    """
    if level is None:
        level = os.environ.get("LOGGING_LEVEL", "WARNING")

    logger = logging.getLogger("gerber_preview")
    logger.setLevel(level)
    logger.handlers.clear()

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(format_string or DEFAULT_FORMAT))
    logger.addHandler(handler)
    logger.propagate = False

    return logger
