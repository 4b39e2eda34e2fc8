"""stderr logging setup.

stdout carries the protocol stream, so diagnostics always go to stderr as
``[LEVEL] message`` lines.
"""

from __future__ import annotations

import logging
import sys
from typing import TextIO

LOG_FORMAT = "[%(levelname)s] %(message)s"
_ROOT_LOGGER = "toolwire"


def configure_logging(level: str | int = "INFO", stream: TextIO | None = None) -> logging.Logger:
    """Install a single stderr handler on the ``toolwire`` logger.

    Calling this again replaces the previous handler instead of stacking a
    second one.
    """
    logger = logging.getLogger(_ROOT_LOGGER)
    for handler in list(logger.handlers):
        if getattr(handler, "_toolwire", False):
            logger.removeHandler(handler)

    handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    handler._toolwire = True  # type: ignore[attr-defined]
    logger.addHandler(handler)
    logger.setLevel(level.upper() if isinstance(level, str) else level)
    logger.propagate = False
    return logger
