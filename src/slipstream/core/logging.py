"""Process-wide logging setup."""

from __future__ import annotations

import logging

LOG_FORMAT = "[%(asctime)s] %(levelname)s %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def configure_logging(level: str = "INFO") -> None:
    """Install a single stream handler on the ``slipstream`` logger.

    Safe to call more than once; the handler is replaced rather than stacked.
    """
    logger = logging.getLogger("slipstream")
    logger.setLevel(level.upper())
    for handler in list(logger.handlers):
        if getattr(handler, "_slipstream", False):
            logger.removeHandler(handler)

    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
    handler._slipstream = True  # type: ignore[attr-defined]
    logger.addHandler(handler)
