"""Tests for process-wide logging setup."""

from __future__ import annotations

import logging

from slipstream.core.logging import configure_logging


def test_handler_is_not_stacked():
    configure_logging("debug")
    configure_logging("INFO")
    logger = logging.getLogger("slipstream")
    ours = [h for h in logger.handlers if getattr(h, "_slipstream", False)]
    assert len(ours) == 1
    assert logger.level == logging.INFO
