"""Diagnostic logging configuration.

Skipped directories, unreadable entries and dropped patterns are reported at
DEBUG level on stderr so the tree on stdout stays clean.
"""

from __future__ import annotations

import logging
import os
import sys

LOG_LEVEL_ENV = "LSTREE_LOG_LEVEL"
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

_HANDLER_NAME = "lstree-stderr"


def setup_logging(level: str | None = None) -> logging.Logger:
    """Configure the ``lstree`` logger with a single stderr handler.

    ``level`` wins over ``$LSTREE_LOG_LEVEL``; unknown names fall back to
    WARNING. Calling this again only updates the level.
    """
    level_name = (level or os.getenv(LOG_LEVEL_ENV, "WARNING")).upper()
    log_level = getattr(logging, level_name, logging.WARNING)
    if not isinstance(log_level, int):
        log_level = logging.WARNING

    logger = logging.getLogger("lstree")
    logger.setLevel(log_level)

    handler = next((h for h in logger.handlers if h.get_name() == _HANDLER_NAME), None)
    if handler is None:
        handler = logging.StreamHandler(sys.stderr)
        handler.set_name(_HANDLER_NAME)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)
    handler.setLevel(log_level)
    return logger


__all__ = ["LOG_LEVEL_ENV", "setup_logging"]
