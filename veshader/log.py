# veshader/log.py
from __future__ import annotations

import logging
import sys
from typing import Optional, TextIO

LOGGER_NAME = "veshader"
_FORMAT = "[%(levelname)s %(name)s] %(message)s"


def configure(verbose: bool = False, stream: Optional[TextIO] = None) -> logging.Logger:
    """
    Attach a single stream handler to the package logger.
    WARNING by default, DEBUG when verbose. Safe to call repeatedly.
    """
    logger = logging.getLogger(LOGGER_NAME)
    for handler in list(logger.handlers):
        if getattr(handler, "_veshader", False):
            logger.removeHandler(handler)

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(logging.Formatter(_FORMAT))
    handler._veshader = True  # type: ignore[attr-defined]
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
    return logger
