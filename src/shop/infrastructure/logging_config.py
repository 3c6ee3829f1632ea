"""JSON logging for the ``shop`` package."""

from __future__ import annotations

import logging

from pythonjsonlogger.json import JsonFormatter

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"


def configure_logging(level: str = "WARNING") -> logging.Logger:
    """Attach one JSON stderr handler to the ``shop`` logger.

    Calling it again only changes the level. Handlers added by others
    (test capture, for one) are left alone.
    """
    logger = logging.getLogger("shop")
    if not any(isinstance(h.formatter, JsonFormatter) for h in logger.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(JsonFormatter(LOG_FORMAT))
        logger.addHandler(handler)
        logger.propagate = False
    logger.setLevel(level)
    return logger
