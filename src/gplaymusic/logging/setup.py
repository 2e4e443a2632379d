"""Structured logging configuration for applications using the client."""

import logging
import sys

from gplaymusic.logging.formatter import JSONLogFormatter


def configure_logging(level: int = logging.INFO, service: str = "gplaymusic") -> None:
    """Send the client's logs to stdout as JSON.

    Only the ``gplaymusic`` logger is configured; the root logger and other
    libraries are left alone.
    """
    logger = logging.getLogger("gplaymusic")
    logger.setLevel(level)
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(JSONLogFormatter(service=service))
    logger.addHandler(handler)
    logger.propagate = False
