"""Structured logging: JSON formatter and setup."""

from gplaymusic.logging.formatter import JSONLogFormatter
from gplaymusic.logging.setup import configure_logging

__all__ = ["JSONLogFormatter", "configure_logging"]
