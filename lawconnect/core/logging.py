"""
Logging utilities for the LawConnect API.

Provides a consistent logging format and configuration.
"""

import logging
import sys

# Request lines emitted by httpx at INFO would otherwise flood the log with
# every token, store and mail call.
_NOISY_LOGGERS = ("httpx", "httpcore")


def configure_logging(level: str = "INFO") -> None:
    """Configure root logging with a sensible default format."""
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
        stream=sys.stdout,
    )
    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


__all__ = ["configure_logging"]
