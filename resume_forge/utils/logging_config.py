"""Logging setup for the resume engine host processes."""

import logging
from typing import Optional

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"

_configured = False


def setup_logging(level: Optional[str] = None) -> None:
    """
    Configure the ``resume_forge`` logger once per process.

    Args:
        level: Log level name (e.g. "DEBUG"). Defaults to INFO.
    """
    global _configured
    package_logger = logging.getLogger("resume_forge")
    package_logger.setLevel((level or "INFO").upper())
    if _configured:
        return

    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    package_logger.addHandler(handler)
    _configured = True
