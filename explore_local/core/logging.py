"""Logging setup for hosts that run the pipeline.

Library modules only ever call ``logging.getLogger(...)``; handlers are
attached once by the host (the Functions app or a script).
"""

from __future__ import annotations

import logging
import sys

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s | %(message)s"


def configure_logging(level: str = "INFO") -> None:
    """Attach a stream handler to the ``explore_local`` logger (idempotent)."""
    package_logger = logging.getLogger("explore_local")
    package_logger.setLevel(level.upper())
    if package_logger.handlers:
        return
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    package_logger.addHandler(handler)
