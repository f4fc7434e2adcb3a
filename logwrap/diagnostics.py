"""
Internal diagnostics logger.

logwrap reports on itself (defaulted tags, probe failures, initialisation)
through the stdlib ``logging`` module rather than through the logger it is
building.  Verbosity is controlled from one place, the
``LOGWRAP_DIAGNOSTICS_LEVEL`` environment variable.
"""

from __future__ import annotations

import logging
import os
import sys

LEVEL_ENV = "LOGWRAP_DIAGNOSTICS_LEVEL"


def get_logger(name: str) -> logging.Logger:
    """Return a consistently configured diagnostics logger."""
    logger = logging.getLogger(name)
    if logger.handlers:
        return logger  # Already configured

    level = os.getenv(LEVEL_ENV, "WARNING").upper()
    logger.setLevel(getattr(logging, level, logging.WARNING))

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        logging.Formatter(
            fmt="%(asctime)s  [%(levelname)-8s]  %(name)s: %(message)s",
            datefmt="%Y-%m-%dT%H:%M:%SZ",
        )
    )
    logger.addHandler(handler)
    logger.propagate = False
    return logger
