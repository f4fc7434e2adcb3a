"""
Caller-location processors.

structlog's ``CallsiteParameterAdder`` walks the stack to the first frame
outside structlog and logwrap and records its file and line.
``CallerFormatter`` then folds those two keys into a single ``caller``
field, relative to the working directory captured at initialisation.

Both processors live on one logger's chain, so loggers built with
different working directories never interfere.
"""

from __future__ import annotations

import os
from typing import Any

import structlog
from structlog.processors import CallsiteParameter, CallsiteParameterAdder

CALLER_KEY = "caller"

# Frames from these modules are never reported as the call site.
IGNORED_MODULES = ["logwrap"]


class CallerFormatter:
    """Replace ``pathname``/``lineno`` with ``caller="<short path>:<line>"``."""

    def __init__(self, base_dir: str) -> None:
        self.prefix = base_dir.rstrip(os.sep) + os.sep

    def shorten(self, path: str) -> str:
        if path.startswith(self.prefix):
            return path[len(self.prefix):]
        return path

    def __call__(
        self, logger: Any, method_name: str, event_dict: dict[str, Any]
    ) -> dict[str, Any]:
        path   = event_dict.pop(CallsiteParameter.PATHNAME.value, None)
        lineno = event_dict.pop(CallsiteParameter.LINENO.value, None)
        if path is not None and lineno is not None:
            event_dict[CALLER_KEY] = f"{self.shorten(path)}:{lineno}"
        return event_dict


def caller_processors(base_dir: str) -> list[structlog.types.Processor]:
    """Processors that attach the ``caller`` field, in chain order."""
    return [
        CallsiteParameterAdder(
            parameters=[CallsiteParameter.PATHNAME, CallsiteParameter.LINENO],
            additional_ignores=IGNORED_MODULES,
        ),
        CallerFormatter(base_dir),
    ]
