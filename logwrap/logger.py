"""
Logger handle.

``Logger`` wraps a structlog ``BoundLogger`` together with the minimum
severity it lets through.  The handle published by the initializer keeps
its identity for the life of the process; ``update_context`` rebinds the
wrapped structlog logger in place.
"""

from __future__ import annotations

import threading
from typing import Any, Callable, Iterable, TextIO

import structlog

from logwrap.event import Context, Event
from logwrap.levels import LogLevel


def new_bound_logger(
    stream: TextIO,
    processors: Iterable[structlog.types.Processor],
    **context: Any,
) -> structlog.BoundLogger:
    """Bind ``processors`` and base ``context`` to a line writer on ``stream``."""
    return structlog.BoundLogger(
        structlog.PrintLogger(file=stream),
        processors=list(processors),
        context=dict(context),
    )


class Logger:
    """
    Level-filtering front end over a structlog bound logger.

    A ``Logger`` built without a bound logger is disabled: every event it
    starts is a no-op.  That is the state of the process-wide handle until
    initialisation completes.
    """

    def __init__(self, bound: structlog.BoundLogger | None, level: LogLevel) -> None:
        self._bound = bound
        self._level = level
        self._lock  = threading.Lock()

    @classmethod
    def disabled(cls) -> "Logger":
        return cls(None, LogLevel.TRACE)

    @property
    def level(self) -> LogLevel:
        return self._level

    @property
    def is_disabled(self) -> bool:
        return self._bound is None

    @property
    def context(self) -> dict[str, Any]:
        if self._bound is None:
            return {}
        return dict(structlog.get_context(self._bound))

    def should(self, level: LogLevel) -> bool:
        return self._bound is not None and level >= self._level

    # ── Context ───────────────────────────────────────────────────────────────

    def update_context(self, mutator: Callable[[Context], Context]) -> None:
        """Replace the base context with ``mutator(current context)``."""
        with self._lock:
            if self._bound is None:
                return
            current = structlog.get_context(self._bound)
            ctx = mutator(Context(current))
            # new() would clear the dict still held by open events.
            self._bound = self._bound.unbind(*current).bind(**ctx.to_dict())

    def bind(self, **fields: Any) -> "Logger":
        """Return a child logger carrying ``fields`` on top of this context."""
        if self._bound is None:
            return Logger.disabled()
        return Logger(self._bound.bind(**fields), self._level)

    # ── Level-scoped events ───────────────────────────────────────────────────

    def new_event(self, level: LogLevel) -> Event:
        return Event(self._bound if self.should(level) else None, level)

    def trace(self) -> Event:
        return self.new_event(LogLevel.TRACE)

    def debug(self) -> Event:
        return self.new_event(LogLevel.DEBUG)

    def info(self) -> Event:
        return self.new_event(LogLevel.INFO)

    def warn(self) -> Event:
        return self.new_event(LogLevel.WARN)

    def error(self) -> Event:
        return self.new_event(LogLevel.ERROR)

    def fatal(self) -> Event:
        """Start a fatal record; finalizing it exits the process."""
        return self.new_event(LogLevel.FATAL)

    def panic(self) -> Event:
        """Start a panic record; finalizing it raises ``PanicError``."""
        return self.new_event(LogLevel.PANIC)

    def __repr__(self) -> str:
        state = "disabled" if self._bound is None else self._level.value
        return f"<Logger {state}>"
