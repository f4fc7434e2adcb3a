"""
Severity levels and deployment environments.

Both are closed enumerations.  Free-form tags coming from configuration go
through ``parse()``, which never fails: an unknown level resolves to
``LogLevel.INFO`` and an unknown environment to ``Environment.PROD``.
"""

from __future__ import annotations

from enum import Enum

from logwrap.diagnostics import get_logger

log = get_logger(__name__)


# ── Severity ──────────────────────────────────────────────────────────────────

class LogLevel(Enum):
    """Record severity, ordered from most to least verbose."""

    TRACE = "trace"
    DEBUG = "debug"
    INFO  = "info"
    WARN  = "warn"
    ERROR = "error"
    FATAL = "fatal"
    PANIC = "panic"

    @property
    def severity(self) -> int:
        return _SEVERITY[self]

    @classmethod
    def parse(cls, tag: "LogLevel | str | None") -> "LogLevel":
        if isinstance(tag, cls):
            return tag
        key = str(tag or "").strip().lower()
        for level in cls:
            if level.value == key:
                return level
        log.debug("unrecognised log level %r, using info", tag)
        return cls.INFO

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, LogLevel):
            return NotImplemented
        return self.severity < other.severity

    def __le__(self, other: object) -> bool:
        if not isinstance(other, LogLevel):
            return NotImplemented
        return self.severity <= other.severity

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, LogLevel):
            return NotImplemented
        return self.severity > other.severity

    def __ge__(self, other: object) -> bool:
        if not isinstance(other, LogLevel):
            return NotImplemented
        return self.severity >= other.severity


# Same ladder as the stdlib ``logging`` module, with trace below DEBUG
# and panic above CRITICAL.
_SEVERITY = {
    LogLevel.TRACE:  5,
    LogLevel.DEBUG: 10,
    LogLevel.INFO:  20,
    LogLevel.WARN:  30,
    LogLevel.ERROR: 40,
    LogLevel.FATAL: 50,
    LogLevel.PANIC: 60,
}


# ── Environment ───────────────────────────────────────────────────────────────

class Environment(Enum):
    """Deployment environment.  Only ``DEV`` changes logger behaviour."""

    PROD  = "prod"
    STAGE = "stage"
    QA    = "qa"
    DEV   = "dev"

    @property
    def is_dev(self) -> bool:
        return self is Environment.DEV

    @classmethod
    def parse(cls, tag: "Environment | str | None") -> "Environment":
        if isinstance(tag, cls):
            return tag
        key = str(tag or "").strip().lower()
        for env in cls:
            if env.value == key:
                return env
        log.debug("unrecognised environment %r, treating as prod", tag)
        return cls.PROD
