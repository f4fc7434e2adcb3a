"""
Record and context builders.

An ``Event`` is a record in progress at a fixed severity.  Fields are
chained onto it and nothing is written until one of the finalizers
(``msg``, ``msgf``, ``send``) runs::

    log.info().field("order_id", 42).msg("order accepted")

A ``Context`` is the set of base fields attached to every record of a
logger; ``Logger.update_context`` passes one through a caller-supplied
mutator.
"""

from __future__ import annotations

import sys
from typing import Any

from logwrap.errors import PanicError
from logwrap.levels import LogLevel
from logwrap.metrics import record_written

ERROR_KEY = "error"

# User fields travel to the processor chain under this single key so no
# field name can collide with structlog's own call arguments.
FIELDS_KEY = "_logwrap_fields"

# Record keys owned by the chain; a user field with one of these names is
# written as ``field_<name>``.
RESERVED_KEYS = frozenset({"event", "level", "message", "timestamp", "caller"})
RESERVED_PREFIX = "field_"


# ── Field merging ─────────────────────────────────────────────────────────────

class FieldMerger:
    """
    Processor that unpacks an event's fields into the event dict.

    ``aliases`` maps reserved names to the key they are stored under
    instead of the ``field_`` default; the JSON chain parks a user
    ``event`` field under an alias that ``EventRenamer`` later restores.
    """

    def __init__(self, aliases: dict[str, str] | None = None) -> None:
        self.aliases = dict(aliases or {})

    def __call__(
        self, logger: Any, method_name: str, event_dict: dict[str, Any]
    ) -> dict[str, Any]:
        fields = event_dict.pop(FIELDS_KEY, None) or {}
        for key, value in fields.items():
            if key in RESERVED_KEYS:
                key = self.aliases.get(key, RESERVED_PREFIX + key)
            event_dict[key] = value
        return event_dict


# ── Record builder ────────────────────────────────────────────────────────────

class Event:
    """
    A single log record at ``level``.

    ``bound`` is the structlog bound logger captured when the event was
    started, or ``None`` when the level is filtered out (the event then
    collects nothing and writes nothing).
    """

    def __init__(self, bound: Any, level: LogLevel) -> None:
        self.level      = level
        self._bound     = bound
        self._fields: dict[str, Any] = {}
        self._finalized = False

    def enabled(self) -> bool:
        return self._bound is not None and not self._finalized

    # ── Fields ────────────────────────────────────────────────────────────────

    def field(self, key: str, value: Any) -> "Event":
        if self.enabled():
            self._fields[key] = value
        return self

    def fields(self, **fields: Any) -> "Event":
        if self.enabled():
            self._fields.update(fields)
        return self

    def err(self, exc: BaseException | None) -> "Event":
        """Attach ``exc`` as the ``error`` field; ``None`` is ignored."""
        if exc is None:
            return self
        return self.field(ERROR_KEY, str(exc))

    def stack(self, exc: BaseException | None = None) -> "Event":
        """Attach a formatted traceback of ``exc`` (or the one being handled)."""
        return self.field("exc_info", exc if exc is not None else True)

    # ── Finalizers ────────────────────────────────────────────────────────────

    def msg(self, message: str = "") -> None:
        if self._finalized:
            return
        if self._bound is not None:
            self._bound.msg(
                message, level=self.level.value, **{FIELDS_KEY: self._fields}
            )
            record_written(self.level.value)
        self._finalized = True
        self._bound     = None
        self._fields    = {}
        self._terminate(message)

    def msgf(self, fmt: str, *args: Any) -> None:
        self.msg(fmt % args if args else fmt)

    def send(self) -> None:
        self.msg("")

    def _terminate(self, message: str) -> None:
        if self.level is LogLevel.FATAL:
            sys.exit(1)
        if self.level is LogLevel.PANIC:
            raise PanicError(message)


# ── Context builder ───────────────────────────────────────────────────────────

class Context:
    """Immutable set of base fields; every builder method returns a copy."""

    def __init__(self, fields: dict[str, Any] | None = None) -> None:
        self._fields = dict(fields or {})

    def field(self, key: str, value: Any) -> "Context":
        return Context({**self._fields, key: value})

    def fields(self, **fields: Any) -> "Context":
        return Context({**self._fields, **fields})

    def without(self, *keys: str) -> "Context":
        return Context({k: v for k, v in self._fields.items() if k not in keys})

    def to_dict(self) -> dict[str, Any]:
        return dict(self._fields)

    def __contains__(self, key: object) -> bool:
        return key in self._fields

    def __repr__(self) -> str:
        return f"Context({self._fields!r})"
