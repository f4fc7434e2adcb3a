"""
Logger Initializer — one configured structured logger per process.

Resolves a (level, environment) pair into a structlog-backed ``Logger``
exactly once, however many threads race to initialise it, and exposes
level-scoped entry points that forward to the published handle.

Usage (as library)::

    from logwrap import initializer as log

    log.init_log("info", "prod")
    log.info().field("foo", "bar").msg("hello world")
    # {"host_ip": "10.0.0.5", "foo": "bar", "level": "info",
    #  "timestamp": "...", "caller": "app/main.py:12", "message": "hello world"}

    log.update_context(lambda c: c.field("service", "checkout-api"))

Usage (CLI smoke check)::

    LOG_LEVEL=debug APP_ENV=dev python -m logwrap.initializer
"""

from __future__ import annotations

import sys
from typing import Callable, TextIO

import structlog

from logwrap import diagnostics
from logwrap.caller import caller_processors
from logwrap.errors import HostProbeError
from logwrap.event import Context, Event, FieldMerger
from logwrap.levels import Environment, LogLevel
from logwrap.logger import Logger, new_bound_logger
from logwrap.once import OneShot
from logwrap.probes import DEFAULT_PROBE_ADDRESS, resolve_host_ip, working_dir
from logwrap.settings import load_settings

log = diagnostics.get_logger(__name__)

HOST_IP_KEY    = "host_ip"
TIMESTAMP_KEY  = "timestamp"
MESSAGE_KEY    = "message"
USER_EVENT_KEY = "_user_event"


# ── Output selection ──────────────────────────────────────────────────────────

def build_processors(base_dir: str, dev: bool) -> list[structlog.types.Processor]:
    """Enrichment chain plus the renderer for the chosen output format."""
    if dev:
        # ConsoleRenderer formats exc_info itself and shows the message
        # under "event", so a user "event" field keeps the field_ prefix.
        return [
            FieldMerger(),
            structlog.processors.TimeStamper(fmt="iso", utc=True, key=TIMESTAMP_KEY),
            *caller_processors(base_dir),
            structlog.dev.ConsoleRenderer(),
        ]
    return [
        FieldMerger(aliases={"event": USER_EVENT_KEY}),
        structlog.processors.TimeStamper(fmt="iso", utc=True, key=TIMESTAMP_KEY),
        *caller_processors(base_dir),
        structlog.processors.format_exc_info,
        structlog.processors.EventRenamer(MESSAGE_KEY, replace_by=USER_EVENT_KEY),
        structlog.processors.JSONRenderer(),
    ]


# ── Initializer ───────────────────────────────────────────────────────────────

class LoggerInitializer:
    """
    Owns one logger handle and the one-shot guard that configures it.

    The handle starts disabled and is replaced by the configured logger on
    the first ``initialize()``.  Every later call returns that same object.

    Collaborators are injectable so tests can pin the host IP and the
    working directory::

        init = LoggerInitializer(ip_probe=lambda addr: "192.0.2.10")
        logger = init.initialize("info", "prod")
    """

    def __init__(
        self,
        ip_probe: Callable[[tuple[str, int]], str] = resolve_host_ip,
        cwd_probe: Callable[[], str] = working_dir,
        probe_address: tuple[str, int] = DEFAULT_PROBE_ADDRESS,
    ) -> None:
        self._ip_probe      = ip_probe
        self._cwd_probe     = cwd_probe
        self.probe_address  = probe_address
        self._once          = OneShot()
        self._logger        = Logger.disabled()

    @property
    def logger(self) -> Logger:
        return self._logger

    @property
    def initialized(self) -> bool:
        return self._once.done

    def initialize(
        self,
        level: LogLevel | str,
        env: Environment | str,
        stdout: TextIO | None = None,
        stderr: TextIO | None = None,
    ) -> Logger:
        """
        Configure the logger on the first call; return the published handle.

        Raises ``HostProbeError`` on every call if the first one could not
        resolve the host IP.  Nothing is retried.
        """
        self._once.do(lambda: self._configure(level, env, stdout, stderr))
        return self._logger

    def _configure(
        self,
        level: LogLevel | str,
        env: Environment | str,
        stdout: TextIO | None,
        stderr: TextIO | None,
    ) -> None:
        min_level   = LogLevel.parse(level)
        environment = Environment.parse(env)

        stream = stderr or sys.stderr
        if environment.is_dev:
            # dev always logs everything, human-readable, on stdout
            min_level = LogLevel.TRACE
            stream    = stdout or sys.stdout

        base_dir = self._cwd_probe()

        try:
            host_ip = self._ip_probe(self.probe_address)
        except HostProbeError as exc:
            log.error("logger initialisation aborted: %s", exc)
            raise

        bound = new_bound_logger(
            stream,
            build_processors(base_dir, environment.is_dev),
            **{HOST_IP_KEY: host_ip},
        )
        self._logger = Logger(bound, min_level)
        log.debug(
            "logger initialised level=%s env=%s host_ip=%s",
            min_level.value, environment.value, host_ip,
        )


# ── Process-wide default ──────────────────────────────────────────────────────

_default = LoggerInitializer()


def init_log(level: LogLevel | str, env: Environment | str) -> Logger:
    """Initialise the process-wide logger (first call wins) and return it."""
    return _default.initialize(level, env)


def get_logger() -> Logger:
    """The published handle; a disabled logger before ``init_log``."""
    return _default.logger


def update_context(mutator: Callable[[Context], Context]) -> None:
    """
    Update the base context of the process-wide logger, eg::

        update_context(lambda c: c.field("some_default_key", "some_default_value"))
    """
    _default.logger.update_context(mutator)


def trace() -> Event:
    """Start a trace record.  Call ``msg()`` on it to write it."""
    return _default.logger.trace()


def debug() -> Event:
    """Start a debug record.  Call ``msg()`` on it to write it."""
    return _default.logger.debug()


def info() -> Event:
    """Start an info record.  Call ``msg()`` on it to write it."""
    return _default.logger.info()


def warn() -> Event:
    """Start a warn record.  Call ``msg()`` on it to write it."""
    return _default.logger.warn()


def error() -> Event:
    """Start an error record.  Call ``msg()`` on it to write it."""
    return _default.logger.error()


def fatal() -> Event:
    """Start a fatal record.  ``msg()`` writes it, then exits with status 1."""
    return _default.logger.fatal()


def panic() -> Event:
    """Start a panic record.  ``msg()`` writes it, then raises ``PanicError``."""
    return _default.logger.panic()


# ── CLI entry-point ───────────────────────────────────────────────────────────

def main() -> None:
    settings = load_settings()
    _default.probe_address = settings.probe_address

    try:
        init_log(settings.level, settings.env)
    except HostProbeError as exc:
        print(f"logwrap: {exc}", file=sys.stderr)
        sys.exit(1)

    info().fields(env=settings.env.value, min_level=get_logger().level.value).msg("logger ready")


if __name__ == "__main__":
    main()
