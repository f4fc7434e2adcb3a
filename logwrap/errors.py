"""
Exception hierarchy for logwrap.
"""

from __future__ import annotations


class LogwrapError(Exception):
    """Base class for every error raised by logwrap."""


class HostProbeError(LogwrapError):
    """The outbound-routable host IP could not be determined."""

    def __init__(self, address: tuple[str, int], reason: str) -> None:
        self.address = address
        self.reason  = reason
        host, port = address
        super().__init__(f"host ip probe via {host}:{port} failed: {reason}")


class ConfigError(LogwrapError):
    """Logging settings could not be loaded."""


class PanicError(LogwrapError):
    """Raised after a panic-level record is finalized."""
