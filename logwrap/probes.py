"""
Host probes run once during logger initialisation.

  • resolve_host_ip() — outbound-routable IP of this machine
  • working_dir()     — directory used to shorten caller paths
"""

from __future__ import annotations

import ipaddress
import os
import socket

from logwrap.errors import HostProbeError

DEFAULT_PROBE_ADDRESS = ("1.1.1.1", 53)


def resolve_host_ip(address: tuple[str, int] = DEFAULT_PROBE_ADDRESS) -> str:
    """
    Return the local IP the OS would route ``address`` through.

    A UDP ``connect()`` only selects a route, so no packet leaves the host.
    Raises ``HostProbeError`` when the OS has no route or the socket fails.
    """
    try:
        with socket.socket(socket.AF_INET, socket.SOCK_DGRAM) as sock:
            sock.connect(address)
            local = sock.getsockname()[0]
    except OSError as exc:
        raise HostProbeError(address, str(exc)) from exc

    try:
        return str(ipaddress.ip_address(local))
    except ValueError as exc:
        raise HostProbeError(address, f"unexpected local address {local!r}") from exc


def working_dir() -> str:
    return os.getcwd()
