"""
Prometheus instruments for emitted log records.

The counter is registered on the default registry; exposing it is left to
the host application (``prometheus_client.start_http_server`` or its own
``/metrics`` route).
"""

from __future__ import annotations

from prometheus_client import Counter

LOG_RECORDS = Counter(
    "logwrap_records_total",
    "Log records written, by level",
    ["level"],
)


def record_written(level: str) -> None:
    LOG_RECORDS.labels(level=level).inc()
