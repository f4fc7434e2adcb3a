"""
Shared pytest fixtures for the logwrap test suite.
"""

from __future__ import annotations

import io
import json
from pathlib import Path

import pytest
import yaml

from logwrap import initializer as log_module
from logwrap.initializer import LoggerInitializer

HOST_IP  = "192.0.2.10"          # TEST-NET-1, never routed
REPO_DIR = str(Path(__file__).parent.parent)


# ── Helpers ───────────────────────────────────────────────────────────────────

def json_lines(text: str) -> list[dict]:
    """Parse one JSON record per non-empty line."""
    return [json.loads(line) for line in text.splitlines() if line.strip()]


class ProbeRecorder:
    """Stand-in for the host-IP probe that counts its calls."""

    def __init__(self, ip: str = HOST_IP) -> None:
        self.ip    = ip
        self.calls: list[tuple[str, int]] = []

    def __call__(self, address: tuple[str, int]) -> str:
        self.calls.append(address)
        return self.ip


# ── Initializer fixtures ──────────────────────────────────────────────────────

@pytest.fixture()
def probe() -> ProbeRecorder:
    return ProbeRecorder()


@pytest.fixture()
def initializer(probe: ProbeRecorder) -> LoggerInitializer:
    """A fresh initializer with a pinned IP and the repo root as cwd."""
    return LoggerInitializer(ip_probe=probe, cwd_probe=lambda: REPO_DIR)


@pytest.fixture()
def streams() -> tuple[io.StringIO, io.StringIO]:
    """(stdout, stderr) buffers handed to ``initialize``."""
    return io.StringIO(), io.StringIO()


@pytest.fixture()
def default_initializer(monkeypatch, initializer: LoggerInitializer) -> LoggerInitializer:
    """Swap the process-wide default for a fresh one for the test's duration."""
    monkeypatch.setattr(log_module, "_default", initializer)
    return initializer


# ── Settings fixtures ─────────────────────────────────────────────────────────

@pytest.fixture()
def clean_env(monkeypatch) -> None:
    for name in ("LOG_LEVEL", "APP_ENV", "LOG_PROBE_HOST", "LOG_PROBE_PORT", "LOG_CONFIG"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture()
def logging_config_path(tmp_path: Path) -> Path:
    """Write a minimal logging.yaml to a temp dir and return the path."""
    cfg = {
        "logging": {
            "level": "warn",
            "env": "stage",
            "probe_host": "8.8.8.8",
            "probe_port": 53,
        }
    }
    p = tmp_path / "logging.yaml"
    p.write_text(yaml.dump(cfg))
    return p
