"""
Logging settings loader.

Reads:
  • config/logging.yaml — optional ``logging:`` section
  • environment         — LOG_LEVEL, APP_ENV, LOG_PROBE_HOST, LOG_PROBE_PORT

Environment variables win over the file, the file wins over defaults.
Unknown level or environment tags are defaulted, never rejected.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

from logwrap.errors import ConfigError
from logwrap.levels import Environment, LogLevel
from logwrap.probes import DEFAULT_PROBE_ADDRESS

ROOT = Path(__file__).resolve().parent.parent
DEFAULT_CONFIG = ROOT / "config" / "logging.yaml"

CONFIG_ENV = "LOG_CONFIG"


@dataclass(frozen=True)
class LogSettings:
    """The two initialisation inputs plus the host-IP probe target."""

    level: LogLevel = LogLevel.INFO
    env: Environment = Environment.PROD
    probe_host: str = DEFAULT_PROBE_ADDRESS[0]
    probe_port: int = DEFAULT_PROBE_ADDRESS[1]

    @property
    def probe_address(self) -> tuple[str, int]:
        return (self.probe_host, self.probe_port)

    def to_dict(self) -> dict[str, Any]:
        return {
            "level":      self.level.value,
            "env":        self.env.value,
            "probe_host": self.probe_host,
            "probe_port": self.probe_port,
        }


def _load_yaml(path: Path) -> dict:
    if not path.exists():
        return {}
    try:
        with path.open() as fh:
            data = yaml.safe_load(fh) or {}
    except yaml.YAMLError as exc:
        raise ConfigError(f"{path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigError(f"{path}: expected a mapping at the top level")
    section = data.get("logging", {}) or {}
    if not isinstance(section, dict):
        raise ConfigError(f"{path}: 'logging' must be a mapping")
    return section


def _port(value: Any) -> int:
    try:
        port = int(value)
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"invalid probe port {value!r}") from exc
    if not 0 < port < 65536:
        raise ConfigError(f"probe port out of range: {port}")
    return port


def load_settings(config_path: str | Path | None = None) -> LogSettings:
    if config_path is None:
        config_path = os.getenv(CONFIG_ENV, str(DEFAULT_CONFIG))
    file_cfg = _load_yaml(Path(config_path))

    level = os.getenv("LOG_LEVEL",      file_cfg.get("level", LogLevel.INFO.value))
    env   = os.getenv("APP_ENV",        file_cfg.get("env", Environment.PROD.value))
    host  = os.getenv("LOG_PROBE_HOST", file_cfg.get("probe_host", DEFAULT_PROBE_ADDRESS[0]))
    port  = os.getenv("LOG_PROBE_PORT", file_cfg.get("probe_port", DEFAULT_PROBE_ADDRESS[1]))

    return LogSettings(
        level=LogLevel.parse(level),
        env=Environment.parse(env),
        probe_host=str(host),
        probe_port=_port(port),
    )
