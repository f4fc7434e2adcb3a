"""
Tests for logwrap/settings.py
"""

from __future__ import annotations

import pytest

from logwrap.errors import ConfigError
from logwrap.levels import Environment, LogLevel
from logwrap.settings import DEFAULT_CONFIG, LogSettings, load_settings


@pytest.mark.usefixtures("clean_env")
class TestLoadSettings:
    def test_missing_file_gives_defaults(self, tmp_path):
        settings = load_settings(tmp_path / "absent.yaml")
        assert settings == LogSettings()
        assert settings.probe_address == ("1.1.1.1", 53)

    def test_reads_yaml_file(self, logging_config_path):
        settings = load_settings(logging_config_path)
        assert settings.level is LogLevel.WARN
        assert settings.env is Environment.STAGE
        assert settings.probe_address == ("8.8.8.8", 53)

    def test_environment_overrides_file(self, logging_config_path, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "debug")
        monkeypatch.setenv("APP_ENV", "dev")
        monkeypatch.setenv("LOG_PROBE_PORT", "5353")
        settings = load_settings(logging_config_path)
        assert settings.level is LogLevel.DEBUG
        assert settings.env is Environment.DEV
        assert settings.probe_port == 5353
        assert settings.probe_host == "8.8.8.8"

    def test_config_path_from_environment(self, logging_config_path, monkeypatch):
        monkeypatch.setenv("LOG_CONFIG", str(logging_config_path))
        assert load_settings().env is Environment.STAGE

    def test_unknown_tags_are_defaulted(self, tmp_path, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "chatty")
        monkeypatch.setenv("APP_ENV", "sandbox")
        settings = load_settings(tmp_path / "absent.yaml")
        assert settings.level is LogLevel.INFO
        assert settings.env is Environment.PROD

    def test_bad_port_raises(self, tmp_path, monkeypatch):
        monkeypatch.setenv("LOG_PROBE_PORT", "fifty-three")
        with pytest.raises(ConfigError, match="invalid probe port"):
            load_settings(tmp_path / "absent.yaml")

    def test_port_out_of_range_raises(self, tmp_path, monkeypatch):
        monkeypatch.setenv("LOG_PROBE_PORT", "70000")
        with pytest.raises(ConfigError, match="out of range"):
            load_settings(tmp_path / "absent.yaml")

    def test_malformed_yaml_raises(self, tmp_path):
        p = tmp_path / "broken.yaml"
        p.write_text("logging: [unclosed\n")
        with pytest.raises(ConfigError):
            load_settings(p)

    def test_non_mapping_section_raises(self, tmp_path):
        p = tmp_path / "list.yaml"
        p.write_text("logging:\n  - info\n")
        with pytest.raises(ConfigError, match="must be a mapping"):
            load_settings(p)

    def test_to_dict_round_trips_tags(self, logging_config_path):
        d = load_settings(logging_config_path).to_dict()
        assert d["level"] == "warn"
        assert d["env"] == "stage"


@pytest.mark.usefixtures("clean_env")
class TestDefaultConfigFile:
    """Integration test — uses the config file shipped in the repo."""

    def test_shipped_config_loads(self):
        assert DEFAULT_CONFIG.exists()
        settings = load_settings()
        assert settings.level is LogLevel.INFO
        assert settings.env is Environment.PROD
