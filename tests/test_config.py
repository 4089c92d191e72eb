"""Tests for configuration loading."""

import logging
from datetime import datetime, timedelta
from pathlib import Path
from unittest.mock import patch
from zoneinfo import ZoneInfoNotFoundError

import pytest

from amp_wrapped.config import Config, LoggingConfig, expand_env_var, load_config


class TestExpandEnvVar:
    """Tests for expand_env_var function."""

    def test_expands_braced_variable(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("AMP_WRAPPED_TZ", "UTC")
        assert expand_env_var("${AMP_WRAPPED_TZ}") == "UTC"

    def test_leaves_unset_variable(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("AMP_WRAPPED_UNSET", raising=False)
        assert expand_env_var("${AMP_WRAPPED_UNSET}") == "${AMP_WRAPPED_UNSET}"

    def test_plain_value_unchanged(self) -> None:
        assert expand_env_var("local") == "local"


class TestLoadConfig:
    """Tests for load_config function."""

    def test_defaults_when_no_file(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        """Should return defaults when no config file is found."""
        monkeypatch.chdir(tmp_path)
        with patch.object(Path, "exists", return_value=False):
            config = load_config()

        assert config == Config()
        assert config.loader.workers == 4
        assert config.timezone == "local"

    def test_missing_explicit_path(self, tmp_path: Path) -> None:
        """Should return defaults for a non-existent explicit path."""
        assert load_config(tmp_path / "nope.yaml") == Config()

    def test_loads_yaml(self, tmp_path: Path) -> None:
        config_file = tmp_path / "config.yaml"
        config_file.write_text(
            f"""
data_path: {tmp_path / "amp"}
timezone: UTC
loader:
  workers: 8
logging:
  dir: {tmp_path / "logs"}
  level: debug
"""
        )

        config = load_config(config_file)

        assert config.data_path == tmp_path / "amp"
        assert config.threads_path == tmp_path / "amp" / "threads"
        assert config.timezone == "UTC"
        assert config.loader.workers == 8
        assert config.logging.dir == tmp_path / "logs"
        assert config.logging.level_number == logging.DEBUG

    def test_expands_home_in_data_path(self, tmp_path: Path) -> None:
        config_file = tmp_path / "config.yaml"
        config_file.write_text("data_path: ~/amp-data\n")

        with patch.dict("os.environ", {"HOME": str(tmp_path)}):
            config = load_config(config_file)

        assert config.data_path == tmp_path / "amp-data"

    def test_workers_at_least_one(self, tmp_path: Path) -> None:
        config_file = tmp_path / "config.yaml"
        config_file.write_text("loader:\n  workers: 0\n")

        assert load_config(config_file).loader.workers == 1

    def test_empty_file(self, tmp_path: Path) -> None:
        config_file = tmp_path / "config.yaml"
        config_file.write_text("")

        assert load_config(config_file).timezone == "local"

    def test_null_sections_use_defaults(self, tmp_path: Path) -> None:
        """Should treat bare section keys as empty sections."""
        config_file = tmp_path / "config.yaml"
        config_file.write_text("loader:\nlogging:\n")

        config = load_config(config_file)

        assert config.loader.workers == 4
        assert config.logging.level == "INFO"


class TestConfigHelpers:
    """Tests for Config helper methods."""

    def test_local_timezone_is_none(self) -> None:
        assert Config().resolve_timezone() is None

    def test_named_timezone(self) -> None:
        try:
            tz = Config(timezone="UTC").resolve_timezone()
        except ZoneInfoNotFoundError:
            pytest.skip("timezone database not available")

        assert tz is not None
        assert datetime(2025, 1, 1, tzinfo=tz).utcoffset() == timedelta(0)

    def test_unknown_level_falls_back_to_info(self) -> None:
        assert LoggingConfig(level="chatty").level_number == logging.INFO
