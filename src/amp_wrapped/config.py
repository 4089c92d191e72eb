"""Configuration loading and management."""

import logging
import os
from dataclasses import dataclass, field
from datetime import tzinfo
from pathlib import Path
from zoneinfo import ZoneInfo

import yaml


@dataclass
class LoaderConfig:
    workers: int = 4


@dataclass
class LoggingConfig:
    dir: Path = field(default_factory=lambda: Path.home() / ".amp-wrapped" / "logs")
    level: str = "INFO"

    @property
    def level_number(self) -> int:
        """Numeric logging level, falling back to INFO for unknown names."""
        value = logging.getLevelName(self.level.upper())
        return value if isinstance(value, int) else logging.INFO


@dataclass
class Config:
    data_path: Path = field(default_factory=lambda: Path.home() / ".local" / "share" / "amp")
    timezone: str = "local"
    loader: LoaderConfig = field(default_factory=LoaderConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    @property
    def threads_path(self) -> Path:
        return self.data_path / "threads"

    def resolve_timezone(self) -> tzinfo | None:
        """Timezone used for calendar dates; None means the local zone."""
        if not self.timezone or self.timezone == "local":
            return None
        return ZoneInfo(self.timezone)


def expand_env_var(value: str) -> str:
    """Expand environment variables in string (e.g. ${VAR})."""
    if value.startswith("${") and value.endswith("}"):
        env_var = value[2:-1]
        return os.environ.get(env_var, value)
    return value


def expand_path(path_str: str) -> Path:
    """Expand ~ and environment variables in path."""
    return Path(os.path.expandvars(os.path.expanduser(path_str)))


def load_config(config_path: Path | None = None) -> Config:
    """Load configuration from YAML file."""
    if config_path is None:
        # Look for config in standard locations
        search_paths = [
            Path.cwd() / "config.yaml",
            Path.home() / ".config" / "amp-wrapped" / "config.yaml",
            Path("/etc/amp-wrapped/config.yaml"),
        ]
        for path in search_paths:
            if path.exists():
                config_path = path
                break

    if config_path is None or not config_path.exists():
        return Config()

    with open(config_path) as f:
        data = yaml.safe_load(f) or {}

    loader_data = data.get("loader") or {}
    loader = LoaderConfig(workers=max(1, int(loader_data.get("workers", 4))))

    logging_data = data.get("logging") or {}
    logging_config = LoggingConfig(
        dir=expand_path(logging_data.get("dir", "~/.amp-wrapped/logs")),
        level=str(logging_data.get("level", "INFO")),
    )

    timezone = expand_env_var(str(data.get("timezone", "local")))

    return Config(
        data_path=expand_path(expand_env_var(data.get("data_path", "~/.local/share/amp"))),
        timezone=timezone,
        loader=loader,
        logging=logging_config,
    )
