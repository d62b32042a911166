"""Configuration loading for tuneshelf.

The configuration is a TOML file with a single `[config]` table:

    [config]
    path = "~/Music"
    sorting = "TitleAsc"
    repeat = "Off"
"""
from __future__ import annotations

import logging
import os
import tomllib
from dataclasses import dataclass, fields
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Optional, Type, TypeVar

from models.errors import ConfigurationError
from models.playback import Repeat, SortOrder

logger = logging.getLogger(__name__)

E = TypeVar("E", bound=Enum)

CONFIG_ENV_VAR = "TUNESHELF_CONFIG"
VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

SORTING_ALIASES = {
    "ByTitleAscending": SortOrder.TITLE_ASC,
    "ByTitleDescending": SortOrder.TITLE_DESC,
    "ByDurationAscending": SortOrder.DURATION_ASC,
    "ByDurationDescending": SortOrder.DURATION_DESC,
}

REPEAT_ALIASES = {
    "ThisMusic": Repeat.THIS_TRACK,
    "AllMusics": Repeat.ALL_TRACKS,
    "Dont": Repeat.OFF,
}


@dataclass
class AppConfig:
    """Application configuration settings."""
    path: str = "~/Music"
    sorting: SortOrder = SortOrder.TITLE_ASC
    repeat: Repeat = Repeat.OFF
    seek_seconds: float = 5.0
    volume_step: int = 1
    poll_interval: float = 0.05
    log_level: str = "INFO"

    @property
    def music_dir(self) -> Path:
        return Path(self.path).expanduser()


def default_config_path() -> Path:
    """Config file location: $TUNESHELF_CONFIG, then the XDG config directory."""
    explicit = os.environ.get(CONFIG_ENV_VAR)
    if explicit:
        return Path(explicit).expanduser()
    xdg_config = os.environ.get("XDG_CONFIG_HOME")
    if xdg_config:
        return Path(xdg_config) / "tuneshelf" / "config.toml"
    return Path.home() / ".config" / "tuneshelf" / "config.toml"


def _parse_enum(enum_type: Type[E], value: Any, aliases: Dict[str, E], default: E) -> E:
    if isinstance(value, str):
        if value in aliases:
            return aliases[value]
        for member in enum_type:
            if member.value == value:
                return member
    logger.warning(f"Invalid {enum_type.__name__} value {value!r}, using {default.value}")
    return default


def _parse_number(name: str, value: Any, cast, default, minimum, maximum):
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        logger.warning(f"Invalid value for {name}: {value!r}, using {default}")
        return default
    if not minimum <= value <= maximum:
        logger.warning(f"{name} must be {minimum}-{maximum}, got {value}, using {default}")
        return default
    return cast(value)


def config_from_dict(data: Dict[str, Any]) -> AppConfig:
    """Build an AppConfig from the `[config]` table, falling back per key."""
    config = AppConfig()
    known = {f.name for f in fields(AppConfig)}

    for key in data:
        if key not in known:
            logger.warning(f"Unknown config key ignored: {key}")

    if "path" in data:
        if isinstance(data["path"], str) and data["path"]:
            config.path = data["path"]
        else:
            logger.warning(f"Invalid music path {data['path']!r}, using {config.path}")
    if "sorting" in data:
        config.sorting = _parse_enum(SortOrder, data["sorting"], SORTING_ALIASES, config.sorting)
    if "repeat" in data:
        config.repeat = _parse_enum(Repeat, data["repeat"], REPEAT_ALIASES, config.repeat)
    if "seek_seconds" in data:
        config.seek_seconds = _parse_number("seek_seconds", data["seek_seconds"], float, config.seek_seconds, 1, 60)
    if "volume_step" in data:
        config.volume_step = _parse_number("volume_step", data["volume_step"], int, config.volume_step, 1, 20)
    if "poll_interval" in data:
        config.poll_interval = _parse_number("poll_interval", data["poll_interval"], float, config.poll_interval, 0.01, 1.0)
    if "log_level" in data:
        level = str(data["log_level"]).upper()
        if level in VALID_LOG_LEVELS:
            config.log_level = level
        else:
            logger.warning(f"Invalid log level: {data['log_level']!r}, using {config.log_level}")
    return config


def load_config(config_path: Optional[Path] = None) -> AppConfig:
    """Load configuration from a TOML file.

    A missing file gives the defaults.

    Raises:
        ConfigurationError: If the file exists but cannot be read or parsed.
    """
    config_path = config_path or default_config_path()
    if not config_path.exists():
        logger.info(f"Config file not found at {config_path}, using defaults")
        return AppConfig()

    try:
        with open(config_path, 'rb') as f:
            document = tomllib.load(f)
    except (tomllib.TOMLDecodeError, OSError) as e:
        raise ConfigurationError(f"Failed to load config {config_path}: {e}") from e

    table = document.get("config", {})
    if not isinstance(table, dict):
        raise ConfigurationError(f"[config] in {config_path} must be a table")

    config = config_from_dict(table)
    logger.info(f"Loaded configuration from {config_path}")
    return config
