"""
Configuration management for id3reader.

This module handles loading, validating, and providing access to the
optional configuration stored in id3reader.yaml. Every setting has a
default, so the file is never required.

The configuration file contains:
    - Reader behaviour (strict truncation handling, accepted cover types)
    - Logging settings (level, optional log file, console colors)

Environment Overrides:
    Applied after the YAML file. A .env file in the current directory is
    loaded first (python-dotenv), so these can also live there.

        ID3READER_STRICT      "1"/"true"/"yes" enables strict mode
        ID3READER_LOG_LEVEL   DEBUG, INFO, WARNING, ERROR or CRITICAL
        ID3READER_LOG_FILE    path of a log file

Example id3reader.yaml:
    reader:
      strict: false
      cover_types: [3, 4]

    logging:
      level: INFO
      file: null
      colored: true
"""

import os
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any

import yaml
from dotenv import load_dotenv
from mutagen.id3 import PictureType

from id3reader.core.exceptions import ConfigError


# Default configuration file name (looked up in current working directory)
CONFIG_FILENAME = "id3reader.yaml"

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

DEFAULT_COVER_TYPES = (PictureType.COVER_FRONT, PictureType.COVER_BACK)

_TRUE_VALUES = ("1", "true", "yes", "on")
_FALSE_VALUES = ("0", "false", "no", "off", "")


@dataclass(frozen=True)
class ReaderConfig:
    """
    Tag decoding behaviour.

    Attributes:
        strict: When True, frame data cut short by the end of the stream
                raises ShortRead. When False (default) the frame scan stops
                silently and the tag holds the frames read so far.
        cover_types: Picture types accepted by ID3Tag.get_cover_image(),
                     in no particular order. Defaults to front and back cover.
    """
    strict: bool = False
    cover_types: tuple[int, ...] = DEFAULT_COVER_TYPES


@dataclass(frozen=True)
class LoggingConfig:
    """
    Logging configuration.

    Attributes:
        level: Console log level name.
        file: Optional path of a detailed log file (always DEBUG).
        colored: Whether console output uses ANSI colors.
    """
    level: str = "INFO"
    file: Path | None = None
    colored: bool = True


@dataclass(frozen=True)
class Config:
    """
    Complete id3reader configuration.

    Created by load_config() and treated as immutable.
    """
    reader: ReaderConfig = ReaderConfig()
    logging: LoggingConfig = LoggingConfig()


def load_config(config_path: Path | None = None) -> Config:
    """
    Load and validate configuration.

    Args:
        config_path: Optional explicit path to a YAML config file. If None,
                     id3reader.yaml in the current working directory is used
                     when it exists, otherwise only defaults apply.

    Returns:
        Config: A frozen dataclass containing all configuration values.

    Raises:
        ConfigError: If an explicit config file is missing, the YAML is
                     invalid, or a value has the wrong type.
    """
    load_dotenv(Path.cwd() / ".env")

    if config_path is None:
        default_path = Path.cwd() / CONFIG_FILENAME
        raw_config = _read_yaml(default_path) if default_path.exists() else {}
    else:
        if not config_path.exists():
            raise ConfigError(
                f"Configuration file not found: {config_path}",
                details={"file_path": str(config_path)}
            )
        raw_config = _read_yaml(config_path)

    for section in ("reader", "logging"):
        if raw_config.get(section) is not None and not isinstance(raw_config[section], dict):
            raise ConfigError(
                f"Section '{section}' must be a dictionary",
                details={"section": section}
            )

    config = Config(
        reader=_parse_reader_config(raw_config.get("reader") or {}),
        logging=_parse_logging_config(raw_config.get("logging") or {}),
    )
    return _apply_environment(config)


def _read_yaml(path: Path) -> dict[str, Any]:
    """Read a YAML file and return its top-level mapping."""
    try:
        with open(path, "r", encoding="utf-8") as f:
            raw_config = yaml.safe_load(f)
    except IOError as e:
        raise ConfigError(
            f"Failed to read configuration file: {e}",
            details={"file_path": str(path), "original_error": str(e)}
        ) from e
    except yaml.YAMLError as e:
        raise ConfigError(
            f"Invalid YAML syntax in configuration file: {e}",
            details={"file_path": str(path), "original_error": str(e)}
        ) from e

    # An empty file parses to None
    if raw_config is None:
        return {}

    if not isinstance(raw_config, dict):
        raise ConfigError(
            "Configuration file must contain a YAML dictionary",
            details={"file_path": str(path)}
        )
    return raw_config


def _parse_reader_config(section: dict[str, Any]) -> ReaderConfig:
    """
    Parse and validate the 'reader' section.

    Raises:
        ConfigError: If strict is not a boolean or cover_types is not a
                     non-empty list of integers in 0..255.
    """
    strict = section.get("strict", False)
    if not isinstance(strict, bool):
        raise ConfigError(
            "'reader.strict' must be true or false",
            details={"field": "reader.strict", "value": strict}
        )

    raw_types = section.get("cover_types")
    if raw_types is None:
        cover_types = DEFAULT_COVER_TYPES
    else:
        if (
            not isinstance(raw_types, list)
            or not raw_types
            or not all(isinstance(t, int) and not isinstance(t, bool) and 0 <= t <= 255 for t in raw_types)
        ):
            raise ConfigError(
                "'reader.cover_types' must be a non-empty list of integers between 0 and 255",
                details={"field": "reader.cover_types", "value": raw_types}
            )
        cover_types = tuple(raw_types)

    return ReaderConfig(strict=strict, cover_types=cover_types)


def _parse_logging_config(section: dict[str, Any]) -> LoggingConfig:
    """Parse and validate the 'logging' section."""
    level = _parse_level(section.get("level", "INFO"), "logging.level")

    raw_file = section.get("file")
    log_file = None
    if raw_file is not None:
        if not isinstance(raw_file, str) or not raw_file.strip():
            raise ConfigError(
                "'logging.file' must be a non-empty string path or null",
                details={"field": "logging.file"}
            )
        log_file = Path(raw_file.strip()).expanduser()

    colored = section.get("colored", True)
    if not isinstance(colored, bool):
        raise ConfigError(
            "'logging.colored' must be true or false",
            details={"field": "logging.colored", "value": colored}
        )

    return LoggingConfig(level=level, file=log_file, colored=colored)


def _parse_level(value: Any, field: str) -> str:
    if not isinstance(value, str) or value.upper() not in LOG_LEVELS:
        raise ConfigError(
            f"'{field}' must be one of {', '.join(LOG_LEVELS)}",
            details={"field": field, "value": value}
        )
    return value.upper()


def _apply_environment(config: Config) -> Config:
    """Override configuration values from ID3READER_* environment variables."""
    reader = config.reader
    logging_config = config.logging

    raw_strict = os.getenv("ID3READER_STRICT")
    if raw_strict is not None:
        normalized = raw_strict.strip().lower()
        if normalized in _TRUE_VALUES:
            reader = replace(reader, strict=True)
        elif normalized in _FALSE_VALUES:
            reader = replace(reader, strict=False)
        else:
            raise ConfigError(
                "ID3READER_STRICT must be a boolean value",
                details={"field": "ID3READER_STRICT", "value": raw_strict}
            )

    raw_level = os.getenv("ID3READER_LOG_LEVEL")
    if raw_level:
        logging_config = replace(logging_config, level=_parse_level(raw_level, "ID3READER_LOG_LEVEL"))

    raw_file = os.getenv("ID3READER_LOG_FILE")
    if raw_file:
        logging_config = replace(logging_config, file=Path(raw_file).expanduser())

    return Config(reader=reader, logging=logging_config)
