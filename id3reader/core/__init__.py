"""
Core module for id3reader.

This module provides the foundational components used throughout the package:
    - exceptions: Custom exception classes for error handling
    - config: Configuration loading and validation
    - logger: Logging system with console and file outputs

Usage:
    from id3reader.core import (
        Config, load_config,
        setup_logging, get_logger,
        ID3ReaderError, HeaderInvalid, FrameNotFound
    )
"""

from id3reader.core.config import (
    Config,
    LoggingConfig,
    ReaderConfig,
    load_config,
)
from id3reader.core.exceptions import (
    AccessError,
    ConfigError,
    DecodeFailure,
    FrameNotFound,
    HeaderInvalid,
    ID3ReaderError,
    MalformedInteger,
    PictureNotFound,
    ShortRead,
    TagError,
    UnsupportedFeature,
)
from id3reader.core.logger import (
    get_logger,
    setup_logging,
    shutdown_logging,
)

__all__ = [
    # Config
    "Config",
    "ReaderConfig",
    "LoggingConfig",
    "load_config",
    # Exceptions
    "ID3ReaderError",
    "ConfigError",
    "TagError",
    "HeaderInvalid",
    "UnsupportedFeature",
    "MalformedInteger",
    "ShortRead",
    "AccessError",
    "DecodeFailure",
    "FrameNotFound",
    "PictureNotFound",
    # Logger
    "setup_logging",
    "get_logger",
    "shutdown_logging",
]
