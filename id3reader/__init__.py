"""
id3reader: Read title, artist, album, composer and cover art from ID3v2 tags.

This package decodes the ID3v2.3 or ID3v2.4 tag at the start of an audio
stream. It is read-only: tags are never written or re-encoded.

Architecture:
    core/       - Configuration, logging, exceptions
    id3/        - Binary tag decoder (header, frames, text, pictures)
    cli.py      - Command-line interface (id3-read)

Usage:
    Command Line:
        id3-read song.mp3
        id3-read --cover-out covers/ *.mp3

    Python API:
        from id3reader import read_tag_from_file, FrameNotFound

        tag = read_tag_from_file(Path("song.mp3"))
        try:
            print(tag.get_title())
        except FrameNotFound:
            print("Not Defined")

Unsupported Features:
    Tags using unsynchronisation, an extended header or the experimental
    flag are rejected. Compressed, encrypted or unsynchronised frames are
    read but ignored by the accessors.

Dependencies:
    - mutagen: ID3 encoding and picture type enumerations
    - click: CLI framework
    - tqdm: Progress bars
    - colorama: Console colors
    - pyyaml: Configuration file parsing
    - python-dotenv: .env support for environment overrides
"""

__version__ = "0.1.0"
__license__ = "MIT"

from id3reader.core import (
    Config,
    ConfigError,
    DecodeFailure,
    FrameNotFound,
    HeaderInvalid,
    ID3ReaderError,
    MalformedInteger,
    PictureNotFound,
    ReaderConfig,
    ShortRead,
    UnsupportedFeature,
    get_logger,
    load_config,
    setup_logging,
)
from id3reader.id3 import AttachedPicture, Frame, ID3Tag, read_tag, read_tag_from_file

__all__ = [
    # Version
    "__version__",
    # Core
    "Config",
    "ReaderConfig",
    "load_config",
    "setup_logging",
    "get_logger",
    # Exceptions
    "ID3ReaderError",
    "ConfigError",
    "HeaderInvalid",
    "UnsupportedFeature",
    "MalformedInteger",
    "ShortRead",
    "DecodeFailure",
    "FrameNotFound",
    "PictureNotFound",
    # Decoder
    "ID3Tag",
    "Frame",
    "AttachedPicture",
    "read_tag",
    "read_tag_from_file",
]
