"""
Command-line interface for id3reader.

This module implements the id3-read command using Click.

Usage:
    # Show title, artist, album, composer and cover size
    id3-read song.mp3

    # Several files, with a progress bar, saving covers
    id3-read --cover-out ~/covers *.mp3

    # List every frame in the tag
    id3-read --frames song.mp3

Exit Codes:
    0 - Every file was decoded
    1 - Configuration error
    2 - At least one file could not be decoded or its cover saved
"""

import sys
from pathlib import Path
from typing import Optional

import click
from tqdm import tqdm

from id3reader import __version__
from id3reader.core import (
    ConfigError,
    ID3ReaderError,
    ReaderConfig,
    get_logger,
    load_config,
    setup_logging,
    shutdown_logging,
)
from id3reader.core.exceptions import AccessError
from id3reader.id3 import ID3Tag, read_tag_from_file

logger = get_logger(__name__)


NOT_DEFINED = "Not Defined"

EXIT_OK = 0
EXIT_CONFIG_ERROR = 1
EXIT_DECODE_ERROR = 2


@click.command()
@click.argument(
    "files",
    nargs=-1,
    required=True,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
)
@click.option(
    "--cover-out",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    metavar="<dir>",
    help="Write each cover image found to this directory"
)
@click.option(
    "--frames", "show_frames",
    is_flag=True,
    help="List every frame identifier and size"
)
@click.option(
    "--strict",
    is_flag=True,
    help="Fail on truncated frame data instead of stopping early"
)
@click.option(
    "--config", "config_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    metavar="<id3reader.yaml>",
    help="Configuration file (default: ./id3reader.yaml if present)"
)
@click.option(
    "--verbose", "-v",
    is_flag=True,
    help="Show debug output"
)
@click.version_option(__version__, prog_name="id3reader")
def cli(
    files: tuple[Path, ...],
    cover_out: Optional[Path],
    show_frames: bool,
    strict: bool,
    config_path: Optional[Path],
    verbose: bool
) -> None:
    """
    Show the ID3v2 metadata of one or more audio files.

    Only ID3v2.3 and ID3v2.4 tags at the start of the file are read.
    """
    try:
        config = load_config(config_path)
    except ConfigError as e:
        click.echo(f"Configuration error: {e.message}", err=True)
        sys.exit(EXIT_CONFIG_ERROR)

    setup_logging(
        "DEBUG" if verbose else config.logging.level,
        log_file=config.logging.file,
        colored=config.logging.colored,
    )

    reader_config = ReaderConfig(
        strict=strict or config.reader.strict,
        cover_types=config.reader.cover_types,
    )

    failed = 0
    try:
        with tqdm(files, desc="Reading tags", unit="file", disable=len(files) < 2) as progress:
            for path in progress:
                if not _show_file(path, reader_config, cover_out, show_frames):
                    failed += 1
    finally:
        shutdown_logging()

    sys.exit(EXIT_DECODE_ERROR if failed else EXIT_OK)


def _show_file(
    path: Path,
    reader_config: ReaderConfig,
    cover_out: Path | None,
    show_frames: bool
) -> bool:
    """
    Decode one file and print its fields.

    Returns:
        True if the tag was decoded and its cover saved, False otherwise.
    """
    try:
        tag = read_tag_from_file(path, reader_config)
    except ID3ReaderError as e:
        logger.error(f"{path}: {e.message}")
        return False
    except OSError as e:
        logger.error(f"{path}: {e}")
        return False

    if tag.truncated:
        logger.warning(f"{path}: tag is truncated, some frames may be missing")

    saved = True
    try:
        cover = _describe_cover(tag, path, cover_out)
    except OSError as e:
        logger.error(f"{path}: could not save cover image: {e}")
        cover = "not saved"
        saved = False

    lines = [
        f"File     : {path}",
        f"Version  : ID3v{tag.header.version}",
        f"Title    : {_text_or_default(tag.get_title)}",
        f"Artist   : {_text_or_default(tag.get_artist)}",
        f"Album    : {_text_or_default(tag.get_album)}",
        f"Composer : {_text_or_default(tag.get_composer)}",
        f"Cover    : {cover}",
    ]
    if show_frames:
        lines.append("Frames   :")
        lines.extend(f"  {frame.id} {frame.length:>8} bytes" for frame in tag.frames)

    tqdm.write("\n".join(lines) + "\n")
    return saved


def _text_or_default(accessor) -> str:
    try:
        return accessor()
    except AccessError as e:
        logger.debug(e.message)
        return NOT_DEFINED


def _describe_cover(tag: ID3Tag, path: Path, cover_out: Path | None) -> str:
    try:
        picture = tag.get_cover_picture()
    except AccessError as e:
        logger.debug(e.message)
        return NOT_DEFINED

    description = f"{picture.mime or 'unknown type'}, {len(picture.data)} bytes"
    if cover_out is not None:
        cover_out.mkdir(parents=True, exist_ok=True)
        target = _unique_cover_path(cover_out, path.stem, picture.extension)
        target.write_bytes(picture.data)
        description += f" -> {target}"
    return description


def _unique_cover_path(cover_out: Path, stem: str, extension: str) -> Path:
    # Covers of files sharing a stem must not overwrite each other
    target = cover_out / f"{stem}.{extension}"
    counter = 1
    while target.exists():
        target = cover_out / f"{stem}_{counter}.{extension}"
        counter += 1
    return target


def main() -> None:
    """
    Entry point for the CLI.

    This function is called when running `id3-read` from the command line.
    """
    cli()


if __name__ == "__main__":
    main()
