"""
Decoded ID3v2 tag and its accessors.

An ID3Tag is built once by read_tag() and never modified. Frames keep
their stream order and duplicates are preserved; every accessor returns
the first usable match.

Usage:
    from id3reader import read_tag_from_file

    tag = read_tag_from_file(Path("song.mp3"))
    print(tag.get_title())

    try:
        cover = tag.get_cover_image()
    except PictureNotFound:
        cover = None
"""

from dataclasses import dataclass
from pathlib import Path
from typing import BinaryIO, Iterator

from id3reader.core.config import DEFAULT_COVER_TYPES, ReaderConfig
from id3reader.core.exceptions import DecodeFailure, FrameNotFound, PictureNotFound
from id3reader.core.logger import get_logger
from id3reader.id3.frames import Frame, read_frames
from id3reader.id3.header import TagHeader, read_header
from id3reader.id3.picture import AttachedPicture, parse_apic
from id3reader.id3.text import decode_text

logger = get_logger(__name__)


# Frame identifiers of the convenience accessors
TITLE = "TIT2"
ARTIST = "TPE1"
ALBUM = "TALB"
COMPOSER = "TCOM"
PICTURE = "APIC"


@dataclass(frozen=True)
class ID3Tag:
    """
    An ID3v2.3 or ID3v2.4 tag.

    Attributes:
        header: The tag header (version and declared size).
        frames: All frames in stream order, duplicates included.
        truncated: True if the stream ended inside a frame's data and the
                   remaining frames could not be read.
        cover_types: Picture types get_cover_image() accepts.
    """
    header: TagHeader
    frames: tuple[Frame, ...] = ()
    truncated: bool = False
    cover_types: tuple[int, ...] = DEFAULT_COVER_TYPES

    def __len__(self) -> int:
        return len(self.frames)

    def __iter__(self) -> Iterator[Frame]:
        return iter(self.frames)

    @property
    def frame_ids(self) -> list[str]:
        """Distinct frame identifiers in order of first appearance."""
        return list(dict.fromkeys(frame.id for frame in self.frames))

    def get_frames_by_id(self, frame_id: str) -> list[bytes]:
        """
        Return the payloads of all frames with the given identifier.

        Frames whose payload is compressed, encrypted or unsynchronised are
        left out since those transforms are not implemented.

        Args:
            frame_id: Four character identifier, e.g. "TIT2".

        Returns:
            Payloads in stream order, empty if none match.
        """
        payloads = []
        for frame in self.frames:
            if frame.id != frame_id:
                continue
            if frame.is_transformed:
                logger.debug(f"Skipping {frame_id} frame with unsupported payload transform")
                continue
            payloads.append(frame.data)
        return payloads

    def get_text_field(self, frame_id: str) -> str:
        """
        Decode the first text frame with the given identifier.

        Raises:
            FrameNotFound: If no usable frame exists.
            DecodeFailure: If the encoding byte or UTF-16 byte-order mark is invalid.
        """
        for payload in self.get_frames_by_id(frame_id):
            if not payload:
                # An empty payload has no encoding byte; nothing to decode
                break
            return decode_text(payload[0], payload[1:])
        raise FrameNotFound(frame_id)

    def get_title(self) -> str:
        return self.get_text_field(TITLE)

    def get_artist(self) -> str:
        return self.get_text_field(ARTIST)

    def get_album(self) -> str:
        return self.get_text_field(ALBUM)

    def get_composer(self) -> str:
        return self.get_text_field(COMPOSER)

    def get_cover_picture(self) -> AttachedPicture:
        """
        Return the first APIC picture whose type is accepted.

        APIC frames of other picture types, and frames too damaged to
        parse, are skipped.

        Raises:
            PictureNotFound: If no APIC frame has an accepted picture type.
        """
        for payload in self.get_frames_by_id(PICTURE):
            try:
                picture = parse_apic(payload)
            except DecodeFailure as e:
                logger.debug(f"Skipping unreadable APIC frame: {e.message}")
                continue
            if picture.picture_type in self.cover_types:
                return picture
            logger.debug(f"Skipping APIC frame with picture type {int(picture.picture_type)}")
        raise PictureNotFound(self.cover_types)

    def get_cover_image(self) -> bytes:
        """
        Return the image bytes of the first front or back cover picture.

        Raises:
            PictureNotFound: If no APIC frame has an accepted picture type.
        """
        return self.get_cover_picture().data


def read_tag(stream: BinaryIO, config: ReaderConfig | None = None) -> ID3Tag:
    """
    Decode the ID3v2 tag at the current position of a binary stream.

    Args:
        stream: Any object with a read(n) method returning bytes, positioned
                at the first byte of the tag.
        config: Reader settings; defaults to ReaderConfig().

    Returns:
        ID3Tag: The decoded tag. If the stream ended inside a frame, the
                tag holds the frames before it and tag.truncated is True.

    Raises:
        HeaderInvalid: Not an ID3v2.3/2.4 tag.
        UnsupportedFeature: Tag-wide unsynchronisation, extended header or
                            experimental flag set.
        MalformedInteger: Tag size is not a synchsafe integer.
        ShortRead: Stream shorter than the header, or (strict mode only)
                   truncated frame data.
    """
    config = config or ReaderConfig()
    header = read_header(stream)
    scan = read_frames(stream, header, strict=config.strict)
    logger.debug(f"Read {len(scan.frames)} frames from ID3v{header.version} tag")
    return ID3Tag(
        header=header,
        frames=scan.frames,
        truncated=scan.truncated,
        cover_types=tuple(config.cover_types),
    )


def read_tag_from_file(path: Path, config: ReaderConfig | None = None) -> ID3Tag:
    """Open a file in binary mode and decode the tag at its start."""
    with open(path, "rb") as f:
        return read_tag(f, config)
