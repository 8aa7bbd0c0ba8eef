"""
Frame iteration for ID3v2.3 and ID3v2.4 tags.

Frame header layout (10 bytes):
    identifier (4) | size (4) | status flags (1) | format flags (1)

The size is a regular big-endian integer in v2.3 and a synchsafe integer
in v2.4. The meaning of the format-flags bits also differs between the two
versions, see FRAME_FLAG_LAYOUTS.

Scan Termination:
    The scan ends when the declared tag size is used up. It also ends,
    without raising, at the first frame header that is short or invalid
    (padding is zero bytes, so this is how padding is skipped) and at the
    first frame whose size would overrun the declared tag size, before
    its data is read. A frame whose data is cut short by the end of the
    stream also ends the scan; that sets FrameScan.truncated, and raises
    ShortRead in strict mode.
"""

from dataclasses import dataclass
from typing import BinaryIO

from id3reader.core.exceptions import MalformedInteger, ShortRead
from id3reader.core.logger import get_logger
from id3reader.id3.codecs import decode_regular, decode_synchsafe, unpack_flags
from id3reader.id3.header import TagHeader

logger = get_logger(__name__)


FRAME_HEADER_SIZE = 10


@dataclass(frozen=True)
class FrameFlagLayout:
    """
    Positions of the format-flag bits for one tag version.

    Each attribute is an index into unpack_flags() output (0 is bit 7,
    7 is bit 0), or None if the version has no such flag.
    """
    compression: int | None
    encryption: int | None
    unsynchronised: int | None
    data_length_indicator: int | None

    def decode(self, byte: int) -> dict[str, bool]:
        """Map a format-flags byte to the Frame flag fields."""
        bits = unpack_flags(byte)

        def flag(position: int | None) -> bool:
            return position is not None and bits[position]

        return {
            "compression": flag(self.compression),
            "encryption": flag(self.encryption),
            "unsynchronised": flag(self.unsynchronised),
            "has_data_length_indicator": flag(self.data_length_indicator),
        }


# Major version -> format-flag layout
FRAME_FLAG_LAYOUTS = {
    # v2.3: %ijk00000, i = compression (bit 7), j = encryption (bit 6)
    3: FrameFlagLayout(compression=0, encryption=1, unsynchronised=None, data_length_indicator=None),
    # v2.4: %0h00kmnp, k = compression (bit 3), m = encryption (bit 2),
    # n = unsynchronisation (bit 1), p = data length indicator (bit 0)
    4: FrameFlagLayout(compression=4, encryption=5, unsynchronised=6, data_length_indicator=7),
}

# Major version -> frame size decoder
FRAME_SIZE_DECODERS = {
    3: decode_regular,
    4: decode_synchsafe,
}


@dataclass(frozen=True)
class Frame:
    """
    A single frame as found in the tag, payload left undecoded.

    Attributes:
        id: Four character identifier such as "TIT2".
        length: Payload size in bytes, equal to len(data).
        compression: Payload is zlib compressed.
        encryption: Payload is encrypted.
        unsynchronised: Payload is unsynchronised (v2.4 only).
        has_data_length_indicator: A data length indicator precedes the
                                   payload (v2.4 only).
        data: Raw payload bytes.
    """
    id: str
    length: int
    compression: bool
    encryption: bool
    unsynchronised: bool
    has_data_length_indicator: bool
    data: bytes

    @property
    def is_transformed(self) -> bool:
        """True if the payload needs a transform that is not implemented."""
        return self.compression or self.encryption or self.unsynchronised


@dataclass(frozen=True)
class FrameScan:
    """
    Result of scanning the frames of a tag.

    Attributes:
        frames: Frames in stream order.
        truncated: The stream ended inside a frame's data.
    """
    frames: tuple[Frame, ...]
    truncated: bool = False


def is_valid_frame_id(frame_id: bytes) -> bool:
    """Check that frame_id is exactly four ASCII uppercase letters or digits."""
    return len(frame_id) == 4 and all(
        0x41 <= b <= 0x5A or 0x30 <= b <= 0x39 for b in frame_id
    )


def read_frames(stream: BinaryIO, header: TagHeader, strict: bool = False) -> FrameScan:
    """
    Read frames from the stream until the declared tag size is used up.

    Args:
        stream: Binary stream positioned right after the tag header.
        header: The validated tag header.
        strict: Raise ShortRead when a frame's data is cut short instead of
                stopping silently.

    Returns:
        FrameScan: The frames read, in stream order.

    Raises:
        ShortRead: Only in strict mode, when frame data is truncated.
    """
    layout = FRAME_FLAG_LAYOUTS[header.major_version]
    decode_size = FRAME_SIZE_DECODERS[header.major_version]

    frames: list[Frame] = []
    consumed = 0

    while consumed < header.size:
        frame_header = stream.read(FRAME_HEADER_SIZE)
        if len(frame_header) < FRAME_HEADER_SIZE or not is_valid_frame_id(frame_header[0:4]):
            logger.debug(f"No further frame header after {consumed} bytes, stopping")
            break

        frame_id = frame_header[0:4].decode("ascii")
        try:
            length = decode_size(frame_header[4:8])
        except MalformedInteger:
            logger.debug(f"Frame {frame_id} has a malformed size field, stopping")
            break

        # Checked before reading so a corrupt size never reads past the tag
        if consumed + FRAME_HEADER_SIZE + length > header.size:
            logger.debug(f"Frame {frame_id} overruns the declared tag size, stopping")
            break

        data = stream.read(length)
        if len(data) < length:
            logger.warning(
                f"Frame {frame_id} truncated: expected {length} bytes, got {len(data)}"
            )
            if strict:
                raise ShortRead(length, len(data), what=f"frame {frame_id}")
            return FrameScan(frames=tuple(frames), truncated=True)

        frame = Frame(
            id=frame_id,
            length=length,
            data=data,
            **layout.decode(frame_header[9]),
        )
        frames.append(frame)
        consumed += FRAME_HEADER_SIZE + length
        logger.debug(f"Frame {frame_id}: {length} bytes")

    return FrameScan(frames=tuple(frames))
