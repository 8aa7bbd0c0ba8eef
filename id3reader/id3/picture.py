"""
APIC (attached picture) payload parsing.

Payload layout:
    text encoding (1) | MIME type, Latin-1, zero terminated |
    picture type (1) | description, zero terminated in the text encoding |
    picture data (rest of the payload)
"""

from dataclasses import dataclass

from mutagen.id3 import Encoding, PictureType

from id3reader.core.exceptions import DecodeFailure
from id3reader.core.logger import get_logger
from id3reader.id3.text import decode_text, find_terminator

logger = get_logger(__name__)


WIDE_ENCODINGS = (Encoding.UTF16, Encoding.UTF16BE)
NARROW_ENCODINGS = (Encoding.LATIN1, Encoding.UTF8)


@dataclass(frozen=True)
class AttachedPicture:
    """
    A picture embedded in an APIC frame.

    Attributes:
        encoding: Text encoding of the description.
        mime: MIME type, e.g. "image/jpeg". ID3v2.3 writers sometimes store
              a bare "JPG" or "PNG" here.
        picture_type: Picture type byte, a mutagen PictureType when known.
        description: Decoded description, often empty.
        data: Raw image bytes.
    """
    encoding: int
    mime: str
    picture_type: int
    description: str
    data: bytes

    @property
    def extension(self) -> str:
        """File extension guessed from the MIME type, without a dot."""
        subtype = self.mime.rpartition("/")[2].lower()
        if subtype in ("jpeg", "jpg", "pjpeg"):
            return "jpg"
        return subtype or "bin"


def parse_apic(payload: bytes) -> AttachedPicture:
    """
    Parse an APIC frame payload.

    Args:
        payload: Raw frame payload.

    Returns:
        AttachedPicture: The parsed picture.

    Raises:
        DecodeFailure: If the payload is empty, uses an unknown encoding,
                       or a terminator or the picture type byte is missing.
    """
    if not payload:
        raise DecodeFailure("Empty APIC payload")

    encoding = payload[0]
    if encoding in WIDE_ENCODINGS:
        wide = True
    elif encoding in NARROW_ENCODINGS:
        wide = False
    else:
        raise DecodeFailure(f"Unknown APIC text encoding {encoding}", encoding)

    mime_end = payload.find(b"\x00", 1)
    if mime_end == -1:
        raise DecodeFailure("APIC MIME type is not terminated", encoding)
    if mime_end + 1 >= len(payload):
        raise DecodeFailure("APIC payload ends before the picture type", encoding)

    picture_type = payload[mime_end + 1]
    desc_start = mime_end + 2
    desc_end = find_terminator(payload, wide, desc_start)
    if desc_end == -1:
        raise DecodeFailure("APIC description is not terminated", encoding)

    return AttachedPicture(
        encoding=Encoding(encoding),
        mime=payload[1:mime_end].decode("latin-1"),
        picture_type=_picture_type(picture_type),
        description=_decode_description(encoding, payload[desc_start:desc_end]),
        data=payload[desc_end + (2 if wide else 1):],
    )


def _decode_description(encoding: int, data: bytes) -> str:
    # Writers commonly drop the BOM of an empty UTF-16 description
    if not data:
        return ""
    try:
        return decode_text(encoding, data)
    except DecodeFailure as e:
        logger.debug(f"Ignoring undecodable APIC description: {e.message}")
        return ""


def _picture_type(value: int) -> int:
    try:
        return PictureType(value)
    except ValueError:
        return value
