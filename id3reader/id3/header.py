"""
ID3v2 tag header validation.

Header layout (10 bytes):
    "ID3" | major version | revision | flags | size (4 bytes, synchsafe)

Only major versions 3 and 4 are supported. Header flags announcing
unsynchronisation, an extended header or an experimental tag are rejected
because none of those transforms is implemented.
"""

from dataclasses import dataclass
from typing import BinaryIO

from id3reader.core.exceptions import HeaderInvalid, ShortRead, UnsupportedFeature
from id3reader.core.logger import get_logger
from id3reader.id3.codecs import decode_synchsafe, unpack_flags

logger = get_logger(__name__)


HEADER_SIZE = 10
MAGIC = b"ID3"
SUPPORTED_VERSIONS = (3, 4)

# Position in unpack_flags() output -> feature name (bit 7 first)
HEADER_FLAG_FEATURES = {
    0: "unsynchronisation",
    1: "extended header",
    2: "experimental",
}


@dataclass(frozen=True)
class TagHeader:
    """
    Decoded ID3v2 tag header.

    Attributes:
        major_version: 3 or 4.
        revision: Revision byte, read but not checked.
        size: Declared tag size in bytes, excluding the 10-byte header.
    """
    major_version: int
    revision: int
    size: int

    @property
    def version(self) -> str:
        """Version string such as '2.4.0'."""
        return f"2.{self.major_version}.{self.revision}"


def read_header(stream: BinaryIO) -> TagHeader:
    """
    Read and validate the 10-byte tag header at the current stream position.

    Args:
        stream: Binary stream positioned at the first byte of the tag.

    Returns:
        TagHeader: The validated header.

    Raises:
        ShortRead: If fewer than 10 bytes are available.
        HeaderInvalid: If the magic is not "ID3" or the version is not 3 or 4.
        UnsupportedFeature: If any of the unsynchronisation, extended header
                            or experimental flags is set.
        MalformedInteger: If the size field is not a valid synchsafe integer.
    """
    header = stream.read(HEADER_SIZE)
    if len(header) < HEADER_SIZE:
        raise ShortRead(HEADER_SIZE, len(header), what="tag header")

    if header[0:3] != MAGIC:
        raise HeaderInvalid(
            "Did not find an ID3v2 header at start of stream",
            expected=MAGIC,
            actual=bytes(header[0:3]),
        )

    major_version = header[3]
    if major_version not in SUPPORTED_VERSIONS:
        raise HeaderInvalid(
            f"Unsupported ID3v2 major version {major_version}",
            expected=SUPPORTED_VERSIONS,
            actual=major_version,
        )

    flags = unpack_flags(header[5])
    features = [name for position, name in HEADER_FLAG_FEATURES.items() if flags[position]]
    if features:
        raise UnsupportedFeature(features)

    tag_header = TagHeader(
        major_version=major_version,
        revision=header[4],
        size=decode_synchsafe(header[6:10]),
    )
    logger.debug(f"ID3v{tag_header.version} header, declared size {tag_header.size} bytes")
    return tag_header
