"""
Text decoding for ID3v2 text payloads.

The first byte of a text frame selects one of four encodings (see
mutagen.id3.Encoding). Text ends at the encoding's terminator or at the
end of the payload, whichever comes first: a single zero byte for Latin-1
and UTF-8, a zero 2-byte unit for the UTF-16 variants.
"""

from mutagen.id3 import Encoding

from id3reader.core.exceptions import DecodeFailure


BOM_BIG_ENDIAN = b"\xfe\xff"
BOM_LITTLE_ENDIAN = b"\xff\xfe"


def find_terminator(data: bytes, wide: bool, start: int = 0) -> int:
    """
    Return the index of the first terminator in data at or after start.

    Args:
        data: Encoded bytes.
        wide: Look for a zero 2-byte unit aligned to start instead of a
              single zero byte.
        start: Offset where the string begins.

    Returns:
        Index of the terminator, or -1 if there is none.
    """
    if not wide:
        return data.find(b"\x00", start)
    for index in range(start, len(data) - 1, 2):
        if data[index] == 0 and data[index + 1] == 0:
            return index
    return -1


def _until_terminator(data: bytes, wide: bool) -> bytes:
    end = find_terminator(data, wide)
    if end == -1:
        end = len(data)
    if wide:
        # A dangling odd byte is not part of any code unit
        end -= end % 2
    return data[:end]


def _decode(data: bytes, codec: str) -> str:
    # Invalid sequences and lone surrogates become U+FFFD
    return data.decode(codec, errors="replace")


def decode_text(encoding: int, data: bytes) -> str:
    """
    Decode the text of a text payload.

    Args:
        encoding: The payload's encoding byte (0 to 3).
        data: The bytes following the encoding byte.

    Returns:
        The text up to the first terminator.

    Raises:
        DecodeFailure: If the encoding is unknown or a UTF-16 payload has
                       no valid byte-order mark. Invalid sequences in the
                       text itself are replaced with U+FFFD.
    """
    if encoding == Encoding.LATIN1:
        return _until_terminator(data, wide=False).decode("latin-1")

    if encoding == Encoding.UTF8:
        return _decode(_until_terminator(data, wide=False), "utf-8")

    if encoding == Encoding.UTF16:
        if len(data) < 2:
            raise DecodeFailure("UTF-16 text too short to contain a byte-order mark", encoding)
        bom = data[0:2]
        if bom == BOM_BIG_ENDIAN:
            codec = "utf-16-be"
        elif bom == BOM_LITTLE_ENDIAN:
            codec = "utf-16-le"
        else:
            raise DecodeFailure(f"Invalid UTF-16 byte-order mark: {bom.hex(' ')}", encoding)
        return _decode(_until_terminator(data[2:], wide=True), codec)

    if encoding == Encoding.UTF16BE:
        return _decode(_until_terminator(data, wide=True), "utf-16-be")

    raise DecodeFailure(f"Unknown text encoding {encoding}", encoding)
