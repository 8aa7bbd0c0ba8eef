"""
Integer and bit-flag codecs used by the ID3v2 header and frame parsers.

Synchsafe integers store 28 bits in four bytes, seven bits per byte, so
that no byte of the size field can look like an MPEG sync marker. ID3v2.3
frame sizes are plain big-endian 32-bit integers.
"""

import struct

from id3reader.core.exceptions import MalformedInteger


def decode_synchsafe(data: bytes) -> int:
    """
    Decode a 4-byte synchsafe integer.

    Args:
        data: Exactly four bytes, each below 0x80.

    Returns:
        The decoded value, sum of (byte & 0x7F) << 7 * (3 - i).

    Raises:
        MalformedInteger: If the length is not four or any byte has its
                          high bit set.
    """
    if len(data) != 4:
        raise MalformedInteger(
            f"4 bytes are needed to decode a synchsafe integer, got {len(data)}", data
        )
    if any(b & 0x80 for b in data):
        raise MalformedInteger(f"Not a synchsafe integer: {bytes(data).hex(' ')}", data)

    value = 0
    for b in data:
        value = (value << 7) | (b & 0x7F)
    return value


def decode_regular(data: bytes) -> int:
    """
    Decode a big-endian unsigned 32-bit integer.

    Raises:
        MalformedInteger: If the length is not four.
    """
    if len(data) != 4:
        raise MalformedInteger(
            f"4 bytes are needed to decode a regular integer, got {len(data)}", data
        )
    return struct.unpack(">I", data)[0]


def unpack_flags(byte: int) -> tuple[bool, ...]:
    """Split a byte into 8 booleans, most significant bit (bit 7) first."""
    return tuple(bool(byte & (1 << bit)) for bit in range(7, -1, -1))
