"""
ID3v2.3/ID3v2.4 tag decoding.

Modules:
    codecs  - Synchsafe/regular integers and flag bytes
    header  - Tag header validation
    frames  - Frame iteration with per-version flag tables
    text    - Text payload decoding
    picture - APIC payload parsing
    tag     - ID3Tag and its accessors, read_tag()
"""

from id3reader.id3.codecs import decode_regular, decode_synchsafe, unpack_flags
from id3reader.id3.frames import FRAME_FLAG_LAYOUTS, Frame, FrameScan, read_frames
from id3reader.id3.header import TagHeader, read_header
from id3reader.id3.picture import AttachedPicture, parse_apic
from id3reader.id3.tag import ID3Tag, read_tag, read_tag_from_file
from id3reader.id3.text import decode_text

__all__ = [
    "decode_synchsafe",
    "decode_regular",
    "unpack_flags",
    "TagHeader",
    "read_header",
    "Frame",
    "FrameScan",
    "FRAME_FLAG_LAYOUTS",
    "read_frames",
    "decode_text",
    "AttachedPicture",
    "parse_apic",
    "ID3Tag",
    "read_tag",
    "read_tag_from_file",
]
