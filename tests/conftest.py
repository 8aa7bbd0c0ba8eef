"""Test configuration and fixtures"""

import io
import os
import struct

import pytest


def encode_synchsafe(value: int) -> bytes:
    """Encode a non-negative integer below 2**28 as 4 synchsafe bytes"""
    return bytes([(value >> shift) & 0x7F for shift in (21, 14, 7, 0)])


def build_frame(frame_id: str, payload: bytes, version: int = 4, flags: int = 0) -> bytes:
    """Build a raw frame: 10-byte header followed by the payload"""
    if version == 4:
        size = encode_synchsafe(len(payload))
    else:
        size = struct.pack(">I", len(payload))
    return frame_id.encode("ascii") + size + bytes([0, flags]) + payload


def build_tag(
    frames: list[bytes] = (),
    version: int = 4,
    flags: int = 0,
    padding: int = 0,
    size: int | None = None,
    audio: bytes = b""
) -> bytes:
    """Build a complete tag; size defaults to the length of frames plus padding"""
    body = b"".join(frames) + b"\x00" * padding
    if size is None:
        size = len(body)
    return b"ID3" + bytes([version, 0, flags]) + encode_synchsafe(size) + body + audio


@pytest.fixture
def frame_bytes():
    """Factory building raw frame bytes"""
    return build_frame


@pytest.fixture
def tag_bytes():
    """Factory building raw tag bytes"""
    return build_tag


@pytest.fixture
def tag_stream():
    """Factory building a BytesIO positioned at the start of a tag"""
    def make(*args, **kwargs) -> io.BytesIO:
        return io.BytesIO(build_tag(*args, **kwargs))
    return make


@pytest.fixture
def sample_apic():
    """APIC payload: Latin-1, MIME 'image', front cover, empty description, 3 image bytes"""
    return bytes([0x00]) + b"image" + bytes([0x00, 0x03, 0x00, 0x01, 0x02, 0x03])


@pytest.fixture
def sample_mp3(tmp_path):
    """v2.4 tag with title/artist/album/composer/cover followed by fake MPEG data"""
    data = build_tag(
        [
            build_frame("TIT2", b"\x03Test Song\x00"),
            build_frame("TPE1", b"\x00Test Artist"),
            build_frame("TALB", b"\x01\xff\xfe" + "Test Album".encode("utf-16-le") + b"\x00\x00"),
            build_frame("TCOM", b"\x02" + "Composer".encode("utf-16-be")),
            build_frame("APIC", b"\x00image/png\x00\x03\x00\x89PNG\r\n"),
        ],
        padding=64,
        audio=b"\xff\xfb\x90\x00" + b"\x00" * 32,
    )
    path = tmp_path / "song.mp3"
    path.write_bytes(data)
    return path


@pytest.fixture(autouse=True)
def clean_environment():
    """Keep ID3READER_* variables from leaking between tests"""
    saved = {k: v for k, v in os.environ.items() if k.startswith("ID3READER_")}
    for key in saved:
        del os.environ[key]
    yield
    for key in [k for k in os.environ if k.startswith("ID3READER_")]:
        del os.environ[key]
    os.environ.update(saved)
