"""Test integer and flag codecs"""

import pytest

from id3reader.core.exceptions import MalformedInteger
from id3reader.id3.codecs import decode_regular, decode_synchsafe, unpack_flags


class TestSynchsafe:
    """Test synchsafe integer decoding"""

    def test_known_values(self):
        """Test decoding of hand-computed values"""
        assert decode_synchsafe(b"\x00\x00\x00\x00") == 0
        assert decode_synchsafe(b"\x00\x00\x01\x7f") == 255
        assert decode_synchsafe(b"\x00\x00\x02\x00") == 256
        assert decode_synchsafe(b"\x7f\x7f\x7f\x7f") == 0x0FFFFFFF

    @pytest.mark.parametrize("data", [
        b"\x01\x02\x03\x04",
        b"\x7f\x00\x7f\x00",
        b"\x00\x40\x00\x01",
        b"\x12\x34\x56\x78",
    ])
    def test_matches_formula(self, data):
        """Test result equals sum of 7-bit groups"""
        expected = sum((b & 0x7F) << (7 * (3 - i)) for i, b in enumerate(data))
        assert decode_synchsafe(data) == expected

    @pytest.mark.parametrize("data", [
        b"\x80\x00\x00\x00",
        b"\x00\x00\x00\xff",
        b"\x00\x81\x00\x00",
    ])
    def test_high_bit_rejected(self, data):
        """Test any byte >= 0x80 fails"""
        with pytest.raises(MalformedInteger) as exc_info:
            decode_synchsafe(data)
        assert exc_info.value.data == data
        assert exc_info.value.details["data"] == data

    def test_wrong_length_rejected(self):
        """Test a buffer that is not 4 bytes long fails"""
        with pytest.raises(MalformedInteger):
            decode_synchsafe(b"\x00\x00\x01")


class TestRegular:
    """Test big-endian integer decoding"""

    def test_known_values(self):
        assert decode_regular(b"\x00\x00\x01\x00") == 256
        assert decode_regular(b"\x00\x00\x00\xff") == 255
        assert decode_regular(b"\xff\xff\xff\xff") == 0xFFFFFFFF
        assert decode_regular(b"\x12\x34\x56\x78") == 0x12345678

    def test_wrong_length_rejected(self):
        with pytest.raises(MalformedInteger):
            decode_regular(b"\x00\x01")


class TestUnpackFlags:
    """Test flag byte unpacking"""

    def test_most_significant_bit_first(self):
        """Test bit 7 is the first element"""
        assert unpack_flags(0x80) == (True,) + (False,) * 7
        assert unpack_flags(0x01) == (False,) * 7 + (True,)

    def test_all_and_none(self):
        assert unpack_flags(0x00) == (False,) * 8
        assert unpack_flags(0xFF) == (True,) * 8

    def test_mixed(self):
        assert unpack_flags(0b10100101) == (True, False, True, False, False, True, False, True)
