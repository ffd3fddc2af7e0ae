"""Tests for binary utilities."""

import pytest

from pac_toolkit.exceptions import FormatError, TruncatedError
from pac_toolkit.utils.binary import BinaryReader, BinaryWriter


class TestBinaryReader:
    """Tests for BinaryReader class."""

    def test_read_u8(self):
        reader = BinaryReader(b"\x42")
        assert reader.read_u8() == 0x42

    def test_read_u16_little_endian(self):
        reader = BinaryReader(b"\x34\x12")
        assert reader.read_u16() == 0x1234

    def test_read_u32_little_endian(self):
        reader = BinaryReader(b"\x78\x56\x34\x12")
        assert reader.read_u32() == 0x12345678

    def test_read_fixed_bytes_stops_at_zero(self):
        reader = BinaryReader(b"test\x00junk\x00\x00")
        assert reader.read_fixed_bytes(10) == b"test"
        assert reader.tell() == 10

    def test_read_fixed_bytes_without_terminator(self):
        reader = BinaryReader(b"abcd")
        assert reader.read_fixed_bytes(4) == b"abcd"

    def test_seek_and_tell(self):
        reader = BinaryReader(b"\x00\x01\x02\x03\x04\x05")
        assert reader.tell() == 0
        reader.seek(3)
        assert reader.tell() == 3
        assert reader.read_u8() == 0x03

    def test_skip(self):
        reader = BinaryReader(b"\x00\x01\x02\x03\x04\x05")
        reader.skip(4)
        assert reader.read_u8() == 0x04

    def test_peek(self):
        reader = BinaryReader(b"\x12\x34\x56")
        peeked = reader.peek(2)
        assert peeked == b"\x12\x34"
        assert reader.tell() == 0  # Position unchanged

    def test_peek_past_end(self):
        reader = BinaryReader(b"\x12")
        assert reader.peek(4) == b"\x12"
        assert reader.tell() == 0

    def test_remaining(self):
        reader = BinaryReader(b"\x00\x01\x02\x03\x04\x05")
        assert reader.remaining() == 6
        reader.read_u32()
        assert reader.remaining() == 2

    def test_eof_error(self):
        reader = BinaryReader(b"\x00\x01")
        with pytest.raises(EOFError):
            reader.read_bytes(10)

    def test_truncated_error_details(self):
        reader = BinaryReader(b"\x00\x01\x02")
        reader.seek(1)
        with pytest.raises(TruncatedError) as excinfo:
            reader.read_u32()

        error = excinfo.value
        assert isinstance(error, FormatError)
        assert error.offset == 1
        assert error.expected == 4
        assert error.actual == 2


class TestBinaryWriter:
    """Tests for BinaryWriter class."""

    def test_write_integers(self):
        writer = BinaryWriter()
        writer.write_u8(0x01)
        writer.write_u16(0x0302)
        writer.write_u32(0x07060504)
        assert writer.getvalue() == b"\x01\x02\x03\x04\x05\x06\x07"

    def test_tell(self):
        writer = BinaryWriter()
        writer.write(b"abc")
        assert writer.tell() == 3

    def test_reads_back(self):
        writer = BinaryWriter()
        writer.write_u32(0xDEADBEEF)
        writer.write_u16(7)
        reader = BinaryReader(writer.getvalue())
        assert reader.read_u32() == 0xDEADBEEF
        assert reader.read_u16() == 7
