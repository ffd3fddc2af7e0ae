"""Binary reading and writing utilities for little-endian archive data."""

import struct
from io import BytesIO
from typing import BinaryIO, Optional, Union

from ..exceptions import TruncatedError


class BinaryReader:
    """Helper for reading little-endian binary data."""

    def __init__(self, data: Union[bytes, BinaryIO]):
        if isinstance(data, (bytes, bytearray)):
            self._stream = BytesIO(data)
        else:
            self._stream = data

    @property
    def stream(self) -> BinaryIO:
        return self._stream

    def tell(self) -> int:
        return self._stream.tell()

    def seek(self, offset: int, whence: int = 0) -> int:
        return self._stream.seek(offset, whence)

    def read(self, size: int = -1) -> bytes:
        return self._stream.read(size)

    def read_bytes(self, size: int, what: Optional[str] = None) -> bytes:
        offset = self._stream.tell()
        data = self._stream.read(size)
        if len(data) < size:
            raise TruncatedError(offset, size, len(data), what)
        return data

    def read_u8(self) -> int:
        return struct.unpack("<B", self.read_bytes(1))[0]

    def read_u16(self) -> int:
        return struct.unpack("<H", self.read_bytes(2))[0]

    def read_u32(self) -> int:
        return struct.unpack("<I", self.read_bytes(4))[0]

    def read_fixed_bytes(self, length: int) -> bytes:
        """Read a fixed-width, zero-padded field and cut it at the first zero byte."""
        data = self.read_bytes(length)
        end = data.find(b"\x00")
        if end != -1:
            data = data[:end]
        return data

    def skip(self, count: int) -> None:
        """Skip forward by count bytes."""
        self._stream.seek(count, 1)

    def remaining(self) -> int:
        """Return number of bytes remaining in stream."""
        current = self.tell()
        self._stream.seek(0, 2)  # Seek to end
        end = self.tell()
        self._stream.seek(current)
        return end - current

    def peek(self, size: int) -> bytes:
        """Read bytes without advancing position."""
        data = self._stream.read(size)
        self._stream.seek(-len(data), 1)
        return data


class BinaryWriter:
    """Helper for writing little-endian binary data to a stream."""

    def __init__(self, stream: Optional[BinaryIO] = None):
        self._stream = stream if stream is not None else BytesIO()

    @property
    def stream(self) -> BinaryIO:
        return self._stream

    def tell(self) -> int:
        return self._stream.tell()

    def write(self, data: bytes) -> None:
        self._stream.write(data)

    def write_u8(self, value: int) -> None:
        self.write(struct.pack("<B", value))

    def write_u16(self, value: int) -> None:
        self.write(struct.pack("<H", value))

    def write_u32(self, value: int) -> None:
        self.write(struct.pack("<I", value))

    def getvalue(self) -> bytes:
        """Return everything written so far (in-memory writers only)."""
        return self._stream.getvalue()


def write_u32_le(value: int) -> bytes:
    """Write a little-endian 32-bit unsigned integer."""
    return struct.pack("<I", value)
