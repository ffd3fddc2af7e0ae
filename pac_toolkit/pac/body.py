"""PAC entry bodies.

A body is either a zlib-compressed bitmap (BMZ), tagged on disk by the
profile's marker, or an opaque run of bytes. Extraction inflates BMZ bodies
to plain bitmaps; packing deflates bitmaps back into BMZ bodies. The only
renamed file type is ``.bmz`` <-> ``.bmp``.
"""

import struct
from dataclasses import dataclass
from pathlib import PurePath
from typing import Optional, Union

from loguru import logger

from ..exceptions import InvalidBodyError
from ..utils.binary import BinaryReader, write_u32_le
from ..utils.compression import DEFAULT_LEVEL, deflate, inflate
from .header import STANDARD, BmzProfile

PACKED_BITMAP_EXT = ".bmz"
EXTRACTED_BITMAP_EXT = ".bmp"


@dataclass(frozen=True)
class CompressedBody:
    """BMZ body: marker, profile header fields, zlib stream."""

    uncompressed_size: Optional[int]  # None for profiles without a size field
    compressed_data: bytes
    profile: BmzProfile = STANDARD
    extra: bytes = b""  # opaque profile bytes kept verbatim

    def __post_init__(self):
        if len(self.extra) != self.profile.extra_size:
            raise ValueError(
                f"Profile {self.profile.name!r} needs {self.profile.extra_size} "
                f"extra header bytes, got {len(self.extra)}"
            )
        if self.profile.has_size_field and self.uncompressed_size is None:
            raise ValueError(f"Profile {self.profile.name!r} requires an uncompressed size")

    @property
    def size(self) -> int:
        """Serialized size in bytes."""
        return self.profile.overhead + len(self.compressed_data)

    def to_bytes(self) -> bytes:
        header = self.profile.marker
        if self.profile.has_size_field:
            header += write_u32_le(self.uncompressed_size)
        return header + self.extra + self.compressed_data


@dataclass(frozen=True)
class RawBody:
    """Any body without the BMZ marker, stored as-is."""

    data: bytes

    @property
    def size(self) -> int:
        return len(self.data)

    def to_bytes(self) -> bytes:
        return self.data


FileBody = Union[CompressedBody, RawBody]


def read_body(reader: BinaryReader, size: int, profile: BmzProfile = STANDARD) -> FileBody:
    """Parse a body of ``size`` bytes at the reader's current position."""
    start = reader.tell()
    marker = profile.marker

    if size < len(marker) or reader.peek(len(marker)) != marker:
        return RawBody(reader.read_bytes(size, what="raw body"))

    if size < profile.overhead:
        raise InvalidBodyError(
            f"Compressed body at offset 0x{start:X} is {size} bytes, "
            f"smaller than the {profile.overhead}-byte {profile.name} header"
        )

    reader.skip(len(marker))
    uncompressed_size = None
    if profile.has_size_field:
        uncompressed_size = reader.read_u32()
    extra = reader.read_bytes(profile.extra_size, what="bmz header")
    compressed_data = reader.read_bytes(size - profile.overhead, what="bmz payload")

    return CompressedBody(
        uncompressed_size=uncompressed_size,
        compressed_data=compressed_data,
        profile=profile,
        extra=extra,
    )


def to_extracted_bytes(body: FileBody) -> bytes:
    """Return the bytes written to disk when extracting ``body``."""
    if isinstance(body, CompressedBody):
        data = inflate(body.compressed_data)
        if body.uncompressed_size is not None and body.uncompressed_size != len(data):
            logger.warning(
                "BMZ size mismatch: header says {}, inflated {}",
                body.uncompressed_size,
                len(data),
            )
        return data
    return bytes(body.data)


def from_extracted_bytes(
    data: bytes,
    extension: str,
    profile: BmzProfile = STANDARD,
    level: int = DEFAULT_LEVEL,
) -> FileBody:
    """Build a body from an extracted file's contents and extension."""
    if extension.lower() != EXTRACTED_BITMAP_EXT:
        return RawBody(bytes(data))

    extra = b""
    if profile.extra_size:
        # u16 type 0, zeroed guard
        extra = struct.pack("<H", 0) + bytes(profile.extra_size - 2)

    return CompressedBody(
        uncompressed_size=len(data) if profile.has_size_field else None,
        compressed_data=deflate(data, level),
        profile=profile,
        extra=extra,
    )


def _swap_suffix(name: str, source: str, target: str) -> str:
    suffix = PurePath(name).suffix
    if suffix.lower() != source:
        return name
    if suffix.isupper():
        target = target.upper()
    return name[: -len(suffix)] + target


def extracted_name(name: str) -> str:
    """Map an archive entry name to its extracted filename."""
    return _swap_suffix(name, PACKED_BITMAP_EXT, EXTRACTED_BITMAP_EXT)


def packed_name(name: str) -> str:
    """Map an extracted filename back to its archive entry name."""
    return _swap_suffix(name, EXTRACTED_BITMAP_EXT, PACKED_BITMAP_EXT)


def describe(body: FileBody) -> str:
    """Short kind description for listings."""
    if isinstance(body, CompressedBody):
        if body.uncompressed_size is None:
            return "bmz ?"
        return f"bmz {body.uncompressed_size}"
    return "other"
