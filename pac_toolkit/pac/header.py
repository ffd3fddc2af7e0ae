"""PAC directory structures and BMZ body profiles."""

from dataclasses import dataclass
from typing import Dict

from ..utils.binary import write_u32_le
from ..utils.text import decode_fixed, encode_fixed

# Size of the zero-padded Shift-JIS name slot in each directory record
ENTRY_NAME_SIZE = 56

# offset (4) + size (4) + name
ENTRY_HEADER_SIZE = 8 + ENTRY_NAME_SIZE

# Leading entry count
COUNT_FIELD_SIZE = 4


@dataclass(frozen=True)
class BmzProfile:
    """On-disk shape of the compressed bitmap body for one archive generation."""

    name: str
    marker: bytes
    has_size_field: bool  # u32 uncompressed size follows the marker
    extra_size: int  # opaque bytes between the fixed fields and the zlib stream

    @property
    def overhead(self) -> int:
        """Bytes in front of the zlib stream."""
        return len(self.marker) + (4 if self.has_size_field else 0) + self.extra_size


# "ZLC3" + u32 uncompressed size
STANDARD = BmzProfile(name="standard", marker=b"ZLC3", has_size_field=True, extra_size=0)

# "ZLC38" + u16 type + 3 guard bytes, no size field
LEGACY = BmzProfile(name="legacy", marker=b"ZLC38", has_size_field=False, extra_size=5)

PROFILES: Dict[str, BmzProfile] = {p.name: p for p in (STANDARD, LEGACY)}


def get_profile(name: str) -> BmzProfile:
    """Look up a BMZ profile by name."""
    try:
        return PROFILES[name]
    except KeyError:
        raise ValueError(
            f"Unknown BMZ profile: {name!r}, expected one of {sorted(PROFILES)}"
        ) from None


@dataclass(frozen=True)
class EntryHeader:
    """PAC directory record (64 bytes)."""

    body_offset: int  # 4 bytes: absolute offset from archive start
    body_size: int  # 4 bytes
    raw_name: bytes  # 56 bytes on disk, stored here without padding

    @property
    def name(self) -> str:
        """Decoded entry name; raises EncodingError for invalid Shift-JIS."""
        return decode_fixed(self.raw_name)

    @classmethod
    def for_name(cls, name: str, body_offset: int, body_size: int) -> "EntryHeader":
        raw_name = encode_fixed(name, ENTRY_NAME_SIZE).rstrip(b"\x00")
        return cls(body_offset=body_offset, body_size=body_size, raw_name=raw_name)

    def to_bytes(self) -> bytes:
        return (
            write_u32_le(self.body_offset)
            + write_u32_le(self.body_size)
            + self.raw_name.ljust(ENTRY_NAME_SIZE, b"\x00")
        )
