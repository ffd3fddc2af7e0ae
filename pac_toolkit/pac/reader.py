"""PAC archive reader."""

from dataclasses import dataclass
from pathlib import Path
from typing import BinaryIO, Iterator, List, Optional, Union

from loguru import logger

from ..exceptions import EncodingError
from ..utils.binary import BinaryReader
from .body import FileBody, describe, read_body, to_extracted_bytes
from .header import COUNT_FIELD_SIZE, ENTRY_HEADER_SIZE, ENTRY_NAME_SIZE, STANDARD, BmzProfile, EntryHeader


@dataclass(frozen=True)
class PACEntry:
    """A directory record together with its resolved body."""

    index: int
    header: EntryHeader
    body: FileBody

    @property
    def name(self) -> str:
        """Decoded name. Raises EncodingError if the stored bytes are not Shift-JIS."""
        return self.header.name

    @property
    def raw_name(self) -> bytes:
        return self.header.raw_name

    @property
    def size(self) -> int:
        return self.header.body_size

    @property
    def kind(self) -> str:
        return describe(self.body)

    def name_or_error(self) -> Union[str, EncodingError]:
        """Decoded name, or the decode error in its place."""
        try:
            return self.name
        except EncodingError as e:
            return e

    def data(self) -> bytes:
        """Extracted contents (BMZ bodies are inflated)."""
        return to_extracted_bytes(self.body)


class PACArchive:
    """A parsed PAC archive: entry count, directory and bodies."""

    def __init__(self, entries: List[PACEntry], profile: BmzProfile = STANDARD):
        self._entries = entries
        self.profile = profile

    @classmethod
    def parse(cls, stream: Union[bytes, BinaryIO], profile: BmzProfile = STANDARD) -> "PACArchive":
        """Parse an archive from a seekable stream or a bytes object."""
        reader = BinaryReader(stream)
        reader.seek(0)

        entries_count = reader.read_u32()
        logger.debug("PAC directory: {} entries", entries_count)

        headers = [cls._read_header(reader, i) for i in range(entries_count)]

        entries = []
        for i, header in enumerate(headers):
            reader.seek(header.body_offset)
            body = read_body(reader, header.body_size, profile)
            logger.debug(
                "entry {}: offset=0x{:X} size={} kind={}",
                i,
                header.body_offset,
                header.body_size,
                describe(body),
            )
            entries.append(PACEntry(index=i, header=header, body=body))

        return cls(entries, profile)

    @staticmethod
    def _read_header(reader: BinaryReader, index: int) -> EntryHeader:
        """Read the directory record at its fixed stride."""
        reader.seek(COUNT_FIELD_SIZE + index * ENTRY_HEADER_SIZE)
        body_offset = reader.read_u32()
        body_size = reader.read_u32()
        raw_name = reader.read_fixed_bytes(ENTRY_NAME_SIZE)
        return EntryHeader(body_offset=body_offset, body_size=body_size, raw_name=raw_name)

    @classmethod
    def from_bytes(cls, data: bytes, profile: BmzProfile = STANDARD) -> "PACArchive":
        return cls.parse(data, profile)

    @classmethod
    def from_file(cls, path: Path, profile: BmzProfile = STANDARD) -> "PACArchive":
        """Load an archive from disk."""
        with open(path, "rb") as f:
            return cls.parse(f, profile)

    @property
    def entries(self) -> List[PACEntry]:
        return self._entries

    @property
    def entries_count(self) -> int:
        return len(self._entries)

    def get_entry_by_name(self, name: str) -> Optional[PACEntry]:
        """Find an entry by decoded name, skipping undecodable ones."""
        for entry in self._entries:
            if entry.name_or_error() == name:
                return entry
        return None

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[PACEntry]:
        return iter(self._entries)

    def __repr__(self) -> str:
        return f"PACArchive(entries={len(self._entries)}, profile={self.profile.name!r})"
