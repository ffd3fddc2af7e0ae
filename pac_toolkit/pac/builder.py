"""PAC archive builder."""

from dataclasses import dataclass
from pathlib import Path
from typing import BinaryIO, List

from loguru import logger

from ..utils.binary import BinaryWriter
from .body import FileBody
from .header import COUNT_FIELD_SIZE, ENTRY_HEADER_SIZE, EntryHeader


@dataclass(frozen=True)
class PendingEntry:
    """An entry accepted by the builder, waiting for its offset."""

    name: str
    body: FileBody


class PACBuilder:
    """Collects named bodies and writes them out as a PAC archive.

    Body offsets depend on the size of the whole directory and of every
    body before them, so nothing is laid out until ``build`` is called.
    """

    def __init__(self):
        self._entries: List[PendingEntry] = []

    @property
    def entries(self) -> List[PendingEntry]:
        return list(self._entries)

    def add_entry(self, body: FileBody, name: str) -> None:
        """Queue a body under ``name``.

        Raises:
            NameTooLongError: If the Shift-JIS name does not fit the 56-byte slot.
            EncodingError: If the name cannot be encoded as Shift-JIS.
        """
        # Validates the name now rather than halfway through writing
        EntryHeader.for_name(name, 0, 0)
        self._entries.append(PendingEntry(name=name, body=body))

    def _measure(self) -> List[int]:
        """First pass: serialized size of every body."""
        return [entry.body.size for entry in self._entries]

    def _assign_offsets(self, sizes: List[int]) -> List[int]:
        """Second pass: absolute offsets, bodies packed after the directory."""
        offset = COUNT_FIELD_SIZE + len(sizes) * ENTRY_HEADER_SIZE
        offsets = []
        for size in sizes:
            offsets.append(offset)
            offset += size
        return offsets

    def layout(self) -> List[EntryHeader]:
        """Directory records for the queued entries, offsets resolved."""
        sizes = self._measure()
        offsets = self._assign_offsets(sizes)
        return [
            EntryHeader.for_name(entry.name, offset, size)
            for entry, offset, size in zip(self._entries, offsets, sizes)
        ]

    def build(self, sink: BinaryIO) -> None:
        """Write the count, the directory and then every body to ``sink``."""
        headers = self.layout()
        writer = BinaryWriter(sink)

        writer.write_u32(len(headers))
        for header in headers:
            writer.write(header.to_bytes())
        for entry in self._entries:
            writer.write(entry.body.to_bytes())

        logger.debug("PAC archive built: {} entries, {} bytes", len(headers), writer.tell())

    def to_bytes(self) -> bytes:
        writer = BinaryWriter()
        self.build(writer.stream)
        return writer.getvalue()

    def write(self, path: Path) -> None:
        """Build the archive into a file."""
        with open(path, "wb") as f:
            self.build(f)

    def __len__(self) -> int:
        return len(self._entries)
