"""Path-level archive operations: extract, list and pack."""

import shutil
from dataclasses import dataclass, field
from pathlib import Path, PurePath
from typing import Iterator, List, NamedTuple, Tuple, Union

from loguru import logger

from ..exceptions import EncodingError, FormatError, PackError, PACError
from ..utils.compression import DEFAULT_LEVEL
from .body import extracted_name, from_extracted_bytes, packed_name
from .builder import PACBuilder
from .header import STANDARD, BmzProfile
from .reader import PACArchive, PACEntry


class ListedEntry(NamedTuple):
    """One row of an archive listing."""

    index: int
    size: int
    kind: str
    name: Union[str, EncodingError]


@dataclass
class ExtractReport:
    """Outcome of extracting a whole archive."""

    extracted: List[Path] = field(default_factory=list)
    failed: List[Tuple[int, PACError]] = field(default_factory=list)

    @property
    def failed_count(self) -> int:
        return len(self.failed)

    @property
    def ok(self) -> bool:
        return not self.failed


def _output_name(entry: PACEntry) -> str:
    """Extracted filename for an entry, rejecting names that leave the output directory."""
    name = extracted_name(entry.name)
    parts = PurePath(name.replace("\\", "/")).parts
    if len(parts) != 1 or parts[0] == "..":
        raise FormatError(f"Refusing to extract entry {entry.index} to unsafe path {name!r}")
    return name


def recreate_directory(path: Path) -> None:
    """Remove ``path`` if it exists and create it empty."""
    path = Path(path)
    if path.exists():
        if not path.is_dir():
            raise NotADirectoryError(f"{path} exists and is not a directory")
        shutil.rmtree(path)
    path.mkdir(parents=True)


def extract_archive(archive: PACArchive, output_dir: Path) -> ExtractReport:
    """Write every entry of a parsed archive into an existing directory.

    Entries whose name cannot be decoded or whose bitmap cannot be inflated
    are recorded in the report and skipped; the rest are still written.
    """
    output_dir = Path(output_dir)
    report = ExtractReport()

    for entry in archive:
        try:
            output_path = output_dir / _output_name(entry)
            data = entry.data()
        except PACError as e:
            logger.warning("Entry {} ({!r}) not extracted: {}", entry.index, entry.raw_name, e)
            report.failed.append((entry.index, e))
            continue

        output_path.write_bytes(data)
        logger.debug("Extracted {} ({} bytes)", output_path.name, len(data))
        report.extracted.append(output_path)

    return report


def extract(archive_path: Path, output_dir: Path, profile: BmzProfile = STANDARD) -> ExtractReport:
    """Extract an archive into ``output_dir``, replacing its previous contents."""
    archive = PACArchive.from_file(archive_path, profile)
    recreate_directory(output_dir)

    report = extract_archive(archive, output_dir)
    logger.info(
        "Extracted {} of {} entries from {}",
        len(report.extracted),
        archive.entries_count,
        archive_path,
    )
    return report


def list_entries(archive_path: Path, profile: BmzProfile = STANDARD) -> Iterator[ListedEntry]:
    """Yield a listing row per entry; undecodable names are yielded as their error."""
    archive = PACArchive.from_file(archive_path, profile)
    for entry in archive:
        yield ListedEntry(entry.index, entry.size, entry.kind, entry.name_or_error())


def collect_files(source_dir: Path) -> List[Path]:
    """Files to pack, in name order. Anything but regular files is rejected."""
    source_dir = Path(source_dir)
    if not source_dir.is_dir():
        raise PackError(f"{source_dir} is not a directory")

    files = []
    for path in sorted(source_dir.iterdir()):
        if path.is_dir():
            raise PackError(f"Subdirectories cannot be packed: {path}")
        if not path.is_file():
            raise PackError(f"Not a regular file: {path}")
        files.append(path)
    return files


def pack(
    source_dir: Path,
    output_path: Path,
    profile: BmzProfile = STANDARD,
    level: int = DEFAULT_LEVEL,
) -> int:
    """Pack every file in ``source_dir`` into a new archive.

    Bitmaps are compressed into BMZ bodies and renamed back to ``.bmz``.
    Nothing is written unless every file is accepted.

    Returns:
        Number of entries written
    """
    builder = PACBuilder()
    sources = {}

    for path in collect_files(source_dir):
        name = packed_name(path.name)
        if name in sources:
            raise PackError(f"{path.name} and {sources[name].name} would both be stored as {name}")
        sources[name] = path

        body = from_extracted_bytes(path.read_bytes(), path.suffix, profile, level)
        builder.add_entry(body, name)
        logger.debug("Added {} as {}", path.name, name)

    builder.write(output_path)
    logger.info("Packed {} entries into {}", len(builder), output_path)
    return len(builder)
