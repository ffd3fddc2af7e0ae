"""PAC archive reading, building and extraction."""

from .body import CompressedBody, RawBody, from_extracted_bytes, to_extracted_bytes
from .builder import PACBuilder
from .header import LEGACY, STANDARD, BmzProfile, EntryHeader, get_profile
from .operations import ExtractReport, ListedEntry, extract, list_entries, pack
from .reader import PACArchive, PACEntry

__all__ = [
    "BmzProfile",
    "CompressedBody",
    "EntryHeader",
    "ExtractReport",
    "LEGACY",
    "ListedEntry",
    "PACArchive",
    "PACBuilder",
    "PACEntry",
    "RawBody",
    "STANDARD",
    "extract",
    "from_extracted_bytes",
    "get_profile",
    "list_entries",
    "pack",
    "to_extracted_bytes",
]
