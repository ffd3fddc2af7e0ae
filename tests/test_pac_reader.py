"""Tests for the PAC archive reader."""

import struct
import zlib

import pytest

from pac_toolkit.exceptions import EncodingError, InvalidBodyError, TruncatedError
from pac_toolkit.pac import LEGACY, CompressedBody, PACArchive, RawBody
from pac_toolkit.pac.header import ENTRY_HEADER_SIZE


def create_entry_header(offset: int, size: int, name: bytes) -> bytes:
    """Create a 64-byte directory record."""
    return struct.pack("<II", offset, size) + name.ljust(56, b"\x00")


def create_bmz_body(data: bytes) -> bytes:
    """Create a standard-profile BMZ body."""
    return b"ZLC3" + struct.pack("<I", len(data)) + zlib.compress(data)


def create_archive(entries) -> bytes:
    """Create a PAC archive with bodies stored in directory order.

    Args:
        entries: List of (name bytes, body bytes) tuples
    """
    offset = 4 + len(entries) * ENTRY_HEADER_SIZE
    headers = b""
    bodies = b""
    for name, body in entries:
        headers += create_entry_header(offset, len(body), name)
        bodies += body
        offset += len(body)
    return struct.pack("<I", len(entries)) + headers + bodies


class TestPACArchive:
    """Tests for PACArchive parsing."""

    def test_empty_archive(self):
        archive = PACArchive.from_bytes(struct.pack("<I", 0))
        assert archive.entries_count == 0
        assert list(archive) == []

    def test_raw_entry(self):
        archive = PACArchive.from_bytes(create_archive([(b"B.DAT", b"0123456789")]))

        assert len(archive) == 1
        entry = archive.entries[0]
        assert entry.name == "B.DAT"
        assert entry.size == 10
        assert entry.kind == "other"
        assert entry.body == RawBody(b"0123456789")
        assert entry.data() == b"0123456789"

    def test_compressed_entry(self):
        bitmap = b"BM" + bytes(range(98))
        body = create_bmz_body(bitmap)
        archive = PACArchive.from_bytes(create_archive([(b"A.BMZ", body)]))

        entry = archive.entries[0]
        assert isinstance(entry.body, CompressedBody)
        assert entry.body.uncompressed_size == 100
        assert entry.kind == "bmz 100"
        assert entry.data() == bitmap

    def test_compressed_payload_length(self):
        body = create_bmz_body(b"\x00" * 500)
        archive = PACArchive.from_bytes(create_archive([(b"A.BMZ", body)]))

        entry = archive.entries[0]
        assert len(entry.body.compressed_data) == entry.size - 8

    def test_entry_count_matches_header(self):
        entries = [(f"F{i}.DAT".encode(), bytes([i]) * i) for i in range(5)]
        archive = PACArchive.from_bytes(create_archive(entries))

        assert archive.entries_count == 5
        assert [e.name for e in archive] == [f"F{i}.DAT" for i in range(5)]
        assert [e.size for e in archive] == [0, 1, 2, 3, 4]

    def test_bodies_resolved_by_offset(self):
        # Bodies stored in reverse order relative to the directory
        first, second = b"first body", b"second!"
        base = 4 + 2 * ENTRY_HEADER_SIZE
        data = (
            struct.pack("<I", 2)
            + create_entry_header(base + len(second), len(first), b"1.DAT")
            + create_entry_header(base, len(second), b"2.DAT")
            + second
            + first
        )
        archive = PACArchive.from_bytes(data)

        assert archive.entries[0].data() == first
        assert archive.entries[1].data() == second

    def test_shared_body(self):
        body = b"shared"
        base = 4 + 2 * ENTRY_HEADER_SIZE
        data = (
            struct.pack("<I", 2)
            + create_entry_header(base, len(body), b"X.DAT")
            + create_entry_header(base, len(body), b"Y.DAT")
            + body
        )
        archive = PACArchive.from_bytes(data)

        assert archive.entries[0].data() == archive.entries[1].data() == body

    def test_short_body_is_raw(self):
        archive = PACArchive.from_bytes(create_archive([(b"S.DAT", b"ZL")]))
        assert archive.entries[0].body == RawBody(b"ZL")

    def test_undecodable_name_is_deferred(self):
        data = create_archive([(b"\x82\xff.DAT", b"abc"), (b"OK.DAT", b"def")])
        archive = PACArchive.from_bytes(data)

        assert archive.entries[0].raw_name == b"\x82\xff.DAT"
        with pytest.raises(EncodingError):
            archive.entries[0].name
        assert isinstance(archive.entries[0].name_or_error(), EncodingError)
        assert archive.entries[0].data() == b"abc"
        assert archive.entries[1].name == "OK.DAT"

    def test_shift_jis_name(self):
        data = create_archive([("背景.BMZ".encode("cp932"), create_bmz_body(b"BM"))])
        archive = PACArchive.from_bytes(data)
        assert archive.entries[0].name == "背景.BMZ"
        assert archive.get_entry_by_name("背景.BMZ") is archive.entries[0]

    def test_get_entry_by_name_missing(self):
        archive = PACArchive.from_bytes(create_archive([(b"A.DAT", b"")]))
        assert archive.get_entry_by_name("B.DAT") is None

    def test_from_file(self, tmp_path):
        path = tmp_path / "test.pac"
        path.write_bytes(create_archive([(b"B.DAT", b"xyz")]))

        archive = PACArchive.from_file(path)
        assert archive.entries[0].data() == b"xyz"

    def test_repr(self):
        archive = PACArchive.from_bytes(create_archive([(b"B.DAT", b"xyz")]))
        assert "entries=1" in repr(archive)


class TestPACArchiveErrors:
    """Tests for malformed archives."""

    def test_empty_input(self):
        with pytest.raises(TruncatedError):
            PACArchive.from_bytes(b"")

    def test_truncated_directory(self):
        data = create_archive([(b"A.DAT", b"abc"), (b"B.DAT", b"def")])
        with pytest.raises(TruncatedError):
            PACArchive.from_bytes(data[: 4 + ENTRY_HEADER_SIZE + 10])

    def test_count_larger_than_directory(self):
        data = struct.pack("<I", 1000) + create_entry_header(0, 0, b"A.DAT")
        with pytest.raises(TruncatedError):
            PACArchive.from_bytes(data)

    def test_truncated_body(self):
        data = create_archive([(b"A.DAT", b"abcdef")])
        with pytest.raises(TruncatedError) as excinfo:
            PACArchive.from_bytes(data[:-2])
        assert excinfo.value.expected == 6
        assert excinfo.value.actual == 4

    def test_body_offset_past_end(self):
        data = struct.pack("<I", 1) + create_entry_header(0x10000, 4, b"A.DAT")
        with pytest.raises(TruncatedError):
            PACArchive.from_bytes(data)

    def test_compressed_body_smaller_than_header(self):
        data = create_archive([(b"A.BMZ", b"ZLC3\x01\x00")])
        with pytest.raises(InvalidBodyError):
            PACArchive.from_bytes(data)

    @pytest.mark.parametrize("cut", [1, 4, 50, 64, 68])
    def test_every_prefix_fails_cleanly(self, cut):
        data = create_archive([(b"A.BMZ", create_bmz_body(b"BM" * 20)), (b"B.DAT", b"raw")])
        with pytest.raises(TruncatedError):
            PACArchive.from_bytes(data[:cut])

    def test_corrupt_bitmap_fails_only_on_extraction(self):
        body = b"ZLC3" + struct.pack("<I", 10) + b"garbage!"
        archive = PACArchive.from_bytes(create_archive([(b"A.BMZ", body)]))

        with pytest.raises(ValueError):
            archive.entries[0].data()


class TestLegacyProfile:
    """Tests for the five-byte marker archive generation."""

    def test_legacy_compressed_entry(self):
        bitmap = b"BM" + b"\x33" * 60
        extra = struct.pack("<H", 2) + b"\x01\x02\x03"
        body = b"ZLC38" + extra + zlib.compress(bitmap)
        archive = PACArchive.from_bytes(create_archive([(b"A.BMZ", body)]), LEGACY)

        entry = archive.entries[0]
        assert isinstance(entry.body, CompressedBody)
        assert entry.body.uncompressed_size is None
        assert entry.body.extra == extra
        assert entry.kind == "bmz ?"
        assert entry.data() == bitmap
        assert entry.body.to_bytes() == body

    def test_standard_body_is_raw_under_legacy(self):
        body = create_bmz_body(b"BM")
        archive = PACArchive.from_bytes(create_archive([(b"A.BMZ", body)]), LEGACY)
        assert archive.entries[0].body == RawBody(body)

    def test_legacy_body_smaller_than_header(self):
        data = create_archive([(b"A.BMZ", b"ZLC38\x00\x00")])
        with pytest.raises(InvalidBodyError):
            PACArchive.from_bytes(data, LEGACY)
