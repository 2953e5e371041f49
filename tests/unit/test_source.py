"""Unit tests for spdcore.core.source."""

from __future__ import annotations

import pytest

from spdcore.core.source import DirectorySource, DumpSource
from spdcore.exceptions import SpdSourceError


class TestDumpSource:
    def test_from_slots_maps_addresses(self, legacy_image):
        source = DumpSource.from_slots({0: legacy_image, 3: b"\x01" * 300})
        assert source.read_block(0x50, 512) == legacy_image
        assert source.read_block(0x53, 512) == b"\x01" * 300

    def test_missing_address_is_empty(self):
        assert DumpSource({}).read_block(0x51, 256) == b""

    def test_read_is_truncated_to_count(self, legacy_image):
        source = DumpSource({0x50: legacy_image})
        assert len(source.read_block(0x50, 256)) == 256

    def test_context_manager(self):
        with DumpSource({}) as source:
            assert source.name == "dump"


class TestDirectorySource:
    def test_reads_slot_files(self, dump_dir, legacy_image, ddr5_image):
        source = DirectorySource(dump_dir)
        assert source.read_block(0x50, 512) == legacy_image[:512]
        assert source.read_block(0x52, 1024) == ddr5_image
        assert source.read_block(0x51, 512) == b""

    def test_hex_file_suffix(self, tmp_path, legacy_image):
        (tmp_path / "slot1.hex").write_text(" ".join(f"{b:02x}" for b in legacy_image))
        source = DirectorySource(tmp_path)
        assert source.read_block(0x51, 512) == legacy_image

    def test_address_outside_slots(self, dump_dir):
        assert DirectorySource(dump_dir, slot_count=2).read_block(0x52, 512) == b""

    def test_unreadable_dump_is_source_error(self, tmp_path):
        (tmp_path / "slot0.bin").write_bytes(b"\x00" * 10)
        with pytest.raises(SpdSourceError):
            DirectorySource(tmp_path).read_block(0x50, 512)

    def test_not_a_directory(self, tmp_path):
        with pytest.raises(SpdSourceError):
            DirectorySource(tmp_path / "missing")
