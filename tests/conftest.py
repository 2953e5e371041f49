"""Pytest configuration and shared fixtures."""

import struct

import pytest


def _build_legacy_image() -> bytearray:
    """A 512-byte legacy-layout UDIMM image: 8 GiB, single rank, 3200 MT/s, CL16, XMP.

    Byte 2 below 5 keeps the legacy layout and doubles as the type code.
    """
    buf = bytearray(512)
    buf[2] = 0x04          # revision, also the legacy type code
    buf[3] = 0x02          # UDIMM
    buf[4] = 0x02          # 1024 MiB density
    buf[11] = 0x01         # 1.2 V operable
    buf[12] = 0x00         # one rank
    buf[13] = 0x03         # 64-bit primary bus
    struct.pack_into("<I", buf, 14, 1 << 9)   # CL16
    buf[18] = 5            # tCKmin 0.625 ns
    buf[25] = 0x6E
    buf[26] = 0x6E
    buf[27] = 0x21         # tRC bits 11:8 = 2, tRAS bits 11:8 = 1
    buf[28] = 0x00
    buf[29] = 0x10
    struct.pack_into("<H", buf, 30, 2800)
    struct.pack_into("<H", buf, 320, 0x00CE)
    buf[323] = 21
    buf[324] = 15
    struct.pack_into("<I", buf, 325, 0x12345678)
    buf[329:349] = b"M378A1K43DB2-CTD    "
    buf[384:386] = b"\x0c\x4a"
    return buf


def _build_ddr5_image() -> bytearray:
    """A 1024-byte DDR5 image: 64 GiB, two ranks, 4000 MT/s, CL28, EXPO x2."""
    buf = bytearray(1024)
    buf[2] = 0x10          # revision 1.0 (>= 5 selects DDR5 layout)
    buf[3] = 0x0D          # DDR5
    buf[6] = 0x24          # 4 bank groups, 4096 MiB density
    buf[14] = 0x01         # 1.1 V
    struct.pack_into("<H", buf, 18, 4)        # tCKmin 0.5 ns
    buf[20:23] = (1 << 8).to_bytes(3, "little")  # CL28
    buf[23] = 0x20
    buf[24] = 0x20
    buf[25] = 0x40
    buf[26] = 0x31         # tRC bits 11:8 = 3, tRAS bits 11:8 = 1
    buf[27] = 0x80
    struct.pack_into("<H", buf, 28, 295)
    buf[234] = 0x01        # two ranks
    struct.pack_into("<H", buf, 512, 0x04CD)
    buf[515] = 23
    buf[516] = 40
    struct.pack_into("<I", buf, 517, 0xDEADBEEF)
    buf[521:551] = b"F5-6000J3038F16G".ljust(30)
    buf[640:642] = b"\x08\x00"
    buf[642] = 0x02
    return buf


@pytest.fixture
def legacy_image() -> bytes:
    return bytes(_build_legacy_image())


@pytest.fixture
def ddr5_image() -> bytes:
    return bytes(_build_ddr5_image())


@pytest.fixture
def dump_dir(tmp_path, legacy_image, ddr5_image):
    """A directory laid out as slot dumps: legacy image in slot 0, DDR5 in slot 2."""
    (tmp_path / "slot0.bin").write_bytes(legacy_image)
    (tmp_path / "slot2.bin").write_bytes(ddr5_image)
    return tmp_path
