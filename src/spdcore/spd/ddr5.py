"""Field extraction for the DDR5 SPD layout."""

from __future__ import annotations

from spdcore.spd.bitfield import guarded_read, read_uint_le
from spdcore.spd.fields import (
    Extraction,
    extract_identity,
    extract_timings,
    read_tck,
    speed_from_tck,
)
from spdcore.spd.layouts import DDR5_LAYOUT, Ddr5Layout
from spdcore.spd.types import MIB

# Byte 14 bit 0: 1.1 V VDD
_VDD_1V1 = 1.1


def bank_groups(data: bytes, layout: Ddr5Layout = DDR5_LAYOUT) -> int:
    """Bank groups per die: ``1 << bits[5:4]`` of the density byte."""
    return 1 << ((data[layout.density] >> 4) & 0x03)


def rank_count(data: bytes, layout: Ddr5Layout = DDR5_LAYOUT) -> int:
    """Rank count from byte 234; one rank when a short read ends before it."""
    org = guarded_read(read_uint_le, data, layout.ranks, 1, 0)
    return (org & 0x07) + 1


def module_size_bytes(data: bytes, layout: Ddr5Layout = DDR5_LAYOUT) -> int:
    """Module capacity: ``(1 << (density + 8)) MiB * bus_bytes * ranks``."""
    density = data[layout.density] & 0x0F
    density_mib = 1 << (density + 8)
    return density_mib * (layout.bus_width_bits // 8) * rank_count(data, layout) * MIB


def extract_ddr5(data: bytes, layout: Ddr5Layout = DDR5_LAYOUT) -> Extraction:
    """Extract geometry, speed, timings and identity from a DDR5 image.

    The module section (manufacturer, serial, part number, date) starts at
    byte 512, so 128- and 256-byte reads leave it at defaults.
    """
    voltage = _VDD_1V1 if data[layout.voltage] & 0x01 else 0.0
    return Extraction(
        module_size_bytes=module_size_bytes(data, layout),
        speed_mhz=speed_from_tck(read_tck(data, layout)),
        ranks=rank_count(data, layout),
        timings=extract_timings(data, layout),
        identity=extract_identity(data, layout),
        bank_groups=bank_groups(data, layout),
        voltage=voltage,
    )
