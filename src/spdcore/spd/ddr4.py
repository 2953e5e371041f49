"""Field extraction for the legacy (DDR4-era) SPD layout."""

from __future__ import annotations

from spdcore.spd.fields import (
    Extraction,
    describe_code,
    extract_identity,
    extract_timings,
    read_tck,
    speed_from_tck,
)
from spdcore.spd.layouts import LEGACY_LAYOUT, LegacyLayout
from spdcore.spd.types import FORM_FACTOR_NAMES, MIB

# Byte 11 bit 0: module operable at 1.2 V
_VDD_1V2 = 1.2


def rank_count(data: bytes, layout: LegacyLayout = LEGACY_LAYOUT) -> int:
    """Rank count from byte 12 bits 2:0 (stored as ranks minus one)."""
    return (data[layout.module_org] & 0x07) + 1


def module_size_bytes(data: bytes, layout: LegacyLayout = LEGACY_LAYOUT) -> int:
    """Module capacity: ``(256 << density) MiB * bus_bytes * ranks``.

    Byte 4 bits 3:0 give the die density, byte 13 bits 2:0 the primary bus
    width (``8 << n`` bits); ranks come from :func:`rank_count`.
    """
    density = data[layout.density] & 0x0F
    bus_width = 8 << (data[layout.bus_width] & 0x07)
    return (256 << density) * (bus_width // 8) * rank_count(data, layout) * MIB


def extract_ddr4(data: bytes, layout: LegacyLayout = LEGACY_LAYOUT) -> Extraction:
    """Extract geometry, speed, timings and identity from a legacy image."""
    voltage = _VDD_1V2 if data[layout.voltage] & 0x01 else 0.0
    return Extraction(
        module_size_bytes=module_size_bytes(data, layout),
        speed_mhz=speed_from_tck(read_tck(data, layout)),
        ranks=rank_count(data, layout),
        timings=extract_timings(data, layout),
        identity=extract_identity(data, layout),
        voltage=voltage,
        form_factor=describe_code(FORM_FACTOR_NAMES, "form_factor", data[layout.module_type] & 0x0F),
    )
