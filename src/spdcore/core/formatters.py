"""Text-table, JSON and hex-dump presentations of decoded modules."""

from __future__ import annotations

import json
from collections.abc import Iterable

from spdcore.models.module import SpdModule

TABLE_HEADERS = (
    "Slot", "Type", "Speed", "Size", "Ranks", "Width", "Manufacturer", "Part Number", "Serial",
)
_ROW_FMT = "{:<6} {:<8} {:<10} {:<8} {:<6} {:<8} {:<20} {:<16} {:<10}"
TABLE_WIDTH = 110


def _type_label(module: SpdModule) -> str:
    # "DDR4 SDRAM" -> "DDR4"; placeholders are kept whole
    if module.memory_type.endswith(" SDRAM"):
        return module.memory_type[: -len(" SDRAM")]
    return module.memory_type


def module_to_dict(module: SpdModule) -> dict:
    """The ten-key JSON object for one module."""
    return {
        "slot": module.slot,
        "type": _type_label(module),
        "dataRate": module.data_rate_mts,
        "pcRate": module.pc_rating,
        "capacity": round(module.capacity_gb, 1),
        "ranks": module.ranks,
        "dataWidth": module.data_width,
        "manufacturer": module.manufacturer_name,
        "partNumber": module.part_number,
        "serial": module.serial_hex,
    }


def format_json(modules: Iterable[SpdModule]) -> str:
    return json.dumps([module_to_dict(m) for m in modules], indent=2)


def format_table(modules: Iterable[SpdModule]) -> str:
    lines = [_ROW_FMT.format(*TABLE_HEADERS), "-" * TABLE_WIDTH]
    for m in modules:
        lines.append(
            _ROW_FMT.format(
                m.slot,
                _type_label(m),
                f"{m.data_rate_mts} MT/s",
                f"{m.capacity_gb:.0f} GB",
                m.ranks,
                f"x{m.data_width}",
                m.manufacturer_name,
                m.part_number,
                m.serial_hex,
            )
        )
    return "\n".join(lines)


def format_hex_dump(raw: bytes, width: int = 16) -> str:
    """Offset-labelled hex rows, *width* bytes per row."""
    rows = []
    for off in range(0, len(raw), width):
        chunk = raw[off:off + width]
        rows.append(f"0x{off:04X}: " + " ".join(f"{b:02X}" for b in chunk))
    return "\n".join(rows)


def format_details(module: SpdModule) -> str:
    """Multi-line description of one module for the ``raw`` command."""
    t = module.timings
    lines = [
        f"Slot {module.slot}: {module.memory_type} (code 0x{module.memory_type_code:02X}, "
        f"revision 0x{module.revision:02X})",
        f"  Size: {module.module_size_bytes // (1024 * 1024)} MiB ({module.capacity_gb:g} GB)",
        f"  Speed: {module.speed_mhz:g} MHz ({module.data_rate_mts} MT/s, PC-{module.pc_rating})",
        f"  Ranks: {module.ranks}  Width: x{module.data_width}",
        f"  Manufacturer: {module.manufacturer_name} (0x{module.manufacturer_id:04X})",
        f"  Part Number: {module.part_number or '-'}",
        f"  Serial: {module.serial_hex}",
        f"  Timings: CL{t.cas_latency} tRCD {t.ras_to_cas_delay} tRP {t.ras_precharge} "
        f"tRAS {t.t_ras} tRC {t.t_rc} tRFC {t.t_rfc}",
        f"  Defaults: tRRD_S {t.t_rrd_s} tRRD_L {t.t_rrd_l} tFAW {t.t_faw}",
        f"  Profiles: XMP={module.has_xmp} EXPO={module.has_expo} count={module.profile_count}",
    ]
    if module.form_factor:
        lines.insert(2, f"  Form Factor: {module.form_factor}")
    if module.bank_groups:
        lines.insert(4, f"  Bank Groups: {module.bank_groups}")
    if module.manufacturing_date:
        lines.append(f"  Manufactured: {module.manufacturing_date}")
    if module.voltage:
        lines.append(f"  Voltage: {module.voltage:.1f} V")
    return "\n".join(lines)
