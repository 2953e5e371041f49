"""Layout-driven field readers shared by both SPD generations."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass

from spdcore.exceptions import UnknownEncoding
from spdcore.models.module import SpdTimings
from spdcore.spd.bitfield import (
    guarded_read,
    lowest_set_bit,
    nibble_pair,
    read_ascii,
    read_bytes,
    read_uint_le,
)
from spdcore.spd.layouts import SpdLayout
from spdcore.spd.types import MTB_NS
from spdcore.utils.logging import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class Identity:
    """Module section fields; each defaults when the image is too short."""

    manufacturer_id: int = 0
    serial_number: int = 0
    part_number: str = ""
    manufacturing_date: str = ""


@dataclass(frozen=True)
class Extraction:
    """Generation-specific fields produced by an extractor."""

    module_size_bytes: int
    speed_mhz: float
    ranks: int
    timings: SpdTimings
    identity: Identity
    bank_groups: int = 0
    voltage: float = 0.0
    form_factor: str = ""


def lookup_code(table: Mapping[int, str], table_name: str, code: int) -> str:
    """Strict table lookup.

    Raises:
        UnknownEncoding: If *code* has no entry in *table*.
    """
    try:
        return table[code]
    except KeyError:
        raise UnknownEncoding(table_name, code) from None


def describe_code(table: Mapping[int, str], table_name: str, code: int) -> str:
    """Table lookup that renders unknown codes as ``Unknown (0xNN)``."""
    try:
        return lookup_code(table, table_name, code)
    except UnknownEncoding:
        logger.debug("spd_code_unknown", table=table_name, code=f"0x{code:02X}")
        return f"Unknown (0x{code:02X})"


def format_manufacturing_date(year: int, week: int) -> str:
    return f"Week {week}, 20{year:02d}"


def extract_identity(data: bytes, layout: SpdLayout) -> Identity:
    """Read manufacturer ID, serial, part number and date where present."""
    mfg = layout.manufacturer_id
    serial = layout.serial
    part = layout.part_number
    date = layout.manufacturing_date

    date_bytes = guarded_read(read_bytes, data, date.offset, date.size, b"")
    return Identity(
        manufacturer_id=guarded_read(read_uint_le, data, mfg.offset, mfg.size, 0),
        serial_number=guarded_read(read_uint_le, data, serial.offset, serial.size, 0),
        part_number=guarded_read(read_ascii, data, part.offset, part.size, ""),
        manufacturing_date=(
            format_manufacturing_date(date_bytes[0], date_bytes[1]) if date_bytes else ""
        ),
    )


def extract_cas_latency(data: bytes, layout: SpdLayout) -> int:
    """Lowest supported CAS latency from the supported-CL bitmask.

    Bit *i* set means CL ``baseline + i`` is supported; an empty mask
    yields 0.
    """
    span = layout.cas_mask
    mask = read_uint_le(data, span.offset, span.size)
    bit = lowest_set_bit(mask, span.size * 8)
    if bit is None:
        return 0
    return bit + layout.cas_baseline


def extract_timings(data: bytes, layout: SpdLayout) -> SpdTimings:
    """Read the primary timing set in raw timebase units."""
    t = layout.timings
    upper = data[t.upper_nibbles]
    return SpdTimings(
        cas_latency=extract_cas_latency(data, layout),
        ras_to_cas_delay=data[t.ras_to_cas],
        ras_precharge=data[t.ras_precharge],
        t_ras=nibble_pair(data[t.ras_low], upper, upper=False),
        t_rc=nibble_pair(data[t.rc_low], upper, upper=True),
        t_rfc=read_uint_le(data, t.rfc, 2),
    )


def read_tck(data: bytes, layout: SpdLayout) -> int:
    """Minimum clock period in medium-timebase units."""
    return read_uint_le(data, layout.tck.offset, layout.tck.size)


def speed_from_tck(tck_units: int, timebase_ns: float = MTB_NS) -> float:
    """Double-data-rate speed in MHz for a clock period of *tck_units*.

    Returns 0.0 for an unprogrammed (zero) period.
    """
    if tck_units <= 0:
        return 0.0
    tck_ns = tck_units * timebase_ns
    return (1_000_000 / tck_ns) / 1000 * 2
