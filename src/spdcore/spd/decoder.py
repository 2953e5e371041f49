"""Decode a raw SPD EEPROM image into an SpdModule.

Pipeline: classify -> extract -> detect profiles -> derive -> assemble.
The layout is chosen once from byte 2 and never revisited.  Only a buffer
shorter than 128 bytes fails; every other gap leaves a field at its
default.
"""

from __future__ import annotations

from spdcore.models.module import SpdModule
from spdcore.spd.ddr4 import extract_ddr4
from spdcore.spd.ddr5 import extract_ddr5
from spdcore.spd.fields import Extraction, describe_code
from spdcore.spd.layouts import Classification, Ddr5Layout, classify
from spdcore.spd.manufacturers import resolve_manufacturer
from spdcore.spd.metrics import derive_metrics
from spdcore.spd.profiles import detect_profiles
from spdcore.spd.types import MEMORY_TYPE_NAMES
from spdcore.utils.logging import get_logger

logger = get_logger(__name__)


def _extract(data: bytes, cls: Classification) -> Extraction:
    if isinstance(cls.layout, Ddr5Layout):
        return extract_ddr5(data, cls.layout)
    return extract_ddr4(data, cls.layout)


def decode_spd(data: bytes | bytearray, slot: int = 0) -> SpdModule:
    """Decode *data* into an immutable SpdModule.

    Args:
        data: Raw SPD image, normally 256 (DDR4) or 512+ (DDR5) bytes.
        slot: Slot index 0-7 assigned by the caller.

    Returns:
        Decoded module record; fields whose bytes are not covered by
        *data* keep their defaults.

    Raises:
        StructuralError: If *data* is shorter than 128 bytes.
    """
    raw = bytes(data)
    cls = classify(raw)
    logger.debug(
        "spd_classified",
        slot=slot,
        length=len(raw),
        revision=cls.revision,
        layout=cls.layout.name,
        memory_type_code=f"0x{cls.memory_type_code:02X}",
    )

    fields = _extract(raw, cls)
    profiles = detect_profiles(raw, cls.layout)
    metrics = derive_metrics(fields.module_size_bytes, fields.speed_mhz)
    identity = fields.identity

    return SpdModule(
        slot=slot,
        revision=cls.revision,
        memory_type=describe_code(MEMORY_TYPE_NAMES, "memory_type", cls.memory_type_code),
        memory_type_code=cls.memory_type_code,
        form_factor=fields.form_factor,
        manufacturer_id=identity.manufacturer_id,
        manufacturer_name=resolve_manufacturer(identity.manufacturer_id),
        part_number=identity.part_number,
        serial_number=identity.serial_number,
        manufacturing_date=identity.manufacturing_date,
        module_size_bytes=fields.module_size_bytes,
        capacity_gb=metrics.capacity_gb,
        speed_mhz=fields.speed_mhz,
        data_rate_mts=metrics.data_rate_mts,
        pc_rating=metrics.pc_rating,
        base_freq_mhz=metrics.base_freq_mhz,
        voltage=fields.voltage,
        ranks=fields.ranks,
        bank_groups=fields.bank_groups,
        timings=fields.timings,
        has_xmp=profiles.has_xmp,
        has_expo=profiles.has_expo,
        profile_count=profiles.profile_count,
        raw_bytes=raw,
    )
