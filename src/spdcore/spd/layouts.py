"""Offset tables for the two SPD wire layouts and buffer classification.

The legacy (DDR4-era) and DDR5 layouts share their decode steps but differ
in every offset and constant.  Each layout is a frozen offset table; the
buffer is classified once and the chosen table drives the shared readers in
:mod:`spdcore.spd.fields`.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum

from spdcore.exceptions import StructuralError
from spdcore.spd.types import (
    DDR4_CL_BASELINE,
    DDR5_CL_BASELINE,
    DDR5_REVISION_THRESHOLD,
    EXPO_MAGIC,
    SPD_MIN_LENGTH,
    XMP_MAGIC,
)


@dataclass(frozen=True)
class FieldSpan:
    """A contiguous byte range ``[offset, offset + size)``."""

    offset: int
    size: int

    @property
    def end(self) -> int:
        return self.offset + self.size


@dataclass(frozen=True)
class TimingOffsets:
    """Byte offsets of the primary timing parameters.

    ``upper_nibbles`` holds tRAS bits 11:8 in its low nibble and tRC bits
    11:8 in its high nibble.  tRFC is a 16-bit little-endian value.
    """

    ras_to_cas: int
    ras_precharge: int
    upper_nibbles: int
    ras_low: int
    rc_low: int
    rfc: int


class ProfileKind(StrEnum):
    XMP = "xmp"
    EXPO = "expo"


@dataclass(frozen=True)
class ProfileSignature:
    """Magic bytes marking an overclocking profile block.

    The profile count is either read from the low two bits of
    ``count_offset`` or fixed by the format.
    """

    kind: ProfileKind
    offset: int
    magic: bytes
    min_length: int
    count_offset: int | None = None
    fixed_count: int = 0


@dataclass(frozen=True)
class SpdLayout:
    """Offsets shared by both layouts."""

    name: str
    tck: FieldSpan
    cas_mask: FieldSpan
    cas_baseline: int
    timings: TimingOffsets
    manufacturer_id: FieldSpan
    serial: FieldSpan
    part_number: FieldSpan
    manufacturing_date: FieldSpan
    profiles: tuple[ProfileSignature, ...]


@dataclass(frozen=True)
class LegacyLayout(SpdLayout):
    """DDR4-era layout: geometry bytes 4/12/13, module section at 320."""

    density: int = 4
    module_org: int = 12
    bus_width: int = 13
    module_type: int = 3
    voltage: int = 11


@dataclass(frozen=True)
class Ddr5Layout(SpdLayout):
    """DDR5 layout: geometry byte 6, ranks at 234, module section at 512."""

    density: int = 6
    ranks: int = 234
    voltage: int = 14
    bus_width_bits: int = 64


LEGACY_LAYOUT = LegacyLayout(
    name="legacy",
    tck=FieldSpan(18, 1),
    cas_mask=FieldSpan(14, 4),
    cas_baseline=DDR4_CL_BASELINE,
    timings=TimingOffsets(
        ras_to_cas=25,
        ras_precharge=26,
        upper_nibbles=27,
        ras_low=28,
        rc_low=29,
        rfc=30,
    ),
    manufacturer_id=FieldSpan(320, 2),
    manufacturing_date=FieldSpan(323, 2),
    serial=FieldSpan(325, 4),
    part_number=FieldSpan(329, 20),
    profiles=(
        ProfileSignature(ProfileKind.XMP, offset=384, magic=XMP_MAGIC, min_length=386, fixed_count=2),
    ),
)

DDR5_LAYOUT = Ddr5Layout(
    name="ddr5",
    tck=FieldSpan(18, 2),
    cas_mask=FieldSpan(20, 3),
    cas_baseline=DDR5_CL_BASELINE,
    timings=TimingOffsets(
        ras_to_cas=23,
        ras_precharge=24,
        upper_nibbles=26,
        ras_low=25,
        rc_low=27,
        rfc=28,
    ),
    manufacturer_id=FieldSpan(512, 2),
    manufacturing_date=FieldSpan(515, 2),
    serial=FieldSpan(517, 4),
    part_number=FieldSpan(521, 30),
    profiles=(
        ProfileSignature(ProfileKind.XMP, offset=640, magic=XMP_MAGIC, min_length=700, count_offset=642),
        ProfileSignature(ProfileKind.EXPO, offset=640, magic=EXPO_MAGIC, min_length=700, count_offset=642),
    ),
)


@dataclass(frozen=True)
class Classification:
    """Result of the one-time layout selection for a buffer."""

    revision: int
    memory_type_code: int
    layout: LegacyLayout | Ddr5Layout

    @property
    def is_ddr5(self) -> bool:
        return isinstance(self.layout, Ddr5Layout)


def classify(data: bytes) -> Classification:
    """Select the layout from byte 2.

    Byte 2 is read as the revision.  Values >= 5 select the DDR5 layout,
    with the memory type in the low nibble of byte 3.  Lower values select
    the legacy layout, and byte 2 is also taken as the memory type code.

    Raises:
        StructuralError: If *data* is shorter than 128 bytes.
    """
    if len(data) < SPD_MIN_LENGTH:
        raise StructuralError(len(data))

    revision = data[2]
    if revision >= DDR5_REVISION_THRESHOLD:
        return Classification(revision, data[3] & 0x0F, DDR5_LAYOUT)
    return Classification(revision, revision, LEGACY_LAYOUT)
