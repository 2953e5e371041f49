"""SPD memory-type codes, module form factors, and layout constants.

References: JEDEC JESD21-C Annex L (DDR4 SPD), JESD400-5 (DDR5 SPD).
"""

from __future__ import annotations

from enum import IntEnum

# Shortest image accepted by the decoder
SPD_MIN_LENGTH = 128

# Byte 2 doubles as the revision selector; >= this value selects DDR5 layout
DDR5_REVISION_THRESHOLD = 5

# Medium timebase (ns)
MTB_NS = 0.125

MIB = 1024 * 1024
GIB = 1024 * 1024 * 1024

# Baseline CAS latency represented by bit 0 of the supported-CL mask
DDR4_CL_BASELINE = 7
DDR5_CL_BASELINE = 20

# Overclocking profile block signatures
XMP_MAGIC = b"\x0c\x4a"
EXPO_MAGIC = b"\x08\x00"

# SMBus address of the SPD EEPROM in slot 0
SPD_BASE_ADDRESS = 0x50
SPD_SLOT_COUNT = 8


class MemoryTypeCode(IntEnum):
    """DRAM device type codes as resolved by the decoder."""

    DDR3 = 0x0B
    DDR4 = 0x0C
    DDR5 = 0x0D
    LPDDR4 = 0x0E
    LPDDR4X = 0x0F
    LPDDR5 = 0x10
    HBM2 = 0x1B


MEMORY_TYPE_NAMES: dict[int, str] = {
    MemoryTypeCode.DDR3: "DDR3 SDRAM",
    MemoryTypeCode.DDR4: "DDR4 SDRAM",
    MemoryTypeCode.DDR5: "DDR5 SDRAM",
    MemoryTypeCode.LPDDR4: "LPDDR4 SDRAM",
    MemoryTypeCode.LPDDR4X: "LPDDR4X SDRAM",
    MemoryTypeCode.LPDDR5: "LPDDR5 SDRAM",
    MemoryTypeCode.HBM2: "HBM2",
}


# Module type (byte 3, bits 3:0) for the legacy layout
FORM_FACTOR_NAMES: dict[int, str] = {
    0x01: "RDIMM",
    0x02: "UDIMM",
    0x03: "SO-DIMM",
    0x04: "LRDIMM",
    0x05: "Mini-RDIMM",
    0x06: "Mini-UDIMM",
    0x08: "72b-SO-RDIMM",
    0x09: "72b-SO-UDIMM",
    0x0C: "16b-SO-DIMM",
    0x0D: "32b-SO-DIMM",
}
