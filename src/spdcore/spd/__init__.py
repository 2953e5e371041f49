"""SPD (Serial Presence Detect) image decoding.

Decodes DDR4-era and DDR5 memory module EEPROM dumps into SpdModule
records: module type, capacity, speed, timings, identity, and overclocking
profile presence.
"""

from spdcore.spd.decoder import decode_spd
from spdcore.spd.layouts import DDR5_LAYOUT, LEGACY_LAYOUT, classify
from spdcore.spd.manufacturers import resolve_manufacturer

__all__ = [
    "DDR5_LAYOUT",
    "LEGACY_LAYOUT",
    "classify",
    "decode_spd",
    "resolve_manufacturer",
]
