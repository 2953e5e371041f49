"""JEDEC JEP106 module manufacturer lookup.

IDs are the 16-bit little-endian value read from the SPD manufacturer
field, keyed as continuation byte + vendor byte.  The lookup is a two-tier
simplification of the JEP106 bank scheme, not a full table walk:

  1. exact match on the full 16-bit value
  2. match on the low byte alone (vendor byte without bank context)
  3. ``Unknown (0xNNNN)``
"""

from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType

from spdcore.exceptions import UnknownEncoding
from spdcore.utils.logging import get_logger

logger = get_logger(__name__)

MANUFACTURERS: Mapping[int, str] = MappingProxyType({
    0x0198: "Kingston",
    0x029E: "Corsair",
    0x04CB: "A-DATA",
    0x04CD: "G.Skill",
    0x059B: "Crucial/Micron",
    0x00CE: "Samsung",
    0x00AD: "SK Hynix",
    0x802C: "Micron",
    0x0F98: "Apacer",
    0x7F7F: "Unknown",
})


def lookup_manufacturer(manufacturer_id: int) -> str:
    """Strict two-tier lookup.

    Raises:
        UnknownEncoding: If neither the full ID nor its low byte is known.
    """
    name = MANUFACTURERS.get(manufacturer_id)
    if name is not None:
        return name
    name = MANUFACTURERS.get(manufacturer_id & 0xFF)
    if name is not None:
        return name
    raise UnknownEncoding("manufacturer", manufacturer_id)


def resolve_manufacturer(manufacturer_id: int) -> str:
    """Return the vendor name for *manufacturer_id*, or a placeholder."""
    try:
        return lookup_manufacturer(manufacturer_id)
    except UnknownEncoding:
        logger.debug("manufacturer_unknown", manufacturer_id=f"0x{manufacturer_id:04X}")
        return f"Unknown (0x{manufacturer_id:04X})"
