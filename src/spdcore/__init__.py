"""spdcore - memory module SPD decoder."""

from spdcore.exceptions import SpdError, StructuralError
from spdcore.models.module import SpdModule, SpdTimings
from spdcore.spd.decoder import decode_spd

__version__ = "0.1.0"

__all__ = [
    "SpdError",
    "SpdModule",
    "SpdTimings",
    "StructuralError",
    "decode_spd",
]
