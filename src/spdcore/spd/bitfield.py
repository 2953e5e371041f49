"""Byte-level read primitives shared by the DDR4 and DDR5 extractors.

Every primitive checks that ``[offset, offset + size)`` lies inside the
image and raises :class:`FieldUnavailable` otherwise.  Extractors wrap
optional regions in :func:`guarded_read`, which turns that exception into
the field's default value.
"""

from __future__ import annotations

import struct
from collections.abc import Callable
from typing import TypeVar

from spdcore.exceptions import FieldUnavailable
from spdcore.utils.logging import get_logger

logger = get_logger(__name__)

T = TypeVar("T")

_LE_FORMATS: dict[int, str] = {1: "<B", 2: "<H", 4: "<I", 8: "<Q"}


def _check_range(data: bytes, offset: int, size: int) -> None:
    end = offset + size
    if offset < 0 or end > len(data):
        raise FieldUnavailable(offset, end, len(data))


def read_uint_le(data: bytes, offset: int, size: int) -> int:
    """Read an unsigned little-endian integer of *size* bytes at *offset*."""
    _check_range(data, offset, size)
    fmt = _LE_FORMATS.get(size)
    if fmt is not None:
        return struct.unpack_from(fmt, data, offset)[0]
    return int.from_bytes(data[offset:offset + size], "little")


def read_ascii(data: bytes, offset: int, size: int) -> str:
    """Read a fixed-width ASCII field, trimming padding and NULs."""
    _check_range(data, offset, size)
    raw = bytes(data[offset:offset + size])
    return raw.decode("ascii", errors="replace").strip(" \x00")


def read_bytes(data: bytes, offset: int, size: int) -> bytes:
    """Return an immutable copy of ``data[offset:offset + size]``."""
    _check_range(data, offset, size)
    return bytes(data[offset:offset + size])


def lowest_set_bit(mask: int, width: int) -> int | None:
    """Index of the lowest set bit among the low *width* bits, or None."""
    for i in range(width):
        if mask & (1 << i):
            return i
    return None


def nibble_pair(low: int, high_byte: int, upper: bool) -> int:
    """Combine an 8-bit LSB with the upper or lower nibble of *high_byte*.

    Used for 12-bit timings whose bits 11:8 share one byte with a sibling.
    """
    nibble = (high_byte >> 4) & 0x0F if upper else high_byte & 0x0F
    return low | (nibble << 8)


def guarded_read(
    reader: Callable[[bytes, int, int], T],
    data: bytes,
    offset: int,
    size: int,
    default: T,
) -> T:
    """Run *reader* over a byte range, falling back to *default* when the
    image does not cover it."""
    try:
        return reader(data, offset, size)
    except FieldUnavailable as exc:
        logger.debug(
            "spd_field_unavailable",
            offset=offset,
            end=exc.end,
            length=exc.length,
        )
        return default
