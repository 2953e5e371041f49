"""Exception hierarchy for SPD decoding and slot acquisition."""

from __future__ import annotations


class SpdError(Exception):
    """Base exception for all spdcore errors."""

    def __init__(self, message: str, offset: int | None = None) -> None:
        self.offset = offset
        super().__init__(message)


class StructuralError(SpdError):
    """SPD image is too short to be decoded at all."""

    def __init__(self, length: int) -> None:
        self.length = length
        super().__init__(f"SPD data too short: {length} bytes")


class FieldUnavailable(SpdError):
    """A field's byte range lies beyond the end of the supplied image."""

    def __init__(self, offset: int, end: int, length: int) -> None:
        self.end = end
        self.length = length
        super().__init__(
            f"bytes [{offset}:{end}] not covered by {length}-byte image", offset=offset
        )


class UnknownEncoding(SpdError):
    """A code has no entry in the lookup table it was resolved against."""

    def __init__(self, table: str, code: int) -> None:
        self.table = table
        self.code = code
        super().__init__(f"{table}: no entry for code 0x{code:X}")


class SpdSourceError(SpdError):
    """The byte source failed to return SPD data for an address."""


class DumpFormatError(SpdError):
    """A dump file holds neither a binary SPD image nor hex byte tokens."""
