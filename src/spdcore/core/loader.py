"""Load SPD dumps from files: raw binary images or hex text."""

from __future__ import annotations

import re
from pathlib import Path

from spdcore.exceptions import DumpFormatError
from spdcore.spd.types import SPD_MIN_LENGTH

_HEX_BYTE_RE = re.compile(r"(?:0[xX])?([0-9A-Fa-f]{2})")
# "0x0040:" / "0040:" row labels from hex dumps
_ROW_LABEL_RE = re.compile(r"^\s*(?:0[xX])?[0-9A-Fa-f]+:")
# C0 controls other than tab, newline, VT, FF and CR, plus DEL, never appear in hex text
_BINARY_BYTES = frozenset(range(0x20)) - frozenset(b"\t\n\x0b\x0c\r") | {0x7F}


def _as_text(raw: bytes) -> str | None:
    """Decode *raw* as UTF-8 text, or return None for a binary image."""
    if not raw or any(b in _BINARY_BYTES for b in raw):
        return None
    try:
        return raw.decode("utf-8")
    except UnicodeDecodeError:
        return None


def parse_hex_text(text: str) -> bytes:
    """Extract byte tokens (``HH`` or ``0xHH``) from hex text.

    ``#`` comments and ``ADDR:`` row labels are ignored, as is any
    separator between tokens.
    """
    values: list[int] = []
    for line in text.splitlines():
        line = line.split("#", 1)[0]
        line = _ROW_LABEL_RE.sub("", line)
        values.extend(int(m.group(1), 16) for m in _HEX_BYTE_RE.finditer(line))
    return bytes(values)


def load_dump(path: str | Path) -> bytes:
    """Load an SPD image from *path*.

    UTF-8 text files (comments may hold any character) are parsed as hex
    text; files with control bytes or invalid UTF-8 are binary images.

    Raises:
        FileNotFoundError: If *path* does not exist.
        DumpFormatError: If fewer than 128 bytes can be recovered.
    """
    raw = Path(path).read_bytes()

    text = _as_text(raw)
    data = parse_hex_text(text) if text is not None else raw
    if len(data) < SPD_MIN_LENGTH:
        raise DumpFormatError(
            f"{path}: not an SPD image (need >= {SPD_MIN_LENGTH} bytes as binary "
            f"or hex text, got {len(data)})"
        )
    return data
