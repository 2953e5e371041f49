"""Slot scanning, dump loading and presentation."""

from spdcore.core.loader import load_dump
from spdcore.core.scanner import decode_images, scan_slots
from spdcore.core.source import DirectorySource, DumpSource, SpdSource

__all__ = [
    "DirectorySource",
    "DumpSource",
    "SpdSource",
    "decode_images",
    "load_dump",
    "scan_slots",
]
