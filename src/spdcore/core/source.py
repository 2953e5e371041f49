"""Byte sources for SPD EEPROM images.

Hardware access (SMBus block reads, management-interface fallbacks) lives
outside this package.  Anything that can return the bytes at an SPD
address implements :class:`SpdSource`; the scanner only talks to that
interface, which also lets tests substitute in-memory sources.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Mapping
from pathlib import Path

from spdcore.core.loader import load_dump
from spdcore.exceptions import DumpFormatError, SpdSourceError
from spdcore.spd.types import SPD_BASE_ADDRESS, SPD_SLOT_COUNT


class SpdSource(ABC):
    """Abstract source of SPD block reads."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Short label used in log events."""

    @abstractmethod
    def read_block(self, address: int, count: int) -> bytes:
        """Read up to *count* bytes from the EEPROM at *address*.

        Returns an empty or short buffer when nothing answers at the
        address.

        Raises:
            SpdSourceError: If the read itself failed and may be retried.
        """

    def close(self) -> None:
        """Release any resources held by the source."""

    def __enter__(self) -> SpdSource:
        return self

    def __exit__(self, *exc: object) -> None:
        self.close()


class DumpSource(SpdSource):
    """Serves pre-captured images keyed by SMBus address."""

    def __init__(self, images: Mapping[int, bytes]) -> None:
        self._images = {addr: bytes(img) for addr, img in images.items()}

    @classmethod
    def from_slots(
        cls, images: Mapping[int, bytes], base_address: int = SPD_BASE_ADDRESS
    ) -> DumpSource:
        """Build a source from images keyed by slot index."""
        return cls({base_address + slot: img for slot, img in images.items()})

    @property
    def name(self) -> str:
        return "dump"

    def read_block(self, address: int, count: int) -> bytes:
        return self._images.get(address, b"")[:count]


class DirectorySource(SpdSource):
    """Reads ``slot<N>.bin`` (or ``.hex`` / ``.txt``) files from a directory.

    A missing file means an empty slot; an unreadable one is a read error.
    """

    SUFFIXES = (".bin", ".hex", ".txt")

    def __init__(
        self,
        directory: str | Path,
        base_address: int = SPD_BASE_ADDRESS,
        slot_count: int = SPD_SLOT_COUNT,
    ) -> None:
        self._dir = Path(directory)
        if not self._dir.is_dir():
            raise SpdSourceError(f"Not a directory: {self._dir}")
        self._base = base_address
        self._slot_count = slot_count

    @property
    def name(self) -> str:
        return f"dir:{self._dir}"

    def _path_for(self, address: int) -> Path | None:
        slot = address - self._base
        if not 0 <= slot < self._slot_count:
            return None
        for suffix in self.SUFFIXES:
            path = self._dir / f"slot{slot}{suffix}"
            if path.is_file():
                return path
        return None

    def read_block(self, address: int, count: int) -> bytes:
        path = self._path_for(address)
        if path is None:
            return b""
        try:
            return load_dump(path)[:count]
        except (OSError, DumpFormatError) as exc:
            raise SpdSourceError(f"{path}: {exc}") from exc
