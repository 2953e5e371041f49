"""Pydantic models for SPD slot scanning."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field, model_validator

from spdcore.models.module import SpdModule


class ScanConfig(BaseModel):
    """Configuration for a slot scan."""

    base_address: int = Field(default=0x50, ge=0x00, le=0x7F, description="SMBus address of slot 0")
    slot_count: int = Field(default=8, ge=1, le=8)
    block_size: int = Field(default=512, ge=128, description="Bytes requested per block read")
    min_valid_length: int = Field(default=256, ge=128, description="Shorter reads mean an empty slot")
    retries: int = Field(default=3, ge=1)
    retry_delay_s: float = Field(default=0.1, ge=0.0)
    backoff: float = Field(default=2.0, ge=1.0)
    timeout_s: float = Field(default=2.0, gt=0.0)
    max_workers: int = Field(default=8, ge=1)

    @model_validator(mode="after")
    def check_address_range(self) -> ScanConfig:
        last = self.base_address + self.slot_count - 1
        if last > 0x7F:
            raise ValueError(f"Slot addresses run past 0x7F (last would be 0x{last:02X})")
        if self.min_valid_length > self.block_size:
            raise ValueError("min_valid_length cannot exceed block_size")
        return self

    def address_for(self, slot: int) -> int:
        return self.base_address + slot


class SlotStatus(str, Enum):
    """Outcome of probing one slot."""
    DECODED = "decoded"
    EMPTY = "empty"
    READ_FAILED = "read_failed"
    DECODE_FAILED = "decode_failed"
    TIMED_OUT = "timed_out"


class SlotReading(BaseModel):
    """Per-slot scan outcome."""

    slot: int
    address: int
    status: SlotStatus
    length: int = 0
    attempts: int = 0
    error: str = ""
    module: SpdModule | None = None

    @property
    def address_hex(self) -> str:
        return f"0x{self.address:02X}"


class ScanResult(BaseModel):
    """All slot readings of one scan, ordered by slot."""

    readings: list[SlotReading] = Field(default_factory=list)

    @property
    def modules(self) -> list[SpdModule]:
        return [r.module for r in self.readings if r.module is not None]

    @property
    def errors(self) -> list[str]:
        return [
            f"slot {r.slot} ({r.address_hex}): {r.error}"
            for r in self.readings
            if r.status not in (SlotStatus.DECODED, SlotStatus.EMPTY)
        ]
