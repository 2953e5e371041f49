"""Decoded SPD module record."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class SpdTimings(BaseModel):
    """Primary DRAM timings as stored in the SPD (raw timebase units)."""

    model_config = ConfigDict(frozen=True)

    cas_latency: int = 0
    ras_to_cas_delay: int = 0
    ras_precharge: int = 0
    t_ras: int = 0
    t_rc: int = 0
    t_rfc: int = 0
    # Not decoded from either layout; fixed placeholders in clock cycles
    t_rrd_s: int = 4
    t_rrd_l: int = 6
    t_faw: int = 16

    @property
    def summary(self) -> str:
        """Timings in the usual CL-tRCD-tRP-tRAS form."""
        return f"{self.cas_latency}-{self.ras_to_cas_delay}-{self.ras_precharge}-{self.t_ras}"


class ProfileInfo(BaseModel):
    """Overclocking profile blocks found in the image."""

    model_config = ConfigDict(frozen=True)

    has_xmp: bool = False
    has_expo: bool = False
    profile_count: int = 0


class SpdModule(BaseModel):
    """Immutable result of decoding one SPD image."""

    model_config = ConfigDict(frozen=True)

    slot: int = Field(default=0, ge=0, le=7)
    revision: int = 0
    memory_type: str = ""
    memory_type_code: int = 0
    form_factor: str = ""

    manufacturer_id: int = 0
    manufacturer_name: str = ""
    part_number: str = ""
    serial_number: int = 0
    manufacturing_date: str = ""

    module_size_bytes: int = 0
    capacity_gb: float = 0.0
    speed_mhz: float = 0.0
    data_rate_mts: int = 0
    pc_rating: int = 0
    base_freq_mhz: float = 0.0
    voltage: float = 0.0

    ranks: int = 1
    data_width: int = 64
    bank_groups: int = 0

    timings: SpdTimings = Field(default_factory=SpdTimings)

    has_xmp: bool = False
    has_expo: bool = False
    profile_count: int = 0

    raw_bytes: bytes = Field(default=b"", exclude=True, repr=False)

    @property
    def serial_hex(self) -> str:
        return f"{self.serial_number:08X}"
