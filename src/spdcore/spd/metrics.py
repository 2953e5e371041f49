"""Capacity, data-rate and PC-rating arithmetic shared by both layouts."""

from __future__ import annotations

from dataclasses import dataclass

from spdcore.spd.types import GIB

# PC rating multiplier (MT/s * 8 bytes per transfer), used for both layouts
PC_RATING_FACTOR = 8


@dataclass(frozen=True)
class DerivedMetrics:
    capacity_gb: float
    data_rate_mts: int
    pc_rating: int
    base_freq_mhz: float


def derive_metrics(module_size_bytes: int, speed_mhz: float) -> DerivedMetrics:
    """Derive capacity and rate figures.

    *speed_mhz* is already doubled for double data rate, so the data rate
    in MT/s equals it and the I/O clock is half of it.
    """
    data_rate = int(speed_mhz)
    return DerivedMetrics(
        capacity_gb=module_size_bytes / GIB,
        data_rate_mts=data_rate,
        pc_rating=data_rate * PC_RATING_FACTOR,
        base_freq_mhz=speed_mhz / 2,
    )
