"""Pydantic data models for spdcore."""

from spdcore.models.module import ProfileInfo, SpdModule, SpdTimings
from spdcore.models.scan import ScanConfig, ScanResult, SlotReading, SlotStatus

__all__ = [
    "ProfileInfo",
    "ScanConfig",
    "ScanResult",
    "SlotReading",
    "SlotStatus",
    "SpdModule",
    "SpdTimings",
]
