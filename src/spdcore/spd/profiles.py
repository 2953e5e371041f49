"""Detection of XMP / EXPO overclocking profile blocks."""

from __future__ import annotations

from spdcore.models.module import ProfileInfo
from spdcore.spd.layouts import ProfileKind, ProfileSignature, SpdLayout


def _matches(data: bytes, sig: ProfileSignature) -> bool:
    if len(data) < sig.min_length:
        return False
    return bytes(data[sig.offset:sig.offset + len(sig.magic)]) == sig.magic


def _profile_count(data: bytes, sig: ProfileSignature) -> int:
    if sig.count_offset is None:
        return sig.fixed_count
    return data[sig.count_offset] & 0x03


def detect_profiles(data: bytes, layout: SpdLayout) -> ProfileInfo:
    """Match the layout's profile signatures in order; the first hit wins.

    Images shorter than a signature's minimum length never match it.
    """
    for sig in layout.profiles:
        if _matches(data, sig):
            return ProfileInfo(
                has_xmp=sig.kind is ProfileKind.XMP,
                has_expo=sig.kind is ProfileKind.EXPO,
                profile_count=_profile_count(data, sig),
            )
    return ProfileInfo()
