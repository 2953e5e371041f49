"""Unit tests for XMP / EXPO profile detection."""

from __future__ import annotations

import pytest

from spdcore.spd.layouts import DDR5_LAYOUT, LEGACY_LAYOUT
from spdcore.spd.profiles import detect_profiles


def _with_magic(length: int, offset: int, magic: bytes, count_byte: int | None = None) -> bytes:
    buf = bytearray(length)
    buf[offset:offset + len(magic)] = magic
    if count_byte is not None:
        buf[offset + 2] = count_byte
    return bytes(buf)


class TestLegacyXmp:
    def test_xmp_detected(self):
        info = detect_profiles(_with_magic(512, 384, b"\x0c\x4a"), LEGACY_LAYOUT)
        assert info.has_xmp
        assert not info.has_expo
        assert info.profile_count == 2

    def test_length_boundary(self):
        buf = _with_magic(386, 384, b"\x0c\x4a")
        assert detect_profiles(buf, LEGACY_LAYOUT).has_xmp
        assert not detect_profiles(buf[:385], LEGACY_LAYOUT).has_xmp

    @pytest.mark.parametrize("bit", range(16))
    def test_single_bit_flip_defeats_match(self, bit):
        buf = bytearray(_with_magic(512, 384, b"\x0c\x4a"))
        buf[384 + bit // 8] ^= 1 << (bit % 8)
        info = detect_profiles(bytes(buf), LEGACY_LAYOUT)
        assert not info.has_xmp
        assert info.profile_count == 0

    def test_expo_magic_not_recognised(self):
        info = detect_profiles(_with_magic(512, 384, b"\x08\x00"), LEGACY_LAYOUT)
        assert not info.has_expo

    def test_no_magic(self):
        info = detect_profiles(bytes(512), LEGACY_LAYOUT)
        assert (info.has_xmp, info.has_expo, info.profile_count) == (False, False, 0)


class TestDdr5Profiles:
    def test_xmp3(self):
        info = detect_profiles(_with_magic(1024, 640, b"\x0c\x4a", count_byte=0x03), DDR5_LAYOUT)
        assert info.has_xmp
        assert not info.has_expo
        assert info.profile_count == 3

    def test_expo(self):
        info = detect_profiles(_with_magic(1024, 640, b"\x08\x00", count_byte=0x01), DDR5_LAYOUT)
        assert info.has_expo
        assert not info.has_xmp
        assert info.profile_count == 1

    def test_count_uses_low_two_bits(self):
        info = detect_profiles(_with_magic(1024, 640, b"\x0c\x4a", count_byte=0xFE), DDR5_LAYOUT)
        assert info.profile_count == 2

    def test_requires_700_bytes(self):
        buf = _with_magic(700, 640, b"\x0c\x4a", count_byte=1)
        assert detect_profiles(buf, DDR5_LAYOUT).has_xmp
        assert not detect_profiles(buf[:699], DDR5_LAYOUT).has_xmp

    def test_512_byte_image_has_no_profiles(self):
        info = detect_profiles(bytes(512), DDR5_LAYOUT)
        assert not info.has_xmp
        assert not info.has_expo

    @pytest.mark.parametrize("bit", range(16))
    def test_single_bit_flip_defeats_expo(self, bit):
        buf = bytearray(_with_magic(1024, 640, b"\x08\x00", count_byte=2))
        buf[640 + bit // 8] ^= 1 << (bit % 8)
        info = detect_profiles(bytes(buf), DDR5_LAYOUT)
        assert not info.has_expo
