"""Unit tests for the DDR5 extractor."""

from __future__ import annotations

import pytest

from spdcore.spd.ddr5 import bank_groups, extract_ddr5, module_size_bytes, rank_count
from spdcore.spd.fields import extract_cas_latency
from spdcore.spd.layouts import DDR5_LAYOUT
from spdcore.spd.types import MIB


def _ddr5(length: int = 512, **offsets: int) -> bytes:
    buf = bytearray(length)
    buf[2] = 0x10
    buf[3] = 0x0D
    for key, value in offsets.items():
        buf[int(key.lstrip("b"))] = value
    return bytes(buf)


class TestGeometry:
    def test_bank_groups(self):
        assert bank_groups(_ddr5(b6=0x00)) == 1
        assert bank_groups(_ddr5(b6=0x10)) == 2
        assert bank_groups(_ddr5(b6=0x20)) == 4
        assert bank_groups(_ddr5(b6=0x30)) == 8

    def test_rank_count(self):
        assert rank_count(_ddr5(b234=0x00)) == 1
        assert rank_count(_ddr5(b234=0x03)) == 4

    def test_rank_count_short_read_defaults_to_one(self):
        assert rank_count(_ddr5(length=128)) == 1

    def test_module_size(self):
        # (1 << 12) MiB * 8 bytes * 2 ranks
        assert module_size_bytes(_ddr5(b6=0x24, b234=0x01)) == 4096 * 8 * 2 * MIB

    def test_minimum_size(self):
        assert module_size_bytes(_ddr5()) == 256 * 8 * MIB


class TestCasLatency:
    def _with_mask(self, mask: int) -> bytes:
        buf = bytearray(_ddr5())
        buf[20:23] = mask.to_bytes(3, "little")
        return bytes(buf)

    def test_bit0_is_baseline(self):
        assert extract_cas_latency(self._with_mask(1), DDR5_LAYOUT) == 20

    def test_bit5_is_baseline_plus_5(self):
        assert extract_cas_latency(self._with_mask(1 << 5), DDR5_LAYOUT) == 25

    def test_top_bit(self):
        assert extract_cas_latency(self._with_mask(1 << 23), DDR5_LAYOUT) == 43


class TestExtractDdr5:
    def test_speed_uses_16bit_tck(self, ddr5_image):
        assert extract_ddr5(ddr5_image).speed_mhz == (1_000_000 / (4 * 0.125)) / 1000 * 2

    def test_timings(self, ddr5_image):
        t = extract_ddr5(ddr5_image).timings
        assert t.cas_latency == 28
        assert t.ras_to_cas_delay == 0x20
        assert t.ras_precharge == 0x20
        assert t.t_ras == 0x140
        assert t.t_rc == 0x380
        assert t.t_rfc == 295

    def test_identity(self, ddr5_image):
        ident = extract_ddr5(ddr5_image).identity
        assert ident.manufacturer_id == 0x04CD
        assert ident.serial_number == 0xDEADBEEF
        assert ident.part_number == "F5-6000J3038F16G"
        assert ident.manufacturing_date == "Week 40, 2023"

    def test_voltage_flag(self, ddr5_image):
        assert extract_ddr5(ddr5_image).voltage == pytest.approx(1.1)
        assert extract_ddr5(_ddr5()).voltage == 0.0

    def test_no_form_factor(self, ddr5_image):
        assert extract_ddr5(ddr5_image).form_factor == ""

    def test_short_read_leaves_identity_empty(self, ddr5_image):
        fields = extract_ddr5(ddr5_image[:256])
        assert fields.identity.manufacturer_id == 0
        assert fields.identity.part_number == ""
        assert fields.identity.manufacturing_date == ""
        assert fields.ranks == 2
