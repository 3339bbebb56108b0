"""Tests for the spec value parser."""

import pytest

from pcbuild_mcp.parsers import parse_spec_number, parse_spec_number_or


class TestParseSpecNumber:
    """Tests for parse_spec_number function."""

    @pytest.mark.parametrize("input_val,expected", [
        ("4.5 GHz", 4.5),
        ("24 GB", 24.0),
        ("1000 W", 1000.0),
        ("16", 16.0),
        ("384-bit", 384.0),
        ("7200MHz+", 7200.0),
        ("6 years", 6.0),
        ("  170 W", 170.0),
    ])
    def test_leading_number_with_unit(self, input_val: str, expected: float):
        assert parse_spec_number(input_val) == pytest.approx(expected)

    def test_thousands_separators(self):
        assert parse_spec_number("1,000 W") == 1000.0
        assert parse_spec_number("16,384 CUDA") == 16384.0
        assert parse_spec_number("1,234.5 MB/s") == pytest.approx(1234.5)

    def test_range_takes_first_number(self):
        assert parse_spec_number("500-2000 RPM") == 500.0
        assert parse_spec_number("800-2800 RPM") == 800.0

    def test_single_decimal_point(self):
        assert parse_spec_number("1.2.3") == pytest.approx(1.2)
        assert parse_spec_number(".5 mm") == pytest.approx(0.5)

    def test_numbers_pass_through(self):
        assert parse_spec_number(4) == 4.0
        assert parse_spec_number(2.5) == 2.5
        assert parse_spec_number(0) == 0.0

    @pytest.mark.parametrize("input_val", [
        "", "None", "PCIe 4.0 x16", "CL36", "N/A", "-", None, True, False,
    ])
    def test_no_leading_number(self, input_val):
        """Values without a leading digit run have no magnitude."""
        assert parse_spec_number(input_val) is None

    def test_idempotent(self):
        assert parse_spec_number("5.7 GHz") == parse_spec_number("5.7 GHz")


class TestParseSpecNumberOr:
    """Tests for fallback parsing."""

    def test_parsed_value_used(self):
        assert parse_spec_number_or("125 W", 65) == 125.0

    @pytest.mark.parametrize("input_val", [None, "", "unknown", "0 W", True])
    def test_fallback(self, input_val):
        assert parse_spec_number_or(input_val, 65) == 65
