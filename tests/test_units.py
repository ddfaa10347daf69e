"""Tests for docker stats text helpers."""

import pytest

from statscope.core.units import binary_size, decimal_size, format_percent, parse_percent


class TestPercent:
    """Tests for percentage parsing and formatting."""

    def test_round_trip(self):
        """Test that '12.50%' parses to 12.5 and formats back."""
        value = parse_percent("12.50%")
        assert value == 12.5
        assert format_percent(value) == "12.50%"

    @pytest.mark.parametrize(
        "text, expected",
        [
            ("0.00%", 0.0),
            ("150.25%", 150.25),
            ("7", 7.0),
            ("-0.5%", -0.5),
            ("1e2%", 100.0),
        ],
    )
    def test_valid(self, text, expected):
        """Test well-formed percentages."""
        assert parse_percent(text) == pytest.approx(expected)

    @pytest.mark.parametrize(
        "text",
        ["", "%", "--", "abc%", "nan%", "inf%", "1e999%", "1_0%", " 3.10% ", "3.10%%", "0x1p3%"],
    )
    def test_malformed_is_zero(self, text):
        """Test that malformed or non-finite text parses to 0.0."""
        assert parse_percent(text) == 0.0


class TestSizes:
    """Tests for byte formatting in docker stats style."""

    def test_binary_size(self):
        """Test memory style sizes."""
        assert binary_size(0) == "0B"
        assert binary_size(512) == "512B"
        assert binary_size(1536 * 1024) == "1.5MiB"
        assert binary_size(2 * 1024**3) == "2GiB"

    def test_decimal_size(self):
        """Test network and block I/O style sizes."""
        assert decimal_size(0) == "0B"
        assert decimal_size(1200) == "1.2kB"
        assert decimal_size(3_450_000) == "3.45MB"
