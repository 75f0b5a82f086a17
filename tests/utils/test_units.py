"""Tests for base-2 size parsing."""

import pytest

from vcd_tool.utils import format_size, parse_size


class TestParseSize:
    """Tests for parse_size."""

    @pytest.mark.parametrize(
        "value,expected",
        [
            ("1KB", 1024),
            ("2MB", 2 * 1024**2),
            ("3GB", 3 * 1024**3),
            ("1TB", 1024**4),
            ("512B", 512),
            ("1KiB", 1024),
            ("1gb", 1024**3),
            ("1.5GB", int(1.5 * 1024**3)),
            ("1GB512MB", 1024**3 + 512 * 1024**2),
            (" 10MB ", 10 * 1024**2),
            ("0", 0),
        ],
    )
    def test_valid_sizes(self, value, expected):
        """Test parsing of valid size strings."""
        assert parse_size(value) == expected

    @pytest.mark.parametrize("value", ["", "10", "GB", "10XB", "10 GB", "abc", "-1GB"])
    def test_invalid_sizes(self, value):
        """Test that malformed sizes are rejected."""
        with pytest.raises(ValueError):
            parse_size(value)


class TestFormatSize:
    """Tests for format_size."""

    def test_exact_units(self):
        """Test that the largest exact unit is chosen."""
        assert format_size(1024**3) == "1GB"
        assert format_size(1536 * 1024**2) == "1536MB"
        assert format_size(2048) == "2KB"

    def test_bytes(self):
        """Test sizes that are not a multiple of a kibibyte."""
        assert format_size(1000) == "1000B"
        assert format_size(0) == "0B"
