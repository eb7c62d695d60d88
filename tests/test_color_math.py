"""
Unit tests for the color math module.

Tests hex/RGB/HSL conversions, clamping and canonical hex form.
"""

import pytest

from devpalette.services.colors.color_math import (
    hex_to_rgb, rgb_to_hsl, rgb_to_hex, hex_to_hsl, normalize_hex
)


class TestHexToRgb:
    """Test hex parsing."""

    def test_basic_colors(self):
        assert hex_to_rgb("#FF0000") == {"r": 255, "g": 0, "b": 0}
        assert hex_to_rgb("#00FF00") == {"r": 0, "g": 255, "b": 0}
        assert hex_to_rgb("#0000FF") == {"r": 0, "g": 0, "b": 255}
        assert hex_to_rgb("#6366f1") == {"r": 99, "g": 102, "b": 241}

    def test_without_hash_prefix(self):
        """Leading # is optional."""
        assert hex_to_rgb("ff6b9d") == {"r": 255, "g": 107, "b": 157}

    def test_invalid_hex_format(self):
        """Wrong length or non-hex digits raise ValueError."""
        with pytest.raises(ValueError):
            hex_to_rgb("#FF00")
        with pytest.raises(ValueError):
            hex_to_rgb("#GGGGGG")
        with pytest.raises(ValueError):
            hex_to_rgb("#FF00000")


class TestRgbToHsl:
    """Test RGB to HSL conversion."""

    def test_primaries(self):
        assert rgb_to_hsl(255, 0, 0) == {"h": 0.0, "s": 1.0, "l": 0.5}
        assert rgb_to_hsl(0, 255, 0) == {"h": 120.0, "s": 1.0, "l": 0.5}
        assert rgb_to_hsl(0, 0, 255) == {"h": 240.0, "s": 1.0, "l": 0.5}

    def test_achromatic(self):
        """Greys have no saturation."""
        assert rgb_to_hsl(0, 0, 0) == {"h": 0.0, "s": 0.0, "l": 0.0}
        assert rgb_to_hsl(255, 255, 255) == {"h": 0.0, "s": 0.0, "l": 1.0}
        grey = rgb_to_hsl(128, 128, 128)
        assert grey["s"] == 0.0
        assert abs(grey["l"] - 0.502) < 1e-9

    def test_ranges(self):
        for r, g, b in [(99, 102, 241), (255, 107, 157), (1, 2, 3), (250, 5, 6)]:
            hsl = rgb_to_hsl(r, g, b)
            assert 0.0 <= hsl["h"] < 360.0
            assert 0.0 <= hsl["s"] <= 1.0
            assert 0.0 <= hsl["l"] <= 1.0

    def test_hex_to_hsl_composition(self):
        assert hex_to_hsl("#0000FF") == rgb_to_hsl(0, 0, 255)


class TestRgbToHex:
    """Test RGB to hex conversion."""

    def test_zero_padding(self):
        assert rgb_to_hex(0, 0, 0) == "#000000"
        assert rgb_to_hex(1, 2, 3) == "#010203"
        assert rgb_to_hex(255, 255, 255) == "#FFFFFF"

    def test_clamping(self):
        """Out-of-range channels are clamped to [0, 255]."""
        assert rgb_to_hex(300, -20, 128) == "#FF0080"

    def test_roundtrip(self):
        """Hex -> RGB -> hex is stable up to case."""
        for original in ["#6366f1", "#FF6B9D", "#000000", "#ffffff", "#1F4E79", "#d3b58f"]:
            rgb = hex_to_rgb(original)
            assert rgb_to_hex(rgb["r"], rgb["g"], rgb["b"]) == original.upper()


class TestNormalizeHex:
    """Test canonical hex form."""

    def test_canonical_form(self):
        assert normalize_hex("#6366f1") == "#6366F1"
        assert normalize_hex("abcdef") == "#ABCDEF"

    def test_rejects_malformed(self):
        for bad in ["", "#12345", "#12345G", "##123456", None]:
            with pytest.raises(ValueError):
                normalize_hex(bad)
