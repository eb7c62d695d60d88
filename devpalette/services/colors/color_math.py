"""
Color Math Module

Stateless conversions between hexadecimal, RGB and HSL representations.
Every other part of DevPalette derives its color values through here.
"""

import colorsys
import re
from typing import Dict, Union

HEX_PATTERN = re.compile(r"^#?[0-9A-Fa-f]{6}$")


def normalize_hex(hex_color: str) -> str:
    """
    Canonicalize a hex color to upper-case #RRGGBB.

    Args:
        hex_color: Color as RRGGBB or #RRGGBB, any case

    Returns:
        Hex color string in format #RRGGBB (uppercase)
    """
    if not isinstance(hex_color, str) or not HEX_PATTERN.match(hex_color):
        raise ValueError(f"Invalid hex color format: {hex_color}")
    return "#" + hex_color.lstrip("#").upper()


def hex_to_rgb(hex_color: str) -> Dict[str, int]:
    """
    Parse a 6-digit hex color into 8-bit channels.

    Args:
        hex_color: Color as RRGGBB or #RRGGBB

    Returns:
        Dict with r, g, b integers in [0, 255]
    """
    hex_clean = hex_color.lstrip("#")
    if len(hex_clean) != 6:
        raise ValueError(f"Invalid hex color format: {hex_color}")

    try:
        r = int(hex_clean[0:2], 16)
        g = int(hex_clean[2:4], 16)
        b = int(hex_clean[4:6], 16)
    except ValueError:
        raise ValueError(f"Invalid hex color format: {hex_color}")

    return {"r": r, "g": g, "b": b}


def rgb_to_hsl(r: int, g: int, b: int) -> Dict[str, float]:
    """
    Convert 8-bit RGB channels to HSL.

    Args:
        r: Red [0, 255]
        g: Green [0, 255]
        b: Blue [0, 255]

    Returns:
        Dict with h in degrees [0, 360), s and l as fractions [0, 1]
    """
    # colorsys works in HLS order with hue in [0, 1)
    h, l, s = colorsys.rgb_to_hls(r / 255.0, g / 255.0, b / 255.0)

    return {
        "h": round(h * 360.0, 2) % 360.0,
        "s": round(s, 4),
        "l": round(l, 4),
    }


def _clamp_channel(value: Union[int, float]) -> int:
    return max(0, min(255, int(round(value))))


def rgb_to_hex(r: Union[int, float], g: Union[int, float], b: Union[int, float]) -> str:
    """
    Convert RGB channels to a hex color.

    Args:
        r: Red, clamped to [0, 255]
        g: Green, clamped to [0, 255]
        b: Blue, clamped to [0, 255]

    Returns:
        Hex color string in format #RRGGBB (uppercase)
    """
    return f"#{_clamp_channel(r):02X}{_clamp_channel(g):02X}{_clamp_channel(b):02X}"


def hex_to_hsl(hex_color: str) -> Dict[str, float]:
    """Convert a hex color straight to HSL."""
    rgb = hex_to_rgb(hex_color)
    return rgb_to_hsl(rgb["r"], rgb["g"], rgb["b"])
