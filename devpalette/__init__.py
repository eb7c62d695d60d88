"""
DevPalette
Personal color swatch manager: saved colors, favorites, search,
color combinations and JSON import/export.
"""

__version__ = "1.0.0"
