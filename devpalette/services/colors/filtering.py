"""
Palette Filter Module

Derives the visible subset of saved colors from a search term and a
favorites-only flag. Pure and order-preserving.
"""

from typing import List, Sequence

from devpalette.schemas import Color


def matches_search(color: Color, search_term: str) -> bool:
    """True when the term is a case-insensitive substring of the name or hex."""
    term = search_term.lower()
    return term in color.name.lower() or term in color.hex.lower()


def filter_colors(colors: Sequence[Color], search_term: str = "", favorites_only: bool = False) -> List[Color]:
    """
    Filter saved colors for display.

    Args:
        colors: Colors in store order
        search_term: Substring to look for in name or hex; empty matches all
        favorites_only: Keep favorites only

    Returns:
        New list with the matching colors in their original order
    """
    return [
        color for color in colors
        if matches_search(color, search_term or "")
        and (not favorites_only or color.is_favorite)
    ]
