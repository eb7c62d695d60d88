"""
DevPalette Color Store

Owns the ordered collection of saved colors (newest first) and the opaque
palette collection. Every mutation writes the whole collection through to
the persistence backend before returning.
"""
import copy
from datetime import datetime
from typing import Any, Callable, Iterable, Iterator, List, Optional, Union

from pydantic import TypeAdapter, ValidationError

from devpalette.schemas import Color, HSL, RGB
from devpalette.services.colors.color_math import hex_to_rgb, normalize_hex, rgb_to_hsl
from devpalette.services.persistence import KeyValueBackend
from devpalette.utils.ids import generate_clock_id, iso_timestamp, utc_now
from devpalette.utils.logging import get_logger
from devpalette.utils.metrics import get_metrics

logger = get_logger("store")

_color_list = TypeAdapter(List[Color])

ColorLike = Union[Color, dict]


def _as_colors(colors: Iterable[ColorLike]) -> List[Color]:
    """Private copies of the given colors; the store never shares its instances."""
    return [c.model_copy(deep=True) if isinstance(c, Color) else Color.model_validate(c) for c in colors]


class ColorStore:
    """Saved colors, most recent first, persisted write-through."""

    def __init__(self, backend: KeyValueBackend, key: str,
                 clock: Callable[[], datetime] = utc_now):
        self.backend = backend
        self.key = key
        self._clock = clock
        self._colors: List[Color] = self._load()

    def _load(self) -> List[Color]:
        raw = self.backend.read(self.key)
        if raw is None:
            return []
        if not isinstance(raw, list):
            logger.warning("Stored colors are not a list, starting empty", {"key": self.key})
            return []
        try:
            colors = _color_list.validate_python(raw)
        except ValidationError as e:
            logger.warning("Stored colors failed validation, starting empty",
                           {"key": self.key, "errors": e.error_count()})
            return []
        logger.info(f"Loaded {len(colors)} colors", {"key": self.key})
        return colors

    def _persist(self) -> bool:
        with get_metrics().timed("persist_colors"):
            ok = self.backend.write(self.key, [c.to_document() for c in self._colors])
        if not ok:
            get_metrics().increment("persistence_write_failures_total")
            logger.error("Failed to persist colors", {"key": self.key, "count": len(self._colors)})
        return ok

    @property
    def colors(self) -> List[Color]:
        """Copy of the collection in store order."""
        return [c.model_copy(deep=True) for c in self._colors]

    def __len__(self) -> int:
        return len(self._colors)

    def __iter__(self) -> Iterator[Color]:
        return iter(self.colors)

    def get(self, color_id: str) -> Optional[Color]:
        """Copy of the first color with the given id."""
        for color in self._colors:
            if color.id == color_id:
                return color.model_copy(deep=True)
        return None

    def favorites(self) -> List[Color]:
        """Favorite colors in store order."""
        return [c.model_copy(deep=True) for c in self._colors if c.is_favorite]

    def create(self, name: str, hex_color: str) -> Optional[Color]:
        """
        Create a color and prepend it to the collection.

        rgb and hsl are derived once from the hex, together, and never
        recomputed. A blank name is ignored: nothing changes and nothing
        is written.

        Args:
            name: Display name, trimmed before use
            hex_color: RRGGBB or #RRGGBB, any case

        Returns:
            The new Color, or None when the name was blank
        """
        trimmed = (name or "").strip()
        if not trimmed:
            get_metrics().increment("colors_rejected_total")
            logger.debug("Ignored color with empty name", {"hex": hex_color})
            return None

        canonical = normalize_hex(hex_color)
        rgb = hex_to_rgb(canonical)
        hsl = rgb_to_hsl(rgb["r"], rgb["g"], rgb["b"])
        now = self._clock()

        color = Color(
            id=generate_clock_id(now),
            name=trimmed,
            hex=canonical,
            rgb=RGB(**rgb),
            hsl=HSL(**hsl),
            is_favorite=False,
            created_at=iso_timestamp(now),
        )
        self._colors.insert(0, color)
        self._persist()
        get_metrics().increment("colors_created_total")
        logger.info("Created color", {"id": color.id, "hex": color.hex})
        return color.model_copy(deep=True)

    def toggle_favorite(self, color_id: str) -> bool:
        """Flip the favorite flag of every entry with this id."""
        matched = False
        for color in self._colors:
            if color.id == color_id:
                color.is_favorite = not color.is_favorite
                matched = True
        if not matched:
            logger.debug("Toggle favorite on unknown color", {"id": color_id})
            return False
        self._persist()
        return True

    def rename(self, color_id: str, new_name: str) -> bool:
        """Replace the name of every entry with this id. Empty names are allowed."""
        matched = False
        for color in self._colors:
            if color.id == color_id:
                color.name = new_name
                matched = True
        if not matched:
            logger.debug("Rename on unknown color", {"id": color_id})
            return False
        self._persist()
        return True

    def delete(self, color_id: str) -> bool:
        """Remove every entry with this id."""
        remaining = [c for c in self._colors if c.id != color_id]
        if len(remaining) == len(self._colors):
            logger.debug("Delete on unknown color", {"id": color_id})
            return False
        self._colors = remaining
        self._persist()
        logger.info("Deleted color", {"id": color_id})
        return True

    def clear_all(self):
        """Empty the collection. Confirmation is the caller's job."""
        self._colors = []
        self._persist()
        logger.info("Cleared all colors")

    def add_generated(self, colors: Iterable[ColorLike]) -> List[Color]:
        """
        Prepend an externally produced batch, keeping its order.

        Entries arrive fully formed and are stored as given. Passing colors
        already in the store adds independent duplicates.
        """
        batch = _as_colors(colors)
        self._colors = batch + self._colors
        self._persist()
        logger.info(f"Added {len(batch)} generated colors")
        return [c.model_copy(deep=True) for c in batch]

    def replace_all(self, colors: Iterable[ColorLike]):
        """Replace the whole collection (no merge)."""
        self._colors = _as_colors(colors)
        self._persist()


class PaletteStore:
    """Opaque palette collection, persisted verbatim under its own key."""

    def __init__(self, backend: KeyValueBackend, key: str):
        self.backend = backend
        self.key = key
        self._palettes: List[Any] = self._load()

    def _load(self) -> List[Any]:
        raw = self.backend.read(self.key)
        if raw is None:
            return []
        if not isinstance(raw, list):
            logger.warning("Stored palettes are not a list, starting empty", {"key": self.key})
            return []
        return raw

    @property
    def palettes(self) -> List[Any]:
        return copy.deepcopy(self._palettes)

    def __len__(self) -> int:
        return len(self._palettes)

    def replace_all(self, palettes: Iterable[Any]):
        """Replace the whole collection (no merge)."""
        self._palettes = copy.deepcopy(list(palettes))
        if not self.backend.write(self.key, self._palettes):
            get_metrics().increment("persistence_write_failures_total")
            logger.error("Failed to persist palettes", {"key": self.key})
