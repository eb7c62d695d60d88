"""
DevPalette Workspace

State container behind the presentation layer. Composes the color store,
the palette collection and the combination engine, and exposes the
operations the picker, generator, card and history-row widgets call.
Observers are notified after each mutation, once its write-through has
completed.
"""
from datetime import datetime
from typing import Callable, Dict, Iterable, List, Optional, Union

from devpalette.config import Config, config as default_config
from devpalette.schemas import Color, CombinationRecord
from devpalette.services.colors.color_math import normalize_hex
from devpalette.services.colors.combination import CombinationEngine
from devpalette.services.colors.filtering import filter_colors
from devpalette.services.import_export import (
    ImportResult, ParseFailure, export_document, import_document
)
from devpalette.services.persistence import KeyValueBackend, create_backend
from devpalette.services.store import ColorStore, PaletteStore
from devpalette.utils.ids import utc_now
from devpalette.utils.logging import get_logger

logger = get_logger("workspace")

Observer = Callable[[str, "Workspace"], None]

PICKER_TARGETS = ("draft", "color1", "color2")


class Workspace:
    """Single-session state: colors, palettes, combinations and view filters."""

    def __init__(self, backend: KeyValueBackend, cfg: Config = default_config,
                 clock: Callable[[], datetime] = utc_now):
        self.config = cfg
        self.colors = ColorStore(backend, cfg.COLORS_KEY, clock=clock)
        self.palettes = PaletteStore(backend, cfg.PALETTES_KEY)
        self.combinations = CombinationEngine(clock=clock)

        self.pickers: Dict[str, str] = {
            "draft": normalize_hex(cfg.DEFAULT_HEX),
            "color1": normalize_hex(cfg.DEFAULT_HEX),
            "color2": normalize_hex(cfg.DEFAULT_COMBINE_HEX),
        }
        self.search_term = ""
        self.favorites_only = False
        self._observers: List[Observer] = []

    @classmethod
    def from_config(cls, cfg: Config = default_config) -> "Workspace":
        logger.info("Opening workspace", {"backend": cfg.STORAGE_BACKEND})
        return cls(create_backend(cfg), cfg)

    # ------------------------------------------------------------------
    # Observers
    # ------------------------------------------------------------------

    def subscribe(self, observer: Observer) -> Callable[[], None]:
        """Register an observer; returns a function that unregisters it."""
        self._observers.append(observer)

        def unsubscribe():
            if observer in self._observers:
                self._observers.remove(observer)

        return unsubscribe

    def _notify(self, event: str):
        for observer in list(self._observers):
            observer(event, self)

    # ------------------------------------------------------------------
    # Views
    # ------------------------------------------------------------------

    def set_search(self, term: str):
        self.search_term = term or ""
        self._notify("filter_changed")

    def set_favorites_only(self, flag: bool):
        self.favorites_only = bool(flag)
        self._notify("filter_changed")

    @property
    def visible_colors(self) -> List[Color]:
        """Colors passing the current search and favorites filter."""
        return filter_colors(self.colors.colors, self.search_term, self.favorites_only)

    # ------------------------------------------------------------------
    # Picker and generator widgets
    # ------------------------------------------------------------------

    def on_change(self, new_hex: str, target: str = "draft"):
        """Picker value changed."""
        if target not in PICKER_TARGETS:
            raise ValueError(f"Unknown picker: {target}")
        self.pickers[target] = normalize_hex(new_hex)
        self._notify("picker_changed")

    def add_color(self, name: str, hex_color: Optional[str] = None) -> Optional[Color]:
        """Save a color from the add form; uses the draft picker when no hex is given."""
        color = self.colors.create(name, hex_color or self.pickers["draft"])
        if color is not None:
            self._notify("color_created")
        return color

    def on_add_colors(self, colors: Iterable[Union[Color, dict]]) -> List[Color]:
        """Generator produced a batch of fully formed colors."""
        batch = self.colors.add_generated(colors)
        self._notify("colors_generated")
        return batch

    # ------------------------------------------------------------------
    # Card widget
    # ------------------------------------------------------------------

    def on_toggle_favorite(self, color_id: str) -> bool:
        changed = self.colors.toggle_favorite(color_id)
        if changed:
            self._notify("favorite_toggled")
        return changed

    def on_delete(self, color_id: str) -> bool:
        changed = self.colors.delete(color_id)
        if changed:
            self._notify("color_deleted")
        return changed

    def on_rename(self, color_id: str, name: str) -> bool:
        changed = self.colors.rename(color_id, name)
        if changed:
            self._notify("color_renamed")
        return changed

    def clear_all(self):
        """Delete every saved color. Ask the user before calling this."""
        self.colors.clear_all()
        self._notify("colors_cleared")

    # ------------------------------------------------------------------
    # Combination history rows
    # ------------------------------------------------------------------

    def combine(self, hex_a: Optional[str] = None, hex_b: Optional[str] = None) -> str:
        """Blend two colors; omitted inputs come from the combination pickers."""
        result = self.combinations.combine(hex_a or self.pickers["color1"], hex_b or self.pickers["color2"])
        self._notify("combined")
        return result

    @property
    def history(self) -> List[CombinationRecord]:
        return self.combinations.history

    def on_start_edit(self, position: int) -> str:
        return self.combinations.start_edit(position)

    def on_save_name(self, position: int, name: str) -> bool:
        changed = self.combinations.rename_entry(position, name)
        if changed:
            self._notify("combination_renamed")
        return changed

    def on_delete_entry(self, position: int) -> bool:
        changed = self.combinations.delete_entry(position)
        if changed:
            self._notify("combination_deleted")
        return changed

    # ------------------------------------------------------------------
    # Import / export
    # ------------------------------------------------------------------

    def export_document(self) -> str:
        return export_document(self.colors.colors, self.palettes.palettes, indent=self.config.EXPORT_INDENT)

    def import_document(self, raw_text: Union[str, bytes]) -> Union[ImportResult, ParseFailure]:
        """Apply an exported document. On failure nothing changes."""
        result = import_document(raw_text, self.colors, self.palettes)
        if isinstance(result, ImportResult):
            self._notify("imported")
        return result
