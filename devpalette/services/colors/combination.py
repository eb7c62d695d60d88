"""
Combination Engine Module

Blends two colors by averaging each RGB channel and keeps an editable,
deletable history of past blends, newest first.

History entries are addressed by position, which shifts on every insert
and delete; callers must resolve a position right before using it. Each
record also carries a stable id, and the *_by_id methods address records
through it instead.
"""

from datetime import datetime
from typing import Callable, List, Optional

from loguru import logger

from devpalette.schemas import CombinationRecord
from devpalette.services.colors.color_math import hex_to_rgb, rgb_to_hex
from devpalette.utils.ids import generate_clock_id, utc_now
from devpalette.utils.metrics import get_metrics


def average_channel(a: int, b: int) -> int:
    """Mean of two 8-bit channels, halves rounded up."""
    return (a + b + 1) // 2


def blend_hex(hex_a: str, hex_b: str) -> str:
    """
    Channel-average two hex colors.

    Args:
        hex_a: First color, RRGGBB or #RRGGBB
        hex_b: Second color, RRGGBB or #RRGGBB

    Returns:
        Blended hex color in format #RRGGBB (uppercase)
    """
    rgb_a = hex_to_rgb(hex_a)
    rgb_b = hex_to_rgb(hex_b)
    return rgb_to_hex(
        average_channel(rgb_a["r"], rgb_b["r"]),
        average_channel(rgb_a["g"], rgb_b["g"]),
        average_channel(rgb_a["b"], rgb_b["b"]),
    )


class CombinationEngine:
    """Session-only combination history. Never persisted, never pruned."""

    def __init__(self, clock: Callable[[], datetime] = utc_now):
        self._clock = clock
        self._history: List[CombinationRecord] = []
        self.last_result: Optional[str] = None

    @property
    def history(self) -> List[CombinationRecord]:
        """Snapshot of the history, newest first."""
        return [record.model_copy() for record in self._history]

    def __len__(self) -> int:
        return len(self._history)

    def _next_id(self) -> str:
        # Suffix ids minted within the same millisecond so by-id lookups stay unambiguous
        base = generate_clock_id(self._clock())
        taken = {record.id for record in self._history}
        candidate, n = base, 1
        while candidate in taken:
            candidate = f"{base}-{n}"
            n += 1
        return candidate

    def combine(self, hex_a: str, hex_b: str) -> str:
        """Blend two colors, record the blend at position 0 and return the result."""
        result = blend_hex(hex_a, hex_b)
        record = CombinationRecord(
            id=self._next_id(),
            color1=hex_a,
            color2=hex_b,
            result=result,
            name="",
        )
        self._history.insert(0, record)
        self.last_result = result
        get_metrics().increment("combinations_total")
        logger.debug(f"Combined {hex_a} + {hex_b} -> {result}")
        return result

    def _in_range(self, position: int) -> bool:
        return 0 <= position < len(self._history)

    def start_edit(self, position: int) -> str:
        """Current name at position, for pre-filling an editor."""
        if not self._in_range(position):
            return ""
        return self._history[position].name

    def rename_entry(self, position: int, new_name: str) -> bool:
        """Set the name of the record currently at position."""
        if not self._in_range(position):
            logger.debug(f"Rename on history position {position} out of range")
            return False
        self._history[position].name = new_name
        return True

    def delete_entry(self, position: int) -> bool:
        """Remove the record currently at position."""
        if not self._in_range(position):
            logger.debug(f"Delete on history position {position} out of range")
            return False
        del self._history[position]
        return True

    def position_of(self, record_id: str) -> Optional[int]:
        """Current position of the record with this id."""
        for i, record in enumerate(self._history):
            if record.id == record_id:
                return i
        return None

    def rename_by_id(self, record_id: str, new_name: str) -> bool:
        position = self.position_of(record_id)
        if position is None:
            return False
        return self.rename_entry(position, new_name)

    def delete_by_id(self, record_id: str) -> bool:
        position = self.position_of(record_id)
        if position is None:
            return False
        return self.delete_entry(position)
