"""
DevPalette Import / Export

Serializes the saved state (colors + palettes) to a single JSON document
and applies such a document back. A document that cannot be parsed or
validated is rejected as a whole; nothing is applied.
"""
import json
from dataclasses import dataclass
from typing import Any, List, Optional, Sequence, Union

from pydantic import ValidationError

from devpalette.schemas import Color, PaletteDocument
from devpalette.services.store import ColorStore, PaletteStore
from devpalette.utils.logging import get_logger
from devpalette.utils.metrics import get_metrics

logger = get_logger("import_export")

MALFORMED_DOCUMENT = "MalformedDocument"


@dataclass
class ValidDocument:
    """A parsed document. None means the field was absent."""
    colors: Optional[List[Color]]
    palettes: Optional[List[Any]]


@dataclass
class ParseFailure:
    """Import rejected; no state was touched."""
    detail: str
    reason: str = MALFORMED_DOCUMENT


@dataclass
class ImportResult:
    """What a successful import replaced."""
    colors_replaced: bool
    palettes_replaced: bool


def build_document(colors: Sequence[Color], palettes: Sequence[Any]) -> dict:
    """Document dict with the full color and palette collections."""
    return {
        "colors": [c.to_document() for c in colors],
        "palettes": list(palettes),
    }


def export_document(colors: Sequence[Color], palettes: Sequence[Any], indent: Optional[int] = 2) -> str:
    """
    Serialize colors and palettes to JSON text.

    Args:
        colors: Color collection in store order
        palettes: Opaque palette collection
        indent: JSON indentation; None for compact output

    Returns:
        JSON document text
    """
    return json.dumps(build_document(colors, palettes), indent=indent)


def parse_document(raw_text: Union[str, bytes]) -> Union[ValidDocument, ParseFailure]:
    """
    Parse and validate an import document.

    Unknown top-level fields are ignored. Invalid JSON, a top level that
    is not an object, and a colors field that fails validation all fail
    the whole document.
    """
    try:
        data = json.loads(raw_text)
    except (json.JSONDecodeError, UnicodeDecodeError, TypeError) as e:
        return ParseFailure(detail=f"Invalid JSON: {e}")

    if not isinstance(data, dict):
        return ParseFailure(detail=f"Document must be a JSON object, got {type(data).__name__}")

    try:
        document = PaletteDocument.model_validate(data)
    except ValidationError as e:
        return ParseFailure(detail=f"Document failed validation with {e.error_count()} error(s)")

    return ValidDocument(colors=document.colors, palettes=document.palettes)


def apply_document(document: ValidDocument, color_store: ColorStore, palette_store: PaletteStore) -> ImportResult:
    """Replace each collection the document carries; leave the others alone."""
    colors_replaced = document.colors is not None
    palettes_replaced = document.palettes is not None

    if colors_replaced:
        color_store.replace_all(document.colors)
    if palettes_replaced:
        palette_store.replace_all(document.palettes)

    return ImportResult(colors_replaced=colors_replaced, palettes_replaced=palettes_replaced)


def import_document(raw_text: Union[str, bytes], color_store: ColorStore,
                    palette_store: PaletteStore) -> Union[ImportResult, ParseFailure]:
    """Parse raw text and apply it, or report why it was rejected."""
    get_metrics().increment("imports_total")
    with get_metrics().timed("import_parse"):
        parsed = parse_document(raw_text)

    if isinstance(parsed, ParseFailure):
        get_metrics().increment("imports_failed_total")
        logger.error("Error importing colors", {"reason": parsed.reason, "detail": parsed.detail})
        return parsed

    result = apply_document(parsed, color_store, palette_store)
    logger.info("Imported document", {
        "colors_replaced": result.colors_replaced,
        "palettes_replaced": result.palettes_replaced,
        "color_count": len(color_store),
        "palette_count": len(palette_store),
    })
    return result
