"""
DevPalette Schemas
Pydantic models for saved colors, combination records, the import/export
document and the local HTTP adapter.
"""
from datetime import datetime
from typing import Any, List, Optional, Union
from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError, field_validator

from devpalette.utils.ids import iso_timestamp

HEX_FIELD_PATTERN = r"^#[0-9A-Fa-f]{6}$"
HEX_INPUT_PATTERN = r"^#?[0-9A-Fa-f]{6}$"

_timestamp = TypeAdapter(datetime)


class RGB(BaseModel):
    """8-bit RGB channels."""
    r: int = Field(..., ge=0, le=255, description="Red channel")
    g: int = Field(..., ge=0, le=255, description="Green channel")
    b: int = Field(..., ge=0, le=255, description="Blue channel")


class HSL(BaseModel):
    """HSL representation derived from RGB at creation time."""
    h: Union[int, float] = Field(..., description="Hue in degrees [0, 360)")
    s: Union[int, float] = Field(..., description="Saturation fraction [0, 1]")
    l: Union[int, float] = Field(..., description="Lightness fraction [0, 1]")


class Color(BaseModel):
    """
    A saved swatch.

    Imported values are kept as given: integer HSL stays integer, epoch or
    ISO createdAt keeps its form, and unknown per-color fields are carried
    through to the next export.
    """
    model_config = ConfigDict(populate_by_name=True, extra="allow")

    id: str = Field(..., description="Opaque id assigned at creation")
    name: str = Field(..., description="Display name, may repeat across colors")
    hex: str = Field(..., pattern=HEX_FIELD_PATTERN, description="Hex color code in format #RRGGBB")
    rgb: RGB = Field(..., description="Channels captured at creation")
    hsl: HSL = Field(..., description="HSL captured at creation")
    is_favorite: bool = Field(False, alias="isFavorite", description="Favorite flag")
    created_at: Union[int, float, str] = Field(
        ...,
        alias="createdAt",
        description="Creation time, ISO-8601 text or epoch milliseconds"
    )

    @field_validator("created_at", mode="before")
    @classmethod
    def validate_created_at(cls, value):
        if isinstance(value, datetime):
            return iso_timestamp(value)
        if isinstance(value, bool):
            raise ValueError("createdAt must be a timestamp")
        if isinstance(value, str):
            try:
                _timestamp.validate_python(value)
            except ValidationError:
                raise ValueError(f"createdAt is not an ISO-8601 timestamp: {value!r}")
        return value

    def to_document(self) -> dict:
        """JSON-ready dict using document field names."""
        return self.model_dump(mode="json", by_alias=True)


class CombinationRecord(BaseModel):
    """One entry of the combination history."""
    id: str = Field(..., description="Stable id, same clock scheme as Color")
    color1: str = Field(..., description="First input hex")
    color2: str = Field(..., description="Second input hex")
    result: str = Field(..., pattern=HEX_FIELD_PATTERN, description="Channel-averaged hex")
    name: str = Field("", description="User label, empty until named")


class PaletteDocument(BaseModel):
    """Top-level import/export document. Unknown fields are ignored."""
    model_config = ConfigDict(extra="ignore")

    colors: Optional[List[Color]] = Field(None, description="Full color collection")
    palettes: Optional[List[Any]] = Field(None, description="Opaque palette collection")


# ============================================================================
# HTTP ADAPTER SCHEMAS
# ============================================================================

class CreateColorRequest(BaseModel):
    """Add a named color."""
    name: str = Field(..., description="Display name; blank names are ignored")
    hex: Optional[str] = Field(
        None,
        pattern=HEX_INPUT_PATTERN,
        description="Color as #RRGGBB; defaults to the picker's current value"
    )


class CreateColorResponse(BaseModel):
    """Result of an add-color request."""
    created: bool = Field(..., description="False when the name was blank")
    color: Optional[Color] = Field(None, description="The new color when created")


class RenameRequest(BaseModel):
    """Rename a color or a combination record."""
    name: str = Field(..., description="New name, may be empty")


class PickerChangeRequest(BaseModel):
    """Picker widget value change."""
    hex: str = Field(..., pattern=HEX_INPUT_PATTERN, description="New picker value")
    target: str = Field("draft", pattern="^(draft|color1|color2)$", description="Picker being changed")


class CombineRequest(BaseModel):
    """Blend two colors; omitted inputs use the combination pickers."""
    color1: Optional[str] = Field(None, pattern=HEX_INPUT_PATTERN, description="First color")
    color2: Optional[str] = Field(None, pattern=HEX_INPUT_PATTERN, description="Second color")


class ImportResponse(BaseModel):
    """Outcome of a successful import."""
    colors_replaced: bool = Field(..., description="Whether the color collection was replaced")
    palettes_replaced: bool = Field(..., description="Whether the palette collection was replaced")
    color_count: int = Field(..., description="Colors held after import")
    palette_count: int = Field(..., description="Palettes held after import")


class HealthResponse(BaseModel):
    """Health check response."""
    ok: bool = Field(True, description="Service health status")
    version: str = Field(..., description="Service version")
    service: str = Field("devpalette", description="Service name")
    storage_backend: str = Field(..., description="Configured persistence backend")
