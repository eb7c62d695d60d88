"""
DevPalette v1 API Routes
Local HTTP adapter the browser front end uses to drive the workspace.
"""
from typing import List, Optional
from fastapi import APIRouter, Depends, HTTPException, Query, Request
from fastapi.responses import Response

from devpalette.config import config
from devpalette.schemas import (
    Color, CombinationRecord, CombineRequest, CreateColorRequest, CreateColorResponse,
    ImportResponse, PickerChangeRequest, RenameRequest
)
from devpalette.services.colors.filtering import filter_colors
from devpalette.services.import_export import ParseFailure
from devpalette.services.workspace import Workspace

router = APIRouter(prefix="/v1", tags=["DevPalette"])

_workspace: Optional[Workspace] = None


def get_workspace() -> Workspace:
    """Get or create the process-wide workspace."""
    global _workspace
    if _workspace is None:
        _workspace = Workspace.from_config(config)
    return _workspace


# ============================================================================
# COLORS
# ============================================================================

@router.get("/colors", response_model=List[Color])
def list_colors(
    search: str = Query("", description="Substring of name or hex"),
    favorites_only: bool = Query(False, description="Only favorite colors"),
    workspace: Workspace = Depends(get_workspace)
):
    """Saved colors, newest first, filtered."""
    return filter_colors(workspace.colors.colors, search, favorites_only)


@router.post("/colors", response_model=CreateColorResponse)
def create_color(body: CreateColorRequest, workspace: Workspace = Depends(get_workspace)):
    """Add a named color. Blank names are ignored."""
    color = workspace.add_color(body.name, body.hex)
    return CreateColorResponse(created=color is not None, color=color)


@router.post("/colors/generated", response_model=List[Color])
def add_generated_colors(colors: List[Color], workspace: Workspace = Depends(get_workspace)):
    """Store a batch produced by the palette generator."""
    return workspace.on_add_colors(colors)


@router.post("/colors/{color_id}/favorite", response_model=Color)
def toggle_favorite(color_id: str, workspace: Workspace = Depends(get_workspace)):
    if not workspace.on_toggle_favorite(color_id):
        raise HTTPException(status_code=404, detail="Color not found")
    return workspace.colors.get(color_id)


@router.patch("/colors/{color_id}", response_model=Color)
def rename_color(color_id: str, body: RenameRequest, workspace: Workspace = Depends(get_workspace)):
    if not workspace.on_rename(color_id, body.name):
        raise HTTPException(status_code=404, detail="Color not found")
    return workspace.colors.get(color_id)


@router.delete("/colors/{color_id}", status_code=204)
def delete_color(color_id: str, workspace: Workspace = Depends(get_workspace)):
    if not workspace.on_delete(color_id):
        raise HTTPException(status_code=404, detail="Color not found")
    return Response(status_code=204)


@router.delete("/colors", status_code=204)
def clear_colors(
    confirm: bool = Query(False, description="Must be true; this cannot be undone"),
    workspace: Workspace = Depends(get_workspace)
):
    """Delete every saved color."""
    if not confirm:
        raise HTTPException(status_code=400, detail="Clearing all colors requires confirm=true")
    workspace.clear_all()
    return Response(status_code=204)


@router.put("/picker")
def change_picker(body: PickerChangeRequest, workspace: Workspace = Depends(get_workspace)):
    """Picker widget value change."""
    workspace.on_change(body.hex, body.target)
    return workspace.pickers


# ============================================================================
# COMBINATIONS
# ============================================================================

@router.get("/combinations", response_model=List[CombinationRecord])
def list_combinations(workspace: Workspace = Depends(get_workspace)):
    """Combination history, newest first."""
    return workspace.history


@router.post("/combinations", response_model=CombinationRecord)
def combine_colors(body: CombineRequest, workspace: Workspace = Depends(get_workspace)):
    workspace.combine(body.color1, body.color2)
    return workspace.history[0]


@router.patch("/combinations/by-id/{record_id}", response_model=CombinationRecord)
def rename_combination_by_id(record_id: str, body: RenameRequest, workspace: Workspace = Depends(get_workspace)):
    if not workspace.combinations.rename_by_id(record_id, body.name):
        raise HTTPException(status_code=404, detail="Combination not found")
    return workspace.history[workspace.combinations.position_of(record_id)]


@router.delete("/combinations/by-id/{record_id}", status_code=204)
def delete_combination_by_id(record_id: str, workspace: Workspace = Depends(get_workspace)):
    if not workspace.combinations.delete_by_id(record_id):
        raise HTTPException(status_code=404, detail="Combination not found")
    return Response(status_code=204)


@router.patch("/combinations/{position}", response_model=CombinationRecord)
def rename_combination(position: int, body: RenameRequest, workspace: Workspace = Depends(get_workspace)):
    if not workspace.on_save_name(position, body.name):
        raise HTTPException(status_code=404, detail="No combination at this position")
    return workspace.history[position]


@router.delete("/combinations/{position}", status_code=204)
def delete_combination(position: int, workspace: Workspace = Depends(get_workspace)):
    if not workspace.on_delete_entry(position):
        raise HTTPException(status_code=404, detail="No combination at this position")
    return Response(status_code=204)


# ============================================================================
# IMPORT / EXPORT
# ============================================================================

@router.get("/export")
def export_colors(workspace: Workspace = Depends(get_workspace)):
    """Download colors and palettes as one JSON document."""
    return Response(
        content=workspace.export_document(),
        media_type="application/json",
        headers={"Content-Disposition": f'attachment; filename="{config.EXPORT_FILENAME}"'}
    )


@router.post("/import", response_model=ImportResponse)
async def import_colors(request: Request, workspace: Workspace = Depends(get_workspace)):
    """Replace colors and/or palettes from an exported document."""
    raw = await request.body()
    result = workspace.import_document(raw)
    if isinstance(result, ParseFailure):
        raise HTTPException(status_code=400, detail=f"{result.reason}: {result.detail}")
    return ImportResponse(
        colors_replaced=result.colors_replaced,
        palettes_replaced=result.palettes_replaced,
        color_count=len(workspace.colors),
        palette_count=len(workspace.palettes)
    )
