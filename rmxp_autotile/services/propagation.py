"""
Paint and erase with 3x3 neighbor propagation.

Placing or removing one autotile changes the neighbor mask of each of the
eight surrounding cells, so after writing the edited cell every neighbor
is re-resolved from its own content. A variant only ever depends on its
immediate neighbors, so nothing beyond the 3x3 block can change.

All writes of one pass go through a single LayerEdit. Everything that can
fail is checked before the first write.
"""

import logging
from dataclasses import dataclass
from typing import List, Optional, Tuple

from ..models.tileset import Tile, Tileset
from .errors import UnresolvedTileError
from .group_classifier import GroupKey, ensure_group_capacity, resolve_group_for_brush
from .tile_resolver import resolve_cell, resolve_tile

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BrushSettings:
    """Options passed into each paint/erase pass."""
    # When False only the edited cell is written; neighbors keep their tiles
    update_neighbors: bool = True


DEFAULT_SETTINGS = BrushSettings()


def neighborhood(x: int, y: int, include_center: bool = True) -> List[Tuple[int, int]]:
    """Get the cells of the 3x3 block centered on (x, y), row by row."""
    cells = []
    for dy in (-1, 0, 1):
        for dx in (-1, 0, 1):
            if dx == 0 and dy == 0 and not include_center:
                continue
            cells.append((x + dx, y + dy))
    return cells


def _update_neighbors(edit, x: int, y: int,
                      group_key: Optional[GroupKey] = None) -> List[Tuple[int, int]]:
    """Re-resolve the 8 neighbors of (x, y), preferring group_key for its own tiles."""
    written = []
    for nx, ny in neighborhood(x, y, include_center=False):
        resolved = resolve_cell(edit, nx, ny, group_key)
        if resolved is None:
            continue
        tile, flags = resolved
        edit.set_tile(nx, ny, tile, flags)
        written.append((nx, ny))
    return written


def paint(edit, x: int, y: int, group_key: GroupKey,
          tileset: Optional[Tileset] = None,
          settings: BrushSettings = DEFAULT_SETTINGS) -> List[Tuple[int, int]]:
    """
    Paint one autotile and refresh its neighbors.

    Args:
        edit: The pending edit to read from and write through.
        x, y: Cell to paint.
        group_key: Group of the tile being painted.
        tileset: Tileset the variants come from. Defaults to the group's tileset.
        settings: Brush options.

    Returns:
        Cells written, edited cell first.

    Raises:
        UndersizedTilesetError: The tileset has no full group at the start id.
        UnresolvedTileError: The resolved variant tile cannot be fetched.
    """
    if tileset is None:
        tileset = group_key.tileset

    ensure_group_capacity(tileset, group_key.start_id)

    tile = resolve_tile(edit, x, y, group_key, tileset)
    if tile is None:
        raise UnresolvedTileError(group_key.start_id, tileset.name, tileset.tile_count, tileset.file_name)

    edit.set_tile(x, y, tile, edit.flags_at(x, y))
    written = [(x, y)]

    if settings.update_neighbors:
        written.extend(_update_neighbors(edit, x, y, group_key))

    logger.debug("Painted tile %s at (%s, %s), %d cells written", tile.id, x, y, len(written))
    return written


def erase(edit, x: int, y: int, settings: BrushSettings = DEFAULT_SETTINGS,
          group_key: Optional[GroupKey] = None) -> List[Tuple[int, int]]:
    """
    Clear one cell and refresh its neighbors.

    Neighbors holding tiles of group_key (usually the brush's group) are
    re-resolved against it; all others use their own 48-aligned block.

    Returns:
        Cells written, edited cell first.
    """
    edit.set_tile(x, y, None)
    written = [(x, y)]

    if settings.update_neighbors:
        written.extend(_update_neighbors(edit, x, y, group_key))

    return written


def paint_with_brush(layer, document, x: int, y: int, brush_tile: Tile,
                     settings: BrushSettings = DEFAULT_SETTINGS) -> List[Tuple[int, int]]:
    """
    Paint with a brush tile on a layer as one applied edit.

    The brush tile's group (its own block, or the one its source mapping
    points at) is resolved first. Nothing is written if that fails.
    """
    tileset, group_key = resolve_group_for_brush(brush_tile, document)

    with layer.edit() as edit:
        return paint(edit, x, y, group_key, tileset, settings)


def erase_on_layer(layer, x: int, y: int,
                   settings: BrushSettings = DEFAULT_SETTINGS,
                   group_key: Optional[GroupKey] = None) -> List[Tuple[int, int]]:
    """Erase a cell on a layer as one applied edit."""
    with layer.edit() as edit:
        return erase(edit, x, y, settings, group_key)
