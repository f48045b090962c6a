"""
Tile resolution: choose the concrete variant tile for a cell.

The variant is picked from the cell's neighbor mask and added to the
group's start id to get the local tile id inside the group's tileset.
"""

from typing import Optional, Tuple

from ..models.neighbor_table import variant_for
from ..models.tileset import Tile, Tileset
from .group_classifier import GroupKey, belongs_to_group, group_key_of
from .mask_computer import compute_neighbor_mask, safe_tile_at


def tile_for_mask(tileset: Tileset, start_id: int, mask: int) -> Optional[Tile]:
    """Get the variant tile for a mask in the group starting at start_id."""
    return tileset.tile(start_id + variant_for(mask))


def resolve_tile(grid, x: int, y: int, group_key: GroupKey,
                 tileset: Optional[Tileset] = None) -> Optional[Tile]:
    """
    Resolve the tile of the given group to display at (x, y).

    Args:
        grid: Anything with tile_at(x, y) (a layer or a pending edit).
        x, y: Cell position.
        group_key: The group the cell belongs to.
        tileset: Tileset to fetch the variant from. Defaults to the group's tileset.

    Returns:
        The variant tile, or None if the tileset does not contain it.
    """
    if tileset is None:
        tileset = group_key.tileset
    mask = compute_neighbor_mask(grid, x, y, group_key)
    return tile_for_mask(tileset, group_key.start_id, mask)


def resolve_cell(grid, x: int, y: int,
                 group_key: Optional[GroupKey] = None) -> Optional[Tuple[Tile, int]]:
    """
    Re-resolve an existing cell from its own content.

    If the cell holds a tile of group_key, that group is used, so tiles of
    a mapped group with an unaligned start id stay inside it. Otherwise the
    cell's group is the 48-aligned block of the tile it holds. Empty cells
    and tiles whose block does not fit in their tileset (plain tiles placed
    after the autotile groups) are left alone.

    Returns:
        (tile, flags) to write back, or None if the cell should not change.
    """
    current = safe_tile_at(grid, x, y)
    if group_key is not None and belongs_to_group(current, group_key):
        key = group_key
    else:
        key = group_key_of(current)
    if key is None:
        return None

    if key.tileset.tile_count < key.end_id:
        return None

    tile = resolve_tile(grid, x, y, key)
    if tile is None:
        return None

    flags = grid.flags_at(x, y) if hasattr(grid, "flags_at") else 0
    return tile, flags
