"""Neighbor mask computation over the 8-connected Moore neighborhood."""

from typing import Optional

from ..models.neighbor_table import Neighbor, NEIGHBOR_OFFSETS
from ..models.tileset import Tile
from .group_classifier import GroupKey, belongs_to_group


def safe_tile_at(grid, x: int, y: int) -> Optional[Tile]:
    """Read a tile from the grid, treating any read failure as an empty cell."""
    try:
        return grid.tile_at(x, y)
    except Exception:
        return None


def neighbors_in_group(grid, x: int, y: int, group_key: GroupKey) -> Neighbor:
    """
    Get which of the 8 neighbors of (x, y) belong to the group.

    Off-grid and unreadable neighbors count as empty.
    """
    mask = Neighbor.NONE
    for direction, dx, dy in NEIGHBOR_OFFSETS:
        if belongs_to_group(safe_tile_at(grid, x + dx, y + dy), group_key):
            mask |= direction
    return mask


def compute_neighbor_mask(grid, x: int, y: int, group_key: GroupKey) -> int:
    """Get the 8-bit neighbor mask of (x, y) for the group."""
    return int(neighbors_in_group(grid, x, y, group_key))
