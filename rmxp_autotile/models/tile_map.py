"""
Minimal tile map document: tile layers, scoped edits and attached tilesets.

This is the grid store the autotile brush reads from and writes to. Reads
are tolerant of out-of-range coordinates. All writes go through a LayerEdit
which collects them and applies them to the layer in one step.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntFlag
from typing import Dict, List, Optional, Tuple

from .tileset import Tile, Tileset


class CellFlags(IntFlag):
    """Flip and rotation flags stored with a cell."""
    NONE = 0
    FLIPPED_HORIZONTALLY = 0x01
    FLIPPED_VERTICALLY = 0x02
    FLIPPED_ANTI_DIAGONALLY = 0x04
    ROTATED_HEXAGONAL_120 = 0x08


@dataclass(frozen=True)
class Cell:
    """A non-empty cell: the tile placed there plus its flags."""
    tile: Tile
    flags: int = 0


class TileLayer:
    """A fixed-size grid of cells."""

    is_tile_layer = True

    def __init__(self, name: str, width: int, height: int):
        self.name = name
        self.width = width
        self.height = height
        self._cells: Dict[Tuple[int, int], Cell] = {}

    def contains(self, x: int, y: int) -> bool:
        """Check if a position lies inside the layer."""
        return 0 <= x < self.width and 0 <= y < self.height

    def cell_at(self, x: int, y: int) -> Optional[Cell]:
        """Get the cell at a position, or None if empty or out of range."""
        return self._cells.get((x, y))

    def tile_at(self, x: int, y: int) -> Optional[Tile]:
        """Get the tile at a position, or None if empty or out of range."""
        cell = self._cells.get((x, y))
        return cell.tile if cell else None

    def flags_at(self, x: int, y: int) -> int:
        """Get the flags at a position (0 if empty or out of range)."""
        cell = self._cells.get((x, y))
        return cell.flags if cell else 0

    def cells(self) -> Dict[Tuple[int, int], Cell]:
        """Get a snapshot of all non-empty cells keyed by (x, y)."""
        return dict(self._cells)

    def edit(self) -> "LayerEdit":
        """Start a scoped edit on this layer."""
        return LayerEdit(self)

    def _store(self, x: int, y: int, cell: Optional[Cell]):
        if not self.contains(x, y):
            return
        if cell is None:
            self._cells.pop((x, y), None)
        else:
            self._cells[(x, y)] = cell


class LayerEdit:
    """
    A pending set of writes to a TileLayer.

    Reads through the edit see the pending writes layered over the current
    layer contents. Nothing reaches the layer until apply() is called.
    Used as a context manager, the edit is applied on a clean exit and
    discarded if an exception escapes.
    """

    def __init__(self, layer: TileLayer):
        self.layer = layer
        self._pending: Dict[Tuple[int, int], Optional[Cell]] = {}
        self._closed = False

    def __enter__(self) -> "LayerEdit":
        return self

    def __exit__(self, exc_type, exc, tb):
        if exc_type is None:
            self.apply()
        else:
            self.discard()
        return False

    @property
    def pending(self) -> Dict[Tuple[int, int], Optional[Cell]]:
        """Pending writes keyed by (x, y); None marks a cleared cell."""
        return dict(self._pending)

    def set_tile(self, x: int, y: int, tile: Optional[Tile], flags: int = 0):
        """Set (or with tile=None, clear) a cell. Out-of-range writes are ignored."""
        if self._closed:
            raise RuntimeError("Edit has already been applied or discarded")
        if not self.layer.contains(x, y):
            return
        self._pending[(x, y)] = Cell(tile, int(flags)) if tile is not None else None

    def cell_at(self, x: int, y: int) -> Optional[Cell]:
        if (x, y) in self._pending:
            return self._pending[(x, y)]
        return self.layer.cell_at(x, y)

    def tile_at(self, x: int, y: int) -> Optional[Tile]:
        cell = self.cell_at(x, y)
        return cell.tile if cell else None

    def flags_at(self, x: int, y: int) -> int:
        cell = self.cell_at(x, y)
        return cell.flags if cell else 0

    def apply(self):
        """Commit all pending writes to the layer."""
        if self._closed:
            return
        for (x, y), cell in self._pending.items():
            self.layer._store(x, y, cell)
        self._pending.clear()
        self._closed = True

    def discard(self):
        """Drop all pending writes."""
        self._pending.clear()
        self._closed = True


class ObjectLayer:
    """A non-tile layer. The brush never paints on it."""

    is_tile_layer = False

    def __init__(self, name: str):
        self.name = name


@dataclass
class TileMap:
    """A map document: its layers and the tilesets attached to it."""
    width: int
    height: int
    tilesets: List[Tileset] = field(default_factory=list)
    layers: list = field(default_factory=list)
    current_layer: Optional[object] = None

    is_tile_map = True

    def add_tileset(self, tileset: Tileset) -> Tileset:
        """Attach a tileset to the map (no-op if already attached)."""
        if not any(ts is tileset for ts in self.tilesets):
            self.tilesets.append(tileset)
        return tileset

    def add_tile_layer(self, name: str) -> TileLayer:
        """Add a tile layer sized to the map and make it current."""
        layer = TileLayer(name, self.width, self.height)
        self.layers.append(layer)
        self.current_layer = layer
        return layer
