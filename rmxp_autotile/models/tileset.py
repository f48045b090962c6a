"""
Tileset and tile models as seen by the autotile brush.

A Tileset is identified by its file path (or an embedded marker when it
has none) and hands out Tile objects by local id. Tiles carry the named
per-tile properties used to mark autotile key tiles.
"""

from dataclasses import dataclass, field
from pathlib import PureWindowsPath
from typing import Any, Dict, Optional


@dataclass(eq=False)
class Tile:
    """
    A single tile definition inside a tileset.

    Tiles compare by identity: two Tile objects are the same tile only if
    they are the same object handed out by their tileset.
    """
    tileset: Optional["Tileset"]
    id: int

    # Named custom properties (per-tile metadata)
    properties: Dict[str, Any] = field(default_factory=dict, repr=False)
    class_name: str = ""

    def property(self, name: str) -> Any:
        """Get a custom property value, or None if it is not set."""
        return self.properties.get(name)

    def set_property(self, name: str, value: Any):
        """Set a custom property value."""
        self.properties[name] = value

    def remove_property(self, name: str):
        """Remove a custom property if present."""
        self.properties.pop(name, None)


@dataclass(eq=False)
class Tileset:
    """
    A tileset holding tile_count tiles with local ids 0..tile_count-1.

    Tile objects are created on first access and cached, so repeated
    lookups of the same id return the same object.
    """
    name: str
    file_name: str = ""
    tile_count: int = 0

    _tiles: Dict[int, Tile] = field(default_factory=dict, repr=False)

    is_tileset = True

    @classmethod
    def from_count(cls, name: str, tile_count: int, file_name: str = "") -> "Tileset":
        """Create a tileset with the given number of tiles."""
        return cls(name=name, file_name=file_name, tile_count=tile_count)

    @property
    def identity(self) -> str:
        """File path of the tileset, or an embedded marker if it has none."""
        return self.file_name or f"<embedded:{self.name}>"

    @property
    def file_basename(self) -> str:
        """Just the filename part of file_name (handles / and \\ separators)."""
        if not self.file_name:
            return ""
        return PureWindowsPath(self.file_name).name

    def tile(self, local_id: int) -> Optional[Tile]:
        """
        Get the tile with the given local id.

        Returns:
            The Tile, or None if the id is outside 0..tile_count-1.
        """
        if not isinstance(local_id, int) or not 0 <= local_id < self.tile_count:
            return None
        tile = self._tiles.get(local_id)
        if tile is None:
            tile = Tile(tileset=self, id=local_id)
            self._tiles[local_id] = tile
        return tile
