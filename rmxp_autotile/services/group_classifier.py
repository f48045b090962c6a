"""
Autotile group classification.

An autotile group is a block of 48 consecutive tile ids in one tileset,
identified by a GroupKey. By default a tile's group is the 48-aligned block
its id falls in. A key tile can instead point at a group stored in another
tileset through its rpgxp.* properties (a source mapping).
"""

import logging
import math
from dataclasses import dataclass
from pathlib import PureWindowsPath
from typing import Any, Optional, Tuple, Union

from ..models.tileset import Tile, Tileset
from ..utils.constants import (
    TILES_PER_AUTOTILE,
    PROP_AUTOTILE_KEY,
    PROP_SOURCE_TILESET,
    PROP_SOURCE_BASENAME,
    PROP_START_ID,
    KEY_TILE_CLASS_NAME,
)
from .errors import MissingTilesetError, UndersizedTilesetError, UnresolvedTileError

logger = logging.getLogger(__name__)


@dataclass(frozen=True, eq=False)
class GroupKey:
    """
    Identifies one autotile group: a tileset and the first id of its block.

    Tilesets compare by identity, so two keys are equal only when they
    refer to the same tileset object and the same start id.
    """
    tileset: Tileset
    start_id: int

    @property
    def end_id(self) -> int:
        """One past the last local id of the group."""
        return self.start_id + TILES_PER_AUTOTILE

    def contains(self, tile_id: int) -> bool:
        return self.start_id <= tile_id < self.end_id

    def __eq__(self, other):
        if not isinstance(other, GroupKey):
            return NotImplemented
        return self.tileset is other.tileset and self.start_id == other.start_id

    def __hash__(self):
        return hash((id(self.tileset), self.start_id))


def group_start_of(tile_id: int) -> int:
    """Get the first id of the 48-aligned block containing tile_id."""
    return (tile_id // TILES_PER_AUTOTILE) * TILES_PER_AUTOTILE


def group_key_of(tile: Optional[Tile]) -> Optional[GroupKey]:
    """Get the default group key of a tile, or None for an empty cell."""
    if tile is None or tile.tileset is None:
        return None
    return GroupKey(tile.tileset, group_start_of(tile.id))


def belongs_to_group(tile: Optional[Tile], key: GroupKey) -> bool:
    """Check if a tile is one of the 48 variants of the given group."""
    if tile is None or tile.tileset is None:
        return False
    if tile.tileset is not key.tileset:
        return False
    return key.contains(tile.id)


# Source mapping

@dataclass(frozen=True)
class AutotileSource:
    """Where a key tile's 48 variants actually live."""
    tileset_path: str
    basename: Optional[str] = None
    start_id: int = 0


def coerce_start_id(value: Any) -> int:
    """
    Convert a stored startId property to a usable start id.

    Missing, empty, non-numeric, non-finite and negative values fall back
    to 0. Fractional values are truncated.
    """
    if value is None or value == "" or isinstance(value, bool):
        return 0
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0
    if not math.isfinite(number) or number < 0:
        return 0
    return int(number)


def resolve_source_mapping(tile: Optional[Tile]) -> Optional[AutotileSource]:
    """
    Read the source mapping attached to a key tile.

    Returns:
        AutotileSource, or None if the tile is not marked as an autotile key
        or has no usable source tileset path.
    """
    if tile is None:
        return None
    if not tile.property(PROP_AUTOTILE_KEY):
        return None

    path = tile.property(PROP_SOURCE_TILESET)
    if not path or not isinstance(path, str):
        return None

    basename = tile.property(PROP_SOURCE_BASENAME)
    if not isinstance(basename, str) or not basename:
        basename = None

    return AutotileSource(
        tileset_path=path,
        basename=basename,
        start_id=coerce_start_id(tile.property(PROP_START_ID)),
    )


def lookup_tileset_in_document(path: str, basename: Optional[str], document) -> Optional[Tileset]:
    """
    Find an attached tileset by path, falling back to a basename match.

    An exact file_name match anywhere in the list wins over a basename
    suffix match.
    """
    if document is None or not getattr(document, "is_tile_map", False):
        return None

    tilesets = [ts for ts in (document.tilesets or []) if ts is not None and ts.file_name]

    for tileset in tilesets:
        if tileset.file_name == path:
            return tileset

    if basename:
        for tileset in tilesets:
            if tileset.file_name.endswith(basename):
                return tileset

    return None


def assign_source_mapping(key_tile: Tile, tileset_path: str, start_id: Any = 0) -> AutotileSource:
    """
    Mark a tile as an autotile key pointing at a 48-tile group in another tileset.

    Args:
        key_tile: The tile in the main tileset that stands in for the group.
        tileset_path: Path of the tileset holding the expanded variants.
        start_id: First tile id of the group in that tileset (invalid values become 0).

    Returns:
        The AutotileSource that the key tile now resolves to.
    """
    start = coerce_start_id(start_id)
    basename = PureWindowsPath(tileset_path).name

    key_tile.set_property(PROP_AUTOTILE_KEY, True)
    key_tile.set_property(PROP_SOURCE_TILESET, tileset_path)
    key_tile.set_property(PROP_SOURCE_BASENAME, basename)
    key_tile.set_property(PROP_START_ID, start)
    key_tile.class_name = KEY_TILE_CLASS_NAME

    logger.info("Assigned RMXP autotile source to tile %s: %s (startId=%s)",
                key_tile.id, tileset_path, start)
    return AutotileSource(tileset_path, basename or None, start)


def clear_source_mapping(key_tile: Tile):
    """Remove a key tile's source mapping."""
    for name in (PROP_AUTOTILE_KEY, PROP_SOURCE_TILESET, PROP_SOURCE_BASENAME, PROP_START_ID):
        key_tile.remove_property(name)
    if key_tile.class_name == KEY_TILE_CLASS_NAME:
        key_tile.class_name = ""


# Group source for a brush tile

@dataclass(frozen=True)
class DefaultGroupSource:
    """The brush tile's own 48-aligned block in its own tileset."""
    tile: Tile


@dataclass(frozen=True)
class MappedGroupSource:
    """A group in another tileset, named by the brush tile's source mapping."""
    tile: Tile
    source: AutotileSource


GroupKeySource = Union[DefaultGroupSource, MappedGroupSource]


def group_source_of(brush_tile: Tile) -> GroupKeySource:
    """Classify how a brush tile selects its autotile group."""
    source = resolve_source_mapping(brush_tile)
    if source is not None:
        return MappedGroupSource(brush_tile, source)
    return DefaultGroupSource(brush_tile)


def ensure_group_capacity(tileset: Tileset, start_id: int):
    """Raise UndersizedTilesetError unless the tileset holds a full group at start_id."""
    expected = start_id + TILES_PER_AUTOTILE
    if tileset.tile_count < expected:
        raise UndersizedTilesetError(tileset.name, start_id, expected, tileset.tile_count)


def resolve_group_for_brush(brush_tile: Tile, document) -> Tuple[Tileset, GroupKey]:
    """
    Resolve the tileset and group key a brush tile paints with.

    All checks happen here, before anything is written.

    Raises:
        MissingTilesetError: A mapped source tileset is not attached to the map.
        UndersizedTilesetError: The tileset is too small for a group at the start id.
        UnresolvedTileError: The first tile of the group cannot be fetched.
    """
    group_source = group_source_of(brush_tile)

    if isinstance(group_source, MappedGroupSource):
        source = group_source.source
        tileset = lookup_tileset_in_document(source.tileset_path, source.basename, document)
        if tileset is None:
            raise MissingTilesetError(source.tileset_path, source.basename)
        start_id = source.start_id
    else:
        tileset = brush_tile.tileset
        if tileset is None:
            raise UnresolvedTileError(brush_tile.id, "")
        start_id = group_start_of(brush_tile.id)

    ensure_group_capacity(tileset, start_id)

    if tileset.tile(start_id) is None:
        raise UnresolvedTileError(start_id, tileset.name, tileset.tile_count, tileset.file_name)

    return tileset, GroupKey(tileset, start_id)
