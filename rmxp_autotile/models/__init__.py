"""Data models for tilesets, tile maps and the autotile neighbor table."""

from .tileset import Tile, Tileset
from .tile_map import Cell, CellFlags, LayerEdit, ObjectLayer, TileLayer, TileMap
from .neighbor_table import Neighbor, NEIGHBOR_OFFSETS, NEIGHBORS_TO_AUTOTILE_INDEX, variant_for
