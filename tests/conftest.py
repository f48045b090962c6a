"""Pytest configuration for autotile brush tests."""

import pytest

from rmxp_autotile.models.tileset import Tileset
from rmxp_autotile.models.tile_map import TileMap


@pytest.fixture(scope="session")
def qapp_args():
    """Arguments to pass to QApplication."""
    return ["pytest-qt-qapp", "-platform", "offscreen"]


# Tell pytest-qt to use PySide6
def pytest_configure(config):
    config.addinivalue_line(
        "markers", "qt: mark test as requiring Qt"
    )


@pytest.fixture
def terrain():
    """A tileset holding two full autotile groups (ids 0..95) plus 4 plain tiles."""
    return Tileset.from_count("Terrain", 100, file_name="/project/tilesets/terrain.tsx")


@pytest.fixture
def tile_map(terrain):
    """An 8x6 map with the terrain tileset attached and one tile layer."""
    tile_map = TileMap(width=8, height=6)
    tile_map.add_tileset(terrain)
    tile_map.add_tile_layer("Ground")
    return tile_map


@pytest.fixture
def layer(tile_map):
    """The map's ground layer."""
    return tile_map.current_layer
