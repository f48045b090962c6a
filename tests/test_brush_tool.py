"""Tests for the AutotileBrushTool host adapter."""

import pytest
from unittest.mock import patch

from PySide6.QtCore import Qt
from PySide6.QtWidgets import QMessageBox

from rmxp_autotile.models.tileset import Tile, Tileset
from rmxp_autotile.models.tile_map import ObjectLayer
from rmxp_autotile.services.group_classifier import assign_source_mapping
from rmxp_autotile.ui.brush_tool import AutotileBrushTool
from rmxp_autotile.utils.constants import TOGGLE_NEIGHBORS_TEXT, TOOL_NAME


@pytest.fixture
def tool(qapp, tile_map, terrain):
    """A brush tool on the test map with the first autotile group selected."""
    tool = AutotileBrushTool()
    tool.map = tile_map
    tool.brush_tile = terrain.tile(0)
    return tool


class TestMouseDispatch:
    """Left paints, right erases, anything else is ignored."""

    def test_left_click_paints(self, tool, layer, terrain, qtbot):
        """Left click paints the brush's autotile and emits painted."""
        with qtbot.waitSignal(tool.painted) as blocker:
            assert tool.mouse_pressed(Qt.MouseButton.LeftButton, 2, 2)

        assert blocker.args == [2, 2]
        assert layer.tile_at(2, 2) is terrain.tile(46)

    def test_left_click_updates_neighbors(self, tool, layer):
        """Painting next to an existing tile reconnects both."""
        tool.mouse_pressed(Qt.MouseButton.LeftButton, 1, 1)
        tool.mouse_pressed(Qt.MouseButton.LeftButton, 1, 0)

        assert layer.tile_at(1, 0).id == 42
        assert layer.tile_at(1, 1).id == 44

    def test_right_click_erases(self, tool, layer, qtbot):
        """Right click erases and refreshes the neighbor below."""
        tool.mouse_pressed(Qt.MouseButton.LeftButton, 1, 1)
        tool.mouse_pressed(Qt.MouseButton.LeftButton, 1, 0)

        with qtbot.waitSignal(tool.erased) as blocker:
            assert tool.mouse_pressed(Qt.MouseButton.RightButton, 1, 0)

        assert blocker.args == [1, 0]
        assert layer.tile_at(1, 0) is None
        assert layer.tile_at(1, 1).id == 46

    def test_right_click_without_brush_still_erases(self, tool, layer):
        """Erasing does not need a brush tile."""
        tool.mouse_pressed(Qt.MouseButton.LeftButton, 1, 1)
        tool.brush_tile = None

        assert tool.mouse_pressed(Qt.MouseButton.RightButton, 1, 1)
        assert layer.tile_at(1, 1) is None

    def test_right_click_keeps_mapped_group(self, tool, tile_map, layer):
        """Erasing next to an unaligned mapped group keeps its tiles inside that group."""
        water = Tileset.from_count("Water", 200, file_name="/project/autotiles/water.tsx")
        tile_map.add_tileset(water)
        key_tile = Tileset.from_count("Main", 8, "/project/main.tsx").tile(3)
        assign_source_mapping(key_tile, water.file_name, 10)
        tool.brush_tile = key_tile
        for x in (2, 3, 4):
            tool.mouse_pressed(Qt.MouseButton.LeftButton, x, 2)

        assert tool.mouse_pressed(Qt.MouseButton.RightButton, 4, 2)

        assert layer.tile_at(3, 2).id == 10 + 45
        assert layer.tile_at(2, 2).id == 10 + 43

    def test_middle_click_ignored(self, tool, layer):
        """Buttons other than left and right do nothing."""
        assert not tool.mouse_pressed(Qt.MouseButton.MiddleButton, 1, 1)
        assert layer.cells() == {}


class TestPreconditions:
    """Missing map, layer or brush make the press a silent no-op."""

    def test_no_map(self, tool):
        """Without a map the press is ignored and no dialog is shown."""
        tool.map = None
        with patch.object(QMessageBox, 'warning') as mock_warning:
            assert not tool.mouse_pressed(Qt.MouseButton.LeftButton, 1, 1)
            mock_warning.assert_not_called()

    def test_no_current_layer(self, tool, tile_map):
        """Without a current layer neither paint nor erase applies."""
        tile_map.current_layer = None
        assert not tool.mouse_pressed(Qt.MouseButton.LeftButton, 1, 1)
        assert not tool.mouse_pressed(Qt.MouseButton.RightButton, 1, 1)

    def test_wrong_layer_type(self, tool, tile_map, layer):
        """Presses on a non-tile layer are ignored."""
        tile_map.current_layer = ObjectLayer("Events")
        assert not tool.mouse_pressed(Qt.MouseButton.LeftButton, 1, 1)
        assert layer.cells() == {}

    def test_no_brush_tile(self, tool, layer):
        """Painting without a brush tile is a silent no-op."""
        tool.brush_tile = None
        with patch.object(QMessageBox, 'warning') as mock_warning:
            assert not tool.mouse_pressed(Qt.MouseButton.LeftButton, 1, 1)
            mock_warning.assert_not_called()
        assert layer.cells() == {}

    def test_brush_without_tileset(self, tool, layer):
        """A brush tile detached from any tileset paints nothing and shows no dialog."""
        tool.brush_tile = Tile(tileset=None, id=3)
        with patch.object(QMessageBox, 'warning') as mock_warning:
            assert not tool.mouse_pressed(Qt.MouseButton.LeftButton, 1, 1)
            mock_warning.assert_not_called()
        assert layer.cells() == {}

    def test_brush_without_tileset_still_erases(self, tool, layer):
        """Right click with a detached brush tile still erases."""
        tool.mouse_pressed(Qt.MouseButton.LeftButton, 1, 1)
        tool.brush_tile = Tile(tileset=None, id=3)
        assert tool.mouse_pressed(Qt.MouseButton.RightButton, 1, 1)
        assert layer.tile_at(1, 1) is None


class TestErrorReporting:
    """Paint failures are shown to the user and nothing is written."""

    def test_missing_source_tileset(self, tool, layer, qtbot):
        """A missing source tileset shows a warning naming the path."""
        key_tile = Tileset.from_count("Main", 4, "/project/main.tsx").tile(1)
        assign_source_mapping(key_tile, "/project/autotiles/lava.tsx")
        tool.brush_tile = key_tile

        with patch.object(QMessageBox, 'warning') as mock_warning:
            with qtbot.waitSignal(tool.paint_failed) as blocker:
                assert not tool.mouse_pressed(Qt.MouseButton.LeftButton, 1, 1)

            mock_warning.assert_called_once()
            call_args = mock_warning.call_args
            assert call_args[0][1] == TOOL_NAME
            message = call_args[0][2]
            assert "/project/autotiles/lava.tsx" in message
            assert "lava.tsx" in message

        assert "/project/autotiles/lava.tsx" in blocker.args[0]
        assert layer.cells() == {}

    def test_undersized_tileset(self, tool, layer):
        """A too-small tileset shows expected and actual tile counts."""
        small = Tileset.from_count("Small", 30, "/project/small.tsx")
        tool.brush_tile = small.tile(0)

        with patch.object(QMessageBox, 'warning') as mock_warning:
            assert not tool.mouse_pressed(Qt.MouseButton.LeftButton, 1, 1)

            message = mock_warning.call_args[0][2]
            assert "48" in message
            assert "30" in message

        assert layer.cells() == {}


class TestNeighborToggle:
    """The neighbor update toggle action."""

    def test_defaults_on(self, tool):
        """Neighbor updates start enabled with a checked action."""
        assert tool.neighbor_updates_enabled
        assert tool.settings.update_neighbors
        assert tool.toggle_neighbor_action.isCheckable()
        assert tool.toggle_neighbor_action.isChecked()
        assert tool.toggle_neighbor_action.text() == TOGGLE_NEIGHBORS_TEXT

    def test_trigger_turns_off(self, tool, qtbot):
        """Triggering the action turns neighbor updates off."""
        with qtbot.waitSignal(tool.neighbor_updates_toggled) as blocker:
            tool.toggle_neighbor_action.trigger()

        assert blocker.args == [False]
        assert not tool.neighbor_updates_enabled

    def test_trigger_twice_turns_back_on(self, tool):
        """Triggering twice restores neighbor updates."""
        tool.toggle_neighbor_action.trigger()
        tool.toggle_neighbor_action.trigger()
        assert tool.neighbor_updates_enabled

    def test_set_programmatically_syncs_action(self, tool):
        """Setting the option in code updates the action's checked state."""
        tool.set_neighbor_updates(False)
        assert not tool.toggle_neighbor_action.isChecked()
        assert not tool.settings.update_neighbors

    def test_toggled_once_per_change(self, tool):
        """Setting the same value twice emits only one change."""
        changes = []
        tool.neighbor_updates_toggled.connect(changes.append)

        tool.set_neighbor_updates(False)
        tool.set_neighbor_updates(False)

        assert changes == [False]

    def test_disabled_paint_skips_neighbors(self, tool, layer):
        """With updates off, painting leaves neighbors stale."""
        tool.mouse_pressed(Qt.MouseButton.LeftButton, 1, 1)
        tool.set_neighbor_updates(False)

        tool.mouse_pressed(Qt.MouseButton.LeftButton, 1, 0)

        assert layer.tile_at(1, 0).id == 42
        assert layer.tile_at(1, 1).id == 46

    def test_disabled_erase_skips_neighbors(self, tool, layer):
        """With updates off, erasing leaves neighbors stale."""
        tool.mouse_pressed(Qt.MouseButton.LeftButton, 1, 1)
        tool.mouse_pressed(Qt.MouseButton.LeftButton, 1, 0)
        tool.set_neighbor_updates(False)

        tool.mouse_pressed(Qt.MouseButton.RightButton, 1, 0)

        assert layer.tile_at(1, 0) is None
        assert layer.tile_at(1, 1).id == 44


class TestToolInfo:

    def test_name_and_status(self, tool):
        """The tool exposes its name and status text."""
        assert tool.name == TOOL_NAME
        assert "Left=paint" in tool.status_info
