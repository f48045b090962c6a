"""
Host editor adapter for the autotile brush.

Left click paints with the selected autotile, right click erases. Both
refresh the 3x3 neighborhood unless neighbor updates are toggled off.
"""

import logging
from typing import Optional

from PySide6.QtCore import QObject, Qt, Signal
from PySide6.QtGui import QAction
from PySide6.QtWidgets import QMessageBox

from ..models.tileset import Tile
from ..services.errors import AutotileError
from ..services.group_classifier import DefaultGroupSource, GroupKey, group_source_of, resolve_group_for_brush
from ..services.propagation import BrushSettings, paint_with_brush, erase_on_layer
from ..utils.constants import TOOL_NAME, TOOL_STATUS_INFO, TOGGLE_NEIGHBORS_TEXT

logger = logging.getLogger(__name__)


class AutotileBrushTool(QObject):
    """
    RMXP-style autotile brush.

    The host sets `map` to the active TileMap and `brush_tile` to the tile
    selected in the tileset, then forwards mouse presses in tile
    coordinates to mouse_pressed().
    """

    painted = Signal(int, int)
    erased = Signal(int, int)
    paint_failed = Signal(str)
    neighbor_updates_toggled = Signal(bool)

    name = TOOL_NAME
    status_info = TOOL_STATUS_INFO

    def __init__(self, parent=None, dialog_parent=None):
        super().__init__(parent)

        self.map = None
        self.brush_tile: Optional[Tile] = None
        self._dialog_parent = dialog_parent
        self._settings = BrushSettings()

        self.toggle_neighbor_action = QAction(TOGGLE_NEIGHBORS_TEXT, self)
        self.toggle_neighbor_action.setCheckable(True)
        self.toggle_neighbor_action.setChecked(self._settings.update_neighbors)
        self.toggle_neighbor_action.toggled.connect(self.set_neighbor_updates)

    @property
    def settings(self) -> BrushSettings:
        """Current brush options."""
        return self._settings

    @property
    def neighbor_updates_enabled(self) -> bool:
        return self._settings.update_neighbors

    def set_neighbor_updates(self, enabled: bool):
        """Turn 3x3 neighbor updates on or off."""
        enabled = bool(enabled)
        if enabled == self._settings.update_neighbors:
            return
        self._settings = BrushSettings(update_neighbors=enabled)

        # Keep the action in sync when called programmatically
        if self.toggle_neighbor_action.isChecked() != enabled:
            self.toggle_neighbor_action.setChecked(enabled)

        logger.info("RMXP Autotile Brush: Neighbor updates are now %s", "ON" if enabled else "OFF")
        self.neighbor_updates_toggled.emit(enabled)

    def _current_tile_layer(self):
        """Get the map's current layer if it is a tile layer."""
        if self.map is None:
            return None
        layer = self.map.current_layer
        if layer is None or not getattr(layer, "is_tile_layer", False):
            return None
        return layer

    def mouse_pressed(self, button, x: int, y: int):
        """
        Handle a mouse press at tile position (x, y).

        Returns:
            True if the press painted or erased, False otherwise.
        """
        layer = self._current_tile_layer()
        if layer is None:
            return False

        if button == Qt.MouseButton.RightButton:
            erase_on_layer(layer, x, y, self._settings, self._brush_group_key())
            self.erased.emit(x, y)
            return True

        if button != Qt.MouseButton.LeftButton:
            return False

        if not self._has_paintable_brush():
            return False

        try:
            paint_with_brush(layer, self.map, x, y, self.brush_tile, self._settings)
        except AutotileError as e:
            logger.warning("Autotile paint at (%s, %s) failed: %s", x, y, e)
            self._report_error(str(e))
            return False

        self.painted.emit(x, y)
        return True

    def _has_paintable_brush(self) -> bool:
        """Check that a brush tile is selected and has somewhere to paint from."""
        if self.brush_tile is None:
            return False
        group_source = group_source_of(self.brush_tile)
        if isinstance(group_source, DefaultGroupSource) and self.brush_tile.tileset is None:
            return False
        return True

    def _brush_group_key(self) -> Optional[GroupKey]:
        """Get the selected brush's group, or None if it cannot be resolved."""
        if not self._has_paintable_brush():
            return None
        try:
            _, group_key = resolve_group_for_brush(self.brush_tile, self.map)
        except AutotileError:
            # Erasing never needs the brush, so an unusable one is ignored here
            return None
        return group_key

    def _report_error(self, message: str):
        QMessageBox.warning(
            self._dialog_parent,
            TOOL_NAME,
            f"{TOOL_NAME}: {message}",
            QMessageBox.StandardButton.Ok
        )
        self.paint_failed.emit(message)
