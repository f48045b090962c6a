"""Recoverable errors raised while resolving an autotile paint."""

from typing import Optional


class AutotileError(ValueError):
    """Base class for autotile failures that should be reported to the user."""


class MissingTilesetError(AutotileError):
    """The source tileset of a key tile is not attached to the map."""

    def __init__(self, path: str, basename: Optional[str] = None):
        self.path = path
        self.basename = basename
        message = (
            "Source tileset is not in this map yet.\n\n"
            "Please add it once via: Map -> Add External Tileset...\n\n"
            "Then try again.\n\n"
            f"Missing tileset:\n{path}"
        )
        if basename:
            message += f"\n\n(Basename: {basename})"
        super().__init__(message)


class UndersizedTilesetError(AutotileError):
    """The tileset does not hold a full 48-tile group at the start id."""

    def __init__(self, tileset_name: str, start_id: int, expected: int, actual: int):
        self.tileset_name = tileset_name
        self.start_id = start_id
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"Tileset '{tileset_name}' does not contain 48 tiles starting at "
            f"startId={start_id} (needs {expected} tiles, has {actual})."
        )


class UnresolvedTileError(AutotileError):
    """A tile id could not be fetched from an otherwise valid tileset."""

    def __init__(self, tile_id: int, tileset_name: str, tile_count: int = 0, file_name: str = ""):
        self.tile_id = tile_id
        self.tileset_name = tileset_name
        super().__init__(
            f"Could not access tile id {tile_id} in source tileset.\n\n"
            f"Tileset: {tileset_name or '(unnamed)'}\n"
            f"TileCount: {tile_count}\n"
            f"File: {file_name or '(embedded)'}"
        )
