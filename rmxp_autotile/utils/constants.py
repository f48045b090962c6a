"""Global constants for the RPG Maker XP autotile format."""

# Number of precomposed variant tiles in one expanded autotile group
TILES_PER_AUTOTILE = 48

# One entry per possible 8-bit neighbor mask
NEIGHBOR_MASK_COUNT = 256

# Per-tile properties written on an autotile "key tile"
PROP_AUTOTILE_KEY = "rpgxp.autotileKey"
PROP_SOURCE_TILESET = "rpgxp.sourceTileset"
PROP_SOURCE_BASENAME = "rpgxp.sourceBasename"
PROP_START_ID = "rpgxp.startId"

# Class name used to mark key tiles in the tileset editor
KEY_TILE_CLASS_NAME = "RMXP_Autotile"

# Tool strings shown by the host editor
TOOL_NAME = "RMXP Autotile Brush"
TOOL_STATUS_INFO = "RMXP Autotile Brush: Left=paint, Right=erase (updates 3x3 neighbors)"
TOGGLE_NEIGHBORS_TEXT = "RMXP: Toggle Neighbor Updates"
