"""
Neighbor mask to autotile variant lookup for RPG Maker XP autotiles.

A cell's eight Moore neighbors are encoded as an 8-bit mask, one bit per
compass direction, in the order used by RMXP's TileDrawingHelper:

    0x01 N, 0x02 NE, 0x04 E, 0x08 SE, 0x10 S, 0x20 SW, 0x40 W, 0x80 NW

The mask indexes NEIGHBORS_TO_AUTOTILE_INDEX, which yields the variant
(0..47) within a 48-tile expanded autotile group. Corner bits only matter
when both adjacent edges are present, which is baked into the table rather
than computed.
"""

from enum import IntFlag
from typing import Tuple


class Neighbor(IntFlag):
    """Neighbor bitmask, one bit per compass direction."""
    NONE = 0
    N = 0x01
    NE = 0x02
    E = 0x04
    SE = 0x08
    S = 0x10
    SW = 0x20
    W = 0x40
    NW = 0x80


# (direction, dx, dy) in bit order. Map y grows downward, so north is -1.
NEIGHBOR_OFFSETS: Tuple[Tuple[Neighbor, int, int], ...] = (
    (Neighbor.N, 0, -1),
    (Neighbor.NE, 1, -1),
    (Neighbor.E, 1, 0),
    (Neighbor.SE, 1, 1),
    (Neighbor.S, 0, 1),
    (Neighbor.SW, -1, 1),
    (Neighbor.W, -1, 0),
    (Neighbor.NW, -1, -1),
)


# Exact RMXP neighbor mask -> variant mapping, 16 masks per row
NEIGHBORS_TO_AUTOTILE_INDEX: Tuple[int, ...] = (
    46, 44, 46, 44, 43, 41, 43, 40, 46, 44, 46, 44, 43, 41, 43, 40,
    42, 32, 42, 32, 35, 19, 35, 18, 42, 32, 42, 32, 34, 17, 34, 16,
    46, 44, 46, 44, 43, 41, 43, 40, 46, 44, 46, 44, 43, 41, 43, 40,
    42, 32, 42, 32, 35, 19, 35, 18, 42, 32, 42, 32, 34, 17, 34, 16,
    45, 39, 45, 39, 33, 31, 33, 29, 45, 39, 45, 39, 33, 31, 33, 29,
    37, 27, 37, 27, 23, 15, 23, 13, 37, 27, 37, 27, 22, 11, 22, 9,
    45, 39, 45, 39, 33, 31, 33, 29, 45, 39, 45, 39, 33, 31, 33, 29,
    36, 26, 36, 26, 21, 7, 21, 5, 36, 26, 36, 26, 20, 3, 20, 1,
    46, 44, 46, 44, 43, 41, 43, 40, 46, 44, 46, 44, 43, 41, 43, 40,
    42, 32, 42, 32, 35, 19, 35, 18, 42, 32, 42, 32, 34, 17, 34, 16,
    46, 44, 46, 44, 43, 41, 43, 40, 46, 44, 46, 44, 43, 41, 43, 40,
    42, 32, 42, 32, 35, 19, 35, 18, 42, 32, 42, 32, 34, 17, 34, 16,
    45, 38, 45, 38, 33, 30, 33, 28, 45, 38, 45, 38, 33, 30, 33, 28,
    37, 25, 37, 25, 23, 14, 23, 12, 37, 25, 37, 25, 22, 10, 22, 8,
    45, 38, 45, 38, 33, 30, 33, 28, 45, 38, 45, 38, 33, 30, 33, 28,
    36, 24, 36, 24, 21, 6, 21, 4, 36, 24, 36, 24, 20, 2, 20, 0,
)


def variant_for(mask: int) -> int:
    """
    Get the autotile variant for a neighbor mask.

    Only the low 8 bits of the mask are used, so every integer maps to
    a variant in [0, 48).
    """
    return NEIGHBORS_TO_AUTOTILE_INDEX[int(mask) & 0xFF]
