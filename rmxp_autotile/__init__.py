"""RPG Maker XP style autotile brush: variant resolution and 3x3 neighbor propagation."""

__version__ = "0.1.0"
