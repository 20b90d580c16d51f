"""Shared constants for the dungeon layout generators."""

from __future__ import annotations

# Rooms must keep this many empty cells to the grid edge so a perimeter wall always fits.
GRID_BORDER = 1
# Margin used when picking positions; wider than GRID_BORDER so corridors stay clear of the edge.
PLACEMENT_MARGIN = 2
# Empty-cell buffer between any two rooms, so a wall gap is always carvable between them.
ROOM_SEPARATION = 1

MAIN_PATH_START_X = 2
JUNCTION_PICK_ATTEMPTS = 20
BONUS_ROOM_GAP = 3

RANDOM_SEED = None  # Set to a number for reproducible behavior (for debugging); set to None to produce different dungeon on every run.
