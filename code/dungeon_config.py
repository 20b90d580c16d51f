"""Configuration container for the dungeon layout generators."""

from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Optional, Tuple

from dungeon_constants import RANDOM_SEED


@dataclass
class DungeonConfig:
    """Aggregates all tunable parameters for batch and incremental generation."""

    width: int = 80
    depth: int = 40

    # Target number of rooms on the main path (batch mode only); fewer may fit.
    main_room_count: int = 7
    # Global room size range as (width, depth); intersected with each room type's own bounds.
    room_min: Tuple[int, int] = (6, 6)
    room_max: Tuple[int, int] = (12, 12)

    # Empty columns left after each main-path room before the next one (batch mode).
    corridor_step: int = 4
    # Corridor thickness in cells; carved as a square brush of radius width // 2.
    corridor_width: int = 3
    # Max vertical offset between consecutive main-path rooms (batch mode).
    max_z_drift: int = 6
    # Empty cells between a source room's door and a new room's near edge (incremental mode).
    corridor_length: int = 6

    # Reject door pairs that would push a room past its type's preferred max degree.
    enforce_degrees: bool = True
    random_seed: Optional[int] = RANDOM_SEED
    collect_metrics: bool = False

    def __post_init__(self) -> None:
        if self.width <= 0 or self.depth <= 0:
            raise ValueError("DungeonConfig width and depth must be positive")
        if self.main_room_count < 0:
            raise ValueError("DungeonConfig main_room_count cannot be negative")
        if self.corridor_step < 1:
            # Main-path rooms would touch and lose their wall gap.
            raise ValueError("DungeonConfig corridor_step must be at least 1")

        room_min = (int(self.room_min[0]), int(self.room_min[1]))
        room_max = (int(self.room_max[0]), int(self.room_max[1]))
        if room_min[0] < 1 or room_min[1] < 1:
            raise ValueError("DungeonConfig room_min must be at least (1, 1)")
        if room_max[0] < room_min[0] or room_max[1] < room_min[1]:
            raise ValueError("DungeonConfig room_max must be >= room_min on both axes")
        self.room_min = room_min
        self.room_max = room_max

        self.corridor_width = max(1, int(self.corridor_width))
        self.corridor_length = max(1, int(self.corridor_length))
        self.max_z_drift = max(0, int(self.max_z_drift))

    def rng(self) -> random.Random:
        """Return a fresh random source seeded from ``random_seed``."""
        return random.Random(self.random_seed)
