"""Catalog of room types and their sizing / connectivity preferences."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Mapping, Tuple

UNBOUNDED_SIZE = 9999


class RoomType(Enum):
    """Role a room plays in the dungeon."""
    START = "Start"
    NORMAL = "Normal"
    SHOP = "Shop"
    BOSS = "Boss"
    JUNCTION = "Junction" # Main-path room that a bonus branch hangs off.
    BONUS = "Bonus" # Optional side room, never on the main path.


@dataclass(frozen=True)
class RoomTypeSpec:
    """Immutable sizing bounds and degree preferences for one room type."""

    room_type: RoomType
    debug_color: Tuple[float, float, float]
    min_size: Tuple[int, int] = (1, 1)
    max_size: Tuple[int, int] = (UNBOUNDED_SIZE, UNBOUNDED_SIZE)
    preferred_min_degree: int = 2
    preferred_max_degree: int = 2
    is_main_path_required: bool = True

    def __post_init__(self) -> None:
        if self.min_size[0] < 1 or self.min_size[1] < 1:
            raise ValueError(f"Room type {self.room_type.value} must have a minimum size of at least 1x1")
        if self.preferred_max_degree < self.preferred_min_degree:
            raise ValueError(f"Room type {self.room_type.value} has max degree below its min degree")

    @property
    def name(self) -> str:
        return self.room_type.value


ROOM_TYPE_SPECS: Mapping[RoomType, RoomTypeSpec] = {
    RoomType.START: RoomTypeSpec(
        RoomType.START,
        debug_color=(0.0, 1.0, 0.0),
        preferred_min_degree=1,
        preferred_max_degree=1,
    ),
    RoomType.NORMAL: RoomTypeSpec(RoomType.NORMAL, debug_color=(0.5, 0.5, 0.5)),
    RoomType.SHOP: RoomTypeSpec(RoomType.SHOP, debug_color=(1.0, 0.92, 0.016), min_size=(7, 7)),
    RoomType.BOSS: RoomTypeSpec(
        RoomType.BOSS,
        debug_color=(1.0, 0.0, 0.0),
        min_size=(10, 10),
        preferred_min_degree=1,
        preferred_max_degree=1,
    ),
    RoomType.JUNCTION: RoomTypeSpec(
        RoomType.JUNCTION,
        debug_color=(0.85, 0.85, 0.85),
        preferred_max_degree=3,
    ),
    RoomType.BONUS: RoomTypeSpec(
        RoomType.BONUS,
        debug_color=(0.0, 1.0, 1.0),
        max_size=(8, 8),
        preferred_min_degree=1,
        preferred_max_degree=1,
        is_main_path_required=False,
    ),
}


def spec_for(room_type: RoomType) -> RoomTypeSpec:
    return ROOM_TYPE_SPECS[room_type]
