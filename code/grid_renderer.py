"""Render a dungeon dataset to an ASCII grid for debugging."""

from __future__ import annotations

from typing import List

from dungeon_models import DungeonDataset
from room_types import RoomType

ROOM_CHARS = {
    RoomType.START: "S",
    RoomType.NORMAL: "N",
    RoomType.SHOP: "$",
    RoomType.BOSS: "B",
    RoomType.JUNCTION: "J",
    RoomType.BONUS: "+",
}
CORRIDOR_CHAR = "░"
DOOR_CHAR = "█"
EMPTY_CHAR = "."


def render_rows(dataset: DungeonDataset) -> List[str]:
    """Return one string per grid row, highest z first so north is up."""
    grid = [
        [CORRIDOR_CHAR if dataset.is_floor(x, z) else EMPTY_CHAR for x in range(dataset.width)]
        for z in range(dataset.depth)
    ]
    # Fill rooms with a per-type character so they are easy to distinguish.
    for room in dataset.rooms:
        room_char = ROOM_CHARS[room.room_type]
        for tile in room.bounds.iter_tiles():
            grid[tile.z][tile.x] = room_char
    for door in dataset.doors:
        grid[door.cell.z][door.cell.x] = DOOR_CHAR
    return ["".join(row) for row in reversed(grid)]


def render_ascii(dataset: DungeonDataset) -> str:
    return "\n".join(render_rows(dataset))


def print_grid(dataset: DungeonDataset) -> None:
    """Prints the ASCII grid to the console."""
    for row in render_rows(dataset):
        print(row)
