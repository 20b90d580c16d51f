"""Core value types shared by the generators and handed to renderers."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from dungeon_geometry import Direction, Rect, TilePos
from occupancy_grid import Cell, CellRows
from room_types import RoomType, RoomTypeSpec, spec_for


@dataclass(frozen=True)
class Room:
    """A placed rectangular room. ``id`` equals its index in the room list."""

    id: int
    bounds: Rect
    room_type: RoomType
    parent_id: Optional[int] = None  # Lineage only, e.g. bonus room -> its junction.

    # Rooms are flat; renderers that want 3D bounds read a constant height of 1.
    height: int = field(default=1, init=False, repr=False)

    @property
    def spec(self) -> RoomTypeSpec:
        return spec_for(self.room_type)

    @property
    def x(self) -> int:
        return self.bounds.x

    @property
    def z(self) -> int:
        return self.bounds.z

    @property
    def width(self) -> int:
        return self.bounds.width

    @property
    def depth(self) -> int:
        return self.bounds.depth

    @property
    def center(self) -> TilePos:
        return TilePos(self.x + self.width // 2, self.z + self.depth // 2)

    @property
    def exit_left(self) -> TilePos:
        return TilePos(self.x, self.z + self.depth // 2)

    @property
    def exit_right(self) -> TilePos:
        return TilePos(self.bounds.max_x - 1, self.z + self.depth // 2)

    @property
    def exit_bottom(self) -> TilePos:
        return TilePos(self.x + self.width // 2, self.z)

    @property
    def exit_top(self) -> TilePos:
        return TilePos(self.x + self.width // 2, self.bounds.max_z - 1)

    def edge_door_cell(self, direction: Direction) -> TilePos:
        """Return the mid-edge cell on the side of the room facing ``direction``."""
        if direction is Direction.EAST:
            return self.exit_right
        if direction is Direction.WEST:
            return self.exit_left
        if direction is Direction.NORTH:
            return self.exit_top
        return self.exit_bottom

    def contains_cell(self, x: int, z: int) -> bool:
        return self.bounds.contains(TilePos(x, z))

    def with_type(self, room_type: RoomType) -> Room:
        return Room(self.id, self.bounds, room_type, self.parent_id)


@dataclass(frozen=True)
class Door:
    """One directed half of a connection: the opening on room ``a``'s side towards room ``b``."""

    a: int
    b: int
    cell: TilePos
    normal: Direction

    @property
    def key(self) -> Tuple[int, int]:
        """Undirected connection key."""
        return (self.a, self.b) if self.a <= self.b else (self.b, self.a)

    def is_reciprocal_of(self, other: Door) -> bool:
        return self.a == other.b and self.b == other.a and self.normal is other.normal.opposite()


@dataclass(frozen=True)
class DungeonDataset:
    """Immutable snapshot of a layout: grid cells, rooms and doors."""

    grid: CellRows
    rooms: Tuple[Room, ...]
    doors: Tuple[Door, ...]

    @property
    def width(self) -> int:
        return len(self.grid[0]) if self.grid else 0

    @property
    def depth(self) -> int:
        return len(self.grid)

    def cell_at(self, x: int, z: int) -> Cell:
        if not (0 <= x < self.width and 0 <= z < self.depth):
            raise IndexError(f"Cell {(x, z)} is outside the {self.width}x{self.depth} grid")
        return self.grid[z][x]

    def is_floor(self, x: int, z: int) -> bool:
        return 0 <= x < self.width and 0 <= z < self.depth and self.grid[z][x] is Cell.FLOOR

    def floor_count(self) -> int:
        return sum(1 for row in self.grid for cell in row if cell is Cell.FLOOR)

    def room_at(self, x: int, z: int) -> Optional[Room]:
        for room in self.rooms:
            if room.contains_cell(x, z):
                return room
        return None

    def doors_for(self, room_id: int) -> List[Door]:
        """Doors whose opening lies on ``room_id``'s side."""
        return [door for door in self.doors if door.a == room_id]

    def neighbors_of(self, room_id: int) -> List[int]:
        return sorted({door.b for door in self.doors if door.a == room_id})

    def degree_of(self, room_id: int) -> int:
        return len(self.neighbors_of(room_id))

    def degrees(self) -> Dict[int, int]:
        return {room.id: self.degree_of(room.id) for room in self.rooms}

    def unique_connections(self) -> List[Tuple[int, int]]:
        """One ``(a, b)`` entry per door pair, in creation order."""
        seen = set()
        connections: List[Tuple[int, int]] = []
        for door in self.doors:
            if door.key in seen:
                continue
            seen.add(door.key)
            connections.append(door.key)
        return connections

    def main_path(self) -> List[Room]:
        return [room for room in self.rooms if room.spec.is_main_path_required]
