"""Data container for the mutable layout state shared by both generation modes."""

from __future__ import annotations

import logging
from typing import Dict, List, Optional, Set, Tuple

from dungeon_config import DungeonConfig
from dungeon_constants import GRID_BORDER, ROOM_SEPARATION
from dungeon_geometry import Direction, Rect, TilePos
from dungeon_models import Door, DungeonDataset, Room
from occupancy_grid import OccupancyGrid
from room_types import RoomType, spec_for

log = logging.getLogger("dungeon.layout")


class DungeonLayout:
    """Stores the grid, rooms, doors and per-room degrees for one generation session."""

    def __init__(self, config: DungeonConfig) -> None:
        self.config = config
        self.grid = OccupancyGrid(config.width, config.depth)
        self.rooms: List[Room] = []
        self.doors: List[Door] = []
        self.degrees: List[int] = []
        self._connections: Set[Tuple[int, int]] = set()

    @property
    def room_count(self) -> int:
        return len(self.rooms)

    def get_room(self, room_id: int) -> Optional[Room]:
        """Return the room with this id, or None for anything that is not a valid id."""
        if isinstance(room_id, bool) or not isinstance(room_id, int):
            return None
        if not (0 <= room_id < len(self.rooms)):
            return None
        return self.rooms[room_id]

    def next_room_id(self) -> int:
        return len(self.rooms)

    def register_room(self, bounds: Rect, room_type: RoomType, parent_id: Optional[int] = None) -> Room:
        """Append a room with the next sequential id and carve its floor."""
        room = Room(self.next_room_id(), bounds, room_type, parent_id)
        self.rooms.append(room)
        self.degrees.append(0)
        self.grid.carve_rect(bounds)
        log.debug("Placed %s room %d at %s", room_type.value, room.id, bounds.to_tuple())
        return room

    def replace_room_type(self, room_id: int, room_type: RoomType) -> Room:
        """Rewrite a room in place under the same id and bounds."""
        replaced = self.rooms[room_id].with_type(room_type)
        self.rooms[room_id] = replaced
        return replaced

    def is_inside_grid(self, bounds: Rect) -> bool:
        """True when ``bounds`` keeps at least a one-cell border to every grid edge."""
        if bounds.x < GRID_BORDER or bounds.z < GRID_BORDER:
            return False
        if bounds.max_x >= self.config.width - GRID_BORDER or bounds.max_z >= self.config.depth - GRID_BORDER:
            return False
        return True

    def overlaps_existing_rooms(self, bounds: Rect) -> bool:
        return any(room.bounds.expand(ROOM_SEPARATION).overlaps(bounds) for room in self.rooms)

    def is_valid_placement(self, bounds: Rect) -> bool:
        """Checks that a new room is in bounds and keeps its buffer from every existing room."""
        return self.is_inside_grid(bounds) and not self.overlaps_existing_rooms(bounds)

    def are_connected(self, room_a_id: int, room_b_id: int) -> bool:
        key = (room_a_id, room_b_id) if room_a_id <= room_b_id else (room_b_id, room_a_id)
        return key in self._connections

    def has_free_degree(self, room_id: int) -> bool:
        return self.degrees[room_id] < self.rooms[room_id].spec.preferred_max_degree

    def can_connect(self, room_a_id: int, room_b_id: int, *, enforce_degrees: Optional[bool] = None) -> bool:
        """Whether a door pair between the two rooms would be accepted."""
        self._check_room_index(room_a_id)
        self._check_room_index(room_b_id)
        if room_a_id == room_b_id:
            return False
        if enforce_degrees is None:
            enforce_degrees = self.config.enforce_degrees
        if not enforce_degrees:
            return True
        if self.are_connected(room_a_id, room_b_id):
            return False
        return self.has_free_degree(room_a_id) and self.has_free_degree(room_b_id)

    def can_attach(self, room_id: int, room_type: RoomType, *, enforce_degrees: Optional[bool] = None) -> bool:
        """Whether a not-yet-registered room of ``room_type`` could be linked to ``room_id``.

        Mirrors ``can_connect`` for a fresh room with no connections.
        """
        self._check_room_index(room_id)
        if enforce_degrees is None:
            enforce_degrees = self.config.enforce_degrees
        if not enforce_degrees:
            return True
        return self.has_free_degree(room_id) and spec_for(room_type).preferred_max_degree > 0

    def add_door_pair(
        self,
        room_a_id: int,
        room_b_id: int,
        a_cell: TilePos,
        a_normal: Direction,
        b_cell: TilePos,
        b_normal: Direction,
        *,
        enforce_degrees: Optional[bool] = None,
    ) -> bool:
        """Record both directed doors of one connection; returns False if the pair was rejected.

        ``enforce_degrees`` overrides the config for this call only.
        """
        if not self.can_connect(room_a_id, room_b_id, enforce_degrees=enforce_degrees):
            log.debug("Rejected door pair %d <-> %d", room_a_id, room_b_id)
            return False
        self.doors.append(Door(room_a_id, room_b_id, a_cell, a_normal))
        self.doors.append(Door(room_b_id, room_a_id, b_cell, b_normal))
        self._connections.add((room_a_id, room_b_id) if room_a_id <= room_b_id else (room_b_id, room_a_id))
        self.degrees[room_a_id] += 1
        self.degrees[room_b_id] += 1
        return True

    def connect(
        self,
        room_a_id: int,
        room_b_id: int,
        a_cell: TilePos,
        a_normal: Direction,
        b_cell: TilePos,
        b_normal: Direction,
    ) -> bool:
        """Add a door pair and, if accepted, carve the L corridor between the two door cells."""
        if not self.add_door_pair(room_a_id, room_b_id, a_cell, a_normal, b_cell, b_normal):
            return False
        self.grid.carve_l_corridor(a_cell, b_cell, self.config.corridor_width)
        return True

    def degree_map(self) -> Dict[int, int]:
        return {room.id: self.degrees[room.id] for room in self.rooms}

    def snapshot(self) -> DungeonDataset:
        """Build an independent, immutable dataset from the current state."""
        return DungeonDataset(
            grid=self.grid.snapshot(),
            rooms=tuple(self.rooms),
            doors=tuple(self.doors),
        )

    def _check_room_index(self, room_id: int) -> None:
        if not (0 <= room_id < len(self.rooms)):
            raise IndexError(f"Room index {room_id} out of range")
