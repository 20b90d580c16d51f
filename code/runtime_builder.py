"""Incremental builder that grows a dungeon one room at a time on request."""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from typing import Optional, Tuple, Union

from dungeon_config import DungeonConfig
from dungeon_constants import PLACEMENT_MARGIN
from dungeon_geometry import Direction, Rect, TilePos, clamp
from dungeon_layout import DungeonLayout
from dungeon_models import DungeonDataset, Room
from room_sizing import sample_room_size
from room_types import RoomType, spec_for

log = logging.getLogger("dungeon.runtime")

DirectionLike = Union[Direction, Tuple[int, int]]


@dataclass(frozen=True)
class ExpansionResult:
    """Outcome of one expansion request; truthy when a room was added."""

    success: bool
    room: Optional[Room] = None

    def __bool__(self) -> bool:
        return self.success


FAILED_EXPANSION = ExpansionResult(False, None)


class DungeonRuntimeBuilder:
    """Grows a layout from a single start room, keeping every placement invariant.

    Growth is append-only: existing rooms and doors are never touched, and a
    rejected expansion leaves the grid, rooms and doors exactly as they were.
    """

    def __init__(self, config: DungeonConfig, rng: Optional[random.Random] = None) -> None:
        self.config = config
        self.rng = rng if rng is not None else config.rng()
        self.layout: Optional[DungeonLayout] = None

    def initialize(self) -> DungeonDataset:
        """Reset the session to a single start room centred in the grid.

        Raises ValueError when the sampled start room cannot fit inside the
        grid border; the previous session, if any, is left untouched.
        """
        config = self.config
        layout = DungeonLayout(config)

        width, depth = sample_room_size(spec_for(RoomType.START), config.room_min, config.room_max, self.rng)
        x = clamp(config.width // 2 - width // 2, PLACEMENT_MARGIN, config.width - width - PLACEMENT_MARGIN)
        z = clamp(config.depth // 2 - depth // 2, PLACEMENT_MARGIN, config.depth - depth - PLACEMENT_MARGIN)
        bounds = Rect(x, z, width, depth)
        if not layout.is_valid_placement(bounds):
            raise ValueError(
                f"Start room {width}x{depth} does not fit in a {config.width}x{config.depth} grid"
            )

        layout.register_room(bounds, RoomType.START)
        self.layout = layout
        return layout.snapshot()

    def get_dataset(self) -> DungeonDataset:
        if self.layout is None:
            raise RuntimeError("DungeonRuntimeBuilder.initialize() must be called first")
        return self.layout.snapshot()

    def try_expand_from(self, room_id: int, direction: DirectionLike) -> ExpansionResult:
        """Attach one new normal room to ``room_id``'s edge facing ``direction``."""
        if self.layout is None:
            return FAILED_EXPANSION
        source = self.layout.get_room(room_id)
        if source is None:
            log.debug("Expansion rejected: unknown room %r", room_id)
            return FAILED_EXPANSION
        heading = Direction.try_from(direction)
        if heading is None:
            log.debug("Expansion rejected: %r is not a cardinal direction", direction)
            return FAILED_EXPANSION

        width, depth = sample_room_size(
            spec_for(RoomType.NORMAL), self.config.room_min, self.config.room_max, self.rng
        )
        anchor = source.edge_door_cell(heading)
        bounds, facing = self._plan_room(source, anchor, heading, width, depth)

        if not self.layout.is_valid_placement(bounds):
            log.debug("Expansion from room %d towards %s blocked at %s", room_id, heading.name, bounds.to_tuple())
            return FAILED_EXPANSION

        room = self.layout.register_room(bounds, RoomType.NORMAL, parent_id=source.id)
        self.layout.grid.carve_l_corridor(anchor, facing, self.config.corridor_width)
        # Runtime growth tracks degrees but never caps them.
        self.layout.add_door_pair(
            source.id, room.id, anchor, heading, facing, heading.opposite(), enforce_degrees=False
        )
        log.info("Expanded room %d towards %s: new room %d", source.id, heading.name, room.id)
        return ExpansionResult(True, room)

    def _plan_room(
        self,
        source: Room,
        anchor: TilePos,
        heading: Direction,
        width: int,
        depth: int,
    ) -> Tuple[Rect, TilePos]:
        """Compute the new room's bounds and its facing door cell.

        The near edge sits ``corridor_length + 1`` cells past the anchor; the
        cross axis is centred on the source room and clamped into the grid.
        """
        config = self.config
        reach = config.corridor_length + 1

        if heading.is_horizontal:
            near_x = anchor.x + heading.dx * reach
            room_x = near_x if heading is Direction.EAST else near_x - (width - 1)
            room_z = clamp(source.center.z - depth // 2, PLACEMENT_MARGIN, config.depth - depth - PLACEMENT_MARGIN)
            facing = TilePos(near_x, _clamp_into_edge(anchor.z, room_z, depth))
        else:
            near_z = anchor.z + heading.dz * reach
            room_z = near_z if heading is Direction.NORTH else near_z - (depth - 1)
            room_x = clamp(source.center.x - width // 2, PLACEMENT_MARGIN, config.width - width - PLACEMENT_MARGIN)
            facing = TilePos(_clamp_into_edge(anchor.x, room_x, width), near_z)

        return Rect(room_x, room_z, width, depth), facing


def _clamp_into_edge(value: int, start: int, size: int) -> int:
    """Clamp a door coordinate onto a room edge, off the corners when the edge is long enough."""
    if size >= 3:
        return clamp(value, start + 1, start + size - 2)
    return clamp(value, start, start + size - 1)
