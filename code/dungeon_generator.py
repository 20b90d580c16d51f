"""DungeonGenerator lays out a whole main path plus an optional bonus branch in one call."""

from __future__ import annotations

import logging
import random
from time import perf_counter
from typing import Callable, List, Optional, TypeVar

from dungeon_config import DungeonConfig
from dungeon_constants import (
    BONUS_ROOM_GAP,
    JUNCTION_PICK_ATTEMPTS,
    MAIN_PATH_START_X,
    PLACEMENT_MARGIN,
)
from dungeon_geometry import Direction, Rect, clamp
from dungeon_layout import DungeonLayout
from dungeon_models import DungeonDataset, Room
from metrics import GenerationMetrics
from room_sizing import sample_room_size
from room_types import RoomType, spec_for

log = logging.getLogger("dungeon.generator")

T = TypeVar("T")


def pick_junction_index(planned_count: int, shop_index: int, rng: random.Random) -> int:
    """Pick a main-path index for the junction room, or -1 when the path is too short.

    Index 0, the shop index and the last index are never chosen. After
    ``JUNCTION_PICK_ATTEMPTS`` unlucky draws we fall back to index 1 (or 2 when
    the shop sits at 1).
    """
    lowest = 1
    highest_exclusive = planned_count - 1
    if highest_exclusive <= lowest:
        return -1

    for _ in range(JUNCTION_PICK_ATTEMPTS):
        index = rng.randrange(lowest, highest_exclusive)
        if index == shop_index or index == planned_count - 1:
            continue
        return index

    return 2 if shop_index == 1 else 1


def plan_room_types(planned_count: int, rng: random.Random) -> List[RoomType]:
    """Assign a room type to every main-path index."""
    if planned_count <= 0:
        return []
    shop_index = planned_count // 2
    junction_index = pick_junction_index(planned_count, shop_index, rng) if planned_count >= 4 else -1

    plan: List[RoomType] = []
    for index in range(planned_count):
        if index == 0:
            plan.append(RoomType.START)
        elif index == planned_count - 1:
            plan.append(RoomType.BOSS)
        elif index == shop_index:
            plan.append(RoomType.SHOP)
        elif index == junction_index:
            plan.append(RoomType.JUNCTION)
        else:
            plan.append(RoomType.NORMAL)
    return plan


class DungeonGenerator:
    """Manages the overall process of generating a dungeon floor layout in batch mode."""

    def __init__(self, config: DungeonConfig, rng: Optional[random.Random] = None) -> None:
        self.config = config
        self.rng = rng if rng is not None else config.rng()
        self.layout = DungeonLayout(config)
        self.metrics = GenerationMetrics() if config.collect_metrics else None
        self.main_path: List[int] = []
        self.bonus_room_id: Optional[int] = None
        self.rejections = 0

    def _run_phase(self, name: str, func: Callable[..., T], *args, **kwargs) -> T:
        if self.metrics is None:
            return func(*args, **kwargs)

        rooms_before = len(self.layout.rooms)
        doors_before = len(self.layout.doors)
        rejections_before = self.rejections
        start = perf_counter()
        try:
            return func(*args, **kwargs)
        finally:
            duration = perf_counter() - start
            self.metrics.record_phase(
                name,
                duration,
                [room.room_type for room in self.layout.rooms[rooms_before:]],
                len(self.layout.doors) - doors_before,
                self.rejections - rejections_before,
            )

    def generate(self) -> DungeonDataset:
        """Generates the dungeon and returns an immutable snapshot of it.

        Running out of space never raises: the plan is truncated instead, and
        the last placed room is promoted to a boss room.
        """
        self.layout = DungeonLayout(self.config)
        self.main_path = []
        self.bonus_room_id = None
        self.rejections = 0

        plan = plan_room_types(self.config.main_room_count, self.rng)

        # Step 1: Walk left to right placing the main path.
        self.main_path = self._run_phase("main_path", self._place_main_path, plan)

        # Step 2: Link consecutive main-path rooms.
        self._run_phase("connect_main_path", self._connect_main_path)

        # Step 3: Hang at most one bonus room off the junction.
        junction = self._find_junction()
        if junction is not None:
            bonus = self._run_phase("bonus_branch", self._try_place_bonus_room, junction)
            if bonus is not None:
                self.bonus_room_id = bonus.id

        log.info(
            "Generated %d/%d main-path rooms, bonus=%s, %d doors",
            len(self.main_path),
            self.config.main_room_count,
            "yes" if self.bonus_room_id is not None else "no",
            len(self.layout.doors),
        )
        return self.layout.snapshot()

    def _place_main_path(self, plan: List[RoomType]) -> List[int]:
        config = self.config
        main_path: List[int] = []
        cursor_x = MAIN_PATH_START_X

        for index, room_type in enumerate(plan):
            width, depth = sample_room_size(spec_for(room_type), config.room_min, config.room_max, self.rng)

            if cursor_x + width + PLACEMENT_MARGIN >= config.width:
                log.debug("Main path truncated at index %d: no horizontal space", index)
                self.rejections += 1
                break

            z_min_base = PLACEMENT_MARGIN
            z_max_base = config.depth - depth - PLACEMENT_MARGIN
            if z_min_base >= z_max_base:
                log.debug("Main path truncated at index %d: room too deep for grid", index)
                self.rejections += 1
                break

            if main_path:
                prev_z_center = self.layout.rooms[main_path[-1]].center.z
            else:
                prev_z_center = config.depth // 2
            target_z = prev_z_center - depth // 2

            z_min = clamp(target_z - config.max_z_drift, z_min_base, z_max_base)
            z_max = clamp(target_z + config.max_z_drift, z_min_base, z_max_base)
            z = self.rng.randint(z_min, z_max)

            room = self.layout.register_room(Rect(cursor_x, z, width, depth), room_type)
            main_path.append(room.id)
            cursor_x += width + config.corridor_step

        if len(main_path) >= 2:
            self._ensure_last_is_boss(main_path)
        return main_path

    def _ensure_last_is_boss(self, main_path: List[int]) -> None:
        last = self.layout.rooms[main_path[-1]]
        if last.room_type is RoomType.BOSS:
            return
        log.debug("Promoting room %d (%s) to boss", last.id, last.room_type.value)
        self.layout.replace_room_type(last.id, RoomType.BOSS)

    def _connect_main_path(self) -> int:
        connected = 0
        for room_a_id, room_b_id in zip(self.main_path, self.main_path[1:]):
            room_a = self.layout.rooms[room_a_id]
            room_b = self.layout.rooms[room_b_id]
            if self.layout.connect(
                room_a.id,
                room_b.id,
                room_a.exit_right,
                Direction.EAST,
                room_b.exit_left,
                Direction.WEST,
            ):
                connected += 1
            else:
                self.rejections += 1
        return connected

    def _find_junction(self) -> Optional[Room]:
        for room_id in self.main_path:
            room = self.layout.rooms[room_id]
            if room.room_type is RoomType.JUNCTION:
                return room
        return None

    def _try_place_bonus_room(self, parent: Room) -> Optional[Room]:
        """Place a bonus room above or below ``parent``; returns None when it does not fit."""
        config = self.config
        if not self.layout.can_attach(parent.id, RoomType.BONUS):
            log.debug("Bonus room skipped: room %d cannot take another connection", parent.id)
            self.rejections += 1
            return None

        width, depth = sample_room_size(spec_for(RoomType.BONUS), config.room_min, config.room_max, self.rng)
        place_up = self.rng.random() > 0.5

        offset_z = parent.depth // 2 + depth // 2 + BONUS_ROOM_GAP
        center_x = parent.center.x
        center_z = parent.center.z + (offset_z if place_up else -offset_z)
        bounds = Rect(center_x - width // 2, center_z - depth // 2, width, depth)

        if not self.layout.is_valid_placement(bounds):
            log.debug("Bonus room rejected at %s", bounds.to_tuple())
            self.rejections += 1
            return None

        bonus = self.layout.register_room(bounds, RoomType.BONUS, parent_id=parent.id)
        normal = Direction.NORTH if bonus.center.z >= parent.center.z else Direction.SOUTH
        linked = self.layout.connect(
            parent.id,
            bonus.id,
            parent.edge_door_cell(normal),
            normal,
            bonus.edge_door_cell(normal.opposite()),
            normal.opposite(),
        )
        if not linked:
            # can_attach must agree with add_door_pair.
            raise RuntimeError(f"Bonus room {bonus.id} could not be linked to room {parent.id}")
        return bonus


def generate_dungeon(rng: Optional[random.Random] = None, **config_kwargs) -> DungeonDataset:
    """One-shot convenience wrapper: build a config from keyword arguments and generate."""
    return DungeonGenerator(DungeonConfig(**config_kwargs), rng=rng).generate()
