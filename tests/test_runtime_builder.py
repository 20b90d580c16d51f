import random

import pytest

from dungeon_config import DungeonConfig
from dungeon_geometry import Direction, Rect, TilePos
from dungeon_graph import find_invariant_violations
from room_types import RoomType
from runtime_builder import DungeonRuntimeBuilder


def test_initialize_places_centred_start_room(make_builder):
    builder = make_builder(room_min=(6, 6), room_max=(12, 12))

    dataset = builder.initialize()

    assert len(dataset.rooms) == 1
    start = dataset.rooms[0]
    assert start.room_type is RoomType.START
    assert start.center == TilePos(40, 20)
    assert 6 <= start.width <= 12 and 6 <= start.depth <= 12
    assert dataset.doors == ()
    assert dataset.floor_count() == start.width * start.depth


def test_initialize_clamps_into_small_grid(make_builder):
    builder = make_builder(width=12, depth=12, room_min=(8, 8), room_max=(8, 8))

    start = builder.initialize().rooms[0]

    assert start.bounds == Rect(2, 2, 8, 8)


def test_initialize_rejects_start_room_that_cannot_fit(make_builder):
    builder = make_builder(width=8, depth=8, room_min=(6, 6), room_max=(6, 6))

    with pytest.raises(ValueError):
        builder.initialize()
    with pytest.raises(RuntimeError):
        builder.get_dataset()
    assert not builder.try_expand_from(0, Direction.EAST)


def test_initialize_keeps_previous_session_when_start_does_not_fit(make_builder):
    builder = make_builder()
    before = builder.initialize()
    builder.config.room_min = (80, 80)
    builder.config.room_max = (80, 80)

    with pytest.raises(ValueError):
        builder.initialize()

    assert builder.get_dataset() == before
    assert find_invariant_violations(before) == []


def test_initialize_resets_the_session(make_builder):
    builder = make_builder()
    builder.initialize()
    builder.try_expand_from(0, Direction.EAST)

    dataset = builder.initialize()

    assert len(dataset.rooms) == 1
    assert dataset.doors == ()


def test_get_dataset_requires_initialize(make_builder):
    with pytest.raises(RuntimeError):
        make_builder().get_dataset()


def test_expand_before_initialize_fails(make_builder):
    assert not make_builder().try_expand_from(0, Direction.EAST)


@pytest.mark.parametrize(
    "direction,bounds,anchor,facing",
    [
        (Direction.EAST, Rect(49, 17, 6, 6), TilePos(42, 20), TilePos(49, 20)),
        (Direction.WEST, Rect(25, 17, 6, 6), TilePos(37, 20), TilePos(30, 20)),
        (Direction.NORTH, Rect(37, 29, 6, 6), TilePos(40, 22), TilePos(40, 29)),
        (Direction.SOUTH, Rect(37, 5, 6, 6), TilePos(40, 17), TilePos(40, 10)),
    ],
)
def test_expand_in_each_direction(make_builder, direction, bounds, anchor, facing):
    builder = make_builder()
    assert builder.initialize().rooms[0].bounds == Rect(37, 17, 6, 6)

    result = builder.try_expand_from(0, direction)

    assert result
    assert result.room.id == 1
    assert result.room.bounds == bounds
    assert result.room.room_type is RoomType.NORMAL
    assert result.room.parent_id == 0

    dataset = builder.get_dataset()
    forward, backward = dataset.doors
    assert (forward.a, forward.b, forward.cell, forward.normal) == (0, 1, anchor, direction)
    assert (backward.a, backward.b, backward.cell, backward.normal) == (1, 0, facing, direction.opposite())
    # Every cell of the corridor centre line is carved.
    step = direction.vector
    cell = anchor
    while cell != facing:
        assert dataset.is_floor(*cell)
        cell = TilePos(cell.x + step[0], cell.z + step[1])
    assert find_invariant_violations(dataset, check_degrees=False) == []


def test_expand_accepts_direction_tuples(make_builder):
    builder = make_builder()
    builder.initialize()

    assert builder.try_expand_from(0, (0, 1))


@pytest.mark.parametrize("room_id", [-1, 1, 99, 0.5, "0", True, None])
def test_expand_from_unknown_room_fails(make_builder, room_id):
    builder = make_builder()
    before = builder.initialize()

    assert not builder.try_expand_from(room_id, Direction.EAST)
    assert builder.get_dataset() == before


@pytest.mark.parametrize("direction", [(1, 1), (0, 0), (2, 0), "east", None])
def test_expand_with_non_cardinal_direction_fails(make_builder, direction):
    builder = make_builder()
    before = builder.initialize()

    result = builder.try_expand_from(0, direction)

    assert not result
    assert result.room is None
    assert builder.get_dataset() == before


def test_failed_expansion_changes_nothing(make_builder):
    builder = make_builder(width=30, depth=30)
    before = builder.initialize()

    for direction in Direction:
        assert not builder.try_expand_from(0, direction)

    after = builder.get_dataset()
    assert after.grid == before.grid
    assert after.rooms == before.rooms
    assert after.doors == before.doors


def test_overlapping_expansion_is_rejected(make_builder):
    builder = make_builder()
    builder.initialize()
    builder.try_expand_from(0, Direction.EAST)
    before = builder.get_dataset()

    # Heading back west from the new room lands on the start room.
    assert not builder.try_expand_from(1, Direction.WEST)
    assert builder.get_dataset() == before


def test_runtime_growth_does_not_cap_degrees(make_builder):
    builder = make_builder()
    builder.initialize()

    for direction in Direction:
        assert builder.try_expand_from(0, direction)

    dataset = builder.get_dataset()
    assert dataset.degree_of(0) == 4
    assert builder.layout.degrees[0] == 4


def test_snapshots_are_equal_but_independent(make_builder):
    builder = make_builder()
    builder.initialize()
    builder.try_expand_from(0, Direction.EAST)

    first = builder.get_dataset()
    second = builder.get_dataset()
    assert first == second
    assert first is not second

    builder.try_expand_from(0, Direction.NORTH)

    assert len(first.rooms) == 2
    assert len(first.doors) == 2
    assert builder.get_dataset() != first


def test_random_growth_keeps_invariants():
    config = DungeonConfig(width=80, depth=40, room_min=(4, 4), room_max=(8, 8), corridor_length=4)
    builder = DungeonRuntimeBuilder(config, rng=random.Random(21))
    builder.initialize()
    picker = random.Random(99)
    previous = builder.get_dataset()

    for _ in range(60):
        room_id = picker.randrange(len(previous.rooms))
        direction = picker.choice(list(Direction))
        builder.try_expand_from(room_id, direction)
        current = builder.get_dataset()

        assert current.rooms[: len(previous.rooms)] == previous.rooms
        assert current.doors[: len(previous.doors)] == previous.doors
        assert current.floor_count() >= previous.floor_count()
        assert find_invariant_violations(current, check_degrees=False) == []
        previous = current

    assert len(previous.rooms) > 1
