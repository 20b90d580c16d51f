from dungeon_config import DungeonConfig
from dungeon_geometry import Direction, Rect, TilePos
from dungeon_graph import boss_distance_from_start, build_room_graph, find_invariant_violations, summarize
from dungeon_layout import DungeonLayout
from dungeon_models import Door, DungeonDataset
from room_types import RoomType


def test_summary_of_batch_dungeon(make_generator):
    generator = make_generator(seed=8)
    dataset = generator.generate()

    summary = summarize(dataset)

    assert summary.room_count == len(dataset.rooms)
    assert summary.is_connected
    assert summary.component_count == 1
    assert summary.cycle_count == 0
    assert summary.connection_count == len(dataset.doors) // 2
    assert summary.degrees == dataset.degrees()
    assert boss_distance_from_start(dataset) == len(generator.main_path) - 1


def test_room_graph_carries_room_attributes(make_generator):
    dataset = make_generator(seed=1).generate()

    graph = build_room_graph(dataset)

    assert graph.nodes[0]["room_type"] is RoomType.START
    assert graph.nodes[0]["bounds"] == dataset.rooms[0].bounds.to_tuple()


def test_summary_of_single_room(make_builder):
    builder = make_builder()

    summary = summarize(builder.initialize())

    assert summary.room_count == 1
    assert summary.diameter == 0
    assert summary.is_connected
    assert boss_distance_from_start(builder.get_dataset()) is None


def test_detects_rooms_without_gap():
    layout = DungeonLayout(DungeonConfig())
    layout.register_room(Rect(5, 5, 4, 4), RoomType.NORMAL)
    layout.register_room(Rect(9, 5, 4, 4), RoomType.NORMAL)

    problems = find_invariant_violations(layout.snapshot())

    assert len(problems) == 1
    assert "closer than" in problems[0]


def test_detects_border_and_missing_reciprocal():
    layout = DungeonLayout(DungeonConfig())
    layout.register_room(Rect(0, 5, 4, 4), RoomType.NORMAL)
    layout.register_room(Rect(10, 5, 4, 4), RoomType.NORMAL)
    dataset = layout.snapshot()
    broken = DungeonDataset(
        grid=dataset.grid,
        rooms=dataset.rooms,
        doors=(Door(0, 1, TilePos(3, 7), Direction.EAST),),
    )

    problems = find_invariant_violations(broken)

    assert any("grid border" in problem for problem in problems)
    assert any("no reciprocal" in problem for problem in problems)


def test_detects_degree_overflow_only_when_asked():
    layout = DungeonLayout(DungeonConfig(enforce_degrees=False))
    start = layout.register_room(Rect(5, 5, 4, 4), RoomType.START)
    east = layout.register_room(Rect(15, 5, 4, 4), RoomType.NORMAL)
    north = layout.register_room(Rect(5, 15, 4, 4), RoomType.NORMAL)
    layout.add_door_pair(start.id, east.id, start.exit_right, Direction.EAST, east.exit_left, Direction.WEST)
    layout.add_door_pair(start.id, north.id, start.exit_top, Direction.NORTH, north.exit_bottom, Direction.SOUTH)
    dataset = layout.snapshot()

    problems = find_invariant_violations(dataset)

    assert problems == ["room 0 (Start) has degree 2 > 1"]
    assert find_invariant_violations(dataset, check_degrees=False) == []
