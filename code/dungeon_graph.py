"""Graph view of a dungeon dataset, used for quality checks and invariant validation."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List

import networkx as nx

from dungeon_constants import GRID_BORDER, ROOM_SEPARATION
from dungeon_models import DungeonDataset
from room_types import RoomType


def build_room_graph(dataset: DungeonDataset) -> nx.Graph:
    """One node per room (with type/bounds attributes), one edge per door pair."""
    graph = nx.Graph()
    for room in dataset.rooms:
        graph.add_node(room.id, room_type=room.room_type, bounds=room.bounds.to_tuple())
    for door in dataset.doors:
        graph.add_edge(door.a, door.b)
    return graph


@dataclass
class GraphSummary:
    room_count: int
    connection_count: int
    component_count: int
    is_connected: bool
    diameter: int
    cycle_count: int
    degrees: Dict[int, int] = field(default_factory=dict)


def summarize(dataset: DungeonDataset) -> GraphSummary:
    graph = build_room_graph(dataset)
    room_count = graph.number_of_nodes()
    components = list(nx.connected_components(graph)) if room_count else []
    diameter = 0
    if components:
        largest = max(components, key=len)
        if len(largest) >= 2:
            diameter = int(nx.diameter(graph.subgraph(largest)))
    return GraphSummary(
        room_count=room_count,
        connection_count=graph.number_of_edges(),
        component_count=len(components),
        is_connected=len(components) == 1,
        diameter=diameter,
        cycle_count=len(nx.cycle_basis(graph)),
        degrees=dict(graph.degree()),
    )


def boss_distance_from_start(dataset: DungeonDataset) -> int | None:
    """Number of door pairs between the start room and the boss room, or None if unreachable."""
    start = next((room.id for room in dataset.rooms if room.room_type is RoomType.START), None)
    boss = next((room.id for room in dataset.rooms if room.room_type is RoomType.BOSS), None)
    if start is None or boss is None:
        return None
    graph = build_room_graph(dataset)
    try:
        return nx.shortest_path_length(graph, start, boss)
    except nx.NetworkXNoPath:
        return None


def find_invariant_violations(dataset: DungeonDataset, *, check_degrees: bool = True) -> List[str]:
    """Return a human-readable list of every broken layout invariant (empty when valid)."""
    problems: List[str] = []
    width, depth = dataset.width, dataset.depth

    for index, room in enumerate(dataset.rooms):
        if room.id != index:
            problems.append(f"room at index {index} has id {room.id}")
        bounds = room.bounds
        if (
            bounds.x < GRID_BORDER
            or bounds.z < GRID_BORDER
            or bounds.max_x > width - GRID_BORDER - 1
            or bounds.max_z > depth - GRID_BORDER - 1
        ):
            problems.append(f"room {room.id} violates the grid border: {bounds.to_tuple()}")
        for tile in bounds.iter_tiles():
            if not dataset.is_floor(tile.x, tile.z):
                problems.append(f"room {room.id} has uncarved cell {tile.to_tuple()}")
                break

    for i, room_a in enumerate(dataset.rooms):
        expanded = room_a.bounds.expand(ROOM_SEPARATION)
        for room_b in dataset.rooms[i + 1:]:
            if expanded.overlaps(room_b.bounds):
                problems.append(f"rooms {room_a.id} and {room_b.id} are closer than {ROOM_SEPARATION} cell")

    doors = list(dataset.doors)
    for door in doors:
        if not (0 <= door.a < len(dataset.rooms)) or not dataset.rooms[door.a].contains_cell(*door.cell):
            problems.append(f"door {door.a}->{door.b} cell {door.cell.to_tuple()} is not on room {door.a}")
        if not any(door.is_reciprocal_of(other) for other in doors):
            problems.append(f"door {door.a}->{door.b} at {door.cell.to_tuple()} has no reciprocal")

    if check_degrees:
        graph = build_room_graph(dataset)
        for room in dataset.rooms:
            degree = graph.degree(room.id)
            if degree > room.spec.preferred_max_degree:
                problems.append(
                    f"room {room.id} ({room.room_type.value}) has degree {degree} "
                    f"> {room.spec.preferred_max_degree}"
                )

    return problems
