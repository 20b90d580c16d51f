import pytest

from dungeon_geometry import Rect, TilePos
from occupancy_grid import Cell, OccupancyGrid, l_corridor_path


def test_new_grid_is_empty():
    grid = OccupancyGrid(10, 6)

    assert grid.floor_count() == 0
    assert grid.get(9, 5) is Cell.EMPTY
    snapshot = grid.snapshot()
    assert len(snapshot) == 6
    assert all(len(row) == 10 for row in snapshot)


def test_grid_rejects_non_positive_dimensions():
    with pytest.raises(ValueError):
        OccupancyGrid(0, 5)


def test_reads_outside_grid_raise_but_writes_are_clipped():
    grid = OccupancyGrid(5, 5)

    with pytest.raises(IndexError):
        grid.get(5, 0)
    assert not grid.is_floor(-1, 0)

    grid.carve_cell(-1, 2)
    grid.carve_rect(Rect(3, 3, 4, 4))

    assert grid.floor_count() == 4


def test_carving_is_monotonic():
    grid = OccupancyGrid(8, 8)
    grid.carve_rect(Rect(1, 1, 3, 3))
    grid.carve_rect(Rect(2, 2, 3, 3))

    assert grid.floor_count() == 9 + 9 - 4
    assert grid.get(1, 1) is Cell.FLOOR


def test_l_corridor_path_runs_horizontal_then_vertical():
    path = list(l_corridor_path(TilePos(2, 3), TilePos(5, 1)))

    assert path == [
        TilePos(2, 3),
        TilePos(3, 3),
        TilePos(4, 3),
        TilePos(5, 3),
        TilePos(5, 2),
        TilePos(5, 1),
    ]


def test_l_corridor_path_single_cell():
    assert list(l_corridor_path(TilePos(4, 4), TilePos(4, 4))) == [TilePos(4, 4)]


@pytest.mark.parametrize("corridor_width,expected", [(1, 1), (2, 9), (3, 9), (5, 25)])
def test_carve_wide_uses_half_width_radius(corridor_width, expected):
    grid = OccupancyGrid(20, 20)

    grid.carve_wide(10, 10, corridor_width)

    assert grid.floor_count() == expected


def test_carve_l_corridor_connects_endpoints():
    grid = OccupancyGrid(20, 20)
    start, end = TilePos(2, 2), TilePos(12, 15)

    grid.carve_l_corridor(start, end, 1)

    assert grid.is_floor(*start)
    assert grid.is_floor(*end)
    assert grid.is_floor(12, 2)
    assert not grid.is_floor(2, 15)
    assert grid.floor_count() == 11 + 13
