"""Mutable cell-occupancy grid that the generators carve rooms and corridors into."""

from __future__ import annotations

from enum import Enum
from typing import Iterable, List, Tuple

from dungeon_geometry import Rect, TilePos


class Cell(Enum):
    EMPTY = 0
    FLOOR = 1


CellRows = Tuple[Tuple[Cell, ...], ...]


class OccupancyGrid:
    """A ``width x depth`` array of cells, indexed as ``[z][x]``.

    Carving is monotonic: cells only ever go from EMPTY to FLOOR. Writes that
    fall outside the grid are clipped silently; reads outside raise IndexError.
    """

    def __init__(self, width: int, depth: int) -> None:
        if width <= 0 or depth <= 0:
            raise ValueError("OccupancyGrid dimensions must be positive")
        self.width = width
        self.depth = depth
        self._cells: List[List[Cell]] = [[Cell.EMPTY for _ in range(width)] for _ in range(depth)]

    def in_bounds(self, x: int, z: int) -> bool:
        return 0 <= x < self.width and 0 <= z < self.depth

    def get(self, x: int, z: int) -> Cell:
        if not self.in_bounds(x, z):
            raise IndexError(f"Cell {(x, z)} is outside the {self.width}x{self.depth} grid")
        return self._cells[z][x]

    def is_floor(self, x: int, z: int) -> bool:
        return self.in_bounds(x, z) and self._cells[z][x] is Cell.FLOOR

    def carve_cell(self, x: int, z: int) -> None:
        if self.in_bounds(x, z):
            self._cells[z][x] = Cell.FLOOR

    def carve_rect(self, bounds: Rect) -> None:
        for tile in bounds.iter_tiles():
            self.carve_cell(tile.x, tile.z)

    def carve_wide(self, x: int, z: int, corridor_width: int) -> None:
        """Carve a square brush of radius ``corridor_width // 2`` centred on ``(x, z)``."""
        radius = corridor_width // 2
        for dz in range(-radius, radius + 1):
            for dx in range(-radius, radius + 1):
                self.carve_cell(x + dx, z + dz)

    def carve_l_corridor(self, start: TilePos, end: TilePos, corridor_width: int) -> None:
        """Carve a horizontal run along ``start``'s row, then a vertical run along ``end``'s column."""
        for tile in l_corridor_path(start, end):
            self.carve_wide(tile.x, tile.z, corridor_width)

    def floor_count(self) -> int:
        return sum(1 for row in self._cells for cell in row if cell is Cell.FLOOR)

    def snapshot(self) -> CellRows:
        """Return an immutable copy of the cells."""
        return tuple(tuple(row) for row in self._cells)


def l_corridor_path(start: TilePos, end: TilePos) -> Iterable[TilePos]:
    """Yield the centre-line tiles of an L corridor; the bend sits at ``(end.x, start.z)``."""
    step_x = 1 if end.x >= start.x else -1
    for x in range(start.x, end.x + step_x, step_x):
        yield TilePos(x, start.z)
    step_z = 1 if end.z >= start.z else -1
    for z in range(start.z + step_z, end.z + step_z, step_z):
        yield TilePos(end.x, z)
