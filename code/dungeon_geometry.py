"""Geometry helpers for working with grid cells, directions, and rectangles."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterator, Optional, Tuple


class Direction(Enum):
    """Cardinal directions with unit vectors on the x/z tile grid (z grows northward)."""

    NORTH = (0, 1)
    EAST = (1, 0)
    SOUTH = (0, -1)
    WEST = (-1, 0)

    @property
    def dx(self) -> int:
        return self.value[0]

    @property
    def dz(self) -> int:
        return self.value[1]

    @property
    def vector(self) -> Tuple[int, int]:
        return self.value

    @property
    def is_horizontal(self) -> bool:
        """True for EAST/WEST, i.e. movement along the x axis."""
        return self.dz == 0

    def opposite(self) -> Direction:
        return Direction.from_tuple((-self.dx, -self.dz))

    def dot(self, other: Direction) -> int:
        return self.dx * other.dx + self.dz * other.dz

    @classmethod
    def from_tuple(cls, value: Tuple[int, int]) -> Direction:
        try:
            return cls(tuple(value))
        except (TypeError, ValueError) as exc:
            raise ValueError(f"Unsupported direction {value}") from exc

    @classmethod
    def try_from(cls, value: object) -> Optional[Direction]:
        """Coerce a Direction or an ``(dx, dz)`` pair, returning None for anything non-cardinal."""
        if isinstance(value, Direction):
            return value
        try:
            return cls.from_tuple(value)  # type: ignore[arg-type]
        except ValueError:
            return None


@dataclass(frozen=True, order=True)
class TilePos:
    """Integer tile coordinate."""

    x: int
    z: int

    def __iter__(self):
        yield self.x
        yield self.z

    def __getitem__(self, index: int) -> int:
        if index == 0:
            return self.x
        if index == 1:
            return self.z
        raise IndexError("TilePos only supports two coordinates")

    def offset(self, direction: Direction, distance: int = 1) -> TilePos:
        return TilePos(self.x + direction.dx * distance, self.z + direction.dz * distance)

    def to_tuple(self) -> Tuple[int, int]:
        return self.x, self.z

    @classmethod
    def from_tuple(cls, value: Tuple[int, int]) -> TilePos:
        return cls(*value)


@dataclass(frozen=True)
class Rect:
    """Immutable axis-aligned rectangle on the x/z plane using integer tile coordinates."""

    x: int
    z: int
    width: int
    depth: int

    @property
    def max_x(self) -> int:
        """Right edge (exclusive)."""
        return self.x + self.width

    @property
    def max_z(self) -> int:
        """Top edge (exclusive)."""
        return self.z + self.depth

    @property
    def area(self) -> int:
        return self.width * self.depth

    def overlaps(self, other: Rect) -> bool:
        """Return True when the interior of this rect intersects another rect."""
        if self.max_x <= other.x or other.max_x <= self.x:
            return False
        if self.max_z <= other.z or other.max_z <= self.z:
            return False
        return True

    def expand(self, margin: int) -> Rect:
        """Return a rect grown outward by ``margin`` tiles on all sides."""
        if margin == 0:
            return self
        return Rect(
            self.x - margin,
            self.z - margin,
            self.width + 2 * margin,
            self.depth + 2 * margin,
        )

    def contains(self, point: TilePos) -> bool:
        """Return True if the provided tile lies inside this rect."""
        return self.x <= point.x < self.max_x and self.z <= point.z < self.max_z

    def iter_tiles(self) -> Iterator[TilePos]:
        for tz in range(self.z, self.max_z):
            for tx in range(self.x, self.max_x):
                yield TilePos(tx, tz)

    def to_tuple(self) -> Tuple[int, int, int, int]:
        """Return the rect as an ``(x, z, width, depth)`` tuple."""
        return self.x, self.z, self.width, self.depth


def clamp(value: int, low: int, high: int) -> int:
    """Clamp ``value`` into ``[low, high]``, testing the lower bound first."""
    if value < low:
        return low
    if value > high:
        return high
    return value
