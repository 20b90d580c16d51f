"""Room size sampling against the global size range and per-type bounds."""

from __future__ import annotations

import random
from typing import Tuple

from room_types import RoomTypeSpec


def size_range(
    spec: RoomTypeSpec,
    room_min: Tuple[int, int],
    room_max: Tuple[int, int],
) -> Tuple[Tuple[int, int], Tuple[int, int]]:
    """Intersect the global range with the type's bounds per axis.

    An inverted intersection collapses onto its minimum, so a Boss room with a
    10x10 floor still gets 10x10 when the global max is smaller.
    """
    min_w = max(room_min[0], spec.min_size[0])
    min_d = max(room_min[1], spec.min_size[1])
    max_w = max(min_w, min(room_max[0], spec.max_size[0]))
    max_d = max(min_d, min(room_max[1], spec.max_size[1]))
    return (min_w, min_d), (max_w, max_d)


def sample_room_size(
    spec: RoomTypeSpec,
    room_min: Tuple[int, int],
    room_max: Tuple[int, int],
    rng: random.Random,
) -> Tuple[int, int]:
    (min_w, min_d), (max_w, max_d) = size_range(spec, room_min, room_max)
    return rng.randint(min_w, max_w), rng.randint(min_d, max_d)
