"""Per-phase instrumentation for batch dungeon generation."""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from typing import Dict, Iterable

from room_types import RoomType


@dataclass
class PhaseMetrics:
    """Totals for one generation phase (main path, links, bonus branch) across runs."""

    name: str
    invocations: int = 0
    total_time: float = 0.0
    total_rooms_added: int = 0
    total_doors_added: int = 0
    # Placements or door pairs the phase tried and dropped (no space, overlap, degree cap).
    total_rejections: int = 0
    room_types_added: Counter = field(default_factory=Counter)

    def record(
        self,
        duration: float,
        added_rooms: Iterable[RoomType],
        doors_delta: int,
        rejections_delta: int = 0,
    ) -> None:
        added = list(added_rooms)
        self.invocations += 1
        self.total_time += duration
        self.total_rooms_added += len(added)
        self.total_doors_added += doors_delta
        self.total_rejections += rejections_delta
        self.room_types_added.update(room_type.value for room_type in added)

    @property
    def rejection_rate(self) -> float:
        """Rejected attempts as a share of all attempts that placed a room or a door pair."""
        attempts = self.total_rooms_added + self.total_doors_added // 2 + self.total_rejections
        return self.total_rejections / attempts if attempts else 0.0

    def to_dict(self) -> Dict[str, object]:
        return {
            "invocations": self.invocations,
            "total_time": self.total_time,
            "total_rooms_added": self.total_rooms_added,
            "total_doors_added": self.total_doors_added,
            "total_rejections": self.total_rejections,
            "rejection_rate": self.rejection_rate,
            "room_types_added": dict(self.room_types_added),
        }


@dataclass
class GenerationMetrics:
    phases: Dict[str, PhaseMetrics] = field(default_factory=dict)

    def record_phase(
        self,
        name: str,
        duration: float,
        added_rooms: Iterable[RoomType],
        doors_delta: int,
        rejections_delta: int = 0,
    ) -> None:
        metrics = self.phases.setdefault(name, PhaseMetrics(name=name))
        metrics.record(duration, added_rooms, doors_delta, rejections_delta)

    @property
    def total_rejections(self) -> int:
        return sum(phase.total_rejections for phase in self.phases.values())

    def snapshot(self) -> Dict[str, Dict[str, object]]:
        return {name: metrics.to_dict() for name, metrics in self.phases.items()}
