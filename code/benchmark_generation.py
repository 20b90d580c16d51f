#!/usr/bin/env python3

# This file performs multiple runs of batch dungeon generation, collecting and reporting metrics.
# Used for testing both performance of the algorithm and quality of resulting dungeons.

from __future__ import annotations

import argparse
import json
import math
import random
import statistics
import time
from dataclasses import asdict, dataclass
from typing import Any, Callable, Dict, List, Optional, Sequence

from dungeon_config import DungeonConfig
from dungeon_generator import DungeonGenerator
from dungeon_graph import boss_distance_from_start, find_invariant_violations, summarize

# Default configuration mirrors the batch controller setup.
DEFAULT_CONFIG_KWARGS = dict(
    width=160,
    depth=160,
    main_room_count=7,
    room_min=(12, 12),
    room_max=(20, 20),
    corridor_step=8,
    corridor_width=3,
    max_z_drift=12,
)

PERCENTILES = [5.0, 25.0, 50.0, 75.0, 95.0]


def build_config(seed: int, **overrides: Any) -> DungeonConfig:
    kwargs = dict(DEFAULT_CONFIG_KWARGS)
    kwargs.update(overrides)
    return DungeonConfig(random_seed=seed, **kwargs)  # type: ignore[arg-type]


@dataclass
class GenerationRunResult:
    seed: int
    duration: float
    total_rooms: int
    main_path_rooms: int
    room_target: int
    has_bonus: bool
    door_pairs: int
    is_connected: bool
    graph_diameter: int
    start_to_boss: Optional[int]
    rejections: int
    violations: List[str]


def percentile(values: List[float], pct: float) -> float:
    if not values:
        return float("nan")
    if pct <= 0:
        return min(values)
    if pct >= 100:
        return max(values)
    ordered = sorted(values)
    rank = (len(ordered) - 1) * (pct / 100.0)
    lower = math.floor(rank)
    upper = math.ceil(rank)
    if lower == upper:
        return ordered[int(rank)]
    fraction = rank - lower
    return ordered[lower] + (ordered[upper] - ordered[lower]) * fraction


def format_seconds(value: float) -> str:
    if value >= 1.0:
        return f"{value:.3f}s"
    return f"{value * 1000:.1f}ms"


def run_single_generation(seed: int, **overrides: Any) -> GenerationRunResult:
    """Run one dungeon generation with the provided seed and collect metrics."""
    config = build_config(seed, **overrides)
    generator = DungeonGenerator(config)

    start = time.perf_counter()
    dataset = generator.generate()
    end = time.perf_counter()

    summary = summarize(dataset)
    return GenerationRunResult(
        seed=seed,
        duration=end - start,
        total_rooms=len(dataset.rooms),
        main_path_rooms=len(generator.main_path),
        room_target=config.main_room_count,
        has_bonus=generator.bonus_room_id is not None,
        door_pairs=summary.connection_count,
        is_connected=summary.is_connected,
        graph_diameter=summary.diameter,
        start_to_boss=boss_distance_from_start(dataset),
        rejections=generator.rejections,
        violations=find_invariant_violations(dataset, check_degrees=config.enforce_degrees),
    )


def run_benchmark(num_runs: int, seed: Optional[int], **overrides: Any) -> List[GenerationRunResult]:
    """Run the generator multiple times and collect run-level metrics."""
    rng = random.Random(seed)
    return [run_single_generation(rng.randint(0, 1_000_000), **overrides) for _ in range(num_runs)]


def report_metric(name: str, values: List[float], formatter: Callable[[float], str]) -> None:
    print(name + ":")
    if not values:
        print("  (no data)")
        return
    print(
        "  mean {mean}, median {median}, min {min}, max {max}".format(
            mean=formatter(statistics.mean(values)),
            median=formatter(statistics.median(values)),
            min=formatter(min(values)),
            max=formatter(max(values)),
        )
    )
    parts = [f"p{int(pct)}={formatter(percentile(values, pct))}" for pct in PERCENTILES]
    print("  Percentiles: " + ", ".join(parts))


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        description="Run the batch dungeon generator multiple times and report timing and quality statistics."
    )
    parser.add_argument("-n", "--runs", type=int, default=20, help="Number of generations (default: 20)")
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Optional seed for the benchmark harness RNG; keeps run seeds reproducible",
    )
    parser.add_argument("--rooms", type=int, default=None, help="Override the main-path room target")
    parser.add_argument("--json", dest="json_path", default=None, help="Also write per-run results to this file")
    args = parser.parse_args(argv)

    if args.runs <= 0:
        raise SystemExit("Number of runs must be a positive integer")

    overrides: Dict[str, Any] = {}
    if args.rooms is not None:
        overrides["main_room_count"] = args.rooms

    results = run_benchmark(args.runs, args.seed, **overrides)

    for idx, result in enumerate(results, start=1):
        status = "ok" if not result.violations else f"{len(result.violations)} violations"
        print(
            f"Run {idx:02d}: {format_seconds(result.duration)} (seed {result.seed}) | "
            f"main path {result.main_path_rooms}/{result.room_target} | bonus {'yes' if result.has_bonus else 'no'} | "
            f"diameter {result.graph_diameter} | {status}"
        )
        for violation in result.violations:
            print(f"  - {violation}")

    print()
    report_metric("Generation time", [r.duration for r in results], format_seconds)
    report_metric("Main-path rooms", [float(r.main_path_rooms) for r in results], lambda v: f"{v:.1f}")
    report_metric("Graph diameter", [float(r.graph_diameter) for r in results], lambda v: f"{v:.1f}")
    report_metric("Rejected placements", [float(r.rejections) for r in results], lambda v: f"{v:.1f}")
    completed = sum(1 for r in results if r.main_path_rooms == r.room_target)
    print(f"Full main path: {completed}/{len(results)}")
    print(f"Bonus branch: {sum(1 for r in results if r.has_bonus)}/{len(results)}")
    print(f"Connected: {sum(1 for r in results if r.is_connected)}/{len(results)}")

    if args.json_path:
        with open(args.json_path, "w", encoding="utf-8") as handle:
            json.dump([asdict(r) for r in results], handle, indent=2, sort_keys=True)

    return 1 if any(r.violations for r in results) else 0


if __name__ == "__main__":
    raise SystemExit(main())
