#!/usr/bin/env python3

from __future__ import annotations

import argparse
import logging
import random
from typing import List, Optional, Sequence, Tuple

from dungeon_config import DungeonConfig
from dungeon_generator import DungeonGenerator
from dungeon_geometry import Direction
from dungeon_graph import summarize
from dungeon_models import DungeonDataset
from grid_renderer import print_grid
from logging_setup import setup_logging
from runtime_builder import DungeonRuntimeBuilder

DIRECTION_NAMES = {
    "n": Direction.NORTH,
    "north": Direction.NORTH,
    "up": Direction.NORTH,
    "e": Direction.EAST,
    "east": Direction.EAST,
    "right": Direction.EAST,
    "s": Direction.SOUTH,
    "south": Direction.SOUTH,
    "down": Direction.SOUTH,
    "w": Direction.WEST,
    "west": Direction.WEST,
    "left": Direction.WEST,
}


def parse_size(value: str) -> Tuple[int, int]:
    try:
        width, depth = (int(part) for part in value.lower().split("x"))
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"Expected WIDTHxDEPTH, got {value!r}") from exc
    return width, depth


def parse_step(value: str) -> Tuple[int, Direction]:
    try:
        room_text, direction_text = value.split(":")
        return int(room_text), DIRECTION_NAMES[direction_text.strip().lower()]
    except (KeyError, ValueError) as exc:
        raise argparse.ArgumentTypeError(f"Expected ROOM:DIRECTION (e.g. 0:east), got {value!r}") from exc


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Lay out a grid dungeon and print it as ASCII.")
    parser.add_argument("--width", type=int, default=80)
    parser.add_argument("--depth", type=int, default=40)
    parser.add_argument("--room-min", type=parse_size, default=(6, 6), help="Minimum room size, WIDTHxDEPTH")
    parser.add_argument("--room-max", type=parse_size, default=(12, 12), help="Maximum room size, WIDTHxDEPTH")
    parser.add_argument("--corridor-width", type=int, default=3)
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Random seed; a random one is picked and printed when omitted",
    )
    parser.add_argument("-v", "--verbose", action="count", default=0, help="-v for INFO, -vv for DEBUG")

    subparsers = parser.add_subparsers(dest="mode", required=True)

    batch = subparsers.add_parser("batch", help="Generate a full main path plus bonus branch")
    batch.add_argument("--rooms", type=int, default=7, help="Target number of main-path rooms")
    batch.add_argument("--corridor-step", type=int, default=4)
    batch.add_argument("--max-z-drift", type=int, default=6)
    batch.add_argument(
        "--legacy-degrees",
        action="store_true",
        help="Do not cap door pairs by each room type's preferred max degree",
    )
    batch.add_argument("--metrics", action="store_true", help="Print per-phase timings")

    expand = subparsers.add_parser("expand", help="Start from one room and grow it step by step")
    expand.add_argument("--corridor-length", type=int, default=6)
    expand.add_argument(
        "--step",
        dest="steps",
        action="append",
        type=parse_step,
        default=[],
        help="Expansion request ROOM:DIRECTION; may be repeated",
    )
    return parser


def print_summary(dataset: DungeonDataset) -> None:
    summary = summarize(dataset)
    print(
        f"Rooms: {summary.room_count}  Door pairs: {summary.connection_count}  "
        f"Connected: {summary.is_connected}  Diameter: {summary.diameter}"
    )
    for room in dataset.rooms:
        parent = "" if room.parent_id is None else f" parent={room.parent_id}"
        print(f"  #{room.id:<3} {room.room_type.value:<9} {room.bounds.to_tuple()}{parent}")


def run_batch(args: argparse.Namespace, seed: int) -> DungeonDataset:
    config = DungeonConfig(
        width=args.width,
        depth=args.depth,
        main_room_count=args.rooms,
        room_min=args.room_min,
        room_max=args.room_max,
        corridor_step=args.corridor_step,
        corridor_width=args.corridor_width,
        max_z_drift=args.max_z_drift,
        enforce_degrees=not args.legacy_degrees,
        random_seed=seed,
        collect_metrics=args.metrics,
    )
    generator = DungeonGenerator(config)
    dataset = generator.generate()
    if generator.metrics is not None:
        for name, values in generator.metrics.snapshot().items():
            print(
                f"{name}: {values['total_time'] * 1000:.2f}ms, +{values['total_rooms_added']} rooms, "
                f"{values['total_rejections']} rejected"
            )
    return dataset


def run_expand(args: argparse.Namespace, seed: int) -> DungeonDataset:
    config = DungeonConfig(
        width=args.width,
        depth=args.depth,
        room_min=args.room_min,
        room_max=args.room_max,
        corridor_width=args.corridor_width,
        corridor_length=args.corridor_length,
        random_seed=seed,
    )
    builder = DungeonRuntimeBuilder(config)
    builder.initialize()
    steps: List[Tuple[int, Direction]] = args.steps
    for room_id, direction in steps:
        result = builder.try_expand_from(room_id, direction)
        if result:
            print(f"Expanded room {room_id} {direction.name.lower()}: created room {result.room.id}")
        else:
            print(f"Expand failed from room {room_id} {direction.name.lower()}: blocked by bounds or overlap.")
    return builder.get_dataset()


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    level = logging.WARNING
    if args.verbose == 1:
        level = logging.INFO
    elif args.verbose >= 2:
        level = logging.DEBUG
    setup_logging(level)

    seed = args.seed
    if seed is None:
        # Pick a random seed randomly and print it, so we can reproduce a layout by passing --seed next run.
        seed = random.randint(0, 1000000)
    print(f"Using random seed {seed}")

    if args.mode == "batch":
        dataset = run_batch(args, seed)
    else:
        dataset = run_expand(args, seed)

    print_grid(dataset)
    print_summary(dataset)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
