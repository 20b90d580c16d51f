import random
import sys
from pathlib import Path
from typing import Callable

import pytest

ROOT_DIR = Path(__file__).resolve().parent.parent
CODE_DIR = ROOT_DIR / "code"
if str(CODE_DIR) not in sys.path:
    sys.path.insert(0, str(CODE_DIR))

from dungeon_config import DungeonConfig
from dungeon_generator import DungeonGenerator
from dungeon_layout import DungeonLayout
from runtime_builder import DungeonRuntimeBuilder


@pytest.fixture
def dungeon_config() -> DungeonConfig:
    return DungeonConfig(
        width=80,
        depth=40,
        main_room_count=7,
        room_min=(4, 4),
        room_max=(6, 6),
        corridor_step=4,
        corridor_width=3,
        max_z_drift=6,
        corridor_length=6,
        random_seed=1234,
    )


@pytest.fixture
def dungeon_layout(dungeon_config: DungeonConfig) -> DungeonLayout:
    return DungeonLayout(dungeon_config)


@pytest.fixture
def make_generator() -> Callable[..., DungeonGenerator]:
    def _make_generator(*, seed: int = 0, **overrides) -> DungeonGenerator:
        kwargs = dict(
            width=80,
            depth=40,
            main_room_count=7,
            room_min=(4, 4),
            room_max=(6, 6),
            corridor_step=4,
            corridor_width=3,
            max_z_drift=6,
        )
        kwargs.update(overrides)
        return DungeonGenerator(DungeonConfig(**kwargs), rng=random.Random(seed))

    return _make_generator


@pytest.fixture
def make_builder() -> Callable[..., DungeonRuntimeBuilder]:
    def _make_builder(*, seed: int = 0, **overrides) -> DungeonRuntimeBuilder:
        kwargs = dict(
            width=80,
            depth=40,
            room_min=(6, 6),
            room_max=(6, 6),
            corridor_width=3,
            corridor_length=6,
        )
        kwargs.update(overrides)
        return DungeonRuntimeBuilder(DungeonConfig(**kwargs), rng=random.Random(seed))

    return _make_builder
