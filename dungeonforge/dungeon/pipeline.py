"""
project: Dungeon Forge
module: pipeline.py
License: MIT

Generation orchestration.

``generate_dungeon`` is a pure function of (config, seed, catalog): one
``random.Random`` is seeded up front and consumed in a fixed phase order
(partition, shape, route, roles, placement). Reordering any phase changes
every downstream draw, so new phases go at the end.

``DungeonGenerator`` wraps it with the stateful Generate/Clear boundary used by
the HTTP API and the CLI: every generation starts from a cleared state and a
failed generation leaves the generator cleared rather than half built.
"""

from __future__ import annotations

import random
import time
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Set

from ..logging_utils import get_logger
from .catalog import RoomCatalog, default_catalog
from .cells import Cell, Region, sorted_pairs
from .config import GenerationConfig
from .corridors import Corridor, route_corridors
from .errors import GenerationEmptyError
from .metrics import init_metrics
from .partition import partition
from .placement import PlacementEngine
from .roles import RoleAssigner, populate_room
from .rooms import Room, RoomRole, shape_rooms, shaper_for
from .walls import derive_walls

log = get_logger("dungeonforge.pipeline")

MAX_SEED = 2**31 - 1


@dataclass
class DungeonTopology:
    seed: int
    config: GenerationConfig
    floor: Set[Cell] = field(default_factory=set)
    walls: Set[Cell] = field(default_factory=set)
    corridors: List[Corridor] = field(default_factory=list)
    rooms: List[Room] = field(default_factory=list)
    metrics: Dict[str, Any] = field(default_factory=init_metrics)

    def room_roles(self) -> List[RoomRole]:
        return [r.role for r in self.rooms]

    def placements(self):
        return [p for r in self.rooms for p in r.placements]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "seed": self.seed,
            "config": self.config.to_dict(),
            "floor": sorted_pairs(self.floor),
            "walls": sorted_pairs(self.walls),
            "corridors": [
                {
                    "start": [c.start.x, c.start.y],
                    "end": [c.end.x, c.end.y],
                    "cells": [[p.x, p.y] for p in c.cells],
                }
                for c in self.corridors
            ],
            "rooms": [r.to_dict() for r in self.rooms],
            "metrics": self.metrics,
        }


def new_seed() -> int:
    return random.randint(0, MAX_SEED)


def generate_dungeon(
    config: Optional[GenerationConfig] = None,
    seed: Optional[int] = None,
    catalog: Optional[RoomCatalog] = None,
    renderer=None,
    spawner=None,
) -> DungeonTopology:
    config = (config or GenerationConfig()).validate()
    catalog = catalog or default_catalog()
    # 0 is a valid deterministic seed; only None draws a fresh one.
    if seed is None:
        seed = new_seed()
    rng = random.Random(seed)
    topology = DungeonTopology(seed=seed, config=config)
    metrics = topology.metrics
    phase_times: Dict[str, int] = {}
    start = time.perf_counter()

    def _phase(label, fn, *a, **k):
        ps = time.perf_counter()
        r = fn(*a, **k)
        phase_times[label] = int((time.perf_counter() - ps) * 1000)
        return r

    area = Region(0, 0, config.dungeon_width, config.dungeon_height)
    leaves = _phase("partition", partition, area, config.min_room_width, config.min_room_height, rng)
    metrics["leaves"] = len(leaves)
    if not leaves:
        raise GenerationEmptyError(
            f"no room fits a {config.dungeon_width}x{config.dungeon_height} dungeon "
            f"with {config.min_room_width}x{config.min_room_height} minimum rooms"
        )

    rooms = _phase("shape_rooms", shape_rooms, leaves, shaper_for(config), rng, config.spoke_length)
    topology.rooms = rooms

    topology.corridors = _phase("route_corridors", route_corridors, [r.center for r in rooms], rng)
    floor: Set[Cell] = set()
    for room in rooms:
        floor |= room.floor
    for corridor in topology.corridors:
        floor.update(corridor.cells)
    topology.floor = floor
    topology.walls = _phase("derive_walls", derive_walls, floor)

    _phase("assign_roles", RoleAssigner(config.treasure_room_chance, config.shop_room_chance, rng).assign, rooms)

    engine = PlacementEngine(rng=rng, spawner=spawner)
    if config.populate_rooms:

        def _populate():
            for room in rooms:
                populate_room(room, catalog.for_role(room.role), engine, config.dungeon_level)

        _phase("populate_rooms", _populate)

    if renderer is not None:

        def _render():
            renderer.draw_floor(sorted(topology.floor))
            for cell in sorted(topology.walls):
                renderer.draw_wall(cell)

        _phase("render", _render)

    metrics["rooms"] = len(rooms)
    metrics["corridors"] = len(topology.corridors)
    metrics["tiles_floor"] = len(topology.floor)
    metrics["tiles_wall"] = len(topology.walls)
    metrics["placements_made"] = engine.placed
    metrics["placements_skipped"] = engine.skipped
    metrics["runtime_ms"] = int((time.perf_counter() - start) * 1000)
    metrics["phase_ms"] = phase_times
    log.info(
        event="dungeon_generated",
        seed=seed,
        rooms=metrics["rooms"],
        corridors=metrics["corridors"],
        floor=metrics["tiles_floor"],
        walls=metrics["tiles_wall"],
        skipped=metrics["placements_skipped"],
        runtime_ms=metrics["runtime_ms"],
    )
    return topology


class DungeonGenerator:
    """Stateful Generate/Clear boundary around ``generate_dungeon``."""

    def __init__(self, catalog: Optional[RoomCatalog] = None, renderer=None, spawner=None):
        self.catalog = catalog or default_catalog()
        self.renderer = renderer
        self.spawner = spawner
        self.topology: Optional[DungeonTopology] = None

    def generate(self, config: Optional[GenerationConfig] = None, seed: Optional[int] = None) -> DungeonTopology:
        self.clear()
        try:
            topology = generate_dungeon(
                config, seed=seed, catalog=self.catalog, renderer=self.renderer, spawner=self.spawner
            )
        except Exception:
            self.clear()
            raise
        self.topology = topology
        return topology

    def clear(self) -> None:
        had_dungeon = self.topology is not None
        self.topology = None
        if self.renderer is not None:
            self.renderer.clear()
        if self.spawner is not None:
            self.spawner.clear()
        if had_dungeon:
            log.info(event="dungeon_cleared")


__all__ = ["DungeonTopology", "DungeonGenerator", "generate_dungeon", "new_seed", "MAX_SEED"]
