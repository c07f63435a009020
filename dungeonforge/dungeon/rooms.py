"""
project: Dungeon Forge
module: rooms.py
License: MIT

Room records and the two room shapers.

A shaper turns a partition leaf into the room's floor cells:
    * RectangularShaper: the leaf inset by ``offset`` on every side.
    * RandomWalkShaper: a union of random walks from the leaf center, clipped
      to the leaf bounds inset by ``offset``.

A room keeps every shaped cell plus its center. Pieces the center cannot reach
(an off-inset center, or walk fragments cut off by clipping) are bridged to it
with a vertical-first path toward their cell nearest the center.

The free-floor list of a room is its floor minus the center and minus the four
straight spokes walked from the center; placement consumes it.
"""

from __future__ import annotations

import enum
import random
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional, Protocol, Set

from .cells import FOUR_DIRECTIONS, Cell, Region, flood_fill, sorted_pairs
from .config import GenerationConfig
from .corridors import corridor_path, find_closest_point
from .placement import Placement
from .walks import n_step_walk, random_walk


class RoomRole(str, enum.Enum):
    UNASSIGNED = "unassigned"
    SPAWN = "spawn"
    EXIT = "exit"
    GENERIC = "generic"
    TREASURE = "treasure"
    SHOP = "shop"


@dataclass
class Room:
    index: int
    center: Cell
    region: Region
    floor: Set[Cell]
    role: RoomRole = RoomRole.UNASSIGNED
    free_floor: List[Cell] = field(default_factory=list)
    landmark: Optional[str] = None
    placements: List[Placement] = field(default_factory=list)

    def occupied_cells(self) -> Set[Cell]:
        taken: Set[Cell] = set()
        for p in self.placements:
            taken.update(p.cells)
        return taken

    def to_dict(self) -> Dict[str, Any]:
        return {
            "index": self.index,
            "center": [self.center.x, self.center.y],
            "role": self.role.value,
            "region": {
                "x": self.region.x,
                "y": self.region.y,
                "width": self.region.width,
                "height": self.region.height,
            },
            "landmark": self.landmark,
            "floor": sorted_pairs(self.floor),
            "free_floor": sorted_pairs(self.free_floor),
            "placements": [p.to_dict() for p in self.placements],
        }


class RoomShaper(Protocol):
    def shape(self, region: Region, rng) -> Set[Cell]: ...


class RectangularShaper:
    def __init__(self, offset: int):
        self.offset = offset

    def shape(self, region: Region, rng=None) -> Set[Cell]:
        floor: Set[Cell] = set()
        for column in range(self.offset, region.width - self.offset):
            for row in range(self.offset, region.height - self.offset):
                floor.add(Cell(region.x + column, region.y + row))
        return floor


class RandomWalkShaper:
    def __init__(self, offset: int, iterations: int, steps: int, start_randomly_each_iteration: bool = False):
        self.offset = offset
        self.iterations = iterations
        self.steps = steps
        self.start_randomly_each_iteration = start_randomly_each_iteration

    def shape(self, region: Region, rng=None) -> Set[Cell]:
        if rng is None:
            rng = random
        blob = self.walk_blob(region.rounded_center(), rng)
        lo_x, hi_x = region.x + self.offset, region.x_max - self.offset
        lo_y, hi_y = region.y + self.offset, region.y_max - self.offset
        return {c for c in blob if lo_x <= c.x <= hi_x and lo_y <= c.y <= hi_y}

    def walk_blob(self, start: Cell, rng) -> Set[Cell]:
        current = start
        floor: Set[Cell] = set()
        for _ in range(self.iterations):
            floor |= random_walk(current, self.steps, rng)
            if self.start_randomly_each_iteration:
                current = rng.choice(sorted(floor))
        return floor


def shaper_for(config: GenerationConfig) -> RoomShaper:
    if config.use_random_walk:
        return RandomWalkShaper(
            config.room_offset,
            config.random_walk_iterations,
            config.random_walk_steps,
            config.start_randomly_each_iteration,
        )
    return RectangularShaper(config.room_offset)


def spoke_cells(center: Cell, length: int) -> Set[Cell]:
    """Straight walks from ``center`` in all four directions (center included)."""
    cells: Set[Cell] = set()
    for direction in FOUR_DIRECTIONS:
        cells |= n_step_walk(center, length, direction)
    return cells


def free_floor_for(center: Cell, floor: Iterable[Cell], spoke_length: int) -> List[Cell]:
    reserved = spoke_cells(center, spoke_length)
    reserved.add(center)
    return sorted(c for c in floor if c not in reserved)


def link_to_center(center: Cell, shaped: Iterable[Cell]) -> Set[Cell]:
    """Return ``shaped`` plus ``center`` as one 4-connected piece.

    Each piece the center cannot reach gets a corridor path from the center to
    the piece's nearest cell. Shaped cells are never dropped.
    """
    floor = set(shaped)
    floor.add(center)
    reached = flood_fill(center, floor)
    while len(reached) < len(floor):
        target = find_closest_point(center, sorted(floor - reached))
        floor.update(corridor_path(center, target))
        reached = flood_fill(center, floor)
    return floor


def shape_rooms(leaves: List[Region], shaper: RoomShaper, rng, spoke_length: int = 10) -> List[Room]:
    rooms: List[Room] = []
    for region in leaves:
        center = region.rounded_center()
        floor = link_to_center(center, shaper.shape(region, rng))
        rooms.append(
            Room(
                index=len(rooms),
                center=center,
                region=region,
                floor=floor,
                free_floor=free_floor_for(center, floor, spoke_length),
            )
        )
    return rooms


__all__ = [
    "RoomRole",
    "Room",
    "RoomShaper",
    "RectangularShaper",
    "RandomWalkShaper",
    "shaper_for",
    "spoke_cells",
    "free_floor_for",
    "link_to_center",
    "shape_rooms",
]
