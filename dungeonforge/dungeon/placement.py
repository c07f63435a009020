"""
project: Dungeon Forge
module: placement.py
License: MIT

Constrained random placement of interior objects and enemies inside a room.

Every unit gets a bounded number of attempts. An attempt draws an anchor from
the room's current free-floor list, lays out the descriptor's footprint from
it and accepts only if every footprint cell is still free (near-wall
placement additionally requires the anchor or the footprint's last cell to
hug a boundary). Accepted cells leave the free list immediately, so two
footprints never share a cell. A unit that runs out of attempts is skipped
and counted; it is not an error.

Footprint layout from the anchor:
    * width > 1 and height > 1: ``height`` rows of ``width`` cells, the first
      row at the anchor, each following row one cell lower (y - 1).
    * width > 1 only: a run to the right.
    * height > 1 only: a run downwards.
    * 1x1: the anchor alone.
"""

from __future__ import annotations

import random
from dataclasses import dataclass, field
from typing import Any, Callable, Collection, Dict, List, Optional, Tuple

from ..logging_utils import get_logger
from .cells import DOWN, EIGHT_DIRECTIONS, PLACEMENT_OFFSET, RIGHT, Cell

RANDOM_PLACEMENT_ATTEMPTS = 10
NEAR_WALL_PLACEMENT_ATTEMPTS = 50
ENEMY_PLACEMENT_ATTEMPTS = 10
NEAR_WALL_THRESHOLD = 3
ENEMY_ROTATIONS = (0, -90, -180, -270)

log = get_logger("dungeonforge.placement")


@dataclass
class Placement:
    name: str
    kind: str
    anchor: Cell
    owner: Cell
    cells: List[Cell] = field(default_factory=list)
    rotation: int = 0

    @property
    def position(self) -> Tuple[float, float]:
        return (self.anchor.x + PLACEMENT_OFFSET[0], self.anchor.y + PLACEMENT_OFFSET[1])

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "kind": self.kind,
            "anchor": [self.anchor.x, self.anchor.y],
            "position": list(self.position),
            "cells": [[c.x, c.y] for c in self.cells],
            "rotation": self.rotation,
            "owner": [self.owner.x, self.owner.y],
        }


def footprint(anchor: Tuple[int, int], width: int, height: int) -> List[Cell]:
    anchor = Cell(*anchor)
    if width > 1 and height > 1:
        cells = []
        for row in range(height):
            for column in range(width):
                cells.append(Cell(anchor.x + column, anchor.y - row))
        return cells
    if width > 1:
        return [anchor.step(RIGHT, i) for i in range(width)]
    if height > 1:
        return [anchor.step(DOWN, i) for i in range(height)]
    return [anchor]


def is_near_wall(cell: Tuple[int, int], free_cells: Collection[Tuple[int, int]]) -> bool:
    """Boundary heuristic over the 8 neighbours, in table order.

    Absent neighbours push the counter up, present ones pull it down (never
    below zero); the cell counts as near a wall when the counter ends >= 3.
    This is an approximation, not an exact edge/corner test.
    """
    x, y = cell
    counter = 0
    for dx, dy in EIGHT_DIRECTIONS:
        if (x + dx, y + dy) not in free_cells:
            counter += 1
        else:
            counter = max(0, counter - 1)
    return counter >= NEAR_WALL_THRESHOLD


class PlacementEngine:
    """Places descriptors into a free-floor list and reports them to a spawner.

    ``placed`` / ``skipped`` count units across every call so the pipeline can
    surface shortfalls in its metrics.
    """

    def __init__(self, rng=None, spawner=None):
        self.rng = rng if rng is not None else random
        self.spawner = spawner
        self.placed = 0
        self.skipped = 0

    def roll_quantity(self, descriptor) -> int:
        # Inclusive upper bound for objects and enemies alike.
        low, high = descriptor.min_quantity, descriptor.max_quantity
        if high < low:
            return 0
        return self.rng.randint(low, high)

    def place_randomly(self, descriptor, free_cells: List[Cell], owner: Cell) -> List[Placement]:
        return self._place_units(descriptor, free_cells, owner, "object", RANDOM_PLACEMENT_ATTEMPTS)

    def place_near_wall(self, descriptor, free_cells: List[Cell], owner: Cell) -> List[Placement]:
        return self._place_units(
            descriptor,
            free_cells,
            owner,
            "object",
            NEAR_WALL_PLACEMENT_ATTEMPTS,
            accept=lambda anchor, cells, free: is_near_wall(anchor, free) or is_near_wall(cells[-1], free),
        )

    def place_enemy(self, descriptor, free_cells: List[Cell], owner: Cell) -> List[Placement]:
        return self._place_units(descriptor, free_cells, owner, "enemy", ENEMY_PLACEMENT_ATTEMPTS)

    def place_landmark(self, name: str, cell: Cell, owner: Cell) -> Placement:
        """Centerpiece content (player start, exit, chest, merchant); uses no free floor."""
        placement = Placement(name=name, kind="landmark", anchor=Cell(*cell), owner=owner, cells=[Cell(*cell)])
        self._emit(placement)
        return placement

    def _place_units(
        self,
        descriptor,
        free_cells: List[Cell],
        owner: Cell,
        kind: str,
        attempts: int,
        accept: Optional[Callable] = None,
    ) -> List[Placement]:
        made: List[Placement] = []
        quantity = self.roll_quantity(descriptor)
        for _ in range(quantity):
            placement = self._try_place(descriptor, free_cells, owner, kind, attempts, accept)
            if placement is None:
                self.skipped += 1
                log.debug(
                    event="placement_skipped",
                    name=descriptor.name,
                    owner=f"{owner.x},{owner.y}",
                    free=len(free_cells),
                )
                continue
            made.append(placement)
        return made

    def _try_place(self, descriptor, free_cells, owner, kind, attempts, accept) -> Optional[Placement]:
        width = getattr(descriptor, "width", 1)
        height = getattr(descriptor, "height", 1)
        for _ in range(attempts):
            if not free_cells:
                return None
            anchor = free_cells[self.rng.randrange(len(free_cells))]
            cells = footprint(anchor, width, height)
            available = set(free_cells)
            if any(c not in available for c in cells):
                continue
            if accept is not None and not accept(anchor, cells, available):
                continue
            rotation = self.rng.choice(ENEMY_ROTATIONS) if kind == "enemy" else 0
            for c in cells:
                free_cells.remove(c)
            placement = Placement(
                name=descriptor.name, kind=kind, anchor=anchor, owner=owner, cells=cells, rotation=rotation
            )
            self._emit(placement)
            return placement
        return None

    def _emit(self, placement: Placement) -> None:
        self.placed += 1
        if self.spawner is not None:
            self.spawner.spawn(placement)


__all__ = [
    "Placement",
    "PlacementEngine",
    "footprint",
    "is_near_wall",
    "RANDOM_PLACEMENT_ATTEMPTS",
    "NEAR_WALL_PLACEMENT_ATTEMPTS",
    "ENEMY_PLACEMENT_ATTEMPTS",
    "NEAR_WALL_THRESHOLD",
]
