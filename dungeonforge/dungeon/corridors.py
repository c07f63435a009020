"""
project: Dungeon Forge
module: corridors.py
License: MIT

Corridor routing between room centers.

The router is a greedy nearest-neighbour chain, not a minimum spanning tree:
start from a random center, repeatedly walk to the closest unvisited center
(Euclidean distance, first minimum wins) and carve an L-shaped corridor to
it. N centers always yield N-1 corridors forming one connected chain.
"""

from __future__ import annotations

import math
import random
from typing import List, NamedTuple, Sequence, Set, Tuple

from .cells import Cell


class Corridor(NamedTuple):
    start: Cell
    end: Cell
    cells: List[Cell]


def corridor_path(start: Tuple[int, int], end: Tuple[int, int]) -> List[Cell]:
    """Ordered cells from ``start`` to ``end``: vertical leg first, then horizontal."""
    x, y = start
    gx, gy = end
    path = [Cell(x, y)]
    while y != gy:
        y += 1 if gy > y else -1
        path.append(Cell(x, y))
    while x != gx:
        x += 1 if gx > x else -1
        path.append(Cell(x, y))
    return path


def create_corridor(start: Tuple[int, int], end: Tuple[int, int]) -> Set[Cell]:
    return set(corridor_path(start, end))


def find_closest_point(origin: Tuple[int, int], candidates: Sequence[Tuple[int, int]]) -> Cell:
    closest = None
    best = math.inf
    for point in candidates:
        d = math.dist(point, origin)
        if d < best:
            best = d
            closest = point
    return Cell(*closest)


def route_corridors(centers: Sequence[Tuple[int, int]], rng=None) -> List[Corridor]:
    if rng is None:
        rng = random
    pool = [Cell(*c) for c in centers]
    if not pool:
        return []
    current = pool.pop(rng.randrange(len(pool)))
    corridors: List[Corridor] = []
    while pool:
        closest = find_closest_point(current, pool)
        pool.remove(closest)
        corridors.append(Corridor(current, closest, corridor_path(current, closest)))
        current = closest
    return corridors


def connect_rooms(centers: Sequence[Tuple[int, int]], rng=None) -> Set[Cell]:
    cells: Set[Cell] = set()
    for corridor in route_corridors(centers, rng):
        cells.update(corridor.cells)
    return cells


__all__ = [
    "Corridor",
    "corridor_path",
    "create_corridor",
    "find_closest_point",
    "route_corridors",
    "connect_rooms",
]
