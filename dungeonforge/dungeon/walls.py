"""
project: Dungeon Forge
module: walls.py
License: MIT
"""

from __future__ import annotations

from typing import Iterable, Set, Tuple

from .cells import FOUR_DIRECTIONS, Cell


def derive_walls(floor: Iterable[Tuple[int, int]]) -> Set[Cell]:
    """Every non-floor cell orthogonally adjacent to floor. No diagonal walls."""
    floor_set = {Cell(*c) for c in floor}
    walls: Set[Cell] = set()
    for cell in floor_set:
        for direction in FOUR_DIRECTIONS:
            neighbor = cell.step(direction)
            if neighbor not in floor_set:
                walls.add(neighbor)
    return walls


__all__ = ["derive_walls"]
