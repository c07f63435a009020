"""
project: Dungeon Forge
module: walks.py
License: MIT

Walk primitives: a random cardinal walk (organic room blobs) and a straight
n-step walk (spokes kept clear from a room center).
"""

from __future__ import annotations

import random
from typing import Set, Tuple

from .cells import FOUR_DIRECTIONS, Cell


def random_walk(start: Tuple[int, int], steps: int, rng=None) -> Set[Cell]:
    """Visit ``steps`` uniformly random cardinal moves from ``start``.

    The start cell is always part of the result; revisits collapse.
    """
    if rng is None:
        rng = random
    current = Cell(*start)
    path = {current}
    for _ in range(steps):
        current = current.step(rng.choice(FOUR_DIRECTIONS))
        path.add(current)
    return path


def n_step_walk(start: Tuple[int, int], steps: int, direction: Tuple[int, int]) -> Set[Cell]:
    current = Cell(*start)
    path = {current}
    for _ in range(steps):
        current = current.step(direction)
        path.add(current)
    return path


__all__ = ["random_walk", "n_step_walk"]
