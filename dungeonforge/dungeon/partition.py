"""
project: Dungeon Forge
module: partition.py
License: MIT

Binary space partitioning of the dungeon area into candidate room leaves.

Breadth-first: each dequeued region flips a coin for which axis to try first,
splits along it when that side is at least twice its minimum, otherwise tries
the other axis, otherwise becomes a leaf. Leaves come back in queue order.
"""

from __future__ import annotations

import random
from collections import deque
from typing import Deque, List

from .cells import Region
from .errors import ConfigurationError


def partition(region: Region, min_width: int, min_height: int, rng=None) -> List[Region]:
    if min_width <= 0 or min_height <= 0:
        raise ConfigurationError(f"partition minimums must be >= 1, got {min_width}x{min_height}")
    if rng is None:
        rng = random
    queue: Deque[Region] = deque([region])
    leaves: List[Region] = []
    while queue:
        current = queue.popleft()
        # Undersized regions are dropped before any coin is flipped.
        if current.width < min_width or current.height < min_height:
            continue
        if rng.random() < 0.5:
            if current.height >= min_height * 2:
                queue.extend(split_horizontally(current, rng))
            elif current.width >= min_width * 2:
                queue.extend(split_vertically(current, rng))
            else:
                leaves.append(current)
        else:
            if current.width >= min_width * 2:
                queue.extend(split_vertically(current, rng))
            elif current.height >= min_height * 2:
                queue.extend(split_horizontally(current, rng))
            else:
                leaves.append(current)
    return leaves


def split_vertically(region: Region, rng) -> List[Region]:
    """Cut at a random x offset in 1..width-1; both halves keep the full height."""
    cut = rng.randint(1, region.width - 1)
    return [
        Region(region.x, region.y, cut, region.height),
        Region(region.x + cut, region.y, region.width - cut, region.height),
    ]


def split_horizontally(region: Region, rng) -> List[Region]:
    cut = rng.randint(1, region.height - 1)
    return [
        Region(region.x, region.y, region.width, cut),
        Region(region.x, region.y + cut, region.width, region.height - cut),
    ]


__all__ = ["partition", "split_vertically", "split_horizontally"]
