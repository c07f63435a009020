"""
project: Dungeon Forge
module: cells.py
License: MIT

Grid primitives shared by every generation phase: integer cells, partition
regions and the direction tables random choices index into.
"""

from __future__ import annotations

from typing import Iterable, List, NamedTuple, Set, Tuple


class Cell(NamedTuple):
    x: int
    y: int

    def step(self, direction: Tuple[int, int], distance: int = 1) -> "Cell":
        return Cell(self.x + direction[0] * distance, self.y + direction[1] * distance)


class Region(NamedTuple):
    """Axis-aligned rectangle of cells; x_max / y_max are exclusive edges."""

    x: int
    y: int
    width: int
    height: int

    @property
    def x_max(self) -> int:
        return self.x + self.width

    @property
    def y_max(self) -> int:
        return self.y + self.height

    @property
    def center(self) -> Tuple[float, float]:
        return (self.x + self.width / 2, self.y + self.height / 2)

    def rounded_center(self) -> Cell:
        # round() is half-to-even, so a 5-wide leaf at x=0 centers on 2.
        cx, cy = self.center
        return Cell(round(cx), round(cy))

    def contains(self, cell: Tuple[int, int]) -> bool:
        return self.x <= cell[0] < self.x_max and self.y <= cell[1] < self.y_max

    def overlaps(self, other: "Region") -> bool:
        return (
            self.x < other.x_max
            and other.x < self.x_max
            and self.y < other.y_max
            and other.y < self.y_max
        )


UP = (0, 1)
RIGHT = (1, 0)
DOWN = (0, -1)
LEFT = (-1, 0)

FOUR_DIRECTIONS: List[Tuple[int, int]] = [UP, RIGHT, DOWN, LEFT]

EIGHT_DIRECTIONS: List[Tuple[int, int]] = [
    (0, 1),
    (1, 1),
    (1, 0),
    (1, -1),
    (0, -1),
    (-1, -1),
    (-1, 0),
    (-1, 1),
]

# Sub-cell offset applied to spawned content so it sits in the middle of a tile.
PLACEMENT_OFFSET: Tuple[float, float] = (0.5, 0.5)


def neighbors4(cell: Tuple[int, int]) -> List[Cell]:
    x, y = cell
    return [Cell(x + dx, y + dy) for dx, dy in FOUR_DIRECTIONS]


def flood_fill(start: Tuple[int, int], cells: Iterable[Tuple[int, int]]) -> Set[Cell]:
    """Cells of ``cells`` 4-connected to ``start`` (empty if start is not among them)."""
    pool = {Cell(*c) for c in cells}
    start = Cell(*start)
    if start not in pool:
        return set()
    seen = {start}
    frontier = [start]
    while frontier:
        for n in neighbors4(frontier.pop()):
            if n in pool and n not in seen:
                seen.add(n)
                frontier.append(n)
    return seen


def as_cells(points: Iterable[Tuple[int, int]]) -> Set[Cell]:
    return {Cell(int(p[0]), int(p[1])) for p in points}


def sorted_pairs(cells: Iterable[Tuple[int, int]]) -> List[List[int]]:
    """JSON-friendly [[x, y], ...] in stable order."""
    return [[c[0], c[1]] for c in sorted(cells)]


CellSet = Set[Cell]

__all__ = [
    "Cell",
    "CellSet",
    "Region",
    "UP",
    "RIGHT",
    "DOWN",
    "LEFT",
    "FOUR_DIRECTIONS",
    "EIGHT_DIRECTIONS",
    "PLACEMENT_OFFSET",
    "neighbors4",
    "flood_fill",
    "as_cells",
    "sorted_pairs",
]
