"""
project: Dungeon Forge
module: collaborators.py
License: MIT

Output sinks the generator talks to. A game engine would implement these
against its tilemap and scene; the in-memory versions back the HTTP API,
the CLI and the tests.
"""

from __future__ import annotations

from typing import Iterable, List, Protocol, Set, Tuple

from .cells import Cell
from .placement import Placement


class TileRenderer(Protocol):
    def clear(self) -> None: ...

    def draw_floor(self, cells: Iterable[Tuple[int, int]]) -> None: ...

    def draw_wall(self, cell: Tuple[int, int]) -> None: ...


class ContentSpawner(Protocol):
    def spawn(self, placement: Placement) -> None: ...

    def clear(self) -> None: ...


class MemoryTileRenderer:
    def __init__(self):
        self.floor: Set[Cell] = set()
        self.walls: Set[Cell] = set()

    def clear(self) -> None:
        self.floor.clear()
        self.walls.clear()

    def draw_floor(self, cells):
        self.floor.update(Cell(*c) for c in cells)

    def draw_wall(self, cell):
        self.walls.add(Cell(*cell))


class MemorySpawner:
    def __init__(self):
        self.spawned: List[Placement] = []

    def spawn(self, placement: Placement) -> None:
        self.spawned.append(placement)

    def clear(self) -> None:
        self.spawned.clear()

    def names(self) -> List[str]:
        return [p.name for p in self.spawned]


__all__ = ["TileRenderer", "ContentSpawner", "MemoryTileRenderer", "MemorySpawner"]
