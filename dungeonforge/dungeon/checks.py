"""
project: Dungeon Forge
module: checks.py
License: MIT

Structural diagnostics over a generated topology. Every count is zero for a
healthy dungeon; ``scripts/diagnose_seeds.py`` and the test suite use these.
"""

from __future__ import annotations

from typing import Dict, Iterable, List, Set, Tuple

from .cells import Cell, flood_fill, neighbors4
from .rooms import RoomRole


def connected_components(cells: Iterable[Tuple[int, int]]) -> List[Set[Cell]]:
    remaining = {Cell(*c) for c in cells}
    components: List[Set[Cell]] = []
    while remaining:
        component = flood_fill(next(iter(remaining)), remaining)
        remaining -= component
        components.append(component)
    return components


def analyze(topology) -> Dict[str, int]:
    floor = topology.floor
    walls = topology.walls
    rooms = topology.rooms
    issues = {
        "floor_components_extra": max(0, len(connected_components(floor)) - 1),
        "corridor_count_mismatch": abs(len(topology.corridors) - max(0, len(rooms) - 1)),
        "walls_on_floor": len(walls & floor),
        "walls_detached": sum(1 for w in walls if not any(n in floor for n in neighbors4(w))),
        "floor_unwalled": sum(
            1 for c in floor for n in neighbors4(c) if n not in floor and n not in walls
        ),
        "placement_overlaps": 0,
        "placements_off_floor": 0,
        "role_violations": 0,
    }
    seen: Set[Cell] = set()
    for room in rooms:
        for p in room.placements:
            if p.kind == "landmark":
                continue
            for c in p.cells:
                if c in seen:
                    issues["placement_overlaps"] += 1
                seen.add(c)
                if c not in room.floor:
                    issues["placements_off_floor"] += 1
    roles = [r.role for r in rooms]
    if roles:
        if roles[0] != RoomRole.SPAWN:
            issues["role_violations"] += 1
        if len(roles) > 1 and roles[-1] != RoomRole.EXIT:
            issues["role_violations"] += 1
        for unique in (RoomRole.TREASURE, RoomRole.SHOP):
            issues["role_violations"] += max(0, roles.count(unique) - 1)
    return issues


__all__ = ["analyze", "connected_components"]
